import unittest
import sys
import os

# Add the project root to the Python path to allow imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from ecosystem.bounds import DEFAULT_BOUNDS, WorldBounds
from ecosystem.position import Position, normalize


class TestPosition(unittest.TestCase):

    def test_distance(self):
        a = Position(0.0, 0.0)
        b = Position(3.0, 4.0)
        self.assertAlmostEqual(a.distance_to(b), 5.0)
        self.assertAlmostEqual(b.distance_to(a), 5.0)
        self.assertAlmostEqual(a.manhattan_distance(b), 7.0)

    def test_moved_returns_new_position(self):
        start = Position(10.0, 10.0)
        moved = start.moved((1.0, 0.0), 5.0)
        self.assertEqual(moved, Position(15.0, 10.0))
        # The starting position is untouched.
        self.assertEqual(start, Position(10.0, 10.0))

    def test_direction_to(self):
        direction = Position(0.0, 0.0).direction_to(Position(0.0, -10.0))
        self.assertAlmostEqual(direction[0], 0.0)
        self.assertAlmostEqual(direction[1], -1.0)

    def test_direction_to_same_point_is_none(self):
        p = Position(5.0, 5.0)
        self.assertIsNone(p.direction_to(Position(5.0, 5.0)))

    def test_normalize(self):
        dx, dy = normalize(3.0, 4.0)
        self.assertAlmostEqual(dx, 0.6)
        self.assertAlmostEqual(dy, 0.8)
        self.assertIsNone(normalize(0.0, 0.0))


class TestWorldBounds(unittest.TestCase):

    def test_default_center(self):
        self.assertEqual(DEFAULT_BOUNDS.center, Position(1500.0, 1500.0))

    def test_near_edge(self):
        self.assertTrue(DEFAULT_BOUNDS.is_near_edge(Position(45.0, 1500.0)))
        self.assertTrue(DEFAULT_BOUNDS.is_near_edge(Position(1500.0, 2900.0)))
        self.assertFalse(DEFAULT_BOUNDS.is_near_edge(Position(1500.0, 1500.0)))
        # Exactly on the margin is not near.
        self.assertFalse(DEFAULT_BOUNDS.is_near_edge(Position(150.0, 150.0)))

    def test_clamp(self):
        bounds = WorldBounds(0.0, 100.0, 0.0, 100.0)
        self.assertEqual(bounds.clamp(Position(-5.0, 150.0)), Position(0.0, 100.0))
        self.assertEqual(bounds.clamp(Position(50.0, 50.0)), Position(50.0, 50.0))


if __name__ == "__main__":
    unittest.main()
