import logging
from typing import Callable, Optional

import numpy as np

from ecosystem.bounds import WorldBounds
from ecosystem.position import Direction, Position, normalize

# A callable producing a raw (not normalised) random direction.
DirectionSource = Callable[[], Direction]

logger = logging.getLogger(__name__)


class RandomDirectionSource:
    """Draws directions uniformly from the square [-1, 1] x [-1, 1]."""

    def __init__(self, seed: Optional[int] = None, rng: Optional[np.random.Generator] = None):
        self._rng = rng if rng is not None else np.random.default_rng(seed)

    def __call__(self) -> Direction:
        dx, dy = self._rng.uniform(-1.0, 1.0, size=2)
        return float(dx), float(dy)


class Wanderer:
    """
    The wander state shared by moving creatures: a direction that is
    re-rolled every `interval` seconds, or pointed back at the world centre
    whenever the creature strays near an edge.
    """

    def __init__(self, interval: float, direction_source: Optional[DirectionSource] = None):
        self.interval = interval
        self.timer = 0.0
        self._source = direction_source or RandomDirectionSource()
        self.direction: Direction = normalize(*self._source()) or (0.0, 0.0)

    def tick(self, delta_time: float):
        self.timer += delta_time

    def steer(self, position: Position, bounds: WorldBounds):
        """Picks a new direction if the timer ran out or an edge is close."""
        near_boundary = bounds.is_near_edge(position)
        if not near_boundary and self.timer < self.interval:
            return

        if near_boundary:
            center = bounds.center
            new_direction = normalize(center.x - position.x, center.y - position.y)
            logger.debug(f"near boundary at ({position.x:.1f}, {position.y:.1f}), turning to centre")
        else:
            new_direction = normalize(*self._source())

        if new_direction is not None:
            self.direction = new_direction
        self.timer = 0.0

    def step(self, position: Position, speed: float, delta_time: float) -> Position:
        return position.moved(self.direction, speed * delta_time)
