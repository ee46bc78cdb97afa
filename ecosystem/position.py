import math
from dataclasses import dataclass
from typing import Optional, Tuple

Direction = Tuple[float, float]


@dataclass(frozen=True)
class Position:
    """A point in world space. Immutable: movement always builds a new one."""

    x: float
    y: float

    def distance_to(self, other: "Position") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def manhattan_distance(self, other: "Position") -> float:
        return abs(self.x - other.x) + abs(self.y - other.y)

    def moved(self, direction: Direction, distance: float) -> "Position":
        """Returns the position `distance` units along `direction`."""
        dx, dy = direction
        return Position(self.x + dx * distance, self.y + dy * distance)

    def direction_to(self, other: "Position") -> Optional[Direction]:
        return normalize(other.x - self.x, other.y - self.y)


def normalize(dx: float, dy: float) -> Optional[Direction]:
    """
    Scales (dx, dy) to unit length.

    Returns None for the zero vector so callers keep whatever direction
    they had before instead of producing NaN.
    """
    length = math.hypot(dx, dy)
    if length == 0:
        return None
    return dx / length, dy / length
