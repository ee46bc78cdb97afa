from dataclasses import dataclass

from ecosystem.position import Position

WORLD_MIN = 50.0
WORLD_MAX = 2950.0

# How close to an edge a creature gets before it turns back to the centre.
BOUNDARY_MARGIN = 100.0


@dataclass(frozen=True)
class WorldBounds:
    min_x: float = WORLD_MIN
    max_x: float = WORLD_MAX
    min_y: float = WORLD_MIN
    max_y: float = WORLD_MAX

    @property
    def center(self) -> Position:
        return Position((self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2)

    def is_near_edge(self, position: Position, margin: float = BOUNDARY_MARGIN) -> bool:
        return (
            position.x < self.min_x + margin
            or position.x > self.max_x - margin
            or position.y < self.min_y + margin
            or position.y > self.max_y - margin
        )

    def clamp(self, position: Position) -> Position:
        return Position(
            max(self.min_x, min(self.max_x, position.x)),
            max(self.min_y, min(self.max_y, position.y)),
        )


DEFAULT_BOUNDS = WorldBounds()
