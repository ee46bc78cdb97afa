from abc import ABC, abstractmethod
from typing import Optional, Sequence

from ecosystem.bounds import WorldBounds
from ecosystem.entity_snapshot import EntitySnapshot
from ecosystem.position import Position


class Behavior(ABC):
    """
    A common abstract base class for all creature behaviour strategies.

    One instance belongs to exactly one creature: subclasses keep timers and
    directions that describe that individual.
    """

    @abstractmethod
    def update(
        self,
        delta_time: float,
        position: Position,
        nearby_entities: Sequence[EntitySnapshot],
        bounds: Optional[WorldBounds] = None,
        biome: Optional[str] = None,
    ) -> Position:
        """
        Advances the creature's internal state by `delta_time` seconds and
        returns where it wants to be.

        Args:
            delta_time: Seconds elapsed since the previous tick, >= 0.
            position: The creature's current position.
            nearby_entities: Snapshots of the creatures around it. Targets are
                taken as the first match, so callers should sort these by
                ascending distance.
            bounds: The world bounds to steer away from.
            biome: The biome the creature lives in, or None for none.

        Returns:
            A new position. Clamping to the world is left to the caller.
        """
        pass

    @abstractmethod
    def should_reproduce(
        self,
        health: float,
        max_health: float,
        energy: float,
        max_energy: float,
        biome: Optional[str] = None,
    ) -> bool:
        pass

    @abstractmethod
    def should_eat(
        self, hunger: float, max_hunger: float, biome: Optional[str] = None
    ) -> bool:
        pass

    @abstractmethod
    def should_hunt(
        self,
        hunger: float,
        max_hunger: float,
        nearby_prey: Sequence[EntitySnapshot],
        biome: Optional[str] = None,
    ) -> bool:
        pass
