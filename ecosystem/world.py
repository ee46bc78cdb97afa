import logging
from typing import Dict, List, Optional

import numpy as np

from ecosystem.archetype import Archetype
from ecosystem.behaviours.wandering import RandomDirectionSource
from ecosystem.bounds import DEFAULT_BOUNDS, WorldBounds
from ecosystem.creatures import Creature
from ecosystem.entity_snapshot import EntitySnapshot
from ecosystem.position import Position

# How far a creature can sense others.
NEARBY_RADIUS = 200.0

logger = logging.getLogger(__name__)


class World:
    """
    Holds every creature in the ecosystem. Creatures live in memory only;
    nothing about them survives a restart.
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        bounds: WorldBounds = DEFAULT_BOUNDS,
        biome: Optional[str] = None,
        first_id: int = 1,
    ):
        self.seed = seed
        self.bounds = bounds
        self.biome = biome
        self.rng = np.random.default_rng(seed)
        self._creatures: Dict[int, Creature] = {}
        self._next_id = first_id

    def spawn(self, archetype: Archetype, species: str, position: Position) -> Creature:
        """Creates a creature, with a behaviour of its own, at a clamped position."""
        creature = Creature(
            id=self._next_id,
            archetype=archetype,
            species=species,
            position=self.bounds.clamp(position),
            direction_source=RandomDirectionSource(rng=self.rng),
        )
        self._creatures[creature.id] = creature
        self._next_id += 1
        logger.debug(f"Spawned {creature} at ({creature.position.x:.1f}, {creature.position.y:.1f})")
        return creature

    def remove(self, creature: Creature):
        self._creatures.pop(creature.id, None)

    def get(self, creature_id: int) -> Optional[Creature]:
        return self._creatures.get(creature_id)

    def all(self) -> List[Creature]:
        return list(self._creatures.values())

    def living(self) -> List[Creature]:
        return [c for c in self._creatures.values() if not c.is_dead]

    def nearby(self, creature: Creature, radius: float = NEARBY_RADIUS) -> List[Creature]:
        """
        Returns the other living creatures within `radius`, closest first.
        Behaviours act on the first match, so the order matters.
        """
        others = [
            other
            for other in self._creatures.values()
            if other.id != creature.id
            and not other.is_dead
            and creature.position.distance_to(other.position) <= radius
        ]
        others.sort(key=lambda other: creature.position.distance_to(other.position))
        return others

    def nearby_snapshots(
        self, creature: Creature, radius: float = NEARBY_RADIUS
    ) -> List[EntitySnapshot]:
        return [other.snapshot() for other in self.nearby(creature, radius)]

    def counts(self) -> Dict[Archetype, int]:
        counts = {archetype: 0 for archetype in Archetype}
        for creature in self.living():
            counts[creature.archetype] += 1
        return counts

    def __len__(self):
        return len(self._creatures)
