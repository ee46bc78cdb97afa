from typing import Optional, Sequence

from ecosystem.archetype import Archetype
from ecosystem.behaviours.behavior import Behavior
from ecosystem.biome import get_biome_modifiers
from ecosystem.bounds import WorldBounds
from ecosystem.entity_snapshot import EntitySnapshot
from ecosystem.position import Position

REPRODUCE_HEALTH_RATIO = 0.8
REPRODUCE_ENERGY_RATIO = 0.7


class PlantBehavior(Behavior):
    """Plants grow in place. They never move, eat or hunt."""

    def update(
        self,
        delta_time: float,
        position: Position,
        nearby_entities: Sequence[EntitySnapshot],
        bounds: Optional[WorldBounds] = None,
        biome: Optional[str] = None,
    ) -> Position:
        return position

    def should_reproduce(self, health, max_health, energy, max_energy, biome=None) -> bool:
        modifiers = get_biome_modifiers(Archetype.PLANT, biome)
        return health > max_health * REPRODUCE_HEALTH_RATIO and energy > max_energy * (
            REPRODUCE_ENERGY_RATIO * modifiers.reproduction_rate
        )

    def should_eat(self, hunger, max_hunger, biome=None) -> bool:
        return False

    def should_hunt(self, hunger, max_hunger, nearby_prey, biome=None) -> bool:
        return False
