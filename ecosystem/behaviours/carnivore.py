import logging
from typing import Optional, Sequence

from ecosystem.archetype import Archetype
from ecosystem.behaviours.behavior import Behavior
from ecosystem.behaviours.wandering import DirectionSource, Wanderer
from ecosystem.biome import get_biome_modifiers
from ecosystem.bounds import DEFAULT_BOUNDS, WorldBounds
from ecosystem.entity_snapshot import EntitySnapshot
from ecosystem.position import Direction, Position

SPEED = 60.0
WANDER_INTERVAL = 0.4
HUNT_RANGE = 120.0

# Pack hunting boosts both how fast and how far a carnivore will chase.
PACK_SPEED_MULTIPLIER = 1.3
PACK_RANGE_MULTIPLIER = 1.2
# Seconds pack mode survives once the pack is out of sight.
PACK_GRACE_PERIOD = 3.0

REPRODUCE_HEALTH_RATIO = 0.8
REPRODUCE_ENERGY_RATIO = 0.9
# Absolute hunger units, unlike the herbivore's ratio.
HUNGER_TO_START_HUNTING = 40.0

logger = logging.getLogger(__name__)


class CarnivoreBehavior(Behavior):
    """
    Hunters. A carnivore chases the first herbivore it senses within its
    hunt range, faster and further while running with a pack of its own
    species, and otherwise wanders like a herbivore does.
    """

    def __init__(self, species: str = "", direction_source: Optional[DirectionSource] = None):
        self.species = species
        self._wanderer = Wanderer(WANDER_INTERVAL, direction_source)
        self._pack_active = False
        self._pack_timer = 0.0

    @property
    def in_pack(self) -> bool:
        return self._pack_active

    @property
    def wander_direction(self) -> Direction:
        return self._wanderer.direction

    def update(
        self,
        delta_time: float,
        position: Position,
        nearby_entities: Sequence[EntitySnapshot],
        bounds: Optional[WorldBounds] = None,
        biome: Optional[str] = None,
    ) -> Position:
        bounds = bounds or DEFAULT_BOUNDS
        modifiers = get_biome_modifiers(Archetype.CARNIVORE, biome)
        speed = SPEED * modifiers.speed_multiplier
        hunt_range = HUNT_RANGE * modifiers.aggression_multiplier

        self._wanderer.tick(delta_time)
        self._pack_timer += delta_time

        # The snapshot may include this creature itself; it is counted too.
        pack_members = [
            e
            for e in nearby_entities
            if e.archetype == Archetype.CARNIVORE and e.species == self.species
        ]
        if modifiers.pack_behavior and len(pack_members) > 1:
            if not self._pack_active:
                logger.debug(f"{self.species} joined a pack of {len(pack_members)}")
            self._pack_active = True
            self._pack_timer = 0.0
        elif self._pack_timer > PACK_GRACE_PERIOD:
            self._pack_active = False

        prey = [e for e in nearby_entities if e.archetype == Archetype.HERBIVORE]
        if prey:
            target = prey[0]
            hunt_speed = speed * PACK_SPEED_MULTIPLIER if self._pack_active else speed
            effective_range = (
                hunt_range * PACK_RANGE_MULTIPLIER if self._pack_active else hunt_range
            )
            distance = position.distance_to(target.position)
            if 0 < distance < effective_range:
                direction = position.direction_to(target.position)
                return position.moved(direction, hunt_speed * delta_time)

        self._wanderer.steer(position, bounds)
        return self._wanderer.step(position, speed, delta_time)

    def should_reproduce(self, health, max_health, energy, max_energy, biome=None) -> bool:
        modifiers = get_biome_modifiers(Archetype.CARNIVORE, biome)
        return health > max_health * REPRODUCE_HEALTH_RATIO and energy > max_energy * (
            REPRODUCE_ENERGY_RATIO * modifiers.reproduction_rate
        )

    def should_eat(self, hunger, max_hunger, biome=None) -> bool:
        return False

    def should_hunt(self, hunger, max_hunger, nearby_prey, biome=None) -> bool:
        modifiers = get_biome_modifiers(Archetype.CARNIVORE, biome)
        return (
            hunger > HUNGER_TO_START_HUNTING / modifiers.aggression_multiplier
            and len(nearby_prey) > 0
        )
