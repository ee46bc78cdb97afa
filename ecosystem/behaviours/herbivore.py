import logging
from typing import Optional, Sequence

from ecosystem.archetype import Archetype
from ecosystem.behaviours.behavior import Behavior
from ecosystem.behaviours.wandering import DirectionSource, Wanderer
from ecosystem.biome import get_biome_modifiers
from ecosystem.bounds import DEFAULT_BOUNDS, WorldBounds
from ecosystem.entity_snapshot import EntitySnapshot
from ecosystem.position import Direction, Position, normalize

SPEED = 50.0
WANDER_INTERVAL = 0.5

# Predators closer than this trigger a flee.
FLEE_DISTANCE = 80.0
# Seconds a flee carries on after the last sighting.
FLEE_DURATION = 2.0
FLEE_SPEED_MULTIPLIER = 1.5

FOOD_DETECTION_RANGE = 50.0
FOOD_SEEKING_SPEED_MULTIPLIER = 1.2

REPRODUCE_HEALTH_RATIO = 0.7
REPRODUCE_ENERGY_RATIO = 0.8
HUNGER_TO_START_EATING = 0.6

logger = logging.getLogger(__name__)


class HerbivoreBehavior(Behavior):
    """
    Grazers. Each tick a herbivore, in order of priority:
      1. flees from the first predator inside FLEE_DISTANCE, and keeps
         fleeing for FLEE_DURATION seconds after the last sighting,
      2. walks to the nearest plant within FOOD_DETECTION_RANGE,
      3. wanders, turning back towards the centre near the world edge.
    """

    def __init__(self, direction_source: Optional[DirectionSource] = None):
        self._wanderer = Wanderer(WANDER_INTERVAL, direction_source)
        self._flee_direction: Direction = (0.0, 0.0)
        self._is_fleeing = False
        self._flee_timer = 0.0

    @property
    def is_fleeing(self) -> bool:
        return self._is_fleeing

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
        modifiers = get_biome_modifiers(Archetype.HERBIVORE, biome)
        speed = SPEED * modifiers.speed_multiplier

        self._wanderer.tick(delta_time)
        self._flee_timer += delta_time

        predators = [e for e in nearby_entities if e.archetype == Archetype.CARNIVORE]
        if predators:
            # First match, not necessarily the closest.
            closest_predator = predators[0]
            distance = position.distance_to(closest_predator.position)
            if distance < FLEE_DISTANCE * modifiers.territory_size:
                if not self._is_fleeing:
                    logger.debug(f"predator at {distance:.1f}, fleeing")
                self._is_fleeing = True
                self._flee_timer = 0.0
                flee_direction = normalize(
                    position.x - closest_predator.position.x,
                    position.y - closest_predator.position.y,
                )
                if flee_direction is not None:
                    self._flee_direction = flee_direction

        if self._is_fleeing and self._flee_timer < FLEE_DURATION * modifiers.memory_retention:
            return position.moved(
                self._flee_direction, speed * FLEE_SPEED_MULTIPLIER * delta_time
            )
        self._is_fleeing = False

        self._wanderer.steer(position, bounds)

        food_range = FOOD_DETECTION_RANGE * modifiers.food_efficiency
        nearby_plants = [
            e
            for e in nearby_entities
            if e.archetype == Archetype.PLANT
            and position.distance_to(e.position) <= food_range
        ]
        if nearby_plants:
            closest_plant = min(nearby_plants, key=lambda e: position.distance_to(e.position))
            direction = position.direction_to(closest_plant.position)
            if direction is not None:
                return position.moved(
                    direction, speed * FOOD_SEEKING_SPEED_MULTIPLIER * delta_time
                )

        return self._wanderer.step(position, speed, delta_time)

    def should_reproduce(self, health, max_health, energy, max_energy, biome=None) -> bool:
        modifiers = get_biome_modifiers(Archetype.HERBIVORE, biome)
        return health > max_health * REPRODUCE_HEALTH_RATIO and energy > max_energy * (
            REPRODUCE_ENERGY_RATIO * modifiers.reproduction_rate
        )

    def should_eat(self, hunger, max_hunger, biome=None) -> bool:
        modifiers = get_biome_modifiers(Archetype.HERBIVORE, biome)
        return hunger > max_hunger * (HUNGER_TO_START_EATING / modifiers.food_efficiency)

    def should_hunt(self, hunger, max_hunger, nearby_prey, biome=None) -> bool:
        return False
