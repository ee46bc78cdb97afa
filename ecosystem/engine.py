import logging
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy.orm import Session

from ecosystem.archetype import Archetype
from ecosystem.creatures import Creature
from ecosystem.models import CauseOfDeath, CreatureEvent, Event
from ecosystem.position import Position
from ecosystem.statistics import record_statistics
from ecosystem.world import World

# One frame at 30 FPS.
DEFAULT_DELTA_TIME = 1.0 / 30.0

# Interaction ranges
ATTACK_RANGE = 25.0
EAT_RANGE = 40.0

# Seconds between two attacks or two bites by the same creature.
ATTACK_COOLDOWN = 1.0
EAT_COOLDOWN = 0.2

# Health a plant loses to a single bite.
PLANT_BITE_SIZE = 10.0

# Fraction of the hunger satisfied that is also restored as health.
KILL_HEALTH_GAIN = 0.3
EAT_HEALTH_GAIN = 0.5
FOOD_TO_ENERGY_RATIO = 0.5

# Animals only breed while their hunger is below this fraction of max.
WELL_FED_RATIO = {
    Archetype.HERBIVORE: 0.3,
    Archetype.CARNIVORE: 0.4,
}
REPRODUCTION_ENERGY_COST = 30.0
# Offspring land within this many units of the parent on each axis.
OFFSPRING_SPREAD = 100.0

logger = logging.getLogger(__name__)


@dataclass
class TickReport:
    tick: int
    births: int = 0
    deaths: int = 0
    kills: int = 0
    bites: int = 0


def run_simulation_tick(
    world: World,
    delta_time: float = DEFAULT_DELTA_TIME,
    session: Optional[Session] = None,
    tick: int = 0,
) -> TickReport:
    """
    Process one tick of the ecosystem.

    Creatures first age, then move where their behaviour wants them, then
    hunt, eat and breed as their drives allow. The dead are removed last.
    With a session, events and a statistics row are added to it; committing
    is left to the caller.
    """
    logger.debug(f"+++ Starting tick {tick} +++")
    report = TickReport(tick=tick)

    creatures = world.living()
    for creature in creatures:
        creature.update_vitals(delta_time)

    _process_movement(world, delta_time)
    _process_hunting(world, session, report)
    _process_eating(world, session, report)
    _process_reproduction(world, delta_time, session, report)
    _remove_dead(world, session, report)

    if session is not None:
        record_statistics(session, world, tick, births=report.births, deaths=report.deaths)

    logger.debug(f"+++ Ending tick {tick} +++")
    return report


def _process_movement(world: World, delta_time: float):
    """Asks every behaviour for its next position and keeps it in the world."""
    for creature in world.living():
        nearby = world.nearby_snapshots(creature)
        new_position = creature.behavior.update(
            delta_time, creature.position, nearby, world.bounds, world.biome
        )
        creature.position = world.bounds.clamp(new_position)


def _process_hunting(world: World, session: Optional[Session], report: TickReport):
    for hunter in world.living():
        if hunter.archetype != Archetype.CARNIVORE or hunter.action_cooldown > 0:
            continue

        prey_in_reach = [
            other
            for other in world.nearby(hunter, ATTACK_RANGE)
            if other.archetype == Archetype.HERBIVORE
        ]
        if not hunter.behavior.should_hunt(
            hunter.hunger,
            hunter.max_hunger,
            [prey.snapshot() for prey in prey_in_reach],
            world.biome,
        ):
            continue

        prey = prey_in_reach[0]
        prey.health -= hunter.attack_power
        hunter.action_cooldown = ATTACK_COOLDOWN
        logger.info(f"    {hunter} attacked {prey} for {hunter.attack_power:.2f}")

        if prey.is_dead:
            prey.cause_of_death = CauseOfDeath.PREDATION
            hunger_satisfied = hunter.feed(prey.weight)
            hunter.health = min(
                hunter.max_health, hunter.health + hunger_satisfied * KILL_HEALTH_GAIN
            )
            hunter.energy = min(
                hunter.max_energy, hunter.energy + hunger_satisfied * FOOD_TO_ENERGY_RATIO
            )
            report.kills += 1
            logger.info(f"    kill successful: hunger: {hunter.hunger:.2f}")
            _log_event(session, hunter.id, report.tick, Event.ATTACK_KILLED, f"Killed {prey.id}")
        else:
            _log_event(
                session,
                prey.id,
                report.tick,
                Event.ATTACK_SURVIVED,
                f"Survived attack from {hunter.id}",
            )


def _process_eating(world: World, session: Optional[Session], report: TickReport):
    for grazer in world.living():
        if grazer.archetype != Archetype.HERBIVORE or grazer.action_cooldown > 0:
            continue
        if not grazer.behavior.should_eat(grazer.hunger, grazer.max_hunger, world.biome):
            continue

        plants_in_reach = [
            other
            for other in world.nearby(grazer, EAT_RANGE)
            if other.archetype == Archetype.PLANT
        ]
        if not plants_in_reach:
            continue

        plant = plants_in_reach[0]
        plant.health -= min(PLANT_BITE_SIZE, plant.health)
        grazer.action_cooldown = EAT_COOLDOWN

        hunger_satisfied = grazer.feed(plant.weight)
        grazer.health = min(grazer.max_health, grazer.health + hunger_satisfied * EAT_HEALTH_GAIN)
        grazer.energy = min(
            grazer.max_energy, grazer.energy + hunger_satisfied * FOOD_TO_ENERGY_RATIO
        )
        report.bites += 1
        logger.debug(f"    {grazer} ate from {plant}: hunger: {grazer.hunger:.2f}")

        if plant.is_dead:
            plant.cause_of_death = CauseOfDeath.GRAZED


def _is_well_fed(creature: Creature) -> bool:
    ratio = WELL_FED_RATIO.get(creature.archetype)
    if ratio is None:
        return True
    return creature.hunger < creature.max_hunger * ratio


def _process_reproduction(
    world: World, delta_time: float, session: Optional[Session], report: TickReport
):
    # Offspring born this tick do not breed until the next one.
    parents: List[Creature] = world.living()
    for parent in parents:
        if not parent.behavior.should_reproduce(
            parent.health, parent.max_health, parent.energy, parent.max_energy, world.biome
        ):
            continue
        if not _is_well_fed(parent):
            continue
        if world.rng.random() >= parent.reproduction_rate * delta_time:
            continue

        dx, dy = world.rng.uniform(-OFFSPRING_SPREAD, OFFSPRING_SPREAD, size=2)
        child = world.spawn(
            parent.archetype,
            parent.species,
            Position(parent.position.x + float(dx), parent.position.y + float(dy)),
        )
        parent.energy = max(0.0, parent.energy - REPRODUCTION_ENERGY_COST)
        report.births += 1

        logger.info(f"  {parent} produced {child}")
        _log_event(session, child.id, report.tick, Event.BIRTH, f"Born to parent {parent.id}")
        _log_event(
            session, parent.id, report.tick, Event.REPRODUCE, f"Produced offspring {child.id}"
        )


def _remove_dead(world: World, session: Optional[Session], report: TickReport):
    dead = [c for c in world.all() if c.is_dead]
    for creature in dead:
        _handle_death(world, creature, session, report)


def _handle_death(
    world: World, creature: Creature, session: Optional[Session], report: TickReport
):
    """Removes a dead creature from the world and records why it died."""
    cause = creature.cause_of_death
    if cause is None:
        if creature.archetype != Archetype.PLANT and creature.hunger > creature.max_hunger:
            cause = CauseOfDeath.STARVATION
        else:
            cause = CauseOfDeath.EXHAUSTION
        creature.cause_of_death = cause

    world.remove(creature)
    report.deaths += 1

    logger.info(f"    {creature} died of {cause.name}")
    _log_event(session, creature.id, report.tick, Event.DEATH, f"Died of {cause.name}.")


def _log_event(
    session: Optional[Session], creature_id: int, tick: int, event: Event, description: str
):
    """Creates and saves a new CreatureEvent to the session, if there is one."""
    if session is None:
        return
    session.add(
        CreatureEvent(creature_id=creature_id, tick=tick, event=event, description=description)
    )
