import logging
from typing import List, Optional, Tuple

import numpy as np
from sqlalchemy.orm import Session

from ecosystem.archetype import Archetype
from ecosystem.creatures import Creature
from ecosystem.models import EcosystemHealth, EcosystemStats
from ecosystem.world import World

# The population mix of a balanced ecosystem.
IDEAL_PLANT_RATIO = 0.6
IDEAL_HERBIVORE_RATIO = 0.3
IDEAL_CARNIVORE_RATIO = 0.1

# Upper imbalance bound for each health level, best first.
HEALTH_LEVELS = [
    (0.1, EcosystemHealth.EXCELLENT),
    (0.2, EcosystemHealth.GOOD),
    (0.3, EcosystemHealth.FAIR),
    (0.4, EcosystemHealth.POOR),
]

logger = logging.getLogger(__name__)


def calculate_ecosystem_health(plants: int, herbivores: int, carnivores: int) -> EcosystemHealth:
    """
    Grades the ecosystem by how far its population mix strays from the
    ideal 60/30/10 split of plants, herbivores and carnivores.
    """
    total = plants + herbivores + carnivores
    if total == 0:
        return EcosystemHealth.CRITICAL

    imbalance = (
        abs(plants / total - IDEAL_PLANT_RATIO)
        + abs(herbivores / total - IDEAL_HERBIVORE_RATIO)
        + abs(carnivores / total - IDEAL_CARNIVORE_RATIO)
    )

    for limit, level in HEALTH_LEVELS:
        if imbalance < limit:
            return level
    return EcosystemHealth.CRITICAL


def _get_percentiles(
    creatures: List[Creature], trait_name: str
) -> Tuple[Optional[float], Optional[float], Optional[float]]:
    if not creatures:
        return None, None, None
    values = [getattr(c, trait_name) for c in creatures]
    q1, median, q3 = np.percentile(values, [25, 50, 75])
    return float(q1), float(median), float(q3)


def record_statistics(
    session: Session, world: World, tick: int, births: int = 0, deaths: int = 0
) -> EcosystemStats:
    """Calculates the current ecosystem stats and adds them to the session."""
    living = world.living()
    counts = world.counts()

    if not living:
        logger.warning("No living creatures")

    herbivores = [c for c in living if c.archetype == Archetype.HERBIVORE]
    carnivores = [c for c in living if c.archetype == Archetype.CARNIVORE]

    h_hunger_q1, h_hunger_med, h_hunger_q3 = _get_percentiles(herbivores, "hunger")
    c_hunger_q1, c_hunger_med, c_hunger_q3 = _get_percentiles(carnivores, "hunger")

    stats = EcosystemStats(
        tick=tick,
        population=len(living),
        plant_population=counts[Archetype.PLANT],
        herbivore_population=counts[Archetype.HERBIVORE],
        carnivore_population=counts[Archetype.CARNIVORE],
        health=calculate_ecosystem_health(
            counts[Archetype.PLANT],
            counts[Archetype.HERBIVORE],
            counts[Archetype.CARNIVORE],
        ),
        births=births,
        deaths=deaths,
        herbivore_hunger_q1=h_hunger_q1,
        herbivore_hunger_median=h_hunger_med,
        herbivore_hunger_q3=h_hunger_q3,
        carnivore_hunger_q1=c_hunger_q1,
        carnivore_hunger_median=c_hunger_med,
        carnivore_hunger_q3=c_hunger_q3,
    )
    session.add(stats)

    logger.info(
        f"  Recorded stats for tick {tick}: population {stats.population}, "
        f"health {stats.health.value}"
    )
    return stats
