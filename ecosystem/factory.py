import logging
from typing import Optional, Union

from ecosystem.archetype import Archetype
from ecosystem.behaviours.behavior import Behavior
from ecosystem.behaviours.carnivore import CarnivoreBehavior
from ecosystem.behaviours.herbivore import HerbivoreBehavior
from ecosystem.behaviours.plant import PlantBehavior
from ecosystem.behaviours.wandering import DirectionSource

logger = logging.getLogger(__name__)


def create_behavior(
    archetype: Union[Archetype, str],
    species: str,
    direction_source: Optional[DirectionSource] = None,
) -> Behavior:
    """
    Factory function that builds a fresh behaviour for one creature based on
    its archetype. Every call returns a new instance: behaviours carry
    per-individual timers and must never be shared.

    Unrecognised archetypes get a PlantBehavior.
    """
    try:
        archetype = Archetype(archetype)
    except ValueError:
        logger.warning(f"unknown archetype {archetype!r} for {species}, using plant behaviour")
        return PlantBehavior()

    if archetype == Archetype.HERBIVORE:
        return HerbivoreBehavior(direction_source)
    elif archetype == Archetype.CARNIVORE:
        return CarnivoreBehavior(species, direction_source)
    return PlantBehavior()
