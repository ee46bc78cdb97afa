from dataclasses import dataclass
from typing import Dict, Optional

from ecosystem.archetype import Archetype


@dataclass(frozen=True)
class BiomeModifiers:
    """Multipliers a biome applies on top of an archetype's base behaviour."""

    speed_multiplier: float = 1.0
    aggression_multiplier: float = 1.0
    reproduction_rate: float = 1.0
    food_efficiency: float = 1.0
    # Scales flee distance.
    territory_size: float = 1.0
    pack_behavior: bool = True
    # Scales how long a flee lasts once the predator is gone.
    memory_retention: float = 1.0


# Used when no biome is given: the base behaviour, unmodified.
NEUTRAL_MODIFIERS = BiomeModifiers()

# Rows used for biome names that have no entry below.
DEFAULT_BIOME = "default"

# prettier-ignore
BIOME_TABLES: Dict[Archetype, Dict[str, BiomeModifiers]] = {
    Archetype.PLANT: {
        "forest": BiomeModifiers(1.0, 0.0, 1.2, 1.0, 1.0, False, 0.0),
        "desert": BiomeModifiers(1.0, 0.0, 0.7, 0.8, 1.5, False, 0.0),
        "laboratory": BiomeModifiers(1.0, 0.0, 1.8, 1.5, 0.8, False, 0.0),
        DEFAULT_BIOME: BiomeModifiers(1.0, 0.0, 1.0, 1.0, 1.0, False, 0.0),
    },
    Archetype.HERBIVORE: {
        "forest": BiomeModifiers(1.0, 0.0, 1.2, 1.0, 1.0, False, 1.0),
        "desert": BiomeModifiers(1.3, 0.0, 0.8, 1.5, 1.8, False, 1.5),
        "laboratory": BiomeModifiers(0.7, 0.0, 0.6, 0.8, 0.6, False, 0.5),
        DEFAULT_BIOME: BiomeModifiers(1.0, 0.0, 1.0, 1.0, 1.0, False, 1.0),
    },
    Archetype.CARNIVORE: {
        "forest": BiomeModifiers(1.0, 1.0, 1.0, 1.0, 1.0, False, 1.0),
        "desert": BiomeModifiers(1.2, 1.3, 0.8, 1.2, 1.5, True, 1.3),
        "laboratory": BiomeModifiers(1.5, 2.0, 1.5, 0.7, 0.8, True, 0.6),
        DEFAULT_BIOME: BiomeModifiers(1.0, 1.0, 1.0, 1.0, 1.0, False, 1.0),
    },
}


def get_biome_modifiers(archetype: Archetype, biome: Optional[str]) -> BiomeModifiers:
    """
    Looks up the modifiers for an archetype living in a biome.

    A biome of None means "no biome" and yields the neutral modifiers.
    Unknown biome names fall back to the archetype's default row.
    """
    if biome is None:
        return NEUTRAL_MODIFIERS
    table = BIOME_TABLES[archetype]
    return table.get(biome, table[DEFAULT_BIOME])
