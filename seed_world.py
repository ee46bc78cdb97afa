import logging
from typing import Dict, List, Optional, Tuple

from ecosystem.archetype import Archetype
from ecosystem.creatures import Creature
from ecosystem.position import Position
from ecosystem.world import World

# Which species populate each biome.
# prettier-ignore
BIOME_SPECIES: Dict[Optional[str], Dict[Archetype, List[str]]] = {
    None: {
        Archetype.PLANT: ["moss", "fern", "mushroom", "flower"],
        Archetype.HERBIVORE: ["rabbit", "deer"],
        Archetype.CARNIVORE: ["rat", "wolf"],
    },
    "forest": {
        Archetype.PLANT: ["moss", "fern"],
        Archetype.HERBIVORE: ["rabbit", "deer"],
        Archetype.CARNIVORE: ["rat", "wolf"],
    },
    "desert": {
        Archetype.PLANT: ["cactus", "desert_flower", "dry_grass"],
        Archetype.HERBIVORE: ["rabbit", "mouse"],
        Archetype.CARNIVORE: ["rat", "snake"],
    },
    "laboratory": {
        Archetype.PLANT: ["mutated_moss", "glowing_fungus", "toxic_plant"],
        Archetype.HERBIVORE: ["rabbit"],
        Archetype.CARNIVORE: ["rat"],
    },
}

logger = logging.getLogger(__name__)


def _random_position(world: World) -> Position:
    bounds = world.bounds
    return Position(
        float(world.rng.uniform(bounds.min_x, bounds.max_x)),
        float(world.rng.uniform(bounds.min_y, bounds.max_y)),
    )


def _choose(world: World, options: List[str]) -> str:
    return options[int(world.rng.integers(len(options)))]


def seed_population(
    world: World,
    num_plants: int,
    num_herbivores: int,
    num_carnivores: int,
    num_packs: int,
    pack_radius: float,
) -> List[Creature]:
    """
    Creates the initial population of the world. Plants and herbivores are
    scattered; carnivores are placed in single-species packs.
    """
    species = BIOME_SPECIES.get(world.biome, BIOME_SPECIES[None])
    created: List[Creature] = []

    for _ in range(num_plants):
        plant_species = _choose(world, species[Archetype.PLANT])
        created.append(world.spawn(Archetype.PLANT, plant_species, _random_position(world)))
    logger.info(f"Created {num_plants} plants")

    for _ in range(num_herbivores):
        herbivore_species = _choose(world, species[Archetype.HERBIVORE])
        created.append(
            world.spawn(Archetype.HERBIVORE, herbivore_species, _random_position(world))
        )
    logger.info(f"Created {num_herbivores} herbivores")

    if num_carnivores > 0:
        # Create pack centres, each with one species of its own.
        packs: List[Tuple[Position, str]] = [
            (_random_position(world), _choose(world, species[Archetype.CARNIVORE]))
            for _ in range(max(1, num_packs))
        ]
        logger.info(f"Created {len(packs)} carnivore pack centres")

        for i in range(num_carnivores):
            center, pack_species = packs[i % len(packs)]
            dx, dy = world.rng.uniform(-pack_radius, pack_radius, size=2)
            created.append(
                world.spawn(
                    Archetype.CARNIVORE,
                    pack_species,
                    Position(center.x + float(dx), center.y + float(dy)),
                )
            )
        logger.info(f"Created {num_carnivores} carnivores")

    return created
