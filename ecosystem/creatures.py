from dataclasses import dataclass
from typing import Dict, Optional

from ecosystem.archetype import Archetype
from ecosystem.behaviours.behavior import Behavior
from ecosystem.behaviours.wandering import DirectionSource
from ecosystem.entity_snapshot import EntitySnapshot
from ecosystem.factory import create_behavior
from ecosystem.position import Position

MAX_ENERGY = 100.0

# Energy drains slowly for everyone; an empty tank starts costing health.
ENERGY_DRAIN_PER_SECOND = 0.1
EXHAUSTION_DAMAGE_PER_SECOND = 0.5

PLANT_GROWTH_PER_SECOND = 0.05
# Plants photosynthesise faster than they burn energy.
PLANT_ENERGY_PER_SECOND = 0.2

HUNGER_PER_SECOND = {
    Archetype.HERBIVORE: 2.0,
    Archetype.CARNIVORE: 1.5,
}
STARVATION_DAMAGE_PER_SECOND = {
    Archetype.HERBIVORE: 0.5,
    Archetype.CARNIVORE: 0.3,
}
# Hunger capacity per kg of body weight.
HUNGER_PER_KG = {
    Archetype.HERBIVORE: 40.0,
    Archetype.CARNIVORE: 30.0,
}

# Chance per second of reproducing once the drives allow it.
REPRODUCTION_RATE = {
    Archetype.PLANT: 0.01,
    Archetype.HERBIVORE: 0.008,
    Archetype.CARNIVORE: 0.006,
}


@dataclass(frozen=True)
class SpeciesStats:
    max_health: float
    weight: float
    # Hunger removed per kg of food eaten. Unused by plants.
    efficiency: float = 0.0
    attack_power: float = 0.0


DEFAULT_SPECIES = "default"

# prettier-ignore
SPECIES_STATS: Dict[Archetype, Dict[str, SpeciesStats]] = {
    Archetype.PLANT: {
        "moss": SpeciesStats(50.0, 0.05),
        "fern": SpeciesStats(50.0, 0.2),
        "mushroom": SpeciesStats(50.0, 0.1),
        "flower": SpeciesStats(50.0, 0.15),
        "cactus": SpeciesStats(50.0, 0.3),
        "desert_flower": SpeciesStats(50.0, 0.1),
        "dry_grass": SpeciesStats(50.0, 0.05),
        "mutated_moss": SpeciesStats(50.0, 0.2),
        "glowing_fungus": SpeciesStats(50.0, 0.3),
        "toxic_plant": SpeciesStats(50.0, 0.4),
        DEFAULT_SPECIES: SpeciesStats(50.0, 0.1),
    },
    Archetype.HERBIVORE: {
        "rabbit": SpeciesStats(60.0, 2.5, efficiency=22.0),
        "deer": SpeciesStats(120.0, 80.0, efficiency=18.0),
        "mouse": SpeciesStats(40.0, 0.03, efficiency=25.0),
        "turtle": SpeciesStats(150.0, 15.0, efficiency=15.0),
        DEFAULT_SPECIES: SpeciesStats(60.0, 2.0, efficiency=20.0),
    },
    Archetype.CARNIVORE: {
        "rat": SpeciesStats(80.0, 0.3, efficiency=11.0, attack_power=20.0),
        "wolf": SpeciesStats(120.0, 40.0, efficiency=12.0, attack_power=35.0),
        "snake": SpeciesStats(60.0, 2.0, efficiency=15.0, attack_power=40.0),
        "bear": SpeciesStats(200.0, 300.0, efficiency=8.0, attack_power=50.0),
        DEFAULT_SPECIES: SpeciesStats(100.0, 5.0, efficiency=10.0, attack_power=25.0),
    },
}


def get_species_stats(archetype: Archetype, species: str) -> SpeciesStats:
    table = SPECIES_STATS[archetype]
    return table.get(species, table[DEFAULT_SPECIES])


class Creature:
    """
    One living thing in the world. The creature owns its vitals; its
    behaviour only ever reads them.
    """

    def __init__(
        self,
        id: int,
        archetype: Archetype,
        species: str,
        position: Position,
        direction_source: Optional[DirectionSource] = None,
    ):
        stats = get_species_stats(archetype, species)

        self.id = id
        self.archetype = archetype
        self.species = species
        self.position = position

        self.max_health = stats.max_health
        self.health = stats.max_health
        self.max_energy = MAX_ENERGY
        self.energy = MAX_ENERGY
        self.weight = stats.weight
        self.efficiency = stats.efficiency
        self.attack_power = stats.attack_power
        self.max_hunger = stats.weight * HUNGER_PER_KG.get(archetype, 0.0)
        self.hunger = 0.0
        self.reproduction_rate = REPRODUCTION_RATE[archetype]

        self.age = 0.0
        # Seconds until this creature may eat or attack again.
        self.action_cooldown = 0.0
        # Set by whatever kills the creature.
        self.cause_of_death = None

        self.behavior: Behavior = create_behavior(archetype, species, direction_source)

    @property
    def is_dead(self) -> bool:
        return self.health <= 0

    def snapshot(self) -> EntitySnapshot:
        return EntitySnapshot(self.archetype, self.species, self.position)

    def update_vitals(self, delta_time: float):
        """Ages the creature and applies its metabolism for one tick."""
        self.age += delta_time
        self.action_cooldown = max(0.0, self.action_cooldown - delta_time)

        self.energy = max(0.0, self.energy - ENERGY_DRAIN_PER_SECOND * delta_time)
        if self.energy <= 0:
            self.health -= EXHAUSTION_DAMAGE_PER_SECOND * delta_time

        if self.archetype == Archetype.PLANT:
            if not self.is_dead:
                self.health = min(
                    self.max_health, self.health + PLANT_GROWTH_PER_SECOND * delta_time
                )
                self.energy = min(
                    self.max_energy, self.energy + PLANT_ENERGY_PER_SECOND * delta_time
                )
            return

        self.hunger += HUNGER_PER_SECOND[self.archetype] * delta_time
        if self.hunger > self.max_hunger:
            self.health -= STARVATION_DAMAGE_PER_SECOND[self.archetype] * delta_time

    def feed(self, amount_of_food: float):
        """Digests `amount_of_food` kg using this species' efficiency."""
        hunger_satisfied = amount_of_food * self.efficiency
        self.hunger = max(0.0, self.hunger - hunger_satisfied)
        return hunger_satisfied

    def to_dict(self):
        return {
            "id": self.id,
            "archetype": self.archetype.value,
            "species": self.species,
            "x": self.position.x,
            "y": self.position.y,
            "health": self.health,
            "max_health": self.max_health,
            "energy": self.energy,
            "hunger": self.hunger,
            "max_hunger": self.max_hunger,
            "age": self.age,
        }

    def __repr__(self):
        return f"<Creature {self.id} {self.species}>"
