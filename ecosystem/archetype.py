import enum


class Archetype(enum.Enum):
    """
    The fixed creature categories. An archetype decides which behaviour
    strategy and which drive thresholds apply to a creature for its lifetime.
    """

    PLANT = "plant"
    HERBIVORE = "herbivore"
    CARNIVORE = "carnivore"
