from dataclasses import dataclass

from ecosystem.archetype import Archetype
from ecosystem.position import Position


@dataclass(frozen=True)
class EntitySnapshot:
    """
    A point-in-time view of one nearby creature. A list of these is the only
    thing a behaviour can sense, and it is rebuilt by the caller every tick.
    """

    archetype: Archetype
    species: str
    position: Position
