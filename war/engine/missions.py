"""
Secret missions and their win conditions.
Two variants only: wipe out one faction, or hold a number of territories.
"""

from dataclasses import dataclass
from typing import Any, Union

from war.engine.state import WorldState

ELIMINATE_FACTION = "eliminate_faction"
CONQUER_COUNT = "conquer_count"


@dataclass(frozen=True)
class EliminateFaction:
    """Won when no territory is owned by target_faction (whatever the player's faction is)."""
    target_faction: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": ELIMINATE_FACTION, "target_faction": self.target_faction}


@dataclass(frozen=True)
class ConquerCount:
    """Won when the player's faction owns at least threshold territories."""
    threshold: int

    def to_dict(self) -> dict[str, Any]:
        return {"type": CONQUER_COUNT, "threshold": self.threshold}


Mission = Union[EliminateFaction, ConquerCount]


def count_owned(world: WorldState, faction: str) -> int:
    """Number of territories owned by faction (exact, case-sensitive match)."""
    return sum(1 for territory in world if territory.owner == faction)


def is_mission_complete(world: WorldState, player_faction: str, mission: Mission) -> bool:
    """Evaluate the mission against the current world. Read-only."""
    if isinstance(mission, EliminateFaction):
        return count_owned(world, mission.target_faction) == 0
    if isinstance(mission, ConquerCount):
        return count_owned(world, player_faction) >= mission.threshold
    raise TypeError(f"Unknown mission type: {type(mission).__name__}")


def describe_mission(mission: Mission) -> str:
    if isinstance(mission, EliminateFaction):
        return f"Destroy all {mission.target_faction} territories."
    if isinstance(mission, ConquerCount):
        return f"Conquer {mission.threshold} territories."
    raise TypeError(f"Unknown mission type: {type(mission).__name__}")


def mission_progress(world: WorldState, player_faction: str, mission: Mission) -> dict[str, Any]:
    """
    Numbers behind the mission check, for UI display.

    EliminateFaction: {"remaining": territories still held by the target}
    ConquerCount: {"owned": territories held by the player, "required": threshold}
    """
    if isinstance(mission, EliminateFaction):
        return {"remaining": count_owned(world, mission.target_faction)}
    if isinstance(mission, ConquerCount):
        return {"owned": count_owned(world, player_faction), "required": mission.threshold}
    raise TypeError(f"Unknown mission type: {type(mission).__name__}")
