"""
Game events for UI hooks and logging.
Events describe what happened during action processing.
"""

from dataclasses import dataclass
from typing import Any


@dataclass
class GameEvent:
    """Base event class. All events have a type and payload."""
    type: str
    payload: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "payload": self.payload}


# ===== Event Type Constants =====

# Combat events
ATTACK_RESOLVED = "attack_resolved"
ATTACK_REJECTED = "attack_rejected"

# Territory events
TERRITORY_CAPTURED = "territory_captured"

# Mission events
MISSION_CHECKED = "mission_checked"

# Victory events
VICTORY = "victory"


# ===== Event Factory Functions =====

def attack_resolved(
    attacker: str,
    defender: str,
    faction: str,
    attack_roll: int,
    defense_roll: int,
    result: str,  # "conquered", "defender_repelled", "attack_failed"
    attacker_troops: int,
    defender_troops: int,
) -> GameEvent:
    return GameEvent(ATTACK_RESOLVED, {
        "attacker": attacker,
        "defender": defender,
        "faction": faction,
        "attack_roll": attack_roll,
        "defense_roll": defense_roll,
        "result": result,
        "attacker_troops": attacker_troops,
        "defender_troops": defender_troops,
    })


def attack_rejected(
    attacker_index: int,
    defender_index: int,
    faction: str,
    reason: str,  # "invalid_index", "self_attack", "not_owner"
    message: str,
) -> GameEvent:
    """Emitted when validation stops an attack before any dice are rolled."""
    return GameEvent(ATTACK_REJECTED, {
        "attacker_index": attacker_index,
        "defender_index": defender_index,
        "faction": faction,
        "reason": reason,
        "message": message,
    })


def territory_captured(
    territory: str,
    old_owner: str | None,
    new_owner: str,
    from_territory: str,
) -> GameEvent:
    return GameEvent(TERRITORY_CAPTURED, {
        "territory": territory,
        "old_owner": old_owner,
        "new_owner": new_owner,
        "from_territory": from_territory,
    })


def mission_checked(
    faction: str,
    complete: bool,
    progress: dict[str, int],
) -> GameEvent:
    return GameEvent(MISSION_CHECKED, {
        "faction": faction,
        "complete": complete,
        "progress": progress,
    })


def victory(
    winner: str,
    mission: dict[str, Any],
    territories_owned: list[str],
) -> GameEvent:
    """
    Emitted when the player's mission check succeeds.

    Args:
        winner: The player's faction
        mission: The mission that was completed (revealed now that the game is over)
        territories_owned: Names of territories the winner holds at that moment
    """
    return GameEvent(VICTORY, {
        "winner": winner,
        "mission": mission,
        "territories_owned": territories_owned,
    })
