"""
Query functions for UI integration.
These functions help the UI understand what actions are available
without mutating game state.
"""

from dataclasses import dataclass
from typing import Any

from war.engine.state import GameState, WorldState
from war.engine.actions import Action, ATTACK, CHECK_MISSION, attack_indices
from war.engine.combat import validate_attack, REJECTION_MESSAGES
from war.engine.missions import count_owned, describe_mission, mission_progress


@dataclass
class ValidationResult:
    """Result of action validation."""
    valid: bool
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"valid": self.valid, "error": self.error}


# ===== Action Validation =====

def validate_action(state: GameState, action: Action) -> ValidationResult:
    """
    Validate an action without applying it.
    Returns ValidationResult with valid=True or valid=False with error message.
    """
    if state.winner is not None:
        return ValidationResult(False, f"Game is over. {state.winner} has won.")

    if action.faction != state.player_faction:
        return ValidationResult(
            False,
            f"Not {action.faction}'s game. Player faction: {state.player_faction}"
        )

    if action.type == CHECK_MISSION:
        return ValidationResult(True)

    if action.type == ATTACK:
        try:
            attacker_index, defender_index = attack_indices(action.payload)
        except ValueError as e:
            return ValidationResult(False, str(e))
        rejection = validate_attack(state.world, attacker_index, defender_index, action.faction)
        if rejection is not None:
            return ValidationResult(False, REJECTION_MESSAGES[rejection])
        return ValidationResult(True)

    return ValidationResult(False, f"Unknown action type: {action.type}")


# ===== World Queries =====

def get_faction_territories(world: WorldState, faction: str) -> list[int]:
    """Indices of territories owned by faction."""
    return [i for i, t in enumerate(world) if t.owner == faction]


def get_attack_sources(world: WorldState, faction: str) -> list[int]:
    """
    Indices the faction may attack from. Every owned territory qualifies,
    including one left with zero or fewer troops.
    """
    return get_faction_territories(world, faction)


def get_attack_targets(world: WorldState, faction: str) -> list[int]:
    """Indices not owned by faction. Attacking an own territory is allowed, just pointless."""
    return [i for i, t in enumerate(world) if t.owner != faction]


def get_faction_counts(world: WorldState) -> dict[str, int]:
    """faction -> number of territories, in order of first appearance."""
    counts: dict[str, int] = {}
    for territory in world:
        counts[territory.owner] = counts.get(territory.owner, 0) + 1
    return counts


def get_game_summary(state: GameState) -> dict[str, Any]:
    """Summary for the player: own holdings and mission progress (the mission text is the player's own)."""
    faction = state.player_faction
    return {
        "player_faction": faction,
        "territories_owned": count_owned(state.world, faction),
        "total_troops": sum(t.troops for t in state.world if t.owner == faction),
        "faction_counts": get_faction_counts(state.world),
        "mission": describe_mission(state.mission),
        "mission_progress": mission_progress(state.world, faction, state.mission),
        "attacks_made": state.attacks_made,
        "winner": state.winner,
    }
