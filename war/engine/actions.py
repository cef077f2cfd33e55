"""
Action definitions for the game.
Actions are immutable, deterministic instructions.
"""

from dataclasses import dataclass

ATTACK = "attack"
CHECK_MISSION = "check_mission"


@dataclass(frozen=True)
class Action:
    """Base action class. All actions have a type, faction, and payload."""
    type: str  # "attack" or "check_mission"
    faction: str  # faction performing the action (the player)
    payload: dict  # Action-specific data


def attack(
    faction: str,
    attacker_index: int,  # zero-based; the driver translates any 1-based numbering
    defender_index: int,
) -> Action:
    """
    Attack from one territory into another.
    Example: attack("Blue", 3, 1) - Delta attacks Bravo in the classic setup.
    Any territory may attack any other; there is no adjacency.
    """
    return Action(
        type=ATTACK,
        faction=faction,
        payload={"attacker": attacker_index, "defender": defender_index},
    )


def check_mission(faction: str) -> Action:
    """Ask whether the faction's secret mission is complete. Ends the game when it is."""
    return Action(type=CHECK_MISSION, faction=faction, payload={})


def attack_indices(payload: dict) -> tuple[int, int]:
    """
    (attacker, defender) from an attack payload.
    Raises ValueError unless both are present and plain ints; floats and bools are refused.
    """
    try:
        attacker_index = payload["attacker"]
        defender_index = payload["defender"]
    except KeyError as e:
        raise ValueError(f"Attack payload is missing {e}: {payload}") from e
    for value in (attacker_index, defender_index):
        if not isinstance(value, int) or isinstance(value, bool):
            raise ValueError(f"Territory indices must be integers: {payload}")
    return attacker_index, defender_index
