"""
Combat resolution system.
One attack is one die per side: ties go to the attacker, the loser drops a troop.
A defender brought to zero troops changes hands and is garrisoned with one troop
taken from the attacker.
Rejected attacks (bad index, self attack, not the attacker's territory) are
reported as outcomes and never touch the world.
"""

from dataclasses import dataclass
from typing import Protocol

from war.engine import DICE_SIDES
from war.engine.state import WorldState

# Outcome kinds
CONQUERED = "conquered"
DEFENDER_REPELLED = "defender_repelled"
ATTACK_FAILED = "attack_failed"

# Validation failures, in the order they are checked
INVALID_INDEX = "invalid_index"
SELF_ATTACK = "self_attack"
NOT_OWNER = "not_owner"

REJECTED_OUTCOMES = (INVALID_INDEX, SELF_ATTACK, NOT_OWNER)

REJECTION_MESSAGES = {
    INVALID_INDEX: "Invalid territory index.",
    SELF_ATTACK: "Origin and target cannot be the same territory.",
    NOT_OWNER: "You can only attack from your own territories.",
}


class RandomSource(Protocol):
    """Anything that draws a uniform integer in [a, b], both ends inclusive (random.Random does)."""

    def randint(self, a: int, b: int) -> int:
        ...


@dataclass
class AttackOutcome:
    """Result of one attack attempt."""
    kind: str
    attacker_index: int
    defender_index: int
    attacking_faction: str
    attack_roll: int | None = None  # None when the attack was rejected
    defense_roll: int | None = None
    attacker_troops: int | None = None  # troop counts after resolution
    defender_troops: int | None = None
    previous_defender_owner: str | None = None

    @property
    def rejected(self) -> bool:
        return self.kind in REJECTED_OUTCOMES

    @property
    def message(self) -> str | None:
        return REJECTION_MESSAGES.get(self.kind)


def validate_attack(
    world: WorldState,
    attacker_index: int,
    defender_index: int,
    attacking_faction: str,
) -> str | None:
    """
    Check an attack without rolling. Returns the first failing outcome kind, or None if valid.

    Order: INVALID_INDEX, SELF_ATTACK, NOT_OWNER.
    """
    if not world.is_valid_index(attacker_index) or not world.is_valid_index(defender_index):
        return INVALID_INDEX
    if attacker_index == defender_index:
        return SELF_ATTACK
    if world[attacker_index].owner != attacking_faction:
        return NOT_OWNER
    return None


def roll_die(rng: RandomSource) -> int:
    return rng.randint(1, DICE_SIDES)


def resolve_attack(
    world: WorldState,
    attacker_index: int,
    defender_index: int,
    attacking_faction: str,
    rng: RandomSource,
) -> AttackOutcome:
    """
    Resolve a single attack from attacker_index into defender_index.

    Combat rules:
    - Attack die is drawn first, then defense die, both 1..DICE_SIDES
    - attack >= defense: defender loses 1 troop
      - defender at 0 or below: owner becomes attacking_faction, defender troops = 1,
        attacker loses 1 troop (the unit moved in) -> CONQUERED
      - otherwise -> DEFENDER_REPELLED
    - attack < defense: attacker loses 1 troop -> ATTACK_FAILED

    The attacker's own troop count is never floor-checked; it may reach 0 or below.

    Note: This function MODIFIES world in place. No mutation and no dice are drawn
    when the attack is rejected.

    Args:
        world: World to mutate
        attacker_index: Zero-based index of the attacking territory
        defender_index: Zero-based index of the defending territory
        attacking_faction: Faction ordering the attack; must own the attacker
        rng: Random source for the two dice

    Returns:
        AttackOutcome with kind, both dice and the resulting troop counts
    """
    rejection = validate_attack(world, attacker_index, defender_index, attacking_faction)
    if rejection is not None:
        return AttackOutcome(
            kind=rejection,
            attacker_index=attacker_index,
            defender_index=defender_index,
            attacking_faction=attacking_faction,
        )

    attacker_troops = world[attacker_index].troops
    defender_troops = world[defender_index].troops
    previous_owner = world[defender_index].owner

    attack_roll = roll_die(rng)
    defense_roll = roll_die(rng)

    if attack_roll >= defense_roll:
        defender_troops -= 1
        if defender_troops <= 0:
            world.set_owner(defender_index, attacking_faction)
            defender_troops = 1
            attacker_troops -= 1
            kind = CONQUERED
        else:
            kind = DEFENDER_REPELLED
    else:
        attacker_troops -= 1
        kind = ATTACK_FAILED

    world.set_troops(attacker_index, attacker_troops)
    world.set_troops(defender_index, defender_troops)

    return AttackOutcome(
        kind=kind,
        attacker_index=attacker_index,
        defender_index=defender_index,
        attacking_faction=attacking_faction,
        attack_roll=attack_roll,
        defense_roll=defense_roll,
        attacker_troops=attacker_troops,
        defender_troops=defender_troops,
        previous_defender_owner=previous_owner,
    )
