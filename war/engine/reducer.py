"""
Main game reducer.
Applies actions to the session state, enforcing rules.
The world is mutated in place; returns (state, events) where events describe what happened.
"""

from war.engine.state import GameState
from war.engine.actions import Action, ATTACK, CHECK_MISSION, attack_indices
from war.engine.combat import resolve_attack, RandomSource, CONQUERED
from war.engine.missions import is_mission_complete, mission_progress
from war.engine.events import (
    GameEvent,
    attack_resolved,
    attack_rejected,
    territory_captured,
    mission_checked,
    victory,
)


def apply_action(
    state: GameState,
    action: Action,
    rng: RandomSource,
) -> tuple[GameState, list[GameEvent]]:
    """
    Apply a single action to the session, returning the state and events.

    Validates:
    - Game is not over
    - Action faction matches the player's faction

    Combat validation failures are not errors: they produce an attack_rejected event.

    Args:
        state: Session state (mutated in place)
        action: Action to apply
        rng: Random source for combat dice

    Returns:
        Tuple of (state, events) where events describe what happened

    Raises:
        ValueError: game over, wrong faction, unknown action type or malformed attack indices
    """
    if state.winner is not None:
        raise ValueError(f"Game is over. {state.winner} has won.")

    if action.faction != state.player_faction:
        raise ValueError(
            f"Action faction {action.faction} does not match player faction {state.player_faction}")

    if action.type == ATTACK:
        events = _handle_attack(state, action, rng)
    elif action.type == CHECK_MISSION:
        events = _handle_check_mission(state, action)
    else:
        raise ValueError(f"Unknown action type: {action.type}")

    return state, events


def _handle_attack(state: GameState, action: Action, rng: RandomSource) -> list[GameEvent]:
    attacker_index, defender_index = attack_indices(action.payload)

    world = state.world
    outcome = resolve_attack(world, attacker_index, defender_index, action.faction, rng)
    state.attacks_made += 1

    if outcome.rejected:
        return [attack_rejected(
            attacker_index, defender_index, action.faction, outcome.kind, outcome.message)]

    attacker = world[attacker_index]
    defender = world[defender_index]
    events = [attack_resolved(
        attacker=attacker.name,
        defender=defender.name,
        faction=action.faction,
        attack_roll=outcome.attack_roll,
        defense_roll=outcome.defense_roll,
        result=outcome.kind,
        attacker_troops=outcome.attacker_troops,
        defender_troops=outcome.defender_troops,
    )]
    if outcome.kind == CONQUERED:
        events.append(territory_captured(
            territory=defender.name,
            old_owner=outcome.previous_defender_owner,
            new_owner=action.faction,
            from_territory=attacker.name,
        ))
    return events


def _handle_check_mission(state: GameState, action: Action) -> list[GameEvent]:
    world = state.world
    complete = is_mission_complete(world, action.faction, state.mission)
    events = [mission_checked(
        action.faction, complete, mission_progress(world, action.faction, state.mission))]

    if complete:
        state.winner = action.faction
        events.append(victory(
            winner=action.faction,
            mission=state.mission.to_dict(),
            territories_owned=[t.name for t in world if t.owner == action.faction],
        ))
    return events


def replay_from_actions(
    initial_state: GameState,
    actions: list[Action],
    rng: RandomSource,
) -> tuple[GameState, list[GameEvent]]:
    """
    Replay a series of actions from an initial state.
    With an rng seeded the same way as when the game was played, the result is identical.

    Args:
        initial_state: Starting session state (not modified)
        actions: List of actions to apply in sequence
        rng: Random source for combat dice

    Returns:
        Tuple of (final_state, all_events) after all actions applied
    """
    current_state = initial_state.copy()
    all_events: list[GameEvent] = []

    for action in actions:
        current_state, events = apply_action(current_state, action, rng)
        all_events.extend(events)

    return current_state, all_events
