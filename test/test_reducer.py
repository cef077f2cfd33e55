"""
Session flow through apply_action: events, victory, replay and queries.
"""

import random

import pytest

from war.engine.actions import Action, attack, check_mission
from war.engine.combat import CONQUERED, NOT_OWNER, INVALID_INDEX
from war.engine.events import (
    ATTACK_RESOLVED,
    ATTACK_REJECTED,
    TERRITORY_CAPTURED,
    MISSION_CHECKED,
    VICTORY,
)
from war.engine.missions import ConquerCount, EliminateFaction
from war.engine.queries import (
    validate_action,
    get_attack_sources,
    get_attack_targets,
    get_faction_counts,
    get_game_summary,
)
from war.engine.reducer import apply_action, replay_from_actions
from war.engine.utils import initialize_game_state, make_rng

from helpers import FixedRolls

DELTA, BRAVO, ECO = 3, 1, 4


def new_game(mission=None):
    return initialize_game_state(
        player_faction="Blue",
        setup_id="classic",
        mission=mission or EliminateFaction("Green"),
    )


def test_new_game_uses_defaults():
    state = initialize_game_state(rng=FixedRolls(1))
    assert state.player_faction == "Blue"
    assert state.setup_id == "classic"
    assert state.mission == ConquerCount(3)
    assert state.winner is None


def test_attack_emits_resolved_event():
    state = new_game()
    state, events = apply_action(state, attack("Blue", DELTA, BRAVO), FixedRolls(2, 5))
    assert [e.type for e in events] == [ATTACK_RESOLVED]
    payload = events[0].payload
    assert payload["attacker"] == "Delta"
    assert payload["defender"] == "Bravo"
    assert payload["result"] == "attack_failed"
    assert payload["attacker_troops"] == 2
    assert state.attacks_made == 1


def test_conquest_emits_capture_event():
    state = new_game()
    rolls = FixedRolls(6, 1, 6, 1)
    apply_action(state, attack("Blue", DELTA, ECO), rolls)
    state, events = apply_action(state, attack("Blue", DELTA, ECO), rolls)
    assert [e.type for e in events] == [ATTACK_RESOLVED, TERRITORY_CAPTURED]
    assert events[0].payload["result"] == CONQUERED
    capture = events[1].payload
    assert capture == {
        "territory": "Eco",
        "old_owner": "Green",
        "new_owner": "Blue",
        "from_territory": "Delta",
    }
    assert state.world[ECO].owner == "Blue"


def test_rejected_attack_is_an_event_not_an_error():
    state = new_game()
    state, events = apply_action(state, attack("Blue", BRAVO, ECO), FixedRolls())
    assert [e.type for e in events] == [ATTACK_REJECTED]
    assert events[0].payload["reason"] == NOT_OWNER

    state, events = apply_action(state, attack("Blue", 0, 10), FixedRolls())
    assert events[0].payload["reason"] == INVALID_INDEX
    assert state.attacks_made == 2


def test_check_mission_not_complete():
    state = new_game()
    state, events = apply_action(state, check_mission("Blue"), FixedRolls())
    assert [e.type for e in events] == [MISSION_CHECKED]
    assert events[0].payload["complete"] is False
    assert events[0].payload["progress"] == {"remaining": 2}
    assert state.winner is None


def test_check_mission_victory_ends_game():
    state = new_game(ConquerCount(3))
    state.world.set_owner(0, "Blue")
    state.world.set_owner(2, "Blue")
    state, events = apply_action(state, check_mission("Blue"), FixedRolls())
    assert [e.type for e in events] == [MISSION_CHECKED, VICTORY]
    assert events[1].payload["mission"] == {"type": "conquer_count", "threshold": 3}
    assert events[1].payload["territories_owned"] == ["Alfa", "Charlie", "Delta"]
    assert state.winner == "Blue"

    with pytest.raises(ValueError):
        apply_action(state, attack("Blue", DELTA, BRAVO), FixedRolls(6, 1))


def test_conquest_alone_does_not_end_game():
    # victory is only declared by an explicit mission check
    state = new_game()
    rolls = FixedRolls(6, 1, 6, 1, 6, 1, 6, 1, 6, 1, 6, 1)
    for _ in range(2):
        apply_action(state, attack("Blue", DELTA, ECO), rolls)
    for _ in range(4):
        apply_action(state, attack("Blue", DELTA, BRAVO), rolls)
    assert state.world[BRAVO].owner == "Blue"
    assert state.winner is None


def test_wrong_faction_and_unknown_action_raise():
    state = new_game()
    with pytest.raises(ValueError):
        apply_action(state, attack("Red", 0, 1), FixedRolls())
    with pytest.raises(ValueError):
        apply_action(state, Action(type="reinforce", faction="Blue", payload={}), FixedRolls())
    with pytest.raises(ValueError):
        apply_action(state, Action(type="attack", faction="Blue", payload={}), FixedRolls())


@pytest.mark.parametrize("bad_index", [3.9, True, "3", None])
def test_non_integer_indices_are_refused(bad_index):
    state = new_game()
    before = state.world.snapshot()
    action = Action(type="attack", faction="Blue", payload={"attacker": bad_index, "defender": BRAVO})
    rolls = FixedRolls(6, 1)

    with pytest.raises(ValueError):
        apply_action(state, action, rolls)
    result = validate_action(state, action)
    assert not result.valid
    assert "integers" in result.error

    assert state.world.snapshot() == before
    assert state.attacks_made == 0
    assert rolls.calls == []


def test_replay_with_same_seed_is_identical():
    actions = [attack("Blue", DELTA, ECO)] * 3 + [attack("Blue", DELTA, BRAVO)] * 2 + [check_mission("Blue")]
    initial = new_game()

    played = initial.copy()
    rng = make_rng(7)
    played_events = []
    for action in actions:
        played, events = apply_action(played, action, rng)
        played_events.extend(events)

    replayed, replay_events = replay_from_actions(initial, actions, make_rng(7))
    assert replayed.world.snapshot() == played.world.snapshot()
    assert [e.to_dict() for e in replay_events] == [e.to_dict() for e in played_events]
    # the initial state is left untouched
    assert initial.world.snapshot()[ECO]["owner"] == "Green"
    assert replayed.attacks_made == 5


def test_validate_action():
    state = new_game()
    assert validate_action(state, attack("Blue", DELTA, BRAVO)).valid
    assert validate_action(state, check_mission("Blue")).valid

    result = validate_action(state, attack("Blue", DELTA, DELTA))
    assert not result.valid
    assert "same" in result.error

    assert not validate_action(state, attack("Red", 0, 1)).valid
    assert not validate_action(state, Action("attack", "Blue", {"attacker": "x"})).valid
    assert not validate_action(state, Action("move", "Blue", {})).valid


def test_queries():
    state = new_game()
    world = state.world
    assert get_attack_sources(world, "Blue") == [DELTA]
    assert get_attack_targets(world, "Blue") == [0, 1, 2, 4]
    assert get_faction_counts(world) == {"Red": 1, "Green": 2, "Yellow": 1, "Blue": 1}

    summary = get_game_summary(state)
    assert summary["territories_owned"] == 1
    assert summary["total_troops"] == 3
    assert summary["mission"] == "Destroy all Green territories."
    assert summary["mission_progress"] == {"remaining": 2}


def test_seeded_games_draw_the_same_mission():
    first = initialize_game_state(rng=random.Random(5))
    second = initialize_game_state(rng=random.Random(5))
    assert first.mission == second.mission
