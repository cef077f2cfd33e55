"""
Mission draw and win-condition evaluation.
"""

import random

import pytest

from war.engine.missions import (
    EliminateFaction,
    ConquerCount,
    count_owned,
    describe_mission,
    is_mission_complete,
    mission_progress,
)
from war.engine.utils import draw_mission

from helpers import FixedRolls, reference_world


def test_eliminate_green_needs_both_green_territories_gone():
    world = reference_world()
    mission = EliminateFaction("Green")
    assert not is_mission_complete(world, "Blue", mission)

    world.set_owner(1, "Blue")
    assert not is_mission_complete(world, "Blue", mission)

    world.set_owner(4, "Red")
    assert is_mission_complete(world, "Blue", mission)


def test_eliminate_target_ignores_player_faction():
    world = reference_world()
    world.set_owner(1, "Red")
    world.set_owner(4, "Red")
    # completes for any player, even one who never attacked
    assert is_mission_complete(world, "Yellow", EliminateFaction("Green"))


def test_conquer_three_for_blue():
    world = reference_world()
    mission = ConquerCount(3)
    assert count_owned(world, "Blue") == 1
    assert not is_mission_complete(world, "Blue", mission)

    world.set_owner(0, "Blue")
    assert not is_mission_complete(world, "Blue", mission)

    world.set_owner(2, "Blue")
    assert is_mission_complete(world, "Blue", mission)

    world.set_owner(4, "Blue")
    assert is_mission_complete(world, "Blue", mission)


def test_faction_labels_are_case_sensitive():
    world = reference_world()
    world.set_owner(1, "green")
    world.set_owner(4, "GREEN")
    assert is_mission_complete(world, "Blue", EliminateFaction("Green"))
    assert not is_mission_complete(world, "blue", ConquerCount(1))


def test_evaluation_is_pure():
    world = reference_world()
    before = [(t.name, t.owner, t.troops) for t in world]
    for mission in (EliminateFaction("Green"), ConquerCount(3), ConquerCount(1)):
        results = {is_mission_complete(world, "Blue", mission) for _ in range(5)}
        assert len(results) == 1
    assert [(t.name, t.owner, t.troops) for t in world] == before


def test_unknown_mission_type_raises():
    with pytest.raises(TypeError):
        is_mission_complete(reference_world(), "Blue", object())


def test_missions_are_immutable():
    mission = ConquerCount(3)
    with pytest.raises(AttributeError):
        mission.threshold = 1


def test_describe_mission():
    assert describe_mission(EliminateFaction("Green")) == "Destroy all Green territories."
    assert describe_mission(ConquerCount(3)) == "Conquer 3 territories."


def test_mission_progress():
    world = reference_world()
    assert mission_progress(world, "Blue", EliminateFaction("Green")) == {"remaining": 2}
    assert mission_progress(world, "Blue", ConquerCount(3)) == {"owned": 1, "required": 3}


def test_draw_mission_maps_roll_to_variant():
    assert draw_mission(FixedRolls(0)) == EliminateFaction("Green")
    assert draw_mission(FixedRolls(1)) == ConquerCount(3)


def test_draw_mission_uses_given_parameters():
    assert draw_mission(FixedRolls(1), conquer_threshold=4) == ConquerCount(4)
    assert draw_mission(FixedRolls(0), eliminate_target="Red") == EliminateFaction("Red")


def test_draw_mission_covers_both_variants():
    rng = random.Random(99)
    drawn = [draw_mission(rng) for _ in range(200)]
    eliminate = sum(isinstance(m, EliminateFaction) for m in drawn)
    conquer = sum(isinstance(m, ConquerCount) for m in drawn)
    assert eliminate + conquer == 200
    assert 60 < eliminate < 140
