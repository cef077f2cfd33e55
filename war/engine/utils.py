"""
Utility functions for the game engine.
"""

import random

from war.engine.state import GameState, WorldState
from war.engine.definitions import load_territory_definitions, load_mission_settings
from war.engine.missions import (
    Mission,
    EliminateFaction,
    ConquerCount,
    describe_mission,
)
from war.engine.combat import RandomSource, CONQUERED, DEFENDER_REPELLED
from war.engine.events import GameEvent, ATTACK_RESOLVED, ATTACK_REJECTED


def make_rng(seed: int | None = None) -> random.Random:
    """
    Create a private random source.

    Args:
        seed: Optional seed for reproducibility (None seeds from the OS)

    Returns:
        random.Random instance; never touches the module-level generator
    """
    return random.Random(seed)


def create_world(setup_id: str | None = None) -> WorldState:
    """Build a fresh 5-territory world from a setup's seed data (default setup when None)."""
    return WorldState.from_definitions(load_territory_definitions(setup_id))


def draw_mission(
    rng: RandomSource | None = None,
    eliminate_target: str | None = None,
    conquer_threshold: int | None = None,
) -> Mission:
    """
    Draw the player's secret mission, uniformly over the two variants.

    Args:
        rng: Random source (a fresh unseeded one if None)
        eliminate_target: Faction for EliminateFaction (war.config default if None)
        conquer_threshold: Threshold for ConquerCount (war.config default if None)
    """
    from war.config import ELIMINATE_TARGET_FACTION, CONQUER_THRESHOLD

    if rng is None:
        rng = make_rng()
    if eliminate_target is None:
        eliminate_target = ELIMINATE_TARGET_FACTION
    if conquer_threshold is None:
        conquer_threshold = CONQUER_THRESHOLD

    variants: list[Mission] = [
        EliminateFaction(target_faction=eliminate_target),
        ConquerCount(threshold=conquer_threshold),
    ]
    return variants[rng.randint(0, len(variants) - 1)]


def initialize_game_state(
    player_faction: str | None = None,
    setup_id: str | None = None,
    rng: RandomSource | None = None,
    mission: Mission | None = None,
) -> GameState:
    """
    Create a new session: world from the setup, mission drawn once from rng.

    Args:
        player_faction: Faction the player controls (war.config default if None)
        setup_id: Setup under data/setups/ (war.config default if None)
        rng: Random source used for the mission draw
        mission: Fixed mission instead of a draw (tests, scripted games)
    """
    from war.config import DEFAULT_PLAYER_FACTION, DEFAULT_SETUP_ID

    if player_faction is None:
        player_faction = DEFAULT_PLAYER_FACTION
    if setup_id is None:
        setup_id = DEFAULT_SETUP_ID

    world = create_world(setup_id)
    if mission is None:
        settings = load_mission_settings(setup_id)
        mission = draw_mission(
            rng,
            eliminate_target=settings.eliminate_target,
            conquer_threshold=settings.conquer_threshold,
        )

    return GameState(
        world=world,
        player_faction=player_faction,
        mission=mission,
        setup_id=setup_id,
    )


def print_world(world: WorldState):
    """
    Pretty-print the world as a table, numbered from 1 for the player.
    """
    print(f"\n{'Name':<10}  {'Faction':<12}  {'Troops':<8}")
    print("-" * 38)
    for i, territory in enumerate(world, 1):
        print(f"{i}) {territory.name:<10} {territory.owner:<12} {territory.troops:<8}")


def print_mission(mission: Mission):
    print(describe_mission(mission))


def print_attack_events(events: list[GameEvent]):
    """
    Pretty-print the events of one attack action.

    Args:
        events: Events returned by apply_action for an attack
    """
    for event in events:
        p = event.payload
        if event.type == ATTACK_REJECTED:
            print(p["message"])
        elif event.type == ATTACK_RESOLVED:
            print("\nRolling dice...")
            print(f"Attack ({p['attacker']}): {p['attack_roll']}")
            print(f"Defense ({p['defender']}): {p['defense_roll']}")
            if p["result"] == CONQUERED:
                print(f"\nTerritory CONQUERED! {p['defender']} now belongs to {p['faction']}.")
            elif p["result"] == DEFENDER_REPELLED:
                print("Defender lost one troop!")
            else:
                print("Attack failed! You lost one troop.")
