#!/usr/bin/env python3
"""
Interactive terminal game for WAR.
Run: python main.py [--seed N] [--setup ID] [--faction NAME]
"""

import argparse
import sys

from war.config import DEFAULT_SETUP_ID, DEFAULT_PLAYER_FACTION
from war.engine.actions import attack, check_mission
from war.engine.events import VICTORY
from war.engine.reducer import apply_action
from war.engine.utils import (
    initialize_game_state,
    make_rng,
    print_world,
    print_mission,
    print_attack_events,
)
from war.engine.queries import get_attack_sources


def print_menu():
    print("\n" + "=" * 36)
    print("              MENU")
    print("=" * 36)
    print("1 - Attack")
    print("2 - Check mission")
    print("0 - Quit")


def read_int(prompt: str) -> int | None:
    """Read an integer; None on anything that is not one."""
    raw = input(prompt).strip()
    try:
        return int(raw)
    except ValueError:
        return None


def prompt_attack(state):
    """
    Ask for origin and target using the 1-based numbers shown in the table.
    Returns an attack action with zero-based indices, or None if input was not a number.
    """
    size = len(state.world)
    sources = get_attack_sources(state.world, state.player_faction)
    if sources:
        print("Your territories: " + ", ".join(str(i + 1) for i in sources))

    origin = read_int(f"\nOrigin territory number (1-{size}): ")
    target = read_int(f"Target territory number (1-{size}): ")
    if origin is None or target is None:
        print("Please enter a number.")
        return None
    return attack(state.player_faction, origin - 1, target - 1)


def main_loop(seed: int | None = None, setup_id: str = DEFAULT_SETUP_ID,
              faction: str = DEFAULT_PLAYER_FACTION):
    """Main game loop. Ends on quit or on a successful mission check."""
    rng = make_rng(seed)
    state = initialize_game_state(player_faction=faction, setup_id=setup_id, rng=rng)

    while state.winner is None:
        print("\n" + "=" * 36)
        print("             CURRENT MAP")
        print("=" * 36)
        print_world(state.world)

        print("\n" + "-" * 36)
        print(f"           YOUR MISSION ({state.player_faction})")
        print("-" * 36)
        print_mission(state.mission)

        print_menu()
        choice = read_int("\nChoice: ")

        if choice == 1:
            action = prompt_attack(state)
            if action is None:
                continue
            state, events = apply_action(state, action, rng)
            print_attack_events(events)
        elif choice == 2:
            state, events = apply_action(state, check_mission(state.player_faction), rng)
            if any(e.type == VICTORY for e in events):
                print("\nMISSION COMPLETE! YOU WIN!")
            else:
                print("\nMission not complete yet.")
        elif choice == 0:
            print("Leaving the game...")
            break
        else:
            print("Invalid option!")

    return state


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="WAR - single-player territorial conquest")
    parser.add_argument("--seed", type=int, default=None, help="seed for the mission draw and dice")
    parser.add_argument("--setup", default=DEFAULT_SETUP_ID, help="setup id under war/data/setups/")
    parser.add_argument("--faction", default=DEFAULT_PLAYER_FACTION, help="faction you play")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Entry point. Returns the process exit status."""
    args = parse_args(argv)
    try:
        main_loop(seed=args.seed, setup_id=args.setup, faction=args.faction)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\n\nGame interrupted. Goodbye!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
