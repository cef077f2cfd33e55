"""
Game state representation.
The world is a fixed-size, ordered roster of read-only territory records; combat swaps them by index.
GameState bundles one player's session: world, faction, secret mission, winner.
"""

from dataclasses import dataclass, replace
from copy import deepcopy
from typing import Any, Iterator, TYPE_CHECKING

from war.engine import WORLD_SIZE

if TYPE_CHECKING:
    from war.engine.definitions import TerritoryDefinition
    from war.engine.missions import Mission


@dataclass(frozen=True)
class Territory:
    """State of a single territory. Read-only: WorldState swaps in a new record on every change."""
    name: str  # display identifier, never changes after world creation
    owner: str  # faction label, case-sensitive
    troops: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "owner": self.owner,
            "troops": self.troops,
        }


class WorldState:
    """
    Ordered roster of exactly WORLD_SIZE territories, indexed from 0.

    Only owner and troop count can be changed, and only through an index.
    Nothing adds or removes a territory once the world exists.
    """

    def __init__(self, territories: list[Territory]):
        if len(territories) != WORLD_SIZE:
            raise ValueError(
                f"A world has exactly {WORLD_SIZE} territories, got {len(territories)}")
        names = [t.name for t in territories]
        if len(set(names)) != len(names):
            raise ValueError(f"Territory names must be unique: {names}")
        # Fixed slots; only set_owner/set_troops replace the record in a slot.
        self._territories = list(territories)

    @classmethod
    def from_definitions(cls, defs: list["TerritoryDefinition"]) -> "WorldState":
        return cls([Territory(name=d.name, owner=d.owner, troops=d.troops) for d in defs])

    def __len__(self) -> int:
        return len(self._territories)

    def __getitem__(self, index: int) -> Territory:
        return self._territories[index]

    def __iter__(self) -> Iterator[Territory]:
        return iter(self._territories)

    def __repr__(self) -> str:
        inner = ", ".join(f"{t.name}:{t.owner}:{t.troops}" for t in self._territories)
        return f"WorldState({inner})"

    def is_valid_index(self, index: int) -> bool:
        return 0 <= index < len(self._territories)

    def set_owner(self, index: int, faction: str) -> None:
        self._territories[index] = replace(self._territories[index], owner=faction)

    def set_troops(self, index: int, troops: int) -> None:
        self._territories[index] = replace(self._territories[index], troops=troops)

    def snapshot(self) -> list[dict[str, Any]]:
        """Read-only copy of the roster for rendering (index, name, owner, troops)."""
        return [
            {"index": i, **t.to_dict()}
            for i, t in enumerate(self._territories)
        ]


@dataclass
class GameState:
    """Complete session state owned by the driver."""
    world: WorldState
    player_faction: str
    mission: "Mission"  # drawn once at game start, never re-rolled
    setup_id: str
    # Set to player_faction once a mission check succeeds; no action is accepted afterwards
    winner: str | None = None
    # Number of attack actions applied (including rejected ones)
    attacks_made: int = 0

    def copy(self) -> "GameState":
        """Return a deep copy of this game state."""
        return deepcopy(self)

    def to_dict(self, include_mission: bool = False) -> dict[str, Any]:
        """
        JSON-friendly view. The mission is secret, so it is only included on request.
        """
        out: dict[str, Any] = {
            "setup_id": self.setup_id,
            "player_faction": self.player_faction,
            "territories": self.world.snapshot(),
            "winner": self.winner,
            "attacks_made": self.attacks_made,
        }
        if include_mission:
            out["mission"] = self.mission.to_dict()
        return out
