"""
Static definitions for the world seed.
All setup data lives under data/setups/<setup_id>/: starting_setup.json (the territory roster)
and optional manifest.json (display_name, mission parameters).
"""

import json
from dataclasses import dataclass
from pathlib import Path

from war.engine import WORLD_SIZE

DATA_DIR = Path(__file__).parent.parent / "data"
SETUPS_DIR = DATA_DIR / "setups"


def _default_setup_id() -> str:
    """Single place for default: war.config.DEFAULT_SETUP_ID."""
    from war.config import DEFAULT_SETUP_ID
    return DEFAULT_SETUP_ID


def _setup_dir(setup_id: str) -> Path:
    """Directory of a bundled setup. Only direct subdirectory names of data/setups/ are accepted."""
    if SETUPS_DIR.is_dir():
        for d in SETUPS_DIR.iterdir():
            if d.is_dir() and d.name == setup_id:
                return d
    raise FileNotFoundError(f"Setup not found: {setup_id}")


@dataclass(frozen=True)
class TerritoryDefinition:
    """Starting values of one territory slot."""
    name: str
    owner: str  # starting faction label
    troops: int


@dataclass(frozen=True)
class MissionSettings:
    """Parameters of the two mission variants for a setup."""
    eliminate_target: str
    conquer_threshold: int


def list_setups() -> list[dict]:
    """Return [{ id, display_name }, ...] for all setups (subdirs of data/setups/ with starting_setup.json)."""
    out = []
    if not SETUPS_DIR.exists():
        return out
    for d in sorted(SETUPS_DIR.iterdir()):
        if not d.is_dir():
            continue
        setup_id = d.name
        if not (d / "starting_setup.json").exists():
            continue
        manifest_path = d / "manifest.json"
        if manifest_path.exists():
            try:
                with open(manifest_path, "r") as f:
                    m = json.load(f)
                out.append({
                    "id": m.get("id", setup_id),
                    "display_name": m.get("display_name", setup_id),
                })
            except (json.JSONDecodeError, OSError):
                out.append({"id": setup_id, "display_name": setup_id})
        else:
            out.append({"id": setup_id, "display_name": setup_id})
    return out


def load_setup(setup_id: str | None = None) -> dict:
    """Load setup by id. Returns { id, display_name, starting_setup, missions? }.
    All data read from data/setups/<setup_id>/.
    """
    if setup_id is None:
        setup_id = _default_setup_id()
    setup_dir = _setup_dir(setup_id)
    starting_path = setup_dir / "starting_setup.json"
    if not starting_path.exists():
        raise FileNotFoundError(f"starting_setup.json not found in setup: {setup_id}")
    with open(starting_path, "r") as f:
        starting_setup = json.load(f)
    result = {
        "id": setup_id,
        "display_name": setup_id,
        "starting_setup": starting_setup,
    }
    manifest_path = setup_dir / "manifest.json"
    if manifest_path.exists():
        try:
            with open(manifest_path, "r") as f:
                m = json.load(f)
            result["id"] = m.get("id", setup_id)
            result["display_name"] = m.get("display_name", setup_id)
            missions = m.get("missions")
            if isinstance(missions, dict) and missions:
                result["missions"] = missions
        except (json.JSONDecodeError, OSError):
            pass
    return result


def parse_territory_definitions(starting_setup: dict) -> list[TerritoryDefinition]:
    """
    Build the ordered territory roster from a starting_setup dict.

    Raises ValueError if the roster does not have exactly WORLD_SIZE entries,
    if a name repeats, or if a starting troop count is below 1.
    """
    entries = starting_setup.get("territories")
    if not isinstance(entries, list):
        raise ValueError("starting_setup must contain a 'territories' list")
    if len(entries) != WORLD_SIZE:
        raise ValueError(
            f"A world has exactly {WORLD_SIZE} territories, setup lists {len(entries)}")

    defs = []
    seen: set[str] = set()
    for entry in entries:
        try:
            name = str(entry["name"])
            owner = str(entry["owner"])
            troops = int(entry["troops"])
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid territory entry {entry!r}: {e}") from e
        if name in seen:
            raise ValueError(f"Duplicate territory name: {name}")
        if troops < 1:
            raise ValueError(f"Territory {name} must start with at least 1 troop")
        seen.add(name)
        defs.append(TerritoryDefinition(name=name, owner=owner, troops=troops))
    return defs


def load_territory_definitions(setup_id: str | None = None) -> list[TerritoryDefinition]:
    """Load the territory roster for a setup (default setup when setup_id is None)."""
    return parse_territory_definitions(load_setup(setup_id)["starting_setup"])


def load_mission_settings(setup_id: str | None = None) -> MissionSettings:
    """
    Mission parameters for a setup: manifest "missions" block, falling back to war.config.
    """
    from war.config import ELIMINATE_TARGET_FACTION, CONQUER_THRESHOLD

    missions = load_setup(setup_id).get("missions") or {}
    target = missions.get("eliminate_target") or ELIMINATE_TARGET_FACTION
    try:
        threshold = int(missions.get("conquer_threshold", CONQUER_THRESHOLD))
    except (TypeError, ValueError):
        threshold = CONQUER_THRESHOLD
    return MissionSettings(eliminate_target=str(target), conquer_threshold=threshold)
