"""
FastAPI backend for WAR.
Provides REST API endpoints for single-player sessions held in memory (no persistence).
"""

import random
import secrets
import string
import threading
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, StrictInt

from war.config import DEFAULT_SETUP_ID, DEFAULT_PLAYER_FACTION, GAME_LIMIT
from war.engine.state import GameState
from war.engine.actions import attack, check_mission
from war.engine.definitions import list_setups
from war.engine.events import ATTACK_RESOLVED, ATTACK_REJECTED
from war.engine.missions import describe_mission
from war.engine.queries import get_game_summary
from war.engine.reducer import apply_action
from war.engine.utils import initialize_game_state, make_rng

app = FastAPI(
    title="WAR API",
    description="Backend API for WAR - a single-player territorial conquest game",
    version="1.0.0",
)

# CORS configuration for frontend
CORS_ORIGINS = ["http://localhost:5173", "http://localhost:3000"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request, call_next):
    """Log method and path so 500s can be traced to the failing endpoint."""
    method = getattr(request, "method", "?")
    url = getattr(request, "url", None)
    path = url.path if url else "?"
    try:
        response = await call_next(request)
        if response.status_code >= 500:
            print(f"[500] {method} {path}", flush=True)
        return response
    except Exception:
        print(f"[500] {method} {path} (exception)", flush=True)
        raise


@app.exception_handler(Exception)
async def unhandled_exception_handler(request, exc):
    """Return 500 with the error message so the frontend can read it."""
    import traceback
    traceback.print_exc()
    return JSONResponse(status_code=500, content={"detail": str(exc)})


@dataclass
class GameSession:
    """One player's game: state, its private dice, and the single-writer lock around actions."""
    state: GameState
    rng: random.Random
    lock: threading.Lock = field(default_factory=threading.Lock)


# In-memory sessions in creation order; lost on restart, capped at GAME_LIMIT
games: "OrderedDict[str, GameSession]" = OrderedDict()

# Alphanumeric for game codes (uppercase + digits)
GAME_CODE_CHARS = string.ascii_uppercase + string.digits
GAME_CODE_LENGTH = 6


# ===== Pydantic Models =====

class NewGameRequest(BaseModel):
    """Setup id from GET /setups. Omitted = default from war.config.DEFAULT_SETUP_ID."""
    setup_id: str | None = None
    player_faction: str | None = None
    seed: int | None = None  # fixes the mission draw and all dice of this game


class AttackRequest(BaseModel):
    attacker: StrictInt  # zero-based territory index
    defender: StrictInt


# ===== Helper Functions =====

def generate_game_code() -> str:
    """Generate a unique alphanumeric game code."""
    for _ in range(20):
        code = "".join(secrets.choice(GAME_CODE_CHARS) for _ in range(GAME_CODE_LENGTH))
        if code not in games:
            return code
    raise HTTPException(status_code=500, detail="Could not generate unique game code")


def make_room_for_game() -> None:
    """Evict sessions until one more fits under GAME_LIMIT: finished games first, then the oldest."""
    while games and len(games) >= GAME_LIMIT:
        finished = next((gid for gid, s in games.items() if s.state.winner is not None), None)
        if finished is not None:
            del games[finished]
        else:
            oldest, _ = games.popitem(last=False)
            print(f"[games] limit {GAME_LIMIT} reached, evicted {oldest}", flush=True)


def get_session(game_id: str) -> GameSession:
    session = games.get(game_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Game {game_id} not found")
    return session


def state_for_response(state: GameState) -> dict[str, Any]:
    """State dict plus the player's summary. The mission stays hidden until the game is won."""
    out = state.to_dict(include_mission=state.winner is not None)
    out["summary"] = get_game_summary(state)
    out["summary"].pop("mission")
    return out


# ===== API Endpoints =====

@app.get("/")
def root():
    return {"message": "WAR API", "version": "1.0.0"}


@app.get("/setups")
def get_setups():
    """List available game setups (id, display_name). Use setup_id in POST /games."""
    return {"setups": list_setups()}


@app.post("/games")
def create_game(request: NewGameRequest):
    """Create a new in-memory game. The mission is drawn here, once."""
    setup_id = request.setup_id or DEFAULT_SETUP_ID
    faction = request.player_faction or DEFAULT_PLAYER_FACTION
    rng = make_rng(request.seed)
    try:
        state = initialize_game_state(player_faction=faction, setup_id=setup_id, rng=rng)
    except FileNotFoundError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid setup {setup_id}: {e}")

    make_room_for_game()
    game_id = generate_game_code()
    games[game_id] = GameSession(state=state, rng=rng)
    return {"game_id": game_id, "state": state_for_response(state)}


@app.get("/games/{game_id}")
def get_game_state(game_id: str):
    session = get_session(game_id)
    return {"game_id": game_id, "state": state_for_response(session.state)}


@app.get("/games/{game_id}/mission")
def get_mission(game_id: str):
    """The player's own secret mission."""
    session = get_session(game_id)
    return {"game_id": game_id, "mission": describe_mission(session.state.mission)}


@app.delete("/games/{game_id}")
def delete_game(game_id: str):
    get_session(game_id)
    del games[game_id]
    return {"message": f"Game {game_id} deleted"}


@app.post("/games/{game_id}/attack")
def do_attack(game_id: str, request: AttackRequest):
    """
    Attack with zero-based indices. Rejected attacks (bad index, self attack,
    not your territory) are game outcomes, returned with status 200.
    """
    session = get_session(game_id)
    with session.lock:
        state = session.state
        action = attack(state.player_faction, request.attacker, request.defender)
        try:
            state, events = apply_action(state, action, session.rng)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        response_state = state_for_response(state)

    outcome = None
    for event in events:
        if event.type == ATTACK_REJECTED:
            outcome = event.payload["reason"]
        elif event.type == ATTACK_RESOLVED:
            outcome = event.payload["result"]
    return {
        "outcome": outcome,
        "events": [e.to_dict() for e in events],
        "state": response_state,
    }


@app.post("/games/{game_id}/check-mission")
def do_check_mission(game_id: str):
    session = get_session(game_id)
    with session.lock:
        state = session.state
        try:
            state, events = apply_action(state, check_mission(state.player_faction), session.rng)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        response_state = state_for_response(state)
    return {
        "complete": state.winner is not None,
        "events": [e.to_dict() for e in events],
        "state": response_state,
    }
