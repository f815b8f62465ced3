"""FastAPI app: create a table, drive its game events, read its state."""

import logging
import uuid
from contextlib import asynccontextmanager
from typing import Callable

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from api.game_store import (
    backing_store,
    create as store_create,
    delete as store_delete,
    get as store_get,
    list_games,
)
from api.models import (
    EliminateRequest,
    GameCreateRequest,
    GameStateResponse,
    GuessRequest,
    LanguageRequest,
    ScoreEntry,
    SettingsBody,
    StartRequest,
    VoteRequest,
    WordStockResponse,
    game_state_to_public,
)
from undercover.config import get_log_level
from undercover.errors import CatalogError, InvalidBallot, InvalidSetup, PreconditionViolation
from undercover.roles import recommend_settings
from undercover.rules import DEFAULT_NAMES, MAX_PLAYERS, MIN_PLAYERS, SUPPORTED_LANGUAGES
from undercover.scoring import leaderboard, suggested_names
from undercover.session import GameSession
from undercover.state import GameState
from undercover.storage import clear_scores, load_scores
from undercover.words import fetch_catalog, remaining_pairs

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(level=get_log_level())


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    yield


app = FastAPI(title="Bettercover API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _session(game_id: str) -> GameSession:
    session = store_get(game_id)
    if not session:
        raise HTTPException(404, "Game not found")
    return session


def _run(game_id: str, action: Callable[[GameSession], GameState]) -> GameStateResponse:
    """Apply one event to a session and map engine errors to HTTP status codes."""
    session = _session(game_id)
    try:
        state = action(session)
    except PreconditionViolation as e:
        raise HTTPException(409, str(e))
    except (InvalidSetup, InvalidBallot, CatalogError) as e:
        raise HTTPException(400, str(e))
    return game_state_to_public(state)


@app.post("/games", response_model=dict, tags=["Games"], summary="Create game")
def create_game(body: GameCreateRequest | None = None):
    """Create a table in setup phase. Returns game_id."""
    game_id = str(uuid.uuid4())
    store_create(game_id, language=body.language if body else None)
    logger.info("Created game %s", game_id)
    return {"game_id": game_id}


@app.get("/games", response_model=list[str], tags=["Games"], summary="List game IDs")
def list_games_route():
    """List all game IDs."""
    return list_games()


@app.get("/games/{game_id}", response_model=GameStateResponse, tags=["Games"], summary="Get game state")
def get_game(game_id: str):
    return game_state_to_public(_session(game_id).state)


@app.delete("/games/{game_id}", tags=["Games"], summary="Delete game")
def delete_game(game_id: str):
    _session(game_id)
    store_delete(game_id)
    return {"deleted": game_id}


@app.post("/games/{game_id}/start", response_model=GameStateResponse, tags=["Game events"], summary="Deal roles")
def start_game_endpoint(game_id: str, body: StartRequest):
    """Deal roles and words. Without settings, the recommended split for the table size is used."""
    settings = body.settings.to_settings() if body.settings else recommend_settings(len(body.names))
    return _run(game_id, lambda s: s.start(body.names, settings))


@app.post("/games/{game_id}/reroll", response_model=GameStateResponse, tags=["Game events"], summary="New words")
def reroll_endpoint(game_id: str):
    return _run(game_id, lambda s: s.reroll_words())


@app.post("/games/{game_id}/reveal/finish", response_model=GameStateResponse, tags=["Game events"])
def finish_reveal_endpoint(game_id: str):
    return _run(game_id, lambda s: s.finish_reveal())


@app.post("/games/{game_id}/voting/open", response_model=GameStateResponse, tags=["Game events"])
def open_voting_endpoint(game_id: str):
    return _run(game_id, lambda s: s.open_voting())


@app.post("/games/{game_id}/voting/countdown-finished", response_model=GameStateResponse, tags=["Game events"])
def countdown_finished_endpoint(game_id: str):
    return _run(game_id, lambda s: s.countdown_finished())


@app.post("/games/{game_id}/votes", response_model=GameStateResponse, tags=["Game events"], summary="Submit ballot")
def cast_votes_endpoint(game_id: str, body: VoteRequest):
    """Submit a full ballot: one vote per active player, spread over the ballot ids."""
    return _run(game_id, lambda s: s.cast_votes(body.tally))


@app.post("/games/{game_id}/eliminate", response_model=GameStateResponse, tags=["Game events"])
def eliminate_endpoint(game_id: str, body: EliminateRequest):
    """Eliminate a player directly (clear vote winner decided on the device)."""
    return _run(game_id, lambda s: s.eliminate_direct(body.player_id))


@app.post("/games/{game_id}/elimination/acknowledge", response_model=GameStateResponse, tags=["Game events"])
def acknowledge_endpoint(game_id: str):
    return _run(game_id, lambda s: s.acknowledge_elimination())


@app.post("/games/{game_id}/mr-white/guess", response_model=GameStateResponse, tags=["Game events"])
def guess_endpoint(game_id: str, body: GuessRequest):
    return _run(game_id, lambda s: s.guess_mr_white(body.guess))


@app.post("/games/{game_id}/reset", response_model=GameStateResponse, tags=["Game events"], summary="New game")
def reset_endpoint(game_id: str):
    return _run(game_id, lambda s: s.reset())


@app.post("/games/{game_id}/language", response_model=GameStateResponse, tags=["Game events"])
def language_endpoint(game_id: str, body: LanguageRequest):
    """Switch word catalog (setup phase only). Clears the used-words list."""
    return _run(game_id, lambda s: s.set_language(body.language))


@app.get("/scores", response_model=list[ScoreEntry], tags=["Scores"], summary="Leaderboard")
def get_scores():
    return [ScoreEntry(name=n, score=s) for n, s in leaderboard(load_scores(backing_store()))]


@app.delete("/scores", tags=["Scores"], summary="Reset leaderboard")
def reset_scores():
    clear_scores(backing_store())
    return {"status": "ok"}


@app.get("/settings/recommended", response_model=SettingsBody, tags=["Settings"])
def recommended_settings(num_players: int = Query(..., ge=MIN_PLAYERS, le=MAX_PLAYERS)):
    """Default role split for a table size."""
    s = recommend_settings(num_players)
    return SettingsBody(civils=s.civils, undercovers=s.undercovers, mr_whites=s.mr_whites)


@app.get("/settings/names", response_model=list[str], tags=["Settings"], summary="Suggested roster")
def suggested_names_route():
    """Known players best first when at least three have scores, else default names."""
    return suggested_names(load_scores(backing_store()), DEFAULT_NAMES)


@app.get("/words/{language}", response_model=WordStockResponse, tags=["Settings"], summary="Word stock")
def word_stock(language: str, game_id: str | None = None):
    """Catalog size and pairs left before recycling (for a game's used list, if given)."""
    if language not in SUPPORTED_LANGUAGES:
        raise HTTPException(404, f"Unknown language {language}")
    remaining = remaining_pairs(language, [])
    if game_id is not None:
        session = _session(game_id)
        if session.state.language == language:
            remaining = session.remaining_words()
    return WordStockResponse(language=language, total=len(fetch_catalog(language)), remaining=remaining)


@app.get("/health", tags=["System"], summary="Health check")
def health():
    return {"status": "ok"}
