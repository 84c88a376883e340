'''
Wordle API

Endpoints:
POST /games                -> start a game (normal | cheat | daily)
GET  /games/{id}           -> read state & history
POST /games/{id}/guess     -> submit a guess

Daily:
GET  /daily/leaderboard    -> fastest wins for a date (default today)

Extras:
GET  /stats                -> scoreboard
POST /stats/reset          -> reset scoreboard
GET  /health               -> liveness

Live games are kept in memory (GameStore); only daily wins go to the DB.
'''

import logging
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from fastapi import FastAPI, HTTPException, Depends, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .bootstrap_db import create_all    # dev-only: create tables
from .cheating import get_policy
from .config import settings
from .daily import date_key
from .db import get_db                  # SQLAlchemy Session dependency
from .errors import GameError, SessionFinished, SessionNotFound
from .random_client import fetch_index
from .repository import DailyResultStore
from .session import GameSession, new_cheating, new_daily, new_standard
from .store import GameStore
from .words import load_dictionary

from .schemas import (
    NewGameRequest,
    NewGameResponse,
    GuessRequest,
    GuessResponse,
    GameStateOut,
    GuessEntryOut,
    ErrorOut,
    LeaderboardOut,
    StatsOut,
)

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Wordle API", version="1.0.0")

# Allow everything in dev so the docs and front-end work easily
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)

# Word lists and the live-game registry are built once, here
app.state.store = GameStore(
    load_dictionary(settings.words_file, settings.guesses_file),
    enforce_dictionary_in_cheat=not settings.cheat_allow_any,
)

# --- Dev convenience: auto-create tables locally ---
if settings.app_env == "local":
    @app.on_event("startup")
    def _dev_create_tables():
        create_all()


def get_store(request: Request) -> GameStore:
    return request.app.state.store


def utcnow() -> datetime:
    # patched in tests to pin the daily puzzle
    return datetime.now(timezone.utc)


def _error(exc: GameError) -> dict:
    return {"error": exc.code, "message": str(exc)}


def _to_state(game: GameSession) -> GameStateOut:
    return GameStateOut(
        game_id=game.id,
        mode=game.mode,
        max_rounds=game.max_rounds,
        round=game.round,
        state=game.state,
        history=[
            GuessEntryOut(guess=h.guess, marks=list(h.marks), timestamp=h.timestamp)
            for h in game.history
        ],
        keyboard=game.keyboard(),
        answer=game.answer(),
        date=game.date,
    )

# ---------------- Routes ----------------

@app.post("/games", response_model=NewGameResponse, summary="Start a new game")
def start_game(
    payload: Optional[NewGameRequest] = None,
    store: GameStore = Depends(get_store),
    db: Session = Depends(get_db),
) -> NewGameResponse:
    """
    Modes:
      normal -> random answer (or fixed by `seed`)
      cheat  -> host keeps every answer open as long as it can
      daily  -> same answer for everyone today; one result per player per day
    """
    payload = payload or NewGameRequest()
    max_rounds = payload.max_rounds or settings.default_max_rounds

    if payload.mode == "daily":
        return _start_daily(payload, max_rounds, store, db)

    if payload.mode == "cheat":
        game = new_cheating(store.dictionary, max_rounds, policy=get_policy(settings.cheat_policy))
    else:
        game = new_standard(store.dictionary, max_rounds, seed=payload.seed, pick_index=fetch_index)

    store.create(game)
    return NewGameResponse(game_id=game.id, mode=game.mode, max_rounds=game.max_rounds)


def _start_daily(payload: NewGameRequest, max_rounds: int, store: GameStore, db: Session) -> NewGameResponse:
    player_id = payload.player_id or f"anon-{uuid4().hex[:16]}"
    today = utcnow()
    date = date_key(today)

    # Already has a saved result for today -> nothing to play
    if DailyResultStore(db).already_played(player_id, date):
        return NewGameResponse(
            mode="daily", max_rounds=max_rounds, date=date, player_id=player_id, played=True
        )

    # Reuse today's session if the player has one
    game, created = store.find_or_create_daily(
        player_id,
        date,
        lambda: new_daily(store.dictionary, settings.daily_salt, today, max_rounds, player_id=player_id),
    )
    return NewGameResponse(
        game_id=game.id,
        mode="daily",
        max_rounds=game.max_rounds,
        date=date,
        player_id=player_id,
        played=(not created and game.finished),
    )


@app.get(
    "/games/{game_id}",
    response_model=GameStateOut,
    responses={404: {"model": ErrorOut}},
    summary="Get current game state",
)
def get_game(
    game_id: str,
    store: GameStore = Depends(get_store),
) -> GameStateOut:
    try:
        game = store.get(game_id)
    except SessionNotFound as exc:
        raise HTTPException(status_code=404, detail=_error(exc))
    return _to_state(game)


@app.post(
    "/games/{game_id}/guess",
    response_model=GuessResponse,
    responses={400: {"model": ErrorOut}, 404: {"model": ErrorOut}, 409: {"model": ErrorOut}},
    summary="Submit a guess",
)
def submit_guess(
    game_id: str,
    payload: GuessRequest,
    store: GameStore = Depends(get_store),
    db: Session = Depends(get_db),
) -> GuessResponse:
    # the session checks shape, dictionary and state before using a round
    try:
        outcome = store.guess(game_id, payload.guess)
    except SessionNotFound as exc:
        raise HTTPException(status_code=404, detail=_error(exc))
    except SessionFinished as exc:
        raise HTTPException(status_code=409, detail=_error(exc))
    except GameError as exc:
        logger.info("game %s rejected guess %r: %s", game_id, payload.guess, exc.code)
        raise HTTPException(status_code=400, detail=_error(exc))

    game = store.get(game_id)
    if game.mode == "daily" and outcome.state == "won":
        _save_daily_win(game, db)

    return GuessResponse(
        marks=list(outcome.marks),
        round=outcome.round,
        state=outcome.state,
        keyboard=game.keyboard(),
        answer=game.answer(),
        note=(f"Game {outcome.state}. No more guesses allowed."
              if outcome.state != "playing" else None),
    )


def _save_daily_win(game: GameSession, db: Session) -> None:
    # The guess already counted; a DB hiccup should not fail the response
    try:
        DailyResultStore(db).insert_result(
            player_id=game.player_id,
            date=game.date,
            word_index=game.word_index,
            guesses=game.round,
            elapsed_ms=game.elapsed_ms(),
        )
    except SQLAlchemyError:
        logger.exception("could not save daily result for game %s", game.id)
        db.rollback()


@app.get("/daily/leaderboard", response_model=LeaderboardOut, summary="Fastest daily wins")
def daily_leaderboard(
    date: Optional[str] = Query(None, pattern=r"^\d{4}-\d{2}-\d{2}$"),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
) -> LeaderboardOut:
    date = date or date_key(utcnow())
    return LeaderboardOut(date=date, top=DailyResultStore(db).leaderboard(date, limit))


@app.get("/stats", response_model=StatsOut, summary="Get scoreboard")
def get_stats(store: GameStore = Depends(get_store)) -> StatsOut:
    stats = store.get_stats()
    avg = (stats.total_guesses_in_wins / stats.games_won) if stats.games_won > 0 else None
    return StatsOut(
        games_started=stats.games_started,
        games_won=stats.games_won,
        games_lost=stats.games_lost,
        current_streak=stats.current_streak,
        best_streak=stats.best_streak,
        average_guesses_to_win=avg,
        fastest_win_rounds=stats.fastest_win_rounds,
        normal_started=stats.normal_started,
        cheat_started=stats.cheat_started,
        daily_started=stats.daily_started,
        normal_won=stats.normal_won,
        cheat_won=stats.cheat_won,
        daily_won=stats.daily_won,
    )


@app.post("/stats/reset", summary="Reset the scoreboard")
def reset_stats(store: GameStore = Depends(get_store)) -> dict:
    store.reset_stats()
    return {"message": "Stats reset."}


@app.get("/health", summary="Liveness check")
def health() -> dict:
    return {"ok": True}
