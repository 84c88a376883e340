"""
In-memory store
Holds live game sessions in memory, plus a session scoreboard.

Sessions are mutable, so guesses for the same game must be applied one at a
time: every game id gets its own lock, and guess() holds it for the whole
state transition.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass, replace
from threading import Lock, RLock
from typing import Callable, Dict, Iterator, Optional, Tuple

from .errors import SessionNotFound
from .session import GameSession, GuessOutcome
from .types import Mode
from .words import Dictionary

logger = logging.getLogger(__name__)


# Scoreboard structure
@dataclass
class Stats:
    games_started: int = 0
    games_won: int = 0
    games_lost: int = 0

    current_streak: int = 0
    best_streak: int = 0

    total_guesses_in_wins: int = 0
    fastest_win_rounds: Optional[int] = None

    # per-mode counters
    normal_started: int = 0
    cheat_started: int = 0
    daily_started: int = 0
    normal_won: int = 0
    cheat_won: int = 0
    daily_won: int = 0


class GameStore:
    def __init__(self, dictionary: Dictionary, enforce_dictionary_in_cheat: bool = True) -> None:
        self.dictionary = dictionary
        self.enforce_dictionary_in_cheat = enforce_dictionary_in_cheat
        self._games: Dict[str, GameSession] = {}
        self._locks: Dict[str, Lock] = {}
        self._lock = RLock()  # guards the two dicts above and the stats
        self._stats = Stats()

    # --- Registry ---

    def put(self, game: GameSession) -> None:
        with self._lock:
            self._games[game.id] = game
            self._locks.setdefault(game.id, Lock())

    def get(self, game_id: str) -> GameSession:
        with self._lock:
            game = self._games.get(game_id)
        if game is None:
            raise SessionNotFound(f"Game {game_id} not found.")
        return game

    @contextmanager
    def lock(self, game_id: str) -> Iterator[GameSession]:
        """Exclusive access to one game for the length of the with-block."""
        with self._lock:
            game_lock = self._locks.get(game_id)
        if game_lock is None:
            raise SessionNotFound(f"Game {game_id} not found.")
        with game_lock:
            yield self.get(game_id)

    def find_daily(self, player_id: str, date: str) -> Optional[GameSession]:
        with self._lock:
            for game in self._games.values():
                if game.mode == "daily" and game.player_id == player_id and game.date == date:
                    return game
        return None

    # --- Game flow ---

    def create(self, game: GameSession) -> GameSession:
        with self._lock:
            self.put(game)
            self._count_started(game.mode)
        logger.info("game %s started (mode=%s, max_rounds=%d)", game.id, game.mode, game.max_rounds)
        return game

    def find_or_create_daily(
        self, player_id: str, date: str, factory: Callable[[], GameSession]
    ) -> Tuple[GameSession, bool]:
        """
        Today's daily game for a player, made with `factory` if there is none.
        Lookup and insert happen under one lock hold, so a player never ends
        up with two daily games for the same date. Returns (game, created).
        """
        with self._lock:
            existing = self.find_daily(player_id, date)
            if existing is not None:
                return existing, False
            game = factory()
            self.put(game)
            self._count_started(game.mode)
        logger.info("game %s started (mode=daily, player=%s, date=%s)", game.id, player_id, date)
        return game, True

    def guess(self, game_id: str, raw) -> GuessOutcome:
        with self.lock(game_id) as game:
            enforce = self.enforce_dictionary_in_cheat or game.mode != "cheat"
            outcome = game.submit_guess(raw, self.dictionary, enforce_dictionary=enforce)

            # Update scoreboard exactly once, on the guess that ended the game
            if outcome.state != "playing":
                self._update_stats_on_end(game, won=(outcome.state == "won"))
                logger.info("game %s %s after %d round(s)", game.id, outcome.state, outcome.round)
            return outcome

    # caller holds self._lock
    def _count_started(self, mode: Mode) -> None:
        self._stats.games_started += 1
        if mode == "cheat":
            self._stats.cheat_started += 1
        elif mode == "daily":
            self._stats.daily_started += 1
        else:
            self._stats.normal_started += 1

    # Helper updates scoreboard exactly once per game
    def _update_stats_on_end(self, game: GameSession, won: bool) -> None:
        with self._lock:
            if won:
                self._stats.games_won += 1

                # per-mode wins
                if game.mode == "cheat":
                    self._stats.cheat_won += 1
                elif game.mode == "daily":
                    self._stats.daily_won += 1
                else:
                    self._stats.normal_won += 1

                # streaks
                self._stats.current_streak += 1
                if self._stats.current_streak > self._stats.best_streak:
                    self._stats.best_streak = self._stats.current_streak

                # rounds used
                self._stats.total_guesses_in_wins += game.round
                if self._stats.fastest_win_rounds is None or game.round < self._stats.fastest_win_rounds:
                    self._stats.fastest_win_rounds = game.round
            else:
                self._stats.games_lost += 1
                self._stats.current_streak = 0

    # --- Stats ---

    def get_stats(self) -> Stats:
        # copy taken under the lock
        with self._lock:
            return replace(self._stats)

    def reset_stats(self) -> None:
        with self._lock:
            self._stats = Stats()
