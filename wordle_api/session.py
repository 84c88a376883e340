"""
One play-through of a game, for any of the three modes.

The state machine is the same for every mode:
    playing --(all hits)--> won
    playing --(out of rounds)--> lost
Only "how is this guess marked?" changes, and that lives in a small strategy
object (FixedAnswer or CheatingHost).
"""

from dataclasses import dataclass, field
from secrets import randbelow
from time import time
from typing import Callable, List, Optional, Union
from uuid import uuid4

from .cheating import Policy, next_candidates, select_fewest_hits
from .daily import date_key, seeded_index, word_index
from .engine import is_win, keyboard_state, normalize_word, score_guess
from .errors import InvalidGuess, InvalidWordFormat, SessionFinished, WordNotAllowed
from .types import GameStatus, Keyboard, MarkSequence, Mode, Pool, Word
from .words import Dictionary

MIN_ROUNDS = 1
MAX_ROUNDS = 10
DEFAULT_ROUNDS = 6


@dataclass
class FixedAnswer:
    """Standard and daily games: the answer is chosen at the start."""
    answer: Word

    def evaluate(self, guess: Word) -> MarkSequence:
        return tuple(score_guess(self.answer, guess))

    def reveal(self) -> Optional[Word]:
        return self.answer


@dataclass
class CheatingHost:
    """
    Keeps every answer that is still consistent with the marks shown.
    Once only one word is left it is locked in (finalized) and guesses are
    scored against it directly from then on.
    """
    candidates: Pool
    policy: Policy = select_fewest_hits
    finalized: Optional[Word] = None

    def evaluate(self, guess: Word) -> MarkSequence:
        if self.finalized is not None:
            return tuple(score_guess(self.finalized, guess))

        marks, pool = next_candidates(self.candidates, guess, self.policy)
        self.candidates = pool
        if len(pool) == 1:
            self.finalized = pool[0]
        return marks

    def reveal(self) -> Optional[Word]:
        if self.finalized is not None:
            return self.finalized
        return self.candidates[0] if self.candidates else None


Strategy = Union[FixedAnswer, CheatingHost]


@dataclass
class GuessEntry:
    guess: Word
    marks: MarkSequence
    timestamp: float


@dataclass
class GuessOutcome:
    marks: MarkSequence
    round: int
    state: GameStatus


@dataclass
class GameSession:
    id: str
    mode: Mode
    max_rounds: int
    strategy: Strategy
    round: int = 0
    state: GameStatus = "playing"
    history: List[GuessEntry] = field(default_factory=list)
    created_at: float = field(default_factory=time)
    updated_at: float = field(default_factory=time)
    finished_at: Optional[float] = None
    # daily only
    date: Optional[str] = None
    word_index: Optional[int] = None
    player_id: Optional[str] = None

    @property
    def finished(self) -> bool:
        return self.state != "playing"

    def submit_guess(self, raw: str, dictionary: Dictionary, enforce_dictionary: bool = True) -> GuessOutcome:
        """
        Apply one guess. Rejected guesses (bad shape, unknown word, game over)
        raise and leave the round counter alone.
        """
        # 1. Shape
        try:
            guess = normalize_word(raw)
        except InvalidWordFormat as exc:
            raise InvalidGuess(str(exc)) from exc

        # 2. Dictionary
        if enforce_dictionary and not dictionary.is_allowed(guess):
            raise WordNotAllowed(f"{guess!r} is not in the word list.")

        # 3. Already over
        if self.finished:
            raise SessionFinished(f"Game {self.state}. No more guesses allowed.")

        # 4. Use a round, 5. mark it
        self.round += 1
        marks = self.strategy.evaluate(guess)

        now = time()
        self.history.append(GuessEntry(guess=guess, marks=marks, timestamp=now))
        self.updated_at = now

        # 6 / 7. Terminal?
        if is_win(marks):
            self.state = "won"
        elif self.round >= self.max_rounds:
            self.state = "lost"

        if self.finished:
            self.finished_at = now

        return GuessOutcome(marks=marks, round=self.round, state=self.state)

    def keyboard(self) -> Keyboard:
        return keyboard_state((entry.guess, entry.marks) for entry in self.history)

    def answer(self) -> Optional[Word]:
        """The answer, but only once the game is over."""
        if not self.finished:
            return None
        return self.strategy.reveal()

    def elapsed_ms(self) -> int:
        end = self.finished_at if self.finished_at is not None else time()
        return int((end - self.created_at) * 1000)


# ---------------- Factories ----------------

def check_rounds(max_rounds: int) -> int:
    if max_rounds < MIN_ROUNDS or max_rounds > MAX_ROUNDS:
        raise ValueError(f"max_rounds must be between {MIN_ROUNDS} and {MAX_ROUNDS}.")
    return max_rounds


def new_standard(
    dictionary: Dictionary,
    max_rounds: int = DEFAULT_ROUNDS,
    seed: Optional[str] = None,
    pick_index: Optional[Callable[[int], int]] = None,
) -> GameSession:
    # same seed -> same answer; otherwise a random pick
    size = len(dictionary.answers)
    if seed:
        index = seeded_index(seed, size)
    elif pick_index is not None:
        index = pick_index(size)
    else:
        index = randbelow(size)

    return GameSession(
        id=str(uuid4()),
        mode="normal",
        max_rounds=check_rounds(max_rounds),
        strategy=FixedAnswer(answer=dictionary.answers[index]),
    )


def new_cheating(
    dictionary: Dictionary,
    max_rounds: int = DEFAULT_ROUNDS,
    policy: Policy = select_fewest_hits,
) -> GameSession:
    return GameSession(
        id=str(uuid4()),
        mode="cheat",
        max_rounds=check_rounds(max_rounds),
        strategy=CheatingHost(candidates=list(dictionary.answers), policy=policy),
    )


def new_daily(
    dictionary: Dictionary,
    salt: str,
    today,
    max_rounds: int = DEFAULT_ROUNDS,
    player_id: Optional[str] = None,
) -> GameSession:
    """`today` comes from the caller's clock (a date or datetime)."""
    index = word_index(today, salt, len(dictionary.answers))
    return GameSession(
        id=str(uuid4()),
        mode="daily",
        max_rounds=check_rounds(max_rounds),
        strategy=FixedAnswer(answer=dictionary.answers[index]),
        date=date_key(today),
        word_index=index,
        player_id=player_id,
    )
