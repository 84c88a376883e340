"""
Pure game logic (no HTTP, no storage).
For each guess we compute one mark per letter:
- hit:     right letter, right place
- present: letter is in the answer, but somewhere else
- miss:    letter is not in the (still unmatched part of the) answer

Duplicate letters are allowed in both answer and guess, so presents are
limited by how many copies of the letter the answer still has left.
"""

import re
from typing import Dict, Iterable, List, Sequence

from .errors import InvalidWordFormat
from .types import Keyboard, Mark, Word

WORD_LENGTH = 5

# Only used to colour the keyboard: a better mark is never downgraded.
MARK_RANK: Dict[str, int] = {"miss": 0, "present": 1, "hit": 2}

_LETTERS = re.compile(r"^[a-z]+$")


def normalize_word(raw: str, length: int = WORD_LENGTH) -> Word:
    """
    Lower-case and trim a word, then check it really is a word.
    Raises InvalidWordFormat instead of truncating or padding.
    """
    if not isinstance(raw, str):
        raise InvalidWordFormat("Words must be strings.")
    word = raw.strip().lower()
    if len(word) != length:
        raise InvalidWordFormat(f"Words must be exactly {length} letters.")
    if not _LETTERS.match(word):
        raise InvalidWordFormat("Only letters a-z are allowed.")
    return word


def score_guess(answer: Word, guess: Word) -> List[Mark]:
    """
    Example:
      answer = "apple"
      guess  = "alley"
      marks  = [hit, present, miss, present, miss]
      (apple has a single 'l', so only the first 'l' of the guess gets credit)
    """

    # 0. Validate both words before scoring anything
    answer = normalize_word(answer)
    guess = normalize_word(guess)

    marks: List[Mark] = ["miss"] * WORD_LENGTH

    # 1. Exact matches -> hit. Count the answer letters that were NOT matched.
    remaining: Dict[str, int] = {}
    for i in range(WORD_LENGTH):
        if guess[i] == answer[i]:
            marks[i] = "hit"
        else:
            remaining[answer[i]] = remaining.get(answer[i], 0) + 1

    # 2. Left to right over the rest: use up a remaining copy -> present
    for i in range(WORD_LENGTH):
        if marks[i] == "hit":
            continue
        letter = guess[i]
        if remaining.get(letter, 0) > 0:
            marks[i] = "present"
            remaining[letter] -= 1

    return marks


def is_win(marks: Sequence[Mark]) -> bool:
    """Win = every tile is a hit."""
    if len(marks) == 0:
        return False
    return all(mark == "hit" for mark in marks)


def keyboard_state(history: Iterable[tuple]) -> Keyboard:
    """
    Best mark seen so far for every letter the player has typed.
    `history` is a sequence of (guess, marks) pairs.
    """
    keyboard: Keyboard = {}
    for guess, marks in history:
        for letter, mark in zip(guess, marks):
            current = keyboard.get(letter)
            if current is None or MARK_RANK[mark] > MARK_RANK[current]:
                keyboard[letter] = mark
    return keyboard
