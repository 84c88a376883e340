"""
Word lists.
- answers: ordered list the host can pick from (order matters for the daily index)
- allowed: extra words players may guess; None = accept any well-formed word

Lists are built once at startup and handed to sessions; nothing here is
loaded lazily on first use.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet, Iterable, List, Optional, Tuple

from .engine import WORD_LENGTH, normalize_word
from .errors import InvalidWordFormat

DEFAULT_ANSWERS: Tuple[str, ...] = (
    "crane", "slate", "plant", "clang", "glare", "grace",
    "apple", "paper", "alley", "bolts", "hello", "world",
    "quite", "fancy", "fresh", "panic", "crazy", "buggy",
    "scare", "sweet", "bread", "grape", "lemon", "peach",
    "plums", "mango", "berry", "tiger", "bears", "whale",
    "fishy", "ocean", "river", "mount", "hills", "rainy",
    "sunny", "snowy", "stone", "brick", "chair", "table",
    "light", "night", "dream", "flame", "ghost", "heart",
    "jolly", "knife", "laser", "mirth", "noble", "otter",
    "pride", "quest", "robin", "shine", "toast", "unity",
)


@dataclass(frozen=True)
class Dictionary:
    answers: Tuple[str, ...]
    allowed: Optional[FrozenSet[str]] = None

    def __post_init__(self):
        if not self.answers:
            raise ValueError("Dictionary needs at least one answer.")
        if self.allowed is not None:
            # answers are always guessable
            object.__setattr__(self, "allowed", frozenset(self.allowed) | frozenset(self.answers))

    def is_allowed(self, word: str) -> bool:
        return self.allowed is None or word in self.allowed


def normalize_list(items: Iterable) -> List[str]:
    """Keep only 5-letter a-z strings, lower-cased, first occurrence wins."""
    seen = set()
    out = []
    for item in items:
        if not isinstance(item, str):
            continue
        try:
            word = normalize_word(item, WORD_LENGTH)
        except InvalidWordFormat:
            continue
        if word not in seen:
            seen.add(word)
            out.append(word)
    return out


def load_word_file(path) -> List[str]:
    """
    Accepts either a JSON array of strings or one word per line.
    Returns [] if the file is missing.
    """
    file_path = Path(path)
    if not file_path.is_file():
        return []
    text = file_path.read_text(encoding="utf-8")
    if text.lstrip().startswith("["):
        return normalize_list(json.loads(text))
    return normalize_list(text.splitlines())


def load_dictionary(answers_path=None, guesses_path=None) -> Dictionary:
    answers = load_word_file(answers_path) if answers_path else []
    if not answers:
        answers = list(DEFAULT_ANSWERS)

    allowed = None
    if guesses_path:
        guesses = load_word_file(guesses_path)
        if guesses:
            allowed = frozenset(guesses)

    return Dictionary(answers=tuple(answers), allowed=allowed)
