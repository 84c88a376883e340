"""
"Cheating host" logic.
The host never commits to an answer up front. After every guess it:
  1. groups the remaining candidates by the marks the guess would get
     against each of them (partition)
  2. keeps whichever group gives the player the least to go on (policy)

Every word in the kept group would have produced exactly the marks shown,
so the host is never caught lying.

Policies:
- fewest_hits (default): fewest hits, then fewest presents
- largest_bucket: whichever group has the most words
Ties go to the group that was formed first (pool order).
"""

from typing import Callable, Dict, Iterable, Sequence, Tuple

from .engine import WORD_LENGTH, score_guess
from .errors import InvalidWordFormat
from .types import MarkSequence, Pool, Word

Buckets = Dict[MarkSequence, Pool]
Policy = Callable[[Buckets], Tuple[MarkSequence, Pool]]


def partition(pool: Iterable[Word], guess: Word) -> Buckets:
    """
    Returns a fresh dict: marks -> candidates that would show those marks.
    Each candidate lands in exactly one bucket. The input is not touched.
    """
    buckets: Buckets = {}
    for candidate in pool:
        try:
            key = tuple(score_guess(candidate, guess))
        except InvalidWordFormat:
            # a bad word in the list can't be the answer anyway
            continue
        buckets.setdefault(key, []).append(candidate)
    return buckets


def _hits_and_presents(marks: Sequence[str]) -> Tuple[int, int]:
    hits = 0
    presents = 0
    for mark in marks:
        if mark == "hit":
            hits += 1
        elif mark == "present":
            presents += 1
    return (hits, presents)


def select_fewest_hits(buckets: Buckets) -> Tuple[MarkSequence, Pool]:
    # min() keeps the first of equal keys, i.e. the first bucket formed
    marks = min(buckets, key=_hits_and_presents)
    return marks, buckets[marks]


def select_largest_bucket(buckets: Buckets) -> Tuple[MarkSequence, Pool]:
    marks = max(buckets, key=lambda key: len(buckets[key]))
    return marks, buckets[marks]


POLICIES: Dict[str, Policy] = {
    "fewest_hits": select_fewest_hits,
    "largest_bucket": select_largest_bucket,
}


def get_policy(name: str) -> Policy:
    try:
        return POLICIES[name]
    except KeyError:
        raise ValueError(f"Unknown cheat policy {name!r}. Use one of: {', '.join(POLICIES)}.") from None


def next_candidates(pool: Sequence[Word], guess: Word, policy: Policy = select_fewest_hits) -> Tuple[MarkSequence, Pool]:
    """
    One host move: returns (marks to show, new candidate pool).

    If nothing is left to choose from we answer all-miss with an empty pool,
    and the round limit ends the game as a loss.
    """
    buckets = partition(pool, guess)
    if not buckets:
        return ("miss",) * WORD_LENGTH, []
    marks, chosen = policy(buckets)
    return marks, list(chosen)
