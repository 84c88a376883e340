"""
Daily puzzle helpers.
Everyone playing on the same (UTC) day gets the same answer, without storing
a schedule anywhere:

    index = HMAC-SHA256(key=salt, msg="YYYY-MM-DD")[:8] as uint64 % pool_size

Changing the salt reshuffles which word belongs to which day.
"""

import hashlib
import hmac
from datetime import date, datetime, timezone
from typing import Union

Moment = Union[datetime, date]

_FNV_OFFSET = 2166136261
_FNV_PRIME = 16777619


def date_key(moment: Moment) -> str:
    """
    ex. 2025-08-24 15:32 UTC -> "2025-08-24"
    Naive datetimes are treated as UTC already.
    """
    if isinstance(moment, datetime):
        if moment.tzinfo is not None:
            moment = moment.astimezone(timezone.utc)
        return moment.strftime("%Y-%m-%d")
    return moment.isoformat()


def word_index(moment: Moment, salt: str, pool_size: int) -> int:
    # Empty pool is the caller's problem; don't crash the shared daily path
    if pool_size <= 0:
        return 0
    digest = hmac.new(salt.encode("utf-8"), date_key(moment).encode("utf-8"), hashlib.sha256).digest()
    number = int.from_bytes(digest[:8], "big")
    return number % pool_size


def seeded_index(seed: str, pool_size: int) -> int:
    """
    Replayable index for a player-chosen seed (FNV-1a, 32 bit).
    Not secret; only meant so two players with the same seed share an answer.

    The hash is read as a signed 32-bit int and its absolute value taken,
    so the web client (which does the same in JavaScript) picks the same word.
    """
    if pool_size <= 0:
        return 0
    h = _FNV_OFFSET
    for ch in seed:
        code = ord(ch)
        if code > 0xFFFF:
            # JavaScript sees the UTF-16 high surrogate here
            code = 0xD800 + ((code - 0x10000) >> 10)
        h ^= code
        h = (h * _FNV_PRIME) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return abs(h) % pool_size
