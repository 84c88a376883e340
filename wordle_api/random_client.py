"""
- HTTP call with clear fallback
Get one random answer index from random.org. If anything goes wrong (no internet,
timeout, bad response), we fall back to a local secure random generator so the game still works.
"""

import logging
from secrets import randbelow

import requests

logger = logging.getLogger(__name__)

RANDOM_URL = "https://www.random.org/integers/"

# random.org caps integers at 1e9; our word lists are far smaller
RANDOM_ORG_MAX = 1_000_000_000


def fetch_index(pool_size: int) -> int:
    if pool_size <= 1:
        return 0

    params = {
        "num": 1,              # one index
        "min": 0,
        "max": min(pool_size, RANDOM_ORG_MAX) - 1,
        "col": 1,
        "base": 10,
        "format": "plain",
        "rnd": "new",
    }

    # keep network quick; if it takes too long, we will just fallback
    timeout_seconds = 3.0

    try:
        response = requests.get(RANDOM_URL, params=params, timeout=timeout_seconds)
        response.raise_for_status()

        # The body looks like: "17\n"
        lines = [line.strip() for line in response.text.splitlines() if line.strip()]
        if len(lines) != 1:
            raise ValueError(f"random.org returned {len(lines)} values, expected 1.")

        value = int(lines[0])
        if value < 0 or value >= pool_size:
            raise ValueError(f"random.org number {value} out of range 0..{pool_size - 1}.")
        return value

    except (requests.RequestException, ValueError) as exc:
        logger.warning("random.org unavailable (%s); using local random", exc)
        return randbelow(pool_size)
