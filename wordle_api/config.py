"""
Single place to read settings from the environment (or a local .env).

Why: the routes, the store and the DB layer all need a few knobs; reading
them once keeps startup behaviour predictable and easy to override in tests.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .cheating import POLICIES
from .session import DEFAULT_ROUNDS, check_rounds

# dev convenience; in prod the platform injects env vars
load_dotenv()


@dataclass(frozen=True)
class Settings:
    app_env: str = "local"
    database_url: str = "sqlite+pysqlite:///./wordle.db"
    daily_salt: str = "local_dev_salt"
    words_file: Optional[str] = None
    guesses_file: Optional[str] = None
    cheat_policy: str = "fewest_hits"
    cheat_allow_any: bool = False
    default_max_rounds: int = DEFAULT_ROUNDS
    log_level: str = "INFO"


def load_settings() -> Settings:
    cheat_policy = os.getenv("CHEAT_POLICY", "fewest_hits")
    if cheat_policy not in POLICIES:
        raise RuntimeError(
            f"CHEAT_POLICY={cheat_policy!r} is not valid. Use one of: {', '.join(POLICIES)}."
        )

    try:
        default_max_rounds = check_rounds(int(os.getenv("DEFAULT_MAX_ROUNDS", str(DEFAULT_ROUNDS))))
    except ValueError as exc:
        raise RuntimeError(f"DEFAULT_MAX_ROUNDS is not valid: {exc}") from exc

    return Settings(
        app_env=os.getenv("APP_ENV", "local"),
        database_url=os.getenv("DATABASE_URL", "sqlite+pysqlite:///./wordle.db"),
        daily_salt=os.getenv("DAILY_SALT", "local_dev_salt"),
        words_file=os.getenv("WORDS_FILE") or None,
        guesses_file=os.getenv("GUESSES_FILE") or None,
        cheat_policy=cheat_policy,
        cheat_allow_any=os.getenv("CHEAT_ALLOW_ANY") == "1",
        default_max_rounds=default_max_rounds,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


settings = load_settings()
