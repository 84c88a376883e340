"""
DB-backed repository for daily results.

Public methods:
- already_played(player_id, date) -> bool
- insert_result(player_id, date, word_index, guesses, elapsed_ms) -> bool
- leaderboard(date, limit) -> list[LeaderboardRow]

Why: the routes only talk to this class, so the table layout can change
without touching them.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .models import DailyResult
from .schemas import LeaderboardRow

DEFAULT_LEADERBOARD_SIZE = 20


def _to_row(result: DailyResult) -> LeaderboardRow:
    return LeaderboardRow(
        player_id=result.player_id,
        guesses=result.guesses,
        elapsed_ms=result.elapsed_ms,
    )


class DailyResultStore:
    def __init__(self, db: Session):
        self.db = db

    def already_played(self, player_id: str, date: str) -> bool:
        count = self.db.execute(
            select(func.count(DailyResult.id)).where(
                DailyResult.player_id == player_id,
                DailyResult.date == date,
            )
        ).scalar_one()
        return count > 0

    def insert_result(self, player_id: str, date: str, word_index: int, guesses: int, elapsed_ms: int) -> bool:
        """
        One row per player per day. A second result for the same day is
        ignored; returns False in that case.
        """
        if self.already_played(player_id, date):
            return False

        self.db.add(
            DailyResult(
                player_id=player_id,
                date=date,
                word_index=word_index,
                guesses=guesses,
                elapsed_ms=elapsed_ms,
                created_at=datetime.utcnow(),
            )
        )
        try:
            self.db.commit()
        except IntegrityError:
            # lost a race with another request for the same player/day
            self.db.rollback()
            return False
        return True

    def leaderboard(self, date: str, limit: int = DEFAULT_LEADERBOARD_SIZE) -> list[LeaderboardRow]:
        # fastest first, then fewest guesses, then whoever finished first
        rows = (
            self.db.execute(
                select(DailyResult)
                .where(DailyResult.date == date)
                .order_by(
                    DailyResult.elapsed_ms.asc(),
                    DailyResult.guesses.asc(),
                    DailyResult.created_at.asc(),
                    DailyResult.id.asc(),
                )
                .limit(limit)
            )
            .scalars()
            .all()
        )
        return [_to_row(r) for r in rows]
