"""
SQLAlchemy ORM models.

Tables:
- daily_results: one row per player per day, written when a daily game is won
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import String, Integer, DateTime, UniqueConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column
from .db import Base


class DailyResult(Base):
    __tablename__ = "daily_results"
    __table_args__ = (
        UniqueConstraint("player_id", "date", name="uq_daily_results_player_date"),
        Index("idx_daily_results_date_time", "date", "elapsed_ms"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Opaque id from the caller (logged-in user or anonymous cookie)
    player_id: Mapped[str] = mapped_column(String(64), nullable=False)

    # "YYYY-MM-DD" (UTC)
    date: Mapped[str] = mapped_column(String(10), nullable=False, index=True)

    # Index into the answers list for that day
    word_index: Mapped[int] = mapped_column(Integer, nullable=False)

    guesses: Mapped[int] = mapped_column(Integer, nullable=False)
    elapsed_ms: Mapped[int] = mapped_column(Integer, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
