"""
Business logic for exercises.

``ExerciseService`` stores exercises in the ``exercises`` table and
reads a user's exercises back, optionally restricted to an inclusive
date range and truncated to a number of entries.  Results are always in
insertion order.  ``format_exercise`` turns a stored record into the
entry shape used in exercise logs.

Callers are expected to resolve the owning user (``UserService.find_user``)
before creating an exercise; the owner's username is copied onto the
record at creation time and is not kept in sync afterwards.
"""

from __future__ import annotations

import datetime
import logging
import sqlite3
import uuid
from typing import List, Optional, Union

from ..core.db import Database
from ..schemas.exercise import ExerciseRecord, LogEntry
from ..schemas.user import UserRead
from .dates import DateRange, format_date

logger = logging.getLogger(__name__)


def parse_limit(raw: Optional[str]) -> Optional[int]:
    """Interpret the ``limit`` query value.

    Returns a positive integer, or ``None`` (no limit) when the value is
    absent, not an integer, zero or negative.
    """
    if raw is None:
        return None
    try:
        limit = int(str(raw).strip())
    except ValueError:
        return None
    return limit if limit > 0 else None


def format_exercise(exercise: ExerciseRecord) -> LogEntry:
    return LogEntry(
        description=exercise.description,
        duration=exercise.duration,
        date=format_date(exercise.date),
    )


class ExerciseService:
    """Service class for storing and querying exercises."""

    def __init__(self, db: Database) -> None:
        self.db = db

    async def create_exercise(
        self,
        user: UserRead,
        date: datetime.date,
        duration: Union[int, float],
        description: str,
    ) -> ExerciseRecord:
        """Insert an exercise for ``user`` and return the stored record."""
        exercise = ExerciseRecord(
            id=uuid.uuid4().hex,
            user_id=user.id,
            username=user.username,
            description=description,
            duration=duration,
            date=date,
        )
        with self.db.cursor() as cursor:
            cursor.execute(
                """
                INSERT INTO exercises (id, user_id, username, description, duration, date)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    exercise.id,
                    exercise.user_id,
                    exercise.username,
                    exercise.description,
                    exercise.duration,
                    exercise.date.isoformat(),
                ),
            )
        logger.info("Logged exercise %s for user %s", exercise.id, user.id)
        return exercise

    async def find_exercises_for_user(
        self,
        user_id: str,
        date_range: Optional[DateRange] = None,
        limit: Optional[int] = None,
    ) -> List[ExerciseRecord]:
        """Return the exercises of ``user_id``.

        ``date_range`` bounds are inclusive.  A positive ``limit`` keeps
        only the first ``limit`` matches; ``None`` or a non-positive
        value returns every match.
        """
        query = "SELECT * FROM exercises WHERE user_id = ?"
        params: list = [user_id]
        if date_range is not None:
            # ISO dates compare correctly as text.
            query += " AND date BETWEEN ? AND ?"
            params.extend([date_range.start.isoformat(), date_range.end.isoformat()])
        query += " ORDER BY rowid"
        with self.db.cursor() as cursor:
            rows = cursor.execute(query, tuple(params)).fetchall()
        records = [self._row_to_record(row) for row in rows]
        # Sliced here: a limit may exceed SQLite's INTEGER range.
        if limit is not None and limit > 0:
            records = records[:limit]
        return records

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> ExerciseRecord:
        return ExerciseRecord(
            id=row["id"],
            user_id=row["user_id"],
            username=row["username"],
            description=row["description"],
            duration=row["duration"],
            date=datetime.date.fromisoformat(row["date"]),
        )
