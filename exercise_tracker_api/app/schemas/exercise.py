"""
Pydantic schemas for exercises and exercise logs.

``ExerciseCreate`` is the incoming payload (form fields or JSON keys
use the camelCase ``userId`` of the public API).  ``ExerciseRecord``
mirrors a stored row.  ``LogEntry``, ``ExerciseRead`` and ``ExerciseLog``
are the wire shapes returned to clients; their ``date`` is already
rendered as ``"Sat Dec 21 2019"``.
"""

import math
from datetime import date as Date
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

Duration = Union[int, float]

# Largest integer SQLite stores as INTEGER.
SQLITE_MAX_INTEGER = 2**63 - 1


def storable_duration(number: Duration) -> Duration:
    """Return ``number`` in the form SQLite stores and reads back.

    Integral values that fit a 64‑bit INTEGER become ``int`` (``30.0`` is
    ``30``); larger values become ``float``.
    """
    if isinstance(number, float) and number.is_integer() and abs(number) <= SQLITE_MAX_INTEGER:
        return int(number)
    if isinstance(number, int) and abs(number) > SQLITE_MAX_INTEGER:
        try:
            return float(number)
        except OverflowError:
            raise ValueError("must be a positive number") from None
    return number


class ExerciseCreate(BaseModel):
    """Payload of ``POST /api/exercise/add``."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId")
    description: str
    duration: Duration = Field(..., description="Duration in minutes, must be positive")
    # Free text on purpose: unparseable dates fall back to today.
    date: Optional[str] = Field(None, examples=["2019-12-21"])

    @field_validator("user_id", "description")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v

    @field_validator("duration", mode="before")
    @classmethod
    def parse_duration(cls, v):
        if isinstance(v, bool):
            raise ValueError("must be a number")
        if isinstance(v, (int, float)):
            number = v
        else:
            text = str(v).strip()
            try:
                number = int(text)
            except ValueError:
                try:
                    number = float(text)
                except ValueError:
                    raise ValueError("must be a number") from None
        if (isinstance(number, float) and not math.isfinite(number)) or number <= 0:
            raise ValueError("must be a positive number")
        return storable_duration(number)

    @field_validator("date", mode="before")
    @classmethod
    def date_as_text(cls, v):
        # Non‑text dates count as malformed and fall back to today.
        return v if isinstance(v, str) else None


class ExerciseRecord(BaseModel):
    """A stored exercise."""

    id: str
    user_id: str
    username: str
    description: str
    duration: Duration
    date: Date

    @field_validator("duration")
    @classmethod
    def duration_as_stored(cls, v: Duration) -> Duration:
        return storable_duration(v)


class LogEntry(BaseModel):
    description: str
    duration: Duration
    date: str


class ExerciseRead(LogEntry):
    """Response of ``POST /api/exercise/add``; ``id`` is the owner's user id."""

    username: str
    id: str


class ExerciseLog(BaseModel):
    """Response of ``GET /api/exercise/log``."""

    id: str
    username: str
    count: int
    log: List[LogEntry]
