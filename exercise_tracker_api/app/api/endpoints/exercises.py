"""
Exercise endpoints.

``POST /api/exercise/add`` logs an exercise for an existing user and
``GET /api/exercise/log`` returns a user's exercises, optionally
restricted with ``from``/``to`` (inclusive, ``YYYY-MM-DD``) and
truncated with ``limit``.

Defaulting rules:

* an absent or malformed ``date`` on add means today (UTC);
* on the log, a missing or malformed ``from`` means the beginning of
  time and a missing or malformed ``to`` means today; when neither is
  given no date filter is applied;
* a ``limit`` that is absent, not an integer, or not positive is ignored.

The ``id`` returned by the add endpoint is the owner's user id, the same
id the log endpoint reports.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query

from exercise_tracker_api.app.api.deps import (
    get_exercise_service,
    get_user_service,
    parse_payload,
    read_payload,
)
from exercise_tracker_api.app.schemas.exercise import ExerciseCreate, ExerciseLog, ExerciseRead
from exercise_tracker_api.app.services.dates import DateRange, normalize_date
from exercise_tracker_api.app.services.exercise_service import (
    ExerciseService,
    format_exercise,
    parse_limit,
)
from exercise_tracker_api.app.services.user_service import UserService

router = APIRouter()


@router.post("/add", response_model=ExerciseRead)
async def add_exercise(
    payload: Dict[str, Any] = Depends(read_payload),
    users: UserService = Depends(get_user_service),
    exercises: ExerciseService = Depends(get_exercise_service),
) -> ExerciseRead:
    """Log an exercise and return it together with the owner's name and id."""
    data = parse_payload(ExerciseCreate, payload)
    user = await users.find_user(data.user_id)
    exercise = await exercises.create_exercise(
        user,
        date=normalize_date(data.date),
        duration=data.duration,
        description=data.description,
    )
    entry = format_exercise(exercise)
    return ExerciseRead(username=user.username, id=user.id, **entry.model_dump())


@router.get("/log", response_model=ExerciseLog)
async def get_log(
    user_id: str = Query(..., alias="userId"),
    date_from: Optional[str] = Query(None, alias="from", examples=["2019-01-01"]),
    date_to: Optional[str] = Query(None, alias="to", examples=["2019-12-31"]),
    limit: Optional[str] = Query(None),
    users: UserService = Depends(get_user_service),
    exercises: ExerciseService = Depends(get_exercise_service),
) -> ExerciseLog:
    """Return the formatted exercise log of a user.

    Returns HTTP 404 if the user does not exist.
    """
    user = await users.find_user(user_id)
    date_range = None
    if date_from is not None or date_to is not None:
        date_range = DateRange.from_bounds(date_from, date_to)
    records = await exercises.find_exercises_for_user(
        user.id,
        date_range=date_range,
        limit=parse_limit(limit),
    )
    log = [format_exercise(record) for record in records]
    return ExerciseLog(id=user.id, username=user.username, count=len(log), log=log)
