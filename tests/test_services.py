import asyncio
from datetime import date

import pytest

from exercise_tracker_api.app.core.errors import ConflictError, InternalError, NotFoundError
from exercise_tracker_api.app.schemas.exercise import ExerciseRecord
from exercise_tracker_api.app.schemas.user import UserCreate
from exercise_tracker_api.app.services.dates import DateRange
from exercise_tracker_api.app.services.exercise_service import (
    ExerciseService,
    format_exercise,
    parse_limit,
)
from exercise_tracker_api.app.services.user_service import UserService


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def users(db):
    return UserService(db)


@pytest.fixture
def exercises(db):
    return ExerciseService(db)


def test_create_user_issues_distinct_ids(users):
    ids = {run(users.create_user(UserCreate(username=name))).id for name in ("ann", "bob", "cid")}
    assert len(ids) == 3
    assert all(ids)


def test_duplicate_username_is_a_conflict(users):
    run(users.create_user(UserCreate(username="joe")))
    with pytest.raises(ConflictError):
        run(users.create_user(UserCreate(username="joe")))
    assert [u.username for u in run(users.list_users())] == ["joe"]


def test_list_users_in_insertion_order(users):
    for name in ("zed", "amy", "max"):
        run(users.create_user(UserCreate(username=name)))
    assert [u.username for u in run(users.list_users())] == ["zed", "amy", "max"]


def test_find_user(users):
    created = run(users.create_user(UserCreate(username="joe")))
    assert run(users.find_user(created.id)) == created
    with pytest.raises(NotFoundError):
        run(users.find_user("missing"))


def _log(users, exercises):
    joe = run(users.create_user(UserCreate(username="joe")))
    for day, minutes in ((date(2020, 1, 10), 30), (date(2020, 1, 1), 45), (date(2020, 2, 1), 20.5)):
        run(exercises.create_exercise(joe, date=day, duration=minutes, description="run"))
    return joe


def test_create_exercise_copies_owner(users, exercises):
    joe = run(users.create_user(UserCreate(username="joe")))
    record = run(exercises.create_exercise(joe, date=date(2019, 12, 21), duration=30, description="run"))
    assert record.user_id == joe.id
    assert record.username == "joe"
    assert record.id != joe.id
    assert run(exercises.find_exercises_for_user(joe.id)) == [record]


def test_find_exercises_keeps_insertion_order(users, exercises):
    joe = _log(users, exercises)
    found = run(exercises.find_exercises_for_user(joe.id))
    assert [r.date for r in found] == [date(2020, 1, 10), date(2020, 1, 1), date(2020, 2, 1)]
    assert [r.duration for r in found] == [30, 45, 20.5]


def test_find_exercises_by_inclusive_range(users, exercises):
    joe = _log(users, exercises)
    january = DateRange(date(2020, 1, 1), date(2020, 1, 10))
    found = run(exercises.find_exercises_for_user(joe.id, date_range=january))
    assert [r.date for r in found] == [date(2020, 1, 10), date(2020, 1, 1)]


def test_find_exercises_limit(users, exercises):
    joe = _log(users, exercises)
    assert len(run(exercises.find_exercises_for_user(joe.id, limit=2))) == 2
    assert len(run(exercises.find_exercises_for_user(joe.id, limit=10))) == 3
    assert len(run(exercises.find_exercises_for_user(joe.id, limit=0))) == 3
    assert len(run(exercises.find_exercises_for_user(joe.id, limit=-1))) == 3


def test_find_exercises_only_returns_own_records(users, exercises):
    joe = _log(users, exercises)
    ann = run(users.create_user(UserCreate(username="ann")))
    assert run(exercises.find_exercises_for_user(ann.id)) == []
    assert len(run(exercises.find_exercises_for_user(joe.id))) == 3


def test_parse_limit():
    assert parse_limit(None) is None
    assert parse_limit("5") == 5
    assert parse_limit(" 3 ") == 3
    assert parse_limit("0") is None
    assert parse_limit("-2") is None
    assert parse_limit("ten") is None
    assert parse_limit("2.5") is None


def test_format_exercise():
    record = ExerciseRecord(
        id="e1",
        user_id="u1",
        username="joe",
        description="run",
        duration=30,
        date=date(2019, 12, 21),
    )
    entry = format_exercise(record)
    assert entry.model_dump() == {"description": "run", "duration": 30, "date": "Sat Dec 21 2019"}


def test_migrations_are_idempotent(db):
    db.init()
    with db.cursor() as cursor:
        versions = [row["version"] for row in cursor.execute("SELECT version FROM migrations ORDER BY version")]
    assert versions == [1, 2]


def test_storage_failure_raises_internal_error(db, users, exercises):
    joe = run(users.create_user(UserCreate(username="joe")))
    with db.cursor() as cursor:
        cursor.execute("DROP TABLE exercises")
    with pytest.raises(InternalError):
        run(exercises.find_exercises_for_user(joe.id))


def test_limit_larger_than_integer_range(users, exercises):
    joe = _log(users, exercises)
    assert len(run(exercises.find_exercises_for_user(joe.id, limit=10**20))) == 3


def test_record_duration_matches_stored_form():
    record = ExerciseRecord(
        id="e1", user_id="u1", username="joe", description="run", duration=30.0, date=date(2020, 1, 1)
    )
    assert record.duration == 30 and isinstance(record.duration, int)
