"""
FastAPI dependencies shared by the route modules.

Services are built per request around the application's ``Database``
(stored on ``app.state`` by ``create_app``).  Request bodies may be
form encoded or JSON; ``read_payload`` accepts both and ``parse_payload``
validates the result against a schema, reporting failures as
``BadRequestError``.
"""

from typing import Any, Dict, Type, TypeVar

from fastapi import Depends, Request
from pydantic import BaseModel, ValidationError

from ..core.db import Database, get_database
from ..core.errors import BadRequestError, first_validation_message
from ..services.exercise_service import ExerciseService
from ..services.user_service import UserService

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def get_user_service(db: Database = Depends(get_database)) -> UserService:
    return UserService(db)


def get_exercise_service(db: Database = Depends(get_database)) -> ExerciseService:
    return ExerciseService(db)


async def read_payload(request: Request) -> Dict[str, Any]:
    """Return the request body as a dict of fields.

    JSON bodies must be objects.  Form bodies keep only their text
    fields; uploaded files are ignored.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            payload = await request.json()
        except ValueError as exc:
            raise BadRequestError("malformed JSON body") from exc
        if not isinstance(payload, dict):
            raise BadRequestError("request body must be a JSON object")
        return payload
    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}


def parse_payload(schema: Type[SchemaT], payload: Dict[str, Any]) -> SchemaT:
    try:
        return schema.model_validate(payload)
    except ValidationError as exc:
        raise BadRequestError(first_validation_message(exc.errors())) from exc
