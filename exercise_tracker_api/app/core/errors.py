"""
Error taxonomy and HTTP error rendering.

Services raise subclasses of ``ExerciseTrackerError``; the handlers
registered by ``register_exception_handlers`` turn them, together with
FastAPI's own validation and routing errors, into ``text/plain``
responses:

* ``BadRequestError`` – 400, the first validation complaint.
* ``ConflictError`` – 400, the username is already taken.
* ``NotFoundError`` – 404, unknown route or referenced user.
* ``InternalError`` – 500, a database failure other than a constraint
  violation (raised by ``Database.cursor``).
* anything else – 500 with the same generic message; the traceback is
  logged.
"""

import logging
from typing import Any, Iterable, Mapping

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

# Leading ``loc`` entries naming where a request value came from.
_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}


class ExerciseTrackerError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal Server Error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(ExerciseTrackerError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "bad request"


class ConflictError(BadRequestError):
    default_message = "username already taken"


class NotFoundError(ExerciseTrackerError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "not found"


class InternalError(ExerciseTrackerError):
    pass


def first_validation_message(errors: Iterable[Mapping[str, Any]]) -> str:
    """Render the first entry of a pydantic error list as a short message."""
    for error in errors:
        field = next(
            (
                part
                for part in error.get("loc", ())
                if isinstance(part, str) and part not in _LOCATION_PREFIXES
            ),
            None,
        )
        if error.get("type") == "missing":
            return f"`{field}` is required" if field else "required field missing"
        message = str(error.get("msg", "invalid value"))
        # pydantic prefixes messages raised from validators with "Value error, ".
        message = message.removeprefix("Value error, ")
        return f"`{field}`: {message}" if field else message
    return BadRequestError.default_message


async def _tracker_error_handler(request: Request, exc: ExerciseTrackerError) -> PlainTextResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return PlainTextResponse(exc.message, status_code=exc.status_code)


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> PlainTextResponse:
    return PlainTextResponse(
        first_validation_message(exc.errors()),
        status_code=status.HTTP_400_BAD_REQUEST,
    )


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> PlainTextResponse:
    # Unknown paths and unsupported methods are both reported as missing routes.
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return PlainTextResponse(NotFoundError.default_message, status_code=status.HTTP_404_NOT_FOUND)
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code)


async def _unhandled_error_handler(request: Request, exc: Exception) -> PlainTextResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return PlainTextResponse(
        InternalError.default_message,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ExerciseTrackerError, _tracker_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
