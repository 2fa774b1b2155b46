"""Exercise tracker API client.

A thin wrapper around the exercise tracker REST API built on
``requests``.  Every public method returns a tuple ``(data, error)``:
on success ``data`` holds the decoded JSON body and ``error`` is
``None``; on failure ``data`` is ``None`` and ``error`` is a dictionary
with ``status_code`` and ``message`` keys.  The service answers errors
with plain text, so ``message`` is the response body as sent.

Example::

    api = ExerciseTrackerAPI(base_url="http://localhost:3000")
    user, error = api.create_user("joe")
    entry, error = api.add_exercise(user["id"], "run", 30, date="2019-12-21")
    log, error = api.get_log(user["id"], limit=10)
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple, Union

import requests


logger = logging.getLogger(__name__)

Result = Tuple[Optional[Any], Optional[Dict[str, Any]]]


class ExerciseTrackerAPI:
    """Client for the ``/api/exercise`` endpoints."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the service, e.g. ``http://localhost:3000``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per‑request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helper
    # ------------------------------------------------------------------
    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Dict[str, Any] | None = None,
        data: Dict[str, Any] | None = None,
    ) -> Result:
        """Perform an HTTP request against ``/api/exercise``.

        ``data`` is sent form encoded.
        """
        url = f"{self.base_url}/api/exercise{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                data=data,
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response.json(), None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = exc.response.text if exc.response is not None else ""
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------
    def create_user(self, username: str) -> Result:
        """Register ``username``; returns ``{"username", "id"}``."""
        return self._request("POST", "/new-user", data={"username": username})

    def list_users(self) -> Tuple[Optional[List[Dict[str, Any]]], Optional[Dict[str, Any]]]:
        return self._request("GET", "/users")

    # ------------------------------------------------------------------
    # Exercises
    # ------------------------------------------------------------------
    def add_exercise(
        self,
        user_id: str,
        description: str,
        duration: Union[int, float],
        date: Optional[str] = None,
    ) -> Result:
        """Log an exercise.

        Args:
            user_id: Id of the owning user.
            description: Free‑text description.
            duration: Positive duration in minutes.
            date: Optional ``YYYY-MM-DD``; the server uses today when
                omitted or malformed.
        """
        data: Dict[str, Any] = {
            "userId": user_id,
            "description": description,
            "duration": duration,
        }
        if date is not None:
            data["date"] = date
        return self._request("POST", "/add", data=data)

    def get_log(
        self,
        user_id: str,
        *,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> Result:
        """Fetch the exercise log of ``user_id`` with optional filters."""
        params: Dict[str, Any] = {"userId": user_id}
        if date_from is not None:
            params["from"] = date_from
        if date_to is not None:
            params["to"] = date_to
        if limit is not None:
            params["limit"] = limit
        return self._request("GET", "/log", params=params)
