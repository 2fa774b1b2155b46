"""
Business logic for users.

``UserService`` wraps the ``users`` table.  Usernames are unique; the
database constraint is what guarantees it, so two concurrent requests
for the same name cannot both succeed.
"""

import logging
import sqlite3
import uuid
from typing import List

from ..core.db import Database
from ..core.errors import ConflictError, NotFoundError
from ..schemas.user import UserCreate, UserRead

logger = logging.getLogger(__name__)


class UserService:
    """Сервис для работы с пользователями."""

    def __init__(self, db: Database) -> None:
        self.db = db

    async def create_user(self, data: UserCreate) -> UserRead:
        """Store a new user and return it with its generated id.

        Raises ``ConflictError`` when the username is already taken.
        """
        user_id = uuid.uuid4().hex
        try:
            with self.db.cursor() as cursor:
                cursor.execute(
                    "INSERT INTO users (id, username) VALUES (?, ?)",
                    (user_id, data.username),
                )
        except sqlite3.IntegrityError as exc:
            logger.warning("Username %r already taken", data.username)
            raise ConflictError() from exc
        logger.info("Created user %s (%s)", data.username, user_id)
        return UserRead(id=user_id, username=data.username)

    async def list_users(self) -> List[UserRead]:
        """Return all users in insertion order."""
        with self.db.cursor() as cursor:
            rows = cursor.execute("SELECT id, username FROM users ORDER BY rowid").fetchall()
        return [UserRead(id=row["id"], username=row["username"]) for row in rows]

    async def find_user(self, user_id: str) -> UserRead:
        """Return the user with ``user_id`` or raise ``NotFoundError``."""
        with self.db.cursor() as cursor:
            row = cursor.execute(
                "SELECT id, username FROM users WHERE id = ?",
                (user_id,),
            ).fetchone()
        if not row:
            logger.warning("User %s not found", user_id)
            raise NotFoundError("unknown userId")
        return UserRead(id=row["id"], username=row["username"])
