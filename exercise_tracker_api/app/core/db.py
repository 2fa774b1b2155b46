"""
SQLite persistence and a small migration system.

A ``Database`` object is created once by ``create_app`` and handed to
the services through FastAPI dependencies; nothing in this module keeps
a global connection.  Each store operation opens its own connection via
``Database.connect`` and closes it when done.

Applied migration versions are stored in the ``migrations`` table and
new migrations run in order on start‑up.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from fastapi import Request

from .errors import InternalError

logger = logging.getLogger(__name__)

# Append new migrations with an incremented version number.
MIGRATIONS: list[tuple[int, str]] = [
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS users (
            id TEXT PRIMARY KEY,
            username TEXT NOT NULL UNIQUE,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS exercises (
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL,
            username TEXT NOT NULL,
            description TEXT NOT NULL,
            duration NUMERIC NOT NULL,
            date TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY(user_id) REFERENCES users(id)
        );
        """,
    ),
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_exercises_user_date ON exercises(user_id, date);
        """,
    ),
]


def resolve_database_path(database_url: str) -> str:
    """Return an absolute path for ``database_url``.

    Absolute paths are returned as is; relative paths are resolved
    against the project root.
    """
    if os.path.isabs(database_url):
        return database_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / database_url).resolve())


class Database:
    """Handle to the SQLite database backing the user and exercise stores."""

    def __init__(self, database_url: str) -> None:
        self.path = resolve_database_path(database_url)

    def connect(self) -> sqlite3.Connection:
        """Open a new connection with name‑addressable rows and FK checks on."""
        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        # SQLite only enforces REFERENCES clauses when asked per connection.
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    @contextmanager
    def cursor(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor, commit on success, roll back on error, always close.

        Constraint violations propagate as ``sqlite3.IntegrityError`` so
        stores can map them; other database failures become ``InternalError``.
        """
        conn = self.connect()
        try:
            yield conn.cursor()
            conn.commit()
        except sqlite3.IntegrityError:
            conn.rollback()
            raise
        except sqlite3.Error as exc:
            conn.rollback()
            logger.exception("Database error on %s", self.path)
            raise InternalError() from exc
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def init(self) -> None:
        """Create the migrations table and apply pending migrations."""
        with self.cursor() as cursor:
            cursor.execute(
                "CREATE TABLE IF NOT EXISTS migrations ("
                "version INTEGER PRIMARY KEY, "
                "applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP)"
            )
            row = cursor.execute("SELECT MAX(version) AS version FROM migrations").fetchone()
            current = row["version"] or 0
        for version, script in MIGRATIONS:
            if version <= current:
                continue
            conn = self.connect()
            try:
                conn.executescript(script)
                conn.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
                conn.commit()
            finally:
                conn.close()
            logger.info("Applied migration %s to %s", version, self.path)


def get_database(request: Request) -> Database:
    """FastAPI dependency returning the application's ``Database``."""
    return request.app.state.db
