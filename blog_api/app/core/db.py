"""
SQLite database integration.

The ``Store`` object is the single entry point to the database.  It is
created once by ``create_app`` and handed to the repositories through
FastAPI dependencies; nothing else opens connections.  Each unit of
work gets its own connection (see ``Store.session``), which commits on
success, rolls back on failure and translates ``sqlite3`` exceptions
into the error taxonomy from ``core.errors``.

The schema is created on application start by ``Store.init_db``.  It is
idempotent and there is no migration machinery.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .config import Settings
from .errors import ConstraintViolation, StoreUnavailable


logger = logging.getLogger(__name__)


SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    email TEXT NOT NULL UNIQUE
);

-- No ON DELETE action: removing a user that still owns posts is
-- rejected by SQLite with a foreign key error.
CREATE TABLE IF NOT EXISTS posts (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    content TEXT NOT NULL,
    published INTEGER NOT NULL DEFAULT 0,
    author_id INTEGER NOT NULL,
    FOREIGN KEY(author_id) REFERENCES users(id)
);

CREATE INDEX IF NOT EXISTS idx_posts_author_id ON posts(author_id);
"""


def resolve_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    Absolute paths are used as is.  Relative paths are resolved against
    the project root (the directory holding the ``blog_api`` package).
    """
    if os.path.isabs(database_url):
        return database_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / database_url).resolve())


class Store:
    """Connection factory for the SQLite database."""

    def __init__(self, path: str, timeout: float = 5.0):
        self.path = path
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "Store":
        return cls(resolve_database_path(settings.database_url), timeout=settings.database_timeout)

    def get_connection(self) -> sqlite3.Connection:
        """Create and return a new SQLite connection.

        Rows are returned as ``sqlite3.Row`` so columns can be accessed
        by name.  Foreign key enforcement is off by default in SQLite
        and has to be switched on per connection.
        """
        conn = sqlite3.connect(self.path, timeout=self.timeout)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    @contextmanager
    def session(self) -> Iterator[sqlite3.Connection]:
        """Run one unit of work.

        Commits when the block completes, rolls back otherwise.
        ``sqlite3.IntegrityError`` becomes ``ConstraintViolation``; any
        other ``sqlite3.Error`` (locked database, unreadable file, ...)
        becomes ``StoreUnavailable``.  Domain errors raised inside the
        block propagate untouched.
        """
        try:
            conn = self.get_connection()
        except sqlite3.Error as exc:
            logger.error("Cannot open database %s: %s", self.path, exc)
            raise StoreUnavailable(str(exc)) from exc
        try:
            yield conn
            conn.commit()
        except sqlite3.IntegrityError as exc:
            conn.rollback()
            raise ConstraintViolation(str(exc)) from exc
        except sqlite3.Error as exc:
            conn.rollback()
            raise StoreUnavailable(str(exc)) from exc
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def init_db(self) -> None:
        """Create the tables if they do not exist yet."""
        logger.info("Initialising database at %s", self.path)
        with self.session() as conn:
            conn.executescript(SCHEMA)
