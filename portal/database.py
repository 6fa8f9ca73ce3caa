"""SQLite-backed storage: connection handling and schema setup."""

from __future__ import annotations

import sqlite3
import threading
from collections.abc import Iterable
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID

from portal.config import DatabaseConfig

_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%f+00:00"

_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS users (
        id TEXT PRIMARY KEY,
        fullname TEXT NOT NULL,
        email TEXT NOT NULL UNIQUE,
        password_hash TEXT NOT NULL,
        phone TEXT,
        dob TEXT,
        photo_url TEXT,
        user_role TEXT NOT NULL DEFAULT 'member'
            CHECK (user_role IN ('superadmin', 'admin', 'member', 'treasurer')),
        email_verification_code TEXT,
        email_verification_expires_at TEXT,
        is_email_verified INTEGER NOT NULL DEFAULT 0,
        is_active INTEGER NOT NULL DEFAULT 0,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS announcements (
        id TEXT PRIMARY KEY,
        posted_by TEXT NOT NULL,
        title TEXT NOT NULL,
        body TEXT,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS contributions (
        id TEXT PRIMARY KEY,
        created_by TEXT NOT NULL,
        title TEXT NOT NULL,
        description TEXT,
        amount TEXT,
        due_date TEXT NOT NULL,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS payments (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        contribution_id TEXT NOT NULL,
        amount TEXT,
        receipt_url TEXT,
        status TEXT NOT NULL DEFAULT 'pending'
            CHECK (status IN ('pending', 'verified')),
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS photos (
        id TEXT PRIMARY KEY,
        posted_by TEXT NOT NULL,
        event_id TEXT,
        url TEXT NOT NULL,
        caption TEXT,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )
    """,
)


class DatabaseError(Exception):
    """Raised when a database operation fails."""


def _adapt(value: Any) -> Any:
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).strftime(_TIMESTAMP_FORMAT)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, bool):
        return int(value)
    return value


class Database:
    """A thread-safe SQLite connection that returns rows as dictionaries."""

    def __init__(self, path: str = ":memory:", timeout: float = 30.0) -> None:
        try:
            self._conn = sqlite3.connect(
                path, timeout=timeout, isolation_level=None, check_same_thread=False
            )
        except sqlite3.Error as exc:
            raise DatabaseError(str(exc)) from exc
        self._conn.row_factory = sqlite3.Row
        self._lock = threading.Lock()

    def __enter__(self) -> Database:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _run(self, sql: str, params: Iterable[Any]) -> sqlite3.Cursor:
        try:
            return self._conn.execute(sql, tuple(_adapt(p) for p in params))
        except sqlite3.Error as exc:
            raise DatabaseError(str(exc)) from exc

    def execute(self, sql: str, params: Iterable[Any] = ()) -> int:
        """Run a statement and return the number of affected rows."""
        with self._lock:
            return self._run(sql, params).rowcount

    def fetch_one(self, sql: str, params: Iterable[Any] = ()) -> dict[str, Any] | None:
        """Run a query and return its first row, or None."""
        with self._lock:
            row = self._run(sql, params).fetchone()
        return None if row is None else dict(row)

    def fetch_all(self, sql: str, params: Iterable[Any] = ()) -> list[dict[str, Any]]:
        """Run a query and return all rows."""
        with self._lock:
            rows = self._run(sql, params).fetchall()
        return [dict(row) for row in rows]

    def close(self) -> None:
        with self._lock:
            self._conn.close()


def _sqlite_path(url: str) -> str:
    if url in (":memory:", "sqlite::memory:", "sqlite://:memory:"):
        return ":memory:"
    for prefix in ("sqlite://", "sqlite:"):
        if url.startswith(prefix):
            path = url[len(prefix):]
            break
    else:
        if "://" in url:
            raise DatabaseError(f"unsupported database url: {url}")
        path = url
    if not path:
        raise DatabaseError(f"database url has no path: {url}")
    return path


def create_pool(config: DatabaseConfig) -> Database:
    """Open the database named by ``config.url``."""
    return Database(_sqlite_path(config.url), timeout=float(config.connection_timeout))


def run_migrations(pool: Database) -> None:
    """Create every table the application needs, if not already present."""
    for statement in _SCHEMA:
        pool.execute(statement)