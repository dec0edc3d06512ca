"""
Database Initialization Script
Opens the sidandtos SQLite database, switches it to write-ahead journaling and
creates the users and files tables from a declarative schema registry.
"""

from __future__ import annotations

import logging
import sqlite3
import sys
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Final

from .errors import (
    ConnectionUnavailableError,
    DatabaseBootstrapError,
    SchemaInitError,
    StorageLocationError,
)
from .resilient_db import ResilientDB
from .settings import JOURNAL_MODES, DatabaseSettings

if TYPE_CHECKING:
    from collections.abc import Callable

    import aiosqlite

LOGGER = logging.getLogger(__name__)

# Declarative schema registry (idempotent DDLs). Order matters: files references users.
SCHEMA_DDLS: Final[tuple[tuple[str, str], ...]] = (
    (
        "users",
        """
            CREATE TABLE IF NOT EXISTS users (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                email TEXT UNIQUE NOT NULL,
                password TEXT NOT NULL,
                username TEXT NOT NULL,
                created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
                reset_token TEXT,
                reset_token_expires DATETIME,
                otp_code TEXT,
                otp_expires DATETIME
            )
        """,
    ),
    (
        "files",
        """
            CREATE TABLE IF NOT EXISTS files (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id INTEGER NOT NULL,
                filename TEXT NOT NULL,
                original_name TEXT NOT NULL,
                file_path TEXT NOT NULL,
                file_size INTEGER NOT NULL,
                mime_type TEXT NOT NULL,
                uploaded_at DATETIME DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (user_id) REFERENCES users (id) ON DELETE CASCADE
            )
        """,
    ),
)


class BootstrapState(str, Enum):
    """Lifecycle of a DatabaseManager."""

    UNOPENED = "unopened"
    OPENING = "opening"
    OPEN = "open"
    FAILED = "failed"
    SCHEMA_INITIALIZED = "schema_initialized"
    INIT_FAILED = "init_failed"
    CLOSED = "closed"


def _ensure_dir(path: Path) -> None:
    """Ensure a directory exists."""
    path.mkdir(parents=True, exist_ok=True)


def _stderr_feedback(message: str) -> None:
    print(message, file=sys.stderr)


def prepare_storage_location(db_path: Path) -> Path:
    """Resolve the database path and create any missing parent directories.

    Args:
        db_path: Database file location, absolute or relative to the cwd

    Returns:
        Path: Absolute database path

    Raises:
        StorageLocationError: If the containing directory cannot be created
    """
    resolved = Path(db_path).expanduser().resolve()
    try:
        _ensure_dir(resolved.parent)
    except OSError as e:
        raise StorageLocationError(resolved, str(e)) from e
    return resolved


class DatabaseManager:
    """Owns the application's SQLite connection from open to close"""

    def __init__(
        self,
        settings: DatabaseSettings | None = None,
        user_feedback: Callable[[str], None] | None = None,
        error_feedback: Callable[[str], None] | None = None,
        schema: tuple[tuple[str, str], ...] = SCHEMA_DDLS,
    ):
        self.settings = settings or DatabaseSettings()
        self.user_feedback = user_feedback or print
        self.error_feedback = error_feedback or _stderr_feedback
        self.schema = schema
        self.db_path = Path(self.settings.db_path).expanduser().resolve()
        self.state = BootstrapState.UNOPENED
        self._conn: aiosqlite.Connection | None = None

    @property
    def connection(self) -> aiosqlite.Connection:
        """The open connection shared with query code."""
        if self._conn is None:
            raise ConnectionUnavailableError()
        return self._conn

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    async def _configure_connection(self, conn: aiosqlite.Connection) -> None:
        if self.settings.foreign_keys:
            await conn.execute("PRAGMA foreign_keys = ON")

    async def open(self) -> aiosqlite.Connection:
        """Open (or create) the database file in read-write mode.

        Raises:
            StorageLocationError: If the database directory cannot be created
            DatabaseOpenError: If the file cannot be opened after all retries
        """
        if self._conn is not None:
            return self._conn

        self.state = BootstrapState.OPENING
        self.user_feedback(f"Opening database at: {self.db_path}")
        try:
            self.db_path = prepare_storage_location(self.db_path)
            resilient = ResilientDB(self.db_path, self._configure_connection, self.user_feedback)
            self._conn = await resilient.connect_with_retry(
                retries=self.settings.connect_retries,
                delay=self.settings.retry_delay_s,
            )
        except DatabaseBootstrapError as e:
            self.state = BootstrapState.FAILED
            LOGGER.error("Database open failed for %s: %s", self.db_path, e)
            self.error_feedback(f"[ERROR] {e.message}")
            raise

        self.state = BootstrapState.OPEN
        self.user_feedback("[OK] Database connection opened successfully")
        return self._conn

    def _warn_journal_mode(self, reason: str) -> None:
        LOGGER.warning("Journal mode %s not applied: %s", self.settings.journal_mode, reason)
        self.error_feedback(
            f"[WARNING] Could not enable {self.settings.journal_mode} mode "
            f"(this is usually okay): {reason}"
        )

    async def enable_wal(self) -> bool:
        """Switch the journal mode to the configured one (WAL by default).

        Best effort: database errors are reported as a warning and the
        connection keeps its current journal mode.

        Returns:
            bool: True when the engine reports the requested mode
        """
        conn = self.connection
        mode = self.settings.journal_mode.upper()
        if mode not in JOURNAL_MODES:
            self._warn_journal_mode(f"unsupported journal mode {mode!r}")
            return False

        try:
            async with conn.execute(f"PRAGMA journal_mode = {mode}") as cursor:
                row = await cursor.fetchone()
        except sqlite3.Error as e:
            self._warn_journal_mode(str(e))
            return False

        reported = str(row[0]).upper() if row else ""
        if reported != mode:
            self._warn_journal_mode(f"engine kept journal mode {reported or 'unknown'}")
            return False

        LOGGER.debug("Journal mode set to %s for %s", mode, self.db_path)
        return True

    async def init_database(self) -> list[str]:
        """Create the schema tables in registry order.

        Each statement is awaited and committed before the next one runs, so a
        table is never created ahead of the table it references.

        Returns:
            list[str]: Table names in creation order

        Raises:
            ConnectionUnavailableError: If the connection is not open
            SchemaInitError: If any CREATE statement fails
        """
        conn = self.connection
        created: list[str] = []
        for table, ddl in self.schema:
            try:
                await conn.execute(ddl)
                await conn.commit()
            except sqlite3.Error as e:
                self.state = BootstrapState.INIT_FAILED
                LOGGER.error("Schema statement for table %s failed: %s", table, e)
                self.error_feedback(f"[ERROR] Could not create table '{table}': {e}")
                raise SchemaInitError(table, str(e), self.db_path) from e
            created.append(table)

        self.state = BootstrapState.SCHEMA_INITIALIZED
        self.user_feedback("[OK] Database initialized successfully")
        return created

    async def list_tables(self) -> list[str]:
        """Names of the user tables currently in the database."""
        async with self.connection.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%' "
            "ORDER BY name"
        ) as cursor:
            rows = await cursor.fetchall()
        return [row[0] for row in rows]

    async def journal_mode(self) -> str:
        """Journal mode the engine currently reports."""
        async with self.connection.execute("PRAGMA journal_mode") as cursor:
            row = await cursor.fetchone()
        return str(row[0]).lower() if row else ""

    async def close(self) -> None:
        """Close the connection. Safe to call more than once."""
        if self._conn is None:
            return
        conn, self._conn = self._conn, None
        await conn.close()
        self.state = BootstrapState.CLOSED
        LOGGER.debug("Database connection closed for %s", self.db_path)

    async def __aenter__(self) -> DatabaseManager:
        await self.open()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()


async def initialize_database(
    settings: DatabaseSettings | None = None,
    user_feedback: Callable[[str], None] | None = None,
    error_feedback: Callable[[str], None] | None = None,
) -> DatabaseManager:
    """Open the database, enable WAL and create the schema.

    Args:
        settings: Bootstrap settings (defaults to DatabaseSettings())
        user_feedback: Status line sink (defaults to print)
        error_feedback: Warning/error line sink (defaults to stderr)

    Returns:
        DatabaseManager: Manager holding the open, initialized connection
    """
    manager = DatabaseManager(settings, user_feedback, error_feedback)
    await manager.open()
    await manager.enable_wal()
    try:
        await manager.init_database()
    except SchemaInitError:
        await manager.close()
        raise
    return manager
