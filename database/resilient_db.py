# sidandtos - resilient_db.py
# Resilient async wrapper for opening SQLite, with first-run setup and corruption recovery.

import asyncio
import shutil
import sqlite3
from collections.abc import Awaitable, Callable
from datetime import datetime
from pathlib import Path
from urllib.parse import quote

import aiosqlite

from .errors import DatabaseOpenError

ConnectionInitializer = Callable[[aiosqlite.Connection], Awaitable[None]]

_CORRUPTION_MARKERS = ("file is not a database", "database disk image is malformed")
_SIDECAR_SUFFIXES = ("-wal", "-shm", "-journal")


def _is_corruption(exc: Exception) -> bool:
    message = str(exc).lower()
    return any(marker in message for marker in _CORRUPTION_MARKERS)


class ResilientDB:
    """A wrapper that makes opening SQLite safer and more user-friendly."""

    def __init__(
        self,
        db_path: Path,
        connection_initializer: ConnectionInitializer | None = None,
        user_feedback: Callable[[str], None] | None = None,
    ):
        self.db_path = db_path
        self.connection_initializer = connection_initializer
        self.user_feedback = user_feedback or print

    def log(self, message: str) -> None:
        self.user_feedback(f"{message}")

    @property
    def uri(self) -> str:
        """SQLite URI opening the file read-write, creating it when missing."""
        return f"file:{quote(self.db_path.as_posix())}?mode=rwc"

    async def connect(self) -> aiosqlite.Connection:
        """Attempts to connect to the DB with recovery logic."""
        try:
            return await self._attempt_connection()
        except sqlite3.OperationalError as e:
            if "unable to open database file" in str(e) and not self.db_path.parent.exists():
                self.log("Creating database folder - this is normal for first-time setup.")
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
                return await self._attempt_connection()
            raise
        except sqlite3.DatabaseError as e:
            if _is_corruption(e):
                self.log("Found a damaged database file. Creating a backup and starting fresh...")
                self._backup_corrupted_db()
                return await self._attempt_connection()
            raise

    async def _attempt_connection(self) -> aiosqlite.Connection:
        conn = await aiosqlite.connect(self.uri, uri=True)
        try:
            # Reading the schema table forces SQLite to validate the file header
            await conn.execute("SELECT count(*) FROM sqlite_master")
            if self.connection_initializer is not None:
                await self.connection_initializer(conn)
        except BaseException:
            await conn.close()
            raise
        return conn

    def _backup_corrupted_db(self) -> None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        backup_dir = self.db_path.parent / "backups"
        backup_dir.mkdir(exist_ok=True)
        backup_path = backup_dir / f"{self.db_path.stem}_corrupted_{timestamp}.db"
        try:
            shutil.move(self.db_path, backup_path)
            self.log(f"Backup saved to: {backup_path}")
        except OSError:
            # If we can't move it, just delete it
            self.db_path.unlink(missing_ok=True)
            self.log("Removed damaged database file.")
        for suffix in _SIDECAR_SUFFIXES:
            Path(f"{self.db_path}{suffix}").unlink(missing_ok=True)

    async def connect_with_retry(self, retries: int = 3, delay: int = 1) -> aiosqlite.Connection:
        retries = max(1, retries)
        attempt = 0
        last_exc: Exception | None = None
        while attempt < retries:
            try:
                return await self.connect()
            except (sqlite3.Error, OSError) as e:
                last_exc = e
                attempt += 1
                if attempt < retries:
                    self.log(
                        f"Open attempt {attempt} failed. Trying again in {delay * attempt} seconds..."
                    )
                    await asyncio.sleep(delay * attempt)

        raise DatabaseOpenError(self.db_path, str(last_exc)) from last_exc
