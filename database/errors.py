"""
Error types raised by the database bootstrap layer.

Library code raises these; only the startup routine in ``database.__main__``
turns them into a process exit code.
"""

from __future__ import annotations

from pathlib import Path
from typing import Final

TROUBLESHOOTING_HINTS: Final[tuple[str, ...]] = (
    "Check if the database file exists and is not locked",
    "If the folder is synced (OneDrive, Dropbox, iCloud), the file might be syncing - try pausing the sync client",
    "Check file permissions",
    "Try deleting the database file and let it recreate",
)


class DatabaseBootstrapError(Exception):
    """
    Base class for failures while preparing the application database.

    Attributes:
        db_path: Resolved database path the failure relates to, if known.
        hints: Remediation hints shown to the operator.
    """

    def __init__(
        self,
        message: str,
        *,
        db_path: Path | None = None,
        hints: tuple[str, ...] = (),
    ) -> None:
        super().__init__(message)
        self.message = message
        self.db_path = db_path
        self.hints = hints

    def diagnostic_lines(self) -> list[str]:
        """Human-readable diagnostic block for console output."""
        lines = [f"[ERROR] {self.message}"]
        if self.db_path is not None:
            lines.append(f"Database path: {self.db_path}")
        cause = self.__cause__
        if cause is not None:
            lines.append(f"Full error: {cause!r}")
        if self.hints:
            lines.append("")
            lines.append("Troubleshooting tips:")
            lines.extend(f"   {i}. {hint}" for i, hint in enumerate(self.hints, start=1))
        return lines


class StorageLocationError(DatabaseBootstrapError):
    """Raised when the directory holding the database file cannot be created."""

    def __init__(self, db_path: Path, reason: str) -> None:
        super().__init__(
            f"Cannot prepare database directory: {reason}",
            db_path=db_path,
            hints=TROUBLESHOOTING_HINTS,
        )


class DatabaseOpenError(DatabaseBootstrapError):
    """Raised when the database file cannot be opened or created."""

    def __init__(self, db_path: Path, reason: str) -> None:
        super().__init__(
            f"Error opening database: {reason}",
            db_path=db_path,
            hints=TROUBLESHOOTING_HINTS,
        )


class ConnectionUnavailableError(DatabaseBootstrapError):
    """Raised when an operation needs an open connection and there is none."""

    def __init__(self, message: str = "Database connection not available") -> None:
        super().__init__(message)


class SchemaInitError(DatabaseBootstrapError):
    """
    Raised when a schema statement fails.

    Attributes:
        table: Name of the table whose CREATE statement failed.
    """

    def __init__(self, table: str, reason: str, db_path: Path | None = None) -> None:
        super().__init__(
            f"Failed to create table '{table}': {reason}",
            db_path=db_path,
        )
        self.table = table
