"""Database bootstrap settings.

Env-backed settings:

- SIDANDTOS_DB_PATH: database file location
  default: "sidandtos.db" next to the database package
- SIDANDTOS_DB_JOURNAL_MODE: journal mode requested at startup
  default: "WAL"
- SIDANDTOS_DB_FOREIGN_KEYS: enforce foreign keys on the connection (bool)
  default: true
- SIDANDTOS_DB_CONNECT_RETRIES: open attempts before giving up (int)
  default: 3
- SIDANDTOS_DB_RETRY_DELAY_S: base back-off between attempts, seconds (int)
  default: 1
- SIDANDTOS_LOG_LEVEL: root log level
  default: "INFO"
- SIDANDTOS_LOG_DIR: optional directory for a dated log file

Expose get_database_settings() returning a frozen dataclass with these fields.
"""

from __future__ import annotations

import contextlib
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

LOGGER = logging.getLogger(__name__)

DEFAULT_DB_PATH: Final[Path] = Path(__file__).resolve().parent / "sidandtos.db"

JOURNAL_MODES: Final[frozenset[str]] = frozenset(
    {"DELETE", "TRUNCATE", "PERSIST", "MEMORY", "WAL", "OFF"}
)


def _load_env_file(path: Path) -> None:
    """Load KEY=VALUE from a .env-style file into os.environ if not already set."""
    with contextlib.suppress(OSError, UnicodeDecodeError):
        if not path.exists():
            return
        with path.open(encoding="utf-8") as f:
            for raw in f:
                line = raw.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                key, value = line.split("=", 1)
                key = key.strip()
                value = value.strip().strip('"').strip("'")
                if key and key not in os.environ:
                    os.environ[key] = value


# One-time load at import
_load_env_file(Path(__file__).resolve().parents[1] / ".env")


def _parse_bool(val: str | None, default: bool = False) -> bool:
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "on"}


def _parse_int(val: str | None, default: int) -> int:
    try:
        return int(str(val)) if val is not None else default
    except ValueError:
        return default


def _parse_journal_mode(val: str | None) -> str:
    mode = (val or "WAL").strip().upper()
    if mode not in JOURNAL_MODES:
        LOGGER.warning("Unknown journal mode %r, falling back to WAL", val)
        return "WAL"
    return mode


@dataclass(frozen=True)
class DatabaseSettings:
    """Frozen database bootstrap settings snapshot."""

    db_path: Path = DEFAULT_DB_PATH
    journal_mode: str = "WAL"
    foreign_keys: bool = True
    connect_retries: int = 3
    retry_delay_s: int = 1
    log_level: str = "INFO"
    log_dir: Path | None = None


def get_database_settings() -> DatabaseSettings:
    """
    Load database settings from environment with safe defaults.

    Returns:
        DatabaseSettings: snapshot of the current environment.
    """
    db_path = os.getenv("SIDANDTOS_DB_PATH")
    log_dir = os.getenv("SIDANDTOS_LOG_DIR")
    return DatabaseSettings(
        db_path=Path(db_path).expanduser() if db_path else DEFAULT_DB_PATH,
        journal_mode=_parse_journal_mode(os.getenv("SIDANDTOS_DB_JOURNAL_MODE")),
        foreign_keys=_parse_bool(os.getenv("SIDANDTOS_DB_FOREIGN_KEYS"), True),
        connect_retries=max(1, _parse_int(os.getenv("SIDANDTOS_DB_CONNECT_RETRIES"), 3)),
        retry_delay_s=max(0, _parse_int(os.getenv("SIDANDTOS_DB_RETRY_DELAY_S"), 1)),
        log_level=(os.getenv("SIDANDTOS_LOG_LEVEL") or "INFO").strip().upper(),
        log_dir=Path(log_dir).expanduser() if log_dir else None,
    )
