"""
Main entry point for the sidandtos database bootstrap.

Opens the database, enables WAL and creates the schema. This is the only place
a bootstrap failure becomes a process exit code.
"""

from __future__ import annotations

import asyncio
import sys

from utils.logger import Logger

from .errors import DatabaseBootstrapError
from .initialize_db import initialize_database
from .sentry import init_sentry, report_exception
from .settings import DatabaseSettings, get_database_settings


async def _bootstrap(settings: DatabaseSettings) -> list[str]:
    manager = await initialize_database(settings)
    try:
        return await manager.list_tables()
    finally:
        await manager.close()


def main() -> int:
    """
    Initialize the application database.
    - Returns 0 once the schema exists.
    - Prints diagnostics and troubleshooting tips to stderr and returns 1
      when the database cannot be prepared.
    """
    settings = get_database_settings()
    logger = Logger(settings.log_level, settings.log_dir)
    init_sentry()

    try:
        tables = asyncio.run(_bootstrap(settings))
    except DatabaseBootstrapError as e:
        for line in e.diagnostic_lines():
            print(line, file=sys.stderr)
        report_exception(e)
        logger.error("Database bootstrap failed: %s", e)
        return 1
    except KeyboardInterrupt:
        return 130

    logger.info("Database ready at %s (tables: %s)", settings.db_path, ", ".join(tables))
    return 0


if __name__ == "__main__":
    sys.exit(main())
