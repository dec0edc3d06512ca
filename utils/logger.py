"""
Logger utility for sidandtos
Provides centralized logging functionality
"""

from datetime import datetime
import logging
from pathlib import Path
import sys
from typing import Any, Optional

LOGGER_NAME = "sidandtos"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Logger:
    """Centralized logging utility"""

    _instance: Optional["Logger"] = None
    _initialized: bool = False

    def __new__(cls, *args: Any, **kwargs: Any) -> "Logger":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, level: str = "INFO", log_dir: Path | None = None):
        if not self._initialized:
            self.setup_logging(level, log_dir)
            Logger._initialized = True

    def setup_logging(self, level: str = "INFO", log_dir: Path | None = None) -> None:
        """Setup logging configuration.

        Logs always go to stderr so stdout stays free for status lines. When
        ``log_dir`` is given, a dated log file is written there as well.
        """
        handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
        if log_dir is not None:
            log_dir.mkdir(parents=True, exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d")
            handlers.append(
                logging.FileHandler(log_dir / f"sidandtos_{timestamp}.log", encoding="utf-8")
            )

        logging.basicConfig(
            level=getattr(logging, str(level).upper(), logging.INFO),
            format=LOG_FORMAT,
            handlers=handlers,
        )

        self.logger = logging.getLogger(LOGGER_NAME)

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log info message"""
        self.logger.info(message, *args, **kwargs)

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log warning message"""
        self.logger.warning(message, *args, **kwargs)

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log error message"""
        self.logger.error(message, *args, **kwargs)

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log debug message"""
        self.logger.debug(message, *args, **kwargs)

    def critical(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log critical message"""
        self.logger.critical(message, *args, **kwargs)
