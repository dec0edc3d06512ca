"""Sentry integration for reporting fatal database bootstrap failures."""

import logging
import os

import sentry_sdk

LOGGER = logging.getLogger(__name__)

_state = {"enabled": False}


def _get_sentry_dsn() -> str | None:
    """Get Sentry DSN from file or environment variable."""
    # Try file-based secret first (Docker/K8s)
    dsn_file = os.getenv("SENTRY_DSN_FILE")
    if dsn_file:
        try:
            with open(dsn_file, encoding="utf-8") as f:
                return f.read().strip() or None
        except OSError as e:
            LOGGER.warning("Could not read SENTRY_DSN_FILE %s: %s", dsn_file, e)

    # Fallback to environment variable
    return os.getenv("SENTRY_DSN") or None


def init_sentry() -> bool:
    """Initialize Sentry when a DSN is configured.

    Returns:
        bool: True when error reporting is enabled
    """
    sentry_dsn = _get_sentry_dsn()
    if not sentry_dsn:
        _state["enabled"] = False
        return False

    sentry_sdk.init(dsn=sentry_dsn, send_default_pii=False)
    _state["enabled"] = True
    LOGGER.debug("Sentry error reporting enabled")
    return True


def report_exception(exc: BaseException) -> None:
    """Forward an exception to Sentry when reporting is enabled."""
    if _state["enabled"]:
        sentry_sdk.capture_exception(exc)
