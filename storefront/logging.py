"""
Centralized logging configuration for the storefront cart.

Usage:
    from storefront.logging import get_logger
    logger = get_logger(__name__)

    logger.info("Cart restored")
    logger.error("Failed to add product", exc_info=True)
"""

import logging
import os
import sys
from functools import cache

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FORMAT_SIMPLE = "%(levelname)s - %(name)s - %(message)s"


def _get_log_level() -> int:
    """Get log level from environment or default to INFO."""
    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    return getattr(logging, level_name, logging.INFO)


def _configure_root_logger() -> None:
    """Configure root logger with a single stdout handler."""
    root = logging.getLogger()

    # Hosts that configured logging themselves keep their handlers
    if root.handlers:
        return

    root.setLevel(_get_log_level())

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(_get_log_level())

    simple = os.environ.get("STOREFRONT_LOG_SIMPLE") == "1"
    handler.setFormatter(logging.Formatter(LOG_FORMAT_SIMPLE if simple else LOG_FORMAT))

    root.addHandler(handler)

    # Stock/catalog lookups go through httpx on every operation
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


_configure_root_logger()


@cache
def get_logger(name: str) -> logging.Logger:
    """
    Get or create a logger with the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


def _escape_log_injection(value: str) -> str:
    """Escape control characters that could forge log entries (CWE-117)."""
    return (
        value.replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
        .replace("\x00", "")
    )


def sanitize_id_for_logging(id_value: str | int | None) -> str:
    """
    Sanitize an identifier for logging: escape control characters and keep
    the first 8 characters.

    Args:
        id_value: ID value to sanitize (can be None)

    Returns:
        Sanitized ID string or "N/A" if empty
    """
    if id_value is None or id_value == "":
        return "N/A"
    safe_value = _escape_log_injection(str(id_value))
    return safe_value[:8] if len(safe_value) > 8 else safe_value


__all__ = [
    "LOG_FORMAT",
    "LOG_FORMAT_SIMPLE",
    "get_logger",
    "sanitize_id_for_logging",
]
