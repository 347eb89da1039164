"""
Client context logger.

Provides logging interface for client screens with automatic [client] prefix.
"""

from loguru import logger

CONTEXT_PREFIX = "[client]"


def _log_info(message: str) -> None:
    """Log info message with [client] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [client] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [client] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_store_failure(action: str, error: Exception) -> None:
    """Log a store failure caught by a screen."""
    _log_error(f"{action} failed: {error}")
