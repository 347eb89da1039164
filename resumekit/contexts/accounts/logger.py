"""
Accounts context logger.

Provides logging interface for the accounts context with automatic [accounts] prefix.
"""

from loguru import logger

CONTEXT_PREFIX = "[accounts]"


def _log_info(message: str) -> None:
    """Log info message with [accounts] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [accounts] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [accounts] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")
