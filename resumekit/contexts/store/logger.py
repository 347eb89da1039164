"""
Store context logger.

Provides logging interface for the store context with automatic [store] prefix.
All store modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from resumekit.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[store]"


def setup_store_logger(log_dir: Path = None, db_path: Path = None) -> Path:
    """
    Setup logger for store maintenance sessions.

    Args:
        log_dir: Directory for this session (default: LOGS_PATH)
        db_path: Database file recorded in the provenance header

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="store",
        log_dir=log_dir,
        extra_provenance={"Database": db_path} if db_path else None,
    )


def _log_info(message: str) -> None:
    """Log info message with [store] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [store] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [store] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_operation(operation: str, table: str, user_id: str, affected: int) -> None:
    """Log a completed store operation."""
    caller = user_id or "anonymous"
    _log_debug(f"{operation} on {table} by {caller}: {affected} row(s)")


def log_rejection(operation: str, table: str, user_id: str, reason: str) -> None:
    """Log an operation rejected at the store boundary."""
    caller = user_id or "anonymous"
    _log_warning(f"Rejected {operation} on {table} by {caller}: {reason}")
