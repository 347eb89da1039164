"""Store exceptions. Every failure at the store boundary derives from StoreError."""

from typing import Optional


class StoreError(Exception):
    """
    Generic store operation failure.

    Callers that only need to know "the operation failed" catch this.

    Attributes:
        message: Error description
        table: Table the operation targeted (if any)
        operation: Operation name ("select", "insert", "update", "delete")
    """

    def __init__(
        self,
        message: str,
        table: Optional[str] = None,
        operation: Optional[str] = None,
    ):
        self.message = message
        self.table = table
        self.operation = operation

        parts = [message]
        if table and operation:
            parts.append(f"({operation} on {table})")

        super().__init__(" ".join(parts))


class AccessDeniedError(StoreError):
    """Raised when a table policy rejects the caller."""


class RecordNotFoundError(StoreError):
    """Raised when the targeted row does not exist or is not visible to the caller."""


class ImmutableColumnError(StoreError):
    """Raised when an update tries to change an identifier, owner or creation time."""


class StoreUnavailableError(StoreError):
    """
    Raised when the underlying database cannot be reached or used.

    Attributes:
        original_error: The sqlite3 error that caused the failure
    """

    def __init__(
        self,
        message: str,
        table: Optional[str] = None,
        operation: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.original_error = original_error
        if original_error:
            message = f"{message}: {original_error}"
        super().__init__(message, table=table, operation=operation)


class InvalidContentError(StoreError, ValueError):
    """
    Raised when a resume content document does not match the content schema.

    Attributes:
        path: Dotted location of the offending value (e.g., "experience[2].company")
    """

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        if path:
            message = f"{message} at '{path}'"
        super().__init__(message, table="resumes")
