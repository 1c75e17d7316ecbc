"""
Exception classes for the LightBnB data-access layer.
A lookup that finds nothing is not an error; repositories return None for it.
"""

from typing import Optional


class DataAccessError(Exception):
    """Base class for errors raised by the repositories."""

    def __init__(self, detail: str, error_code: Optional[str] = None):
        super().__init__(detail)
        self.detail = detail
        self.error_code = error_code


class QueryExecutionError(DataAccessError):
    """
    The database rejected or failed to run a statement
    (lost connection, constraint violation, malformed SQL).
    The driver exception is available as ``__cause__``.
    """

    def __init__(self, operation: str, detail: Optional[str] = None):
        message = f"Query failed during {operation}"
        if detail:
            message += f": {detail}"

        super().__init__(message, error_code="QUERY_EXECUTION_ERROR")
        self.operation = operation
