"""Domain-specific exceptions for CineDash.

All exceptions inherit from CineDashError so callers can catch any
dashboard failure in one place.
"""

from typing import Optional


class CineDashError(Exception):
    """Base exception for all CineDash errors."""

    pass


class ProviderError(CineDashError):
    """Raised when a data provider endpoint cannot deliver its table.

    This exception is raised when:
    - The endpoint answers with a non-200 status
    - The body is not a JSON array of records
    - Transport errors persist after all retries
    """

    def __init__(self, endpoint: str, message: str, status_code: Optional[int] = None):
        self.endpoint = endpoint
        self.status_code = status_code
        super().__init__(f"{endpoint}: {message}")


class SelectionError(CineDashError, ValueError):
    """Raised when a dashboard selection (period, year, region) is invalid."""

    pass
