"""
Shared exceptions for dashboard generation modules.
"""


class DashboardError(Exception):
    """Base class for dashboard pipeline failures."""

    kind = "dashboard_error"


class NoTableFoundError(DashboardError):
    """Raised when the text has too little tabular structure to build a table."""

    kind = "no_table_found"

    TOO_FEW_LINES = "too_few_lines"
    NO_VALID_ROWS = "no_valid_rows"

    def __init__(self, message: str, reason: str):
        super().__init__(message)
        self.reason = reason


class StorageError(DashboardError):
    """Raised when a rendered document cannot be written to storage."""

    kind = "storage_error"
