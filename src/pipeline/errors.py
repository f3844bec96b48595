"""
Errors raised by the chart pipeline.

All of them are terminal: the run stops at the first one and no chart is
produced. The entry point turns them into a 400 result.
"""

from __future__ import annotations


class GrowthChartError(Exception):
    """Base class for input and lookup errors."""


class EmptyTableError(GrowthChartError):
    def __init__(self) -> None:
        super().__init__("Table does not contain any data rows")


class MissingRoleError(GrowthChartError):
    """A column required for the chart kind could not be identified."""

    def __init__(self, role: str) -> None:
        self.role = role
        if role == "age/date":
            message = "Table does not contain 'age' nor 'date/time' field"
        else:
            message = f"Table does not contain '{role}' field"
        super().__init__(message)


class MalformedDateError(GrowthChartError):
    def __init__(self, row_index: int, raw: str) -> None:
        self.row_index = row_index
        self.raw = raw
        super().__init__(
            f"Table row[{row_index}]: date is not in YYYY-MM-DD format: '{raw}'"
        )


class MalformedValueError(GrowthChartError):
    """A numeric cell (age, height, weight) is not a finite, non-negative number."""

    def __init__(self, row_index: int, column: str, raw: str) -> None:
        self.row_index = row_index
        self.column = column
        self.raw = raw
        super().__init__(
            f"Table row[{row_index}]: {column} is not a valid non-negative number: '{raw}'"
        )


class ReferenceLookupError(GrowthChartError):
    """The reference lookup rejected a row; its code and message are kept verbatim."""

    def __init__(self, row_index: int, status: int, message: str) -> None:
        self.row_index = row_index
        self.status = status
        self.lookup_message = message
        super().__init__(
            f"Table row[{row_index}]: Cannot get growth reference data: "
            f"{status} - {message}"
        )
