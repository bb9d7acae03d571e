"""Error taxonomy shared by the date, aggregation and data-access layers."""

from __future__ import annotations


class HearthBookError(Exception):
    """Base class for application errors."""


class InvalidDate(HearthBookError, ValueError):
    """A date or month string could not be parsed."""

    def __init__(self, raw: object, expected: str = "YYYY-MM-DD") -> None:
        super().__init__(f"Invalid date {raw!r}; expected {expected}")
        self.raw = raw


class InvalidRange(HearthBookError, ValueError):
    """A month window whose start falls after its end."""

    def __init__(self, start: str, end: str) -> None:
        super().__init__(f"Invalid range: start {start} is after end {end}")
        self.start = start
        self.end = end


class DataAccessFailure(HearthBookError):
    """The backing store rejected a read or write."""

    def __init__(self, operation: str, cause: BaseException | None = None) -> None:
        message = f"{operation} failed"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.operation = operation
        self.cause = cause


class HolidayFeedFailure(HearthBookError):
    """The external holiday feed was unreachable or malformed."""

    def __init__(self, year: int, reason: str) -> None:
        super().__init__(f"Holiday feed for {year} unavailable: {reason}")
        self.year = year
        self.reason = reason


__all__ = [
    "DataAccessFailure",
    "HearthBookError",
    "HolidayFeedFailure",
    "InvalidDate",
    "InvalidRange",
]
