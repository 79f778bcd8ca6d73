"""Errors raised by the shift and compliance calculators"""

from typing import Optional


class InvalidTimeFormat(ValueError):
    """A time-of-day string that is not a valid 24-hour HH:MM (or HH) value."""

    def __init__(self, value, message: Optional[str] = None):
        self.value = value
        super().__init__(message or f"Invalid time {value!r}, expected HH:MM in 24-hour format")


class InvalidRate(ValueError):
    """An hourly rate that is not a valid non-negative decimal."""

    def __init__(self, value, message: Optional[str] = None):
        self.value = value
        super().__init__(message or f"Invalid hourly rate {value!r}, expected a non-negative decimal")


class ValidationError(ValueError):
    """
    Aggregated per-field validation failure.

    `errors` maps a field name (as the UI knows it, e.g. "startTime") to a
    user-facing message.
    """

    def __init__(self, errors: dict[str, str]):
        self.errors = dict(errors)
        fields = ", ".join(sorted(self.errors)) or "input"
        super().__init__(f"Invalid {fields}")
