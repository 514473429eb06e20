from __future__ import annotations

from cronsight.schemas import ErrorKind


class CronError(ValueError):
    """Base class for every problem found while reading a cron expression."""

    kind: ErrorKind


class StructuralError(CronError):
    """The expression does not split into exactly five fields."""

    kind = ErrorKind.STRUCTURAL


class RangeError(CronError):
    """A value lies outside the field's [min, max] bounds."""

    kind = ErrorKind.RANGE


class OrderError(CronError):
    """A range whose start is greater than its end."""

    kind = ErrorKind.ORDER


class StepError(CronError):
    """A step that is not a positive integer."""

    kind = ErrorKind.STEP


class TokenError(CronError):
    """A token that is neither a number nor a known symbolic name."""

    kind = ErrorKind.TOKEN
