from __future__ import annotations

import re
from typing import Optional, Sequence

from cronsight.schemas import FieldDefinition, ParsedField
from cronsight.services.fields import format_value

_EVERY_STEP = re.compile(r"\*/(?P<step>0*[0-9]{1,9})")

INVALID_DESCRIPTION = "Invalid expression"


def _every_step(raw: str) -> Optional[int]:
    """Return n for a ``*/n`` field, None for anything else."""
    match = _EVERY_STEP.fullmatch(raw)
    return int(match["step"]) if match else None


def _is_consecutive(values: Sequence[int]) -> bool:
    return all(b == a + 1 for a, b in zip(values, values[1:]))


def describe_field(field: ParsedField, definition: FieldDefinition) -> str:
    """Human-readable fragment for one field, e.g. "Monday through Friday"."""
    values = field.values
    if not field.valid or not values:
        return "invalid"

    name = definition.name.lower()
    if field.expression == "*" or len(values) == definition.size:
        return f"every {name}"

    step = _every_step(field.expression)
    if step is not None:
        return f"every {step} {name}{'s' if step > 1 else ''}"

    if len(values) == 1:
        return format_value(values[0], definition)

    if len(values) > 2 and _is_consecutive(values):
        first = format_value(values[0], definition)
        last = format_value(values[-1], definition)
        return f"{first} through {last}"

    return ", ".join(format_value(v, definition) for v in values)


def _clock(hour: int, minute: int) -> str:
    if hour == 0:
        display = 12
    elif hour > 12:
        display = hour - 12
    else:
        display = hour
    period = "AM" if hour < 12 else "PM"
    return f"At {display}:{minute:02d} {period}"


def _time_phrase(minute: ParsedField, hour: ParsedField) -> list[str]:
    if minute.expression == "*" and hour.expression == "*":
        return ["Every minute"]
    if minute.expression == "0" and hour.expression == "*":
        return ["Every hour"]

    minute_step = _every_step(minute.expression)
    if minute_step is not None:
        return [f"Every {minute_step} minutes"]
    hour_step = _every_step(hour.expression)
    if hour_step is not None:
        return [f"Every {hour_step} hours"]

    if len(minute.values) == 1 and len(hour.values) == 1:
        return [_clock(hour.values[0], minute.values[0])]

    if len(minute.values) == 1:
        parts = [f"At minute {minute.values[0]}"]
    else:
        parts = [f"At minutes {minute.description}"]
    if hour.expression != "*":
        parts.append(f"past hour {hour.description}")
    return parts


def _day_phrase(
    day_of_month: ParsedField, month: ParsedField, day_of_week: ParsedField
) -> list[str]:
    parts: list[str] = []
    dom_constrained = day_of_month.expression != "*"
    dow_constrained = day_of_week.expression != "*"

    if dow_constrained and not dom_constrained:
        parts.append(f"on {day_of_week.description}")
    elif dom_constrained:
        parts.append(f"on day {day_of_month.description}")
        if dow_constrained:
            parts.append(f"and on {day_of_week.description}")

    if month.expression != "*":
        parts.append(f"in {month.description}")
    return parts


def compose_description(fields: Sequence[ParsedField]) -> str:
    """
    Combine the five field fragments into one sentence.

    The time of day comes first ("Every 15 minutes", "At 9:00 AM", …), then
    the day-of-month / day-of-week restriction, then the month. Returns
    INVALID_DESCRIPTION unless all five fields are valid.
    """
    if len(fields) != 5 or not all(f.valid for f in fields):
        return INVALID_DESCRIPTION

    minute, hour, day_of_month, month, day_of_week = fields
    parts = _time_phrase(minute, hour) + _day_phrase(day_of_month, month, day_of_week)
    return " ".join(parts)
