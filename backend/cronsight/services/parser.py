from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Callable, Iterable, NamedTuple, Optional

from cronsight.schemas import FieldDefinition, ParsedField
from cronsight.services.describer import describe_field
from cronsight.services.errors import (
    CronError,
    OrderError,
    RangeError,
    StepError,
    StructuralError,
    TokenError,
)
from cronsight.services.fields import FIELD_DEFINITIONS

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")
# At most nine significant digits: anything longer is never in range
_INTEGER = re.compile(r"0*[0-9]{1,9}")
_STEP = re.compile(r"(?P<range>[^/]*)/(?P<step>.*)", re.DOTALL)
_RANGE = re.compile(r"(?P<start>[^-]*)-(?P<end>.*)", re.DOTALL)

EMPTY_EXPRESSION_ERROR = "Please enter a cron expression"
FIELD_COUNT_ERROR = (
    "Expected 5 fields, got {count}. "
    "Format: minute hour day-of-month month day-of-week"
)


# ---------------------------------------------------------------------------
# Part grammar
# ---------------------------------------------------------------------------


class PartKind(Enum):
    WILDCARD = "wildcard"
    STEP = "step"
    RANGE = "range"
    SINGLETON = "singleton"


class Part(NamedTuple):
    kind: PartKind
    raw: str


def classify_part(raw: str) -> Part:
    """Tag one comma-separated part with the grammar it has to satisfy."""
    text = raw.strip()
    if text == "*":
        return Part(PartKind.WILDCARD, text)
    if "/" in text:
        return Part(PartKind.STEP, text)
    if "-" in text:
        return Part(PartKind.RANGE, text)
    return Part(PartKind.SINGLETON, text)


def _resolve(token: str, definition: FieldDefinition) -> Optional[int]:
    """Map a symbolic name or decimal string to its integer, None if neither."""
    token = token.strip()
    if definition.symbolic_names:
        upper = token.upper()
        if upper in definition.symbolic_names:
            return definition.symbolic_names.index(upper) + definition.min
    if _INTEGER.fullmatch(token):
        return int(token)
    return None


def _check_bounds(value: int, definition: FieldDefinition) -> int:
    if not definition.min <= value <= definition.max:
        raise RangeError(
            f"Value {value} out of range ({definition.min}-{definition.max})"
        )
    return value


def _resolve_range(text: str, definition: FieldDefinition) -> tuple[int, int]:
    """Resolve an ``a-b`` pair, checking order before bounds."""
    match = _RANGE.fullmatch(text)
    start = _resolve(match["start"], definition) if match else None
    end = _resolve(match["end"], definition) if match else None
    if start is None or end is None:
        raise TokenError(f"Invalid range: {text}")
    if start > end:
        raise OrderError(f"Invalid range: start ({start}) > end ({end})")
    return _check_bounds(start, definition), _check_bounds(end, definition)


def _expand_wildcard(text: str, definition: FieldDefinition) -> Iterable[int]:
    return range(definition.min, definition.max + 1)


def _expand_step(text: str, definition: FieldDefinition) -> Iterable[int]:
    match = _STEP.fullmatch(text)
    span, raw_step = match["range"], match["step"]

    if not _INTEGER.fullmatch(raw_step) or int(raw_step) <= 0:
        raise StepError(f"Invalid step value: {raw_step}")
    step = int(raw_step)

    if span == "*":
        start, end = definition.min, definition.max
    elif "-" in span:
        start, end = _resolve_range(span, definition)
    else:
        start = _resolve(span, definition)
        if start is None:
            raise TokenError(f"Invalid range: {span}")
        start, end = _check_bounds(start, definition), definition.max

    return range(start, end + 1, step)


def _expand_range(text: str, definition: FieldDefinition) -> Iterable[int]:
    start, end = _resolve_range(text, definition)
    return range(start, end + 1)


def _expand_singleton(text: str, definition: FieldDefinition) -> Iterable[int]:
    value = _resolve(text, definition)
    if value is None:
        raise TokenError(f"Invalid value: {text}")
    return (_check_bounds(value, definition),)


_HANDLERS: dict[PartKind, Callable[[str, FieldDefinition], Iterable[int]]] = {
    PartKind.WILDCARD: _expand_wildcard,
    PartKind.STEP: _expand_step,
    PartKind.RANGE: _expand_range,
    PartKind.SINGLETON: _expand_singleton,
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def expand_part(part: Part, definition: FieldDefinition) -> Iterable[int]:
    """Expand one classified part into in-bounds values; raises CronError."""
    return _HANDLERS[part.kind](part.raw, definition)


def parse_field(expression: str, definition: FieldDefinition) -> ParsedField:
    """
    Expand one field's sub-expression into its sorted, unique value set.

    Parts are evaluated left to right; the first failing part decides the
    field's error and the remaining parts are skipped. An invalid field
    carries an empty value list.
    """
    members = [False] * definition.size
    failure: Optional[CronError] = None

    for raw in expression.split(","):
        try:
            for value in expand_part(classify_part(raw), definition):
                members[value - definition.min] = True
        except CronError as exc:
            failure = exc
            break

    values = (
        [definition.min + i for i, hit in enumerate(members) if hit]
        if failure is None
        else []
    )
    field = ParsedField(
        name=definition.name,
        expression=expression,
        values=values,
        valid=failure is None,
        min=definition.min,
        max=definition.max,
        error=str(failure) if failure else None,
        error_kind=failure.kind if failure else None,
    )
    field.description = describe_field(field, definition)
    return field


def split_expression(expression: str) -> list[str]:
    """Split on runs of whitespace; raises StructuralError unless 5 tokens."""
    if not expression.strip():
        raise StructuralError(EMPTY_EXPRESSION_ERROR)
    tokens = _WHITESPACE.split(expression.strip())
    if len(tokens) != len(FIELD_DEFINITIONS):
        raise StructuralError(FIELD_COUNT_ERROR.format(count=len(tokens)))
    return tokens


def validate_expression(expression: str) -> list[ParsedField]:
    """
    Parse all five fields of *expression*.

    Every field is attempted even when an earlier one fails, so callers can
    report all problems at once. Raises StructuralError when the expression
    is empty or does not have exactly five fields.
    """
    tokens = split_expression(expression)
    fields = [
        parse_field(token, definition)
        for token, definition in zip(tokens, FIELD_DEFINITIONS)
    ]
    logger.debug(
        "Validated %r: %s",
        expression,
        ", ".join(f"{f.name}={'ok' if f.valid else f.error}" for f in fields),
    )
    return fields
