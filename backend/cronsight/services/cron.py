from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from cronsight.schemas import CronParseResult
from cronsight.services.describer import INVALID_DESCRIPTION, compose_description
from cronsight.services.errors import StructuralError
from cronsight.services.occurrences import next_occurrences, truncate_to_minute
from cronsight.services.parser import validate_expression

logger = logging.getLogger(__name__)


def parse(
    expression: str, count: int = 5, now: Optional[datetime] = None
) -> CronParseResult:
    """
    Validate, describe and schedule a 5-field cron expression.

    Never raises for string input: every problem is reported through
    ``is_valid``, ``error`` and the per-field ``error`` values. The clock is
    read once (when *now* is not given) and reused for the whole result, so
    identical arguments always produce identical results.
    """
    reference = truncate_to_minute(now if now is not None else datetime.now())

    try:
        fields = validate_expression(expression)
    except StructuralError as exc:
        return CronParseResult(
            expression=expression,
            is_valid=False,
            error=str(exc),
            error_kind=exc.kind,
            fields=[],
            description=INVALID_DESCRIPTION,
            next_occurrences=[],
            reference=reference,
        )

    invalid = next((f for f in fields if not f.valid), None)
    if invalid is not None:
        logger.debug("Invalid cron expression %r: %s", expression, invalid.error)
        return CronParseResult(
            expression=expression,
            is_valid=False,
            error=invalid.error,
            error_kind=invalid.error_kind,
            fields=fields,
            description=INVALID_DESCRIPTION,
            next_occurrences=[],
            reference=reference,
        )

    runs = next_occurrences([f.values for f in fields], reference, count)
    if len(runs) < count:
        logger.debug(
            "Cron expression %r: only %d of %d occurrences within a year",
            expression,
            len(runs),
            count,
        )
    return CronParseResult(
        expression=expression,
        is_valid=True,
        fields=fields,
        description=compose_description(fields),
        next_occurrences=runs,
        reference=reference,
    )
