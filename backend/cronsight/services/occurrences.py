from __future__ import annotations

from collections import defaultdict
from datetime import datetime, timedelta
from itertools import islice
from typing import Iterator, Sequence

from cronsight.services.fields import FIELD_DEFINITIONS

# Search horizon: one non-leap year of minutes
MAX_STEPS = 525_600

_ONE_MINUTE = timedelta(minutes=1)
_MINUTES_PER_DAY = 24 * 60


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def truncate_to_minute(dt: datetime) -> datetime:
    return dt.replace(second=0, microsecond=0)


def _resolve_window(
    from_dt: datetime | None, to_dt: datetime | None
) -> tuple[datetime, datetime, int]:
    """Fill in missing bounds (now → now + 30 days) and count the minutes between."""
    if from_dt is None:
        from_dt = datetime.now(to_dt.tzinfo if to_dt else None)
    if to_dt is None:
        to_dt = from_dt + timedelta(days=30)
    # Naive bounds borrow the other bound's zone
    if from_dt.tzinfo is None and to_dt.tzinfo is not None:
        from_dt = from_dt.replace(tzinfo=to_dt.tzinfo)
    elif to_dt.tzinfo is None and from_dt.tzinfo is not None:
        to_dt = to_dt.replace(tzinfo=from_dt.tzinfo)

    span = truncate_to_minute(to_dt) - truncate_to_minute(from_dt)
    return from_dt, to_dt, max(int(span.total_seconds()) // 60, 0)


def _lookup(values: Sequence[int], size: int) -> list[bool]:
    """Boolean membership table indexed directly by field value."""
    table = [False] * size
    for value in values:
        table[value] = True
    return table


class _Matcher:
    """Cron predicate over precomputed lookup tables for one expression."""

    def __init__(self, value_sets: Sequence[Sequence[int]]) -> None:
        if len(value_sets) != len(FIELD_DEFINITIONS):
            raise ValueError(
                f"Expected {len(FIELD_DEFINITIONS)} value sets, got {len(value_sets)}"
            )
        minutes, hours, days_of_month, months, days_of_week = (
            _lookup(values, definition.max + 1)
            for values, definition in zip(value_sets, FIELD_DEFINITIONS)
        )
        self.minutes = minutes
        self.hours = hours
        self.days_of_month = days_of_month
        self.months = months
        self.days_of_week = days_of_week

        dom_definition, dow_definition = FIELD_DEFINITIONS[2], FIELD_DEFINITIONS[4]
        # A field covering its whole range places no restriction on the day
        self.union_days = (
            len(set(value_sets[2])) < dom_definition.size
            and len(set(value_sets[4])) < dow_definition.size
        )

    def day_matches(self, dt: datetime) -> bool:
        if not self.months[dt.month]:
            return False
        dom = self.days_of_month[dt.day]
        dow = self.days_of_week[dt.isoweekday() % 7]  # 0=Sunday
        return (dom or dow) if self.union_days else (dom and dow)


def iter_occurrences(
    value_sets: Sequence[Sequence[int]],
    start: datetime,
    max_steps: int = MAX_STEPS,
) -> Iterator[datetime]:
    """
    Yield matching minutes strictly after *start*, oldest first.

    The walk is minute by minute over at most *max_steps* minutes. Days and
    hours that cannot match are crossed in a single jump, but the minutes
    they span still count toward *max_steps*.
    """
    matcher = _Matcher(value_sets)
    candidate = truncate_to_minute(start)
    steps = 0

    while steps < max_steps:
        candidate += _ONE_MINUTE
        steps += 1

        if not matcher.day_matches(candidate):
            skip = _MINUTES_PER_DAY - 1 - (candidate.hour * 60 + candidate.minute)
        elif not matcher.hours[candidate.hour]:
            skip = 59 - candidate.minute
        else:
            if matcher.minutes[candidate.minute]:
                yield candidate
            continue

        skip = min(skip, max_steps - steps)
        candidate += timedelta(minutes=skip)
        steps += skip


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def next_occurrences(
    value_sets: Sequence[Sequence[int]],
    now: datetime,
    count: int = 5,
) -> list[datetime]:
    """
    Return up to *count* instants after *now* at which the schedule fires.

    *value_sets* holds the minute, hour, day-of-month, month and day-of-week
    values in that order. Fewer than *count* results (possibly none) means the
    one-year search horizon was exhausted, e.g. for "0 0 31 2 *".
    """
    if count <= 0:
        return []
    return list(islice(iter_occurrences(value_sets, now), count))


def occurrences_between(
    value_sets: Sequence[Sequence[int]],
    from_dt: datetime | None = None,
    to_dt: datetime | None = None,
    limit: int = 500,
) -> tuple[datetime, datetime, list[datetime]]:
    """
    Return (from_dt, to_dt, occurrences) for the window (from_dt, to_dt].

    Missing bounds default to now → now + 30 days.
    """
    from_dt, to_dt, span = _resolve_window(from_dt, to_dt)
    found = iter_occurrences(value_sets, from_dt, max_steps=span)
    return from_dt, to_dt, list(islice(found, max(limit, 0)))


def heatmap_for_window(
    value_sets: Sequence[Sequence[int]],
    from_dt: datetime | None = None,
    to_dt: datetime | None = None,
) -> tuple[datetime, datetime, list[dict], int]:
    """
    Return (from_dt, to_dt, cells, max_count).

    Each cell dict:
        hour  – 0-23
        day   – 0-6  (cron numbering: 0=Sunday … 6=Saturday)
        count – number of occurrences in that (hour, day) slot
    """
    from_dt, to_dt, span = _resolve_window(from_dt, to_dt)
    counts: dict[tuple[int, int], int] = defaultdict(int)
    for dt in iter_occurrences(value_sets, from_dt, max_steps=span):
        counts[(dt.hour, dt.isoweekday() % 7)] += 1

    cells = [
        {"hour": h, "day": d, "count": c}
        for (h, d), c in sorted(counts.items())
    ]
    max_count = max((cell["count"] for cell in cells), default=0)
    return from_dt, to_dt, cells, max_count
