from __future__ import annotations

from datetime import datetime

from cronsight.schemas import CronExample

CRON_EXAMPLES: tuple[CronExample, ...] = (
    CronExample(
        expression="* * * * *",
        label="Every Minute",
        description="Runs every minute of every day",
    ),
    CronExample(
        expression="0 * * * *",
        label="Every Hour",
        description="Runs at the start of every hour",
    ),
    CronExample(
        expression="0 0 * * *",
        label="Daily at Midnight",
        description="Runs once a day at 00:00",
    ),
    CronExample(
        expression="0 9 * * 1-5",
        label="Weekdays at 9 AM",
        description="Runs at 9 AM Monday through Friday",
    ),
    CronExample(
        expression="0 0 * * 0",
        label="Weekly on Sunday",
        description="Runs every Sunday at midnight",
    ),
    CronExample(
        expression="0 0 1 * *",
        label="Monthly (1st)",
        description="Runs on the 1st of every month",
    ),
    CronExample(
        expression="0 0 1 1 *",
        label="Yearly (Jan 1)",
        description="Runs once a year on January 1st",
    ),
    CronExample(
        expression="*/15 * * * *",
        label="Every 15 Minutes",
        description="Runs every 15 minutes",
    ),
    CronExample(
        expression="0 */2 * * *",
        label="Every 2 Hours",
        description="Runs every 2 hours on the hour",
    ),
    CronExample(
        expression="30 4 1,15 * *",
        label="1st & 15th at 4:30 AM",
        description="Runs at 4:30 AM on the 1st and 15th",
    ),
    CronExample(
        expression="0 22 * * 1-5",
        label="Weekdays at 10 PM",
        description="Runs at 10 PM Monday through Friday",
    ),
    CronExample(
        expression="0 0 * * 6,0",
        label="Weekends at Midnight",
        description="Runs at midnight on Saturday and Sunday",
    ),
)


def format_occurrence(dt: datetime) -> str:
    """Short display form of an occurrence, e.g. "Mon, Jan 15, 02:30 PM"."""
    return f"{dt:%a}, {dt:%b} {dt.day}, {dt:%I:%M %p}"
