from __future__ import annotations

from cronsight.schemas import FieldDefinition

MINUTE = FieldDefinition(name="Minute", min=0, max=59)
HOUR = FieldDefinition(name="Hour", min=0, max=23)
DAY_OF_MONTH = FieldDefinition(name="Day of Month", min=1, max=31)
MONTH = FieldDefinition(
    name="Month",
    min=1,
    max=12,
    symbolic_names=(
        "JAN", "FEB", "MAR", "APR", "MAY", "JUN",
        "JUL", "AUG", "SEP", "OCT", "NOV", "DEC",
    ),
)
DAY_OF_WEEK = FieldDefinition(
    name="Day of Week",
    min=0,
    max=6,
    symbolic_names=("SUN", "MON", "TUE", "WED", "THU", "FRI", "SAT"),
)

# Positional order of the fields in an expression
FIELD_DEFINITIONS: tuple[FieldDefinition, ...] = (
    MINUTE,
    HOUR,
    DAY_OF_MONTH,
    MONTH,
    DAY_OF_WEEK,
)

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

DAY_NAMES = (
    "Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday",
)


def format_value(value: int, definition: FieldDefinition) -> str:
    """Render a field value for prose: English names for month and weekday."""
    if definition == MONTH:
        return MONTH_NAMES[value - 1]
    if definition == DAY_OF_WEEK:
        return DAY_NAMES[value]
    return str(value)
