import pytest

from cronsight.schemas import ErrorKind
from cronsight.services import parser
from cronsight.services.errors import StructuralError
from cronsight.services.fields import (
    DAY_OF_MONTH,
    DAY_OF_WEEK,
    FIELD_DEFINITIONS,
    HOUR,
    MINUTE,
    MONTH,
)
from cronsight.services.parser import (
    PartKind,
    classify_part,
    parse_field,
    validate_expression,
)


# ---------------------------------------------------------------------------
# Part classification
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "raw, kind",
    [
        ("*", PartKind.WILDCARD),
        ("*/5", PartKind.STEP),
        ("1-5/2", PartKind.STEP),
        ("10/20", PartKind.STEP),
        ("1-5", PartKind.RANGE),
        ("MON-FRI", PartKind.RANGE),
        ("7", PartKind.SINGLETON),
        ("jan", PartKind.SINGLETON),
    ],
)
def test_classify_part(raw, kind):
    assert classify_part(raw).kind is kind


def test_every_part_kind_has_a_handler():
    assert set(parser._HANDLERS) == set(PartKind)


# ---------------------------------------------------------------------------
# Value expansion
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "expression, definition, expected",
    [
        ("*", HOUR, list(range(24))),
        ("*/15", MINUTE, [0, 15, 30, 45]),
        ("0-30/10", MINUTE, [0, 10, 20, 30]),
        ("10/20", MINUTE, [10, 30, 50]),
        ("1-5", DAY_OF_WEEK, [1, 2, 3, 4, 5]),
        ("5,1,3,1", MINUTE, [1, 3, 5]),
        ("1-3,2-5", DAY_OF_MONTH, [1, 2, 3, 4, 5]),
        ("*/2,1", MONTH, [1, 3, 5, 7, 9, 11]),
        ("59", MINUTE, [59]),
        ("31", DAY_OF_MONTH, [31]),
    ],
)
def test_values_expanded(expression, definition, expected):
    field = parse_field(expression, definition)
    assert field.valid is True
    assert field.error is None
    assert field.values == expected


@pytest.mark.parametrize(
    "expression, definition, expected",
    [
        ("JAN", MONTH, [1]),
        ("dec", MONTH, [12]),
        ("Jan-Jun", MONTH, [1, 2, 3, 4, 5, 6]),
        ("SUN", DAY_OF_WEEK, [0]),
        ("mon-fri", DAY_OF_WEEK, [1, 2, 3, 4, 5]),
        ("SAT,SUN", DAY_OF_WEEK, [0, 6]),
        ("MON-FRI/2", DAY_OF_WEEK, [1, 3, 5]),
        ("feb/3", MONTH, [2, 5, 8, 11]),
    ],
)
def test_symbolic_names(expression, definition, expected):
    assert parse_field(expression, definition).values == expected


@pytest.mark.parametrize(
    "expression, definition",
    [
        ("*", MINUTE),
        ("*/7", MINUTE),
        ("45-50,0-5,3", MINUTE),
        ("22,1,22,5-8", HOUR),
        ("31,1,15", DAY_OF_MONTH),
        ("DEC,JAN,6-8", MONTH),
        ("SAT,0,3-4", DAY_OF_WEEK),
        ("1-31/5,2", DAY_OF_MONTH),
    ],
)
def test_values_sorted_unique_and_in_bounds(expression, definition):
    values = parse_field(expression, definition).values
    assert values == sorted(set(values))
    assert all(definition.min <= v <= definition.max for v in values)


def test_field_carries_bounds_and_description():
    field = parse_field("1-5", DAY_OF_WEEK)
    assert field.name == "Day of Week"
    assert field.expression == "1-5"
    assert (field.min, field.max) == (0, 6)
    assert field.description == "Monday through Friday"


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "expression, definition, error, kind",
    [
        ("60", MINUTE, "Value 60 out of range (0-59)", ErrorKind.RANGE),
        ("24", HOUR, "Value 24 out of range (0-23)", ErrorKind.RANGE),
        ("0", DAY_OF_MONTH, "Value 0 out of range (1-31)", ErrorKind.RANGE),
        ("13", MONTH, "Value 13 out of range (1-12)", ErrorKind.RANGE),
        ("7", DAY_OF_WEEK, "Value 7 out of range (0-6)", ErrorKind.RANGE),
        ("50-70", MINUTE, "Value 70 out of range (0-59)", ErrorKind.RANGE),
        ("70/5", MINUTE, "Value 70 out of range (0-59)", ErrorKind.RANGE),
        ("5-3", MINUTE, "Invalid range: start (5) > end (3)", ErrorKind.ORDER),
        ("FRI-MON", DAY_OF_WEEK, "Invalid range: start (5) > end (1)", ErrorKind.ORDER),
        ("10-5/2", MINUTE, "Invalid range: start (10) > end (5)", ErrorKind.ORDER),
        ("*/0", MINUTE, "Invalid step value: 0", ErrorKind.STEP),
        ("*/x", MINUTE, "Invalid step value: x", ErrorKind.STEP),
        ("*/-1", MINUTE, "Invalid step value: -1", ErrorKind.STEP),
        ("*/", MINUTE, "Invalid step value: ", ErrorKind.STEP),
        ("abc", MINUTE, "Invalid value: abc", ErrorKind.TOKEN),
        ("JAN", MINUTE, "Invalid value: JAN", ErrorKind.TOKEN),
        ("FOO", MONTH, "Invalid value: FOO", ErrorKind.TOKEN),
        ("a-b", HOUR, "Invalid range: a-b", ErrorKind.TOKEN),
        ("5-", HOUR, "Invalid range: 5-", ErrorKind.TOKEN),
        ("x/5", MINUTE, "Invalid range: x", ErrorKind.TOKEN),
        ("1,,2", MINUTE, "Invalid value: ", ErrorKind.TOKEN),
        ("", MINUTE, "Invalid value: ", ErrorKind.TOKEN),
    ],
)
def test_field_errors(expression, definition, error, kind):
    field = parse_field(expression, definition)
    assert field.valid is False
    assert field.error == error
    assert field.error_kind is kind
    assert field.values == []
    assert field.description == "invalid"


def test_first_failing_part_wins():
    assert parse_field("70,abc", MINUTE).error == "Value 70 out of range (0-59)"
    assert parse_field("abc,70", MINUTE).error == "Invalid value: abc"
    assert parse_field("1,2,*/0,99", MINUTE).error == "Invalid step value: 0"


# ---------------------------------------------------------------------------
# Whole-expression validation
# ---------------------------------------------------------------------------


def test_validate_returns_five_fields_in_order():
    fields = validate_expression("30 14 15 6 3")
    assert [f.name for f in fields] == [d.name for d in FIELD_DEFINITIONS]
    assert [f.expression for f in fields] == ["30", "14", "15", "6", "3"]
    assert all(f.valid for f in fields)


def test_validate_collapses_whitespace_runs():
    fields = validate_expression("  */5 \t 0   *  *\n*  ")
    assert [f.expression for f in fields] == ["*/5", "0", "*", "*", "*"]


def test_validate_reports_every_invalid_field():
    fields = validate_expression("60 25 32 13 8")
    assert [f.valid for f in fields] == [False] * 5
    assert [f.error for f in fields] == [
        "Value 60 out of range (0-59)",
        "Value 25 out of range (0-23)",
        "Value 32 out of range (1-31)",
        "Value 13 out of range (1-12)",
        "Value 8 out of range (0-6)",
    ]


def test_validate_keeps_valid_fields_next_to_invalid_ones():
    fields = validate_expression("0 25 * * MON")
    assert [f.valid for f in fields] == [True, False, True, True, True]
    assert fields[4].values == [1]


@pytest.mark.parametrize("expression", ["", "   ", "\t\n"])
def test_validate_empty_expression(expression):
    with pytest.raises(StructuralError) as exc_info:
        validate_expression(expression)
    assert str(exc_info.value) == "Please enter a cron expression"
    assert exc_info.value.kind is ErrorKind.STRUCTURAL


@pytest.mark.parametrize("expression, count", [("* * *", 3), ("* * * * * *", 6), ("invalid", 1)])
def test_validate_wrong_field_count(expression, count):
    with pytest.raises(StructuralError) as exc_info:
        validate_expression(expression)
    assert str(exc_info.value) == (
        f"Expected 5 fields, got {count}. "
        "Format: minute hour day-of-month month day-of-week"
    )


# ---------------------------------------------------------------------------
# Long digit runs
# ---------------------------------------------------------------------------


LONG = "1" * 5000


@pytest.mark.parametrize(
    "expression, kind",
    [
        (LONG, ErrorKind.TOKEN),
        (f"0-{LONG}", ErrorKind.TOKEN),
        (f"{LONG}-5", ErrorKind.TOKEN),
        (f"*/{LONG}", ErrorKind.STEP),
        (f"{LONG}/5", ErrorKind.TOKEN),
        ("1234567890", ErrorKind.TOKEN),
    ],
)
def test_oversized_numbers_are_field_errors(expression, kind):
    field = parse_field(expression, MINUTE)
    assert field.valid is False
    assert field.error_kind is kind


def test_leading_zeros_do_not_count_toward_digit_cap():
    assert parse_field("0" * 20 + "7", MINUTE).values == [7]
    assert parse_field("*/" + "0" * 20 + "30", MINUTE).values == [0, 30]
