import datetime

import pytest

from prepper.dates import (
    add_days,
    format_long_date,
    format_short_date,
    get_day_name,
    get_monday,
    get_short_day_name,
    get_week_dates,
    get_week_range_string,
    is_same_day,
)


def test_format_long_date() -> None:
    assert format_long_date(datetime.date(2026, 1, 30)) == "Friday, January 30, 2026"


def test_format_short_date() -> None:
    assert format_short_date(datetime.date(2026, 1, 3)) == "Jan 3"


@pytest.mark.parametrize(
    "date,expected",
    (
        (datetime.date(2026, 10, 19), datetime.date(2026, 10, 19)),
        (datetime.date(2026, 10, 22), datetime.date(2026, 10, 19)),
        (datetime.date(2026, 10, 25), datetime.date(2026, 10, 19)),
        (datetime.date(2026, 3, 1), datetime.date(2026, 2, 23)),
    ),
)
def test_get_monday(date: datetime.date, expected: datetime.date) -> None:
    assert get_monday(date) == expected


def test_get_week_range_string() -> None:
    assert get_week_range_string(datetime.date(2026, 1, 26)) == "Jan 26 - Feb 1, 2026"
    assert get_week_range_string(datetime.date(2025, 12, 29)) == "Dec 29 - Jan 4, 2026"


def test_day_names() -> None:
    date = datetime.date(2026, 10, 19)
    assert get_day_name(date) == "Monday"
    assert get_short_day_name(add_days(date, 6)) == "Sun"


def test_is_same_day() -> None:
    morning = datetime.datetime(2026, 10, 19, 8, 0)
    evening = datetime.datetime(2026, 10, 19, 20, 0)
    assert is_same_day(morning, evening)
    assert not is_same_day(morning, add_days(evening, 1))


def test_get_week_dates() -> None:
    dates = get_week_dates(datetime.date(2026, 10, 19))
    assert len(dates) == 7
    assert [get_short_day_name(d) for d in dates] == [
        "Mon",
        "Tue",
        "Wed",
        "Thu",
        "Fri",
        "Sat",
        "Sun",
    ]
    assert dates[-1] == datetime.date(2026, 10, 25)
