"""Calendar helpers for picking the week to plan.

Names are always English, whatever the locale.
"""
import datetime


DAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def get_day_name(date: datetime.date) -> str:
    return DAY_NAMES[date.weekday()]


def get_short_day_name(date: datetime.date) -> str:
    return get_day_name(date)[:3]


def _short_month(date: datetime.date) -> str:
    return MONTH_NAMES[date.month - 1][:3]


def format_long_date(date: datetime.date) -> str:
    """Monday, January 30, 2026"""
    month = MONTH_NAMES[date.month - 1]
    return f"{get_day_name(date)}, {month} {date.day}, {date.year}"


def format_short_date(date: datetime.date) -> str:
    """Jan 30"""
    return f"{_short_month(date)} {date.day}"


def add_days(date: datetime.date, days: int) -> datetime.date:
    return date + datetime.timedelta(days=days)


def get_monday(date: datetime.date) -> datetime.date:
    """Monday of the week `date` falls in. Weeks run Monday to Sunday."""
    return add_days(date, -date.weekday())


def get_week_range_string(monday: datetime.date) -> str:
    """Jan 24 - Jan 30, 2026"""
    sunday = add_days(monday, 6)
    return f"{format_short_date(monday)} - {format_short_date(sunday)}, {sunday.year}"


def is_same_day(a: datetime.date, b: datetime.date) -> bool:
    return (a.year, a.month, a.day) == (b.year, b.month, b.day)


def get_week_dates(monday: datetime.date) -> list[datetime.date]:
    return [add_days(monday, i) for i in range(7)]
