"""Date parsing utilities."""

from datetime import date, timedelta
import re

from dateutil.relativedelta import relativedelta


DATE_PATTERN = r"(?P<day>[0-9]{1,2})\.(?P<month>[0-9]{1,2})\.(?P<year>[0-9]{4})"

_DATE_RE = re.compile(rf"^{DATE_PATTERN}$")


def split_date(date_str: str) -> tuple[int, int, int]:
    """Split "D.M.YYYY" into its (day, month, year) fields without validating them."""
    match = _DATE_RE.match(date_str.strip())
    if match is None:
        raise ValueError(f"Could not parse date '{date_str}': expected D.M.YYYY")
    return int(match.group("day")), int(match.group("month")), int(match.group("year"))


def parse_date(date_str: str) -> date:
    """Parse a ledger date string into a date object.

    Supports "D.M.YYYY" with or without zero padding, e.g. "1.2.2024" or
    "01.02.2024".

    Args:
        date_str: Date string

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed or is not a calendar date
    """
    day, month, year = split_date(date_str)
    try:
        return date(year, month, day)
    except ValueError as e:
        raise ValueError(f"Could not parse date '{date_str.strip()}': {e}")


def format_date(value: date) -> str:
    """Format a date the way ledgers write it ("D.M.YYYY", no padding)."""
    return f"{value.day}.{value.month}.{value.year}"


def add_period(start: date, days: int = 0, months: int = 0, years: int = 0) -> date:
    """Add a period to a date.

    Years and months are added first, rolling month overflow into the year and
    clamping the day to the end of shorter months. Days are added last.
    """
    shifted = start + relativedelta(years=years, months=months)
    return shifted + timedelta(days=days)
