"""Date parsing utilities."""

from datetime import date, timedelta
from typing import Optional
import re

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from fintrack.domain.errors import InvalidDate

_STATEMENT_DATE_RE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")
_MONTH_RE = re.compile(r"^(\d{4})-(\d{1,2})$")


def parse_statement_date(date_str: str, line: Optional[int] = None) -> date:
    """Parse a statement date in DD/MM/YYYY form.

    Statement dates are strict: only "/" separators, day first, four-digit
    year, and the result must be a real calendar date.

    Raises:
        InvalidDate: If the token is not a valid DD/MM/YYYY date
    """
    token = (date_str or "").strip()
    match = _STATEMENT_DATE_RE.match(token)
    if match is None:
        raise InvalidDate(line, token)

    day, month, year = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        raise InvalidDate(line, token)


def first_of_month(value: date) -> date:
    """Return the reference month marker (first day) for a date."""
    return value.replace(day=1)


def parse_reference_month(month_str: str) -> date:
    """Parse a reference month given as "YYYY-MM" (or any parseable date).

    Returns:
        First day of the month

    Raises:
        ValueError: If the string is not a month
    """
    text = month_str.strip()
    match = _MONTH_RE.match(text)
    if match is not None:
        year, month = int(match.group(1)), int(match.group(2))
        if not 1 <= month <= 12:
            raise ValueError(f"Invalid month '{month_str}'")
        return date(year, month, 1)
    return first_of_month(parse_date(text))


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "15/01/2024", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "last month", "this year", etc.

    Slash-separated dates are read day first.

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    # Handle relative dates
    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    if date_str.startswith("last "):
        period = date_str[5:]
        if period == "month":
            return (today - relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) - relativedelta(years=1)
        elif period == "week":
            return today - timedelta(days=today.weekday() + 7)

    elif date_str.startswith("this "):
        period = date_str[5:]
        if period == "month":
            return today.replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1)
        elif period == "week":
            return today - timedelta(days=today.weekday())

    # Try parsing as absolute date
    try:
        dt = date_parser.parse(date_str, dayfirst="/" in date_str)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")
