"""Partial publication dates and the BibTeX date field grammar."""

import re
from datetime import date

import msgspec

from .exceptions import DateError

MONTH_ABBREVIATIONS = (
    "jan",
    "feb",
    "mar",
    "apr",
    "may",
    "jun",
    "jul",
    "aug",
    "sep",
    "oct",
    "nov",
    "dec",
)

_MONTHS = {name: number for number, name in enumerate(MONTH_ABBREVIATIONS, 1)}

DAYS_PER_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

YEAR_PATTERN = re.compile(r"^[0-9]{4}$")
NUMBER_PATTERN = re.compile(r"^[0-9]{1,2}$")


def is_leap_year(year: int) -> bool:
    """Gregorian leap-year rule."""
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def days_in_month(year: int, month: int) -> int:
    """Number of days in a month, accounting for leap years."""
    if month == 2 and is_leap_year(year):
        return 29
    return DAYS_PER_MONTH[month - 1]


def month_abbreviation(month: int) -> str:
    """Lowercase three-letter BibTeX month name."""
    return MONTH_ABBREVIATIONS[month - 1]


class PublicationDate(msgspec.Struct, frozen=True, kw_only=True):
    """Date known only up to a prefix of (year, month, day)."""

    year: int
    month: int | None = None
    day: int | None = None

    def __post_init__(self):
        """Enforce calendar validity and prefix ordering."""
        if self.year <= 0:
            raise DateError("Year must be positive", "year", self.year)
        if self.month is not None and not 1 <= self.month <= 12:
            raise DateError("Month must be between 1 and 12", "month", self.month)
        if self.day is not None:
            if self.month is None:
                raise DateError("Day requires a month", "day", self.day)
            if not 1 <= self.day <= days_in_month(self.year, self.month):
                raise DateError(
                    f"Invalid day for {self.year:04d}-{self.month:02d}",
                    "day",
                    self.day,
                )

    def to_date(self) -> date | None:
        """Full calendar date, or None when month or day is unknown."""
        if self.month is None or self.day is None:
            return None
        return date(self.year, self.month, self.day)

    def isoformat(self) -> str:
        """ISO 8601 text of the known prefix (YYYY, YYYY-MM or YYYY-MM-DD)."""
        text = f"{self.year:04d}"
        if self.month is not None:
            text += f"-{self.month:02d}"
        if self.day is not None:
            text += f"-{self.day:02d}"
        return text


def _blank(value: str | None) -> bool:
    return value is None or not str(value).strip()


def parse_year(value: str) -> int:
    """Parse a four-digit year."""
    text = str(value).strip()
    if not YEAR_PATTERN.match(text) or int(text) == 0:
        raise DateError("Invalid year", "year", value)
    return int(text)


def parse_month(value: str) -> int:
    """Parse a month given as 1-12 or a three-letter abbreviation."""
    text = str(value).strip().lower()
    if text in _MONTHS:
        return _MONTHS[text]
    if NUMBER_PATTERN.match(text) and 1 <= int(text) <= 12:
        return int(text)
    raise DateError("Invalid month", "month", value)


def parse_day(value: str, year: int, month: int) -> int:
    """Parse a day of month and check it against the calendar."""
    text = str(value).strip()
    if not NUMBER_PATTERN.match(text):
        raise DateError("Invalid day", "day", value)
    day = int(text)
    if not 1 <= day <= days_in_month(year, month):
        raise DateError(f"Invalid day for {year:04d}-{month:02d}", "day", value)
    return day


def parse_date(
    year: str | None, month: str | None = None, day: str | None = None
) -> PublicationDate | None:
    """Parse BibTeX year/month/day fields into a partial date.

    Lower-order fields are never dropped silently: a month without a year
    or a day without a month is an error.

    Args:
        year: Year field value.
        month: Month field value, numeric or abbreviated.
        day: Day field value.

    Returns:
        The parsed date, or None when no date field is present.

    Raises:
        DateError: If any part is malformed or out of range.
    """
    if _blank(year):
        if not _blank(month):
            raise DateError("Month requires a year", "month", month)
        if not _blank(day):
            raise DateError("Day requires a year and month", "day", day)
        return None

    parsed_year = parse_year(year)
    if _blank(month):
        if not _blank(day):
            raise DateError("Day requires a month", "day", day)
        return PublicationDate(year=parsed_year)

    parsed_month = parse_month(month)
    if _blank(day):
        return PublicationDate(year=parsed_year, month=parsed_month)

    parsed_day = parse_day(day, parsed_year, parsed_month)
    return PublicationDate(year=parsed_year, month=parsed_month, day=parsed_day)
