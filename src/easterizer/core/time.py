from __future__ import annotations

import math
import re
from dataclasses import dataclass, replace
from datetime import date, datetime, timezone
from typing import Tuple, Union

from .errors import InvalidDateError, YearRangeError

# Periodic-term series for seasons and moon phases are only trusted inside this span.
MIN_YEAR = -1000
MAX_YEAR = 3000

GREGORIAN_REFORM: Tuple[int, int, int] = (1582, 10, 15)
GREGORIAN_REFORM_JDN = 2299161
_DROPPED_BY_REFORM = (1582, 10, 5)

_MS_PER_DAY = 86_400_000
_MONTH_DAYS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

_ISO_RE = re.compile(
    r"^([+-]?\d{4,6})-(\d{2})-(\d{2})"
    r"(?:[T ](\d{2}):(\d{2})(?::(\d{2})(?:\.(\d{1,6}))?)?)?"
    r"(?:Z|[+-]00:?00)?$"
)


def validate_year(year: int) -> None:
    if year < MIN_YEAR or year > MAX_YEAR:
        raise YearRangeError(f"year {year} outside supported range [{MIN_YEAR}, {MAX_YEAR}]")


def is_gregorian(year: int, month: int, day: float) -> bool:
    """True for calendar fields on or after 1582-10-15."""
    return (year, month, day) >= GREGORIAN_REFORM


def is_leap_year(year: int) -> bool:
    """Julian rule up to 1582, Gregorian rule afterwards (astronomical year numbering)."""
    if year <= 1582:
        return year % 4 == 0
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    if month == 2 and is_leap_year(year):
        return 29
    return _MONTH_DAYS[month - 1]


def _format_year(year: int) -> str:
    if year < 0:
        return f"-{-year:04d}"
    return f"{year:04d}"


@dataclass(frozen=True, order=True)
class UTCDateTime:
    """
    UTC calendar instant over the whole supported range.

    Years use astronomical numbering (1 BCE is year 0). Fields are Julian
    calendar before 1582-10-15 and Gregorian from then on, which is the
    convention of the Julian Day formulas below. Field order is chronological,
    so the generated ordering compares instants.
    """
    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0
    microsecond: int = 0

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise InvalidDateError(f"month must be in 1..12, got {self.month}")
        if not 1 <= self.day <= days_in_month(self.year, self.month):
            raise InvalidDateError(f"day {self.day} is not valid for {_format_year(self.year)}-{self.month:02d}")
        if _DROPPED_BY_REFORM <= (self.year, self.month, self.day) < GREGORIAN_REFORM:
            raise InvalidDateError(f"{self.date_iso()} was dropped by the Gregorian reform")
        if not (0 <= self.hour < 24 and 0 <= self.minute < 60 and 0 <= self.second < 60):
            raise InvalidDateError(f"invalid time of day {self.hour}:{self.minute}:{self.second}")
        if not 0 <= self.microsecond < 1_000_000:
            raise InvalidDateError(f"microsecond must be in 0..999999, got {self.microsecond}")

    # ---------------------------------------------------------
    # Constructors
    # ---------------------------------------------------------
    @classmethod
    def parse(cls, text: str) -> "UTCDateTime":
        """
        Parse an ISO-8601 style date or date-time in UTC.

        Accepts a signed or expanded year ("-0500-03-21"), an optional
        "THH:MM[:SS[.ffffff]]" part and an optional "Z" or zero offset.
        """
        m = _ISO_RE.match(text.strip())
        if m is None:
            raise InvalidDateError(f"not an ISO date: {text!r}")
        year, month, day, hour, minute, second, frac = m.groups()
        return cls(
            int(year),
            int(month),
            int(day),
            int(hour or 0),
            int(minute or 0),
            int(second or 0),
            int((frac or "0").ljust(6, "0")),
        )

    @classmethod
    def from_date(cls, d: Union[date, datetime]) -> "UTCDateTime":
        """Naive datetimes are taken as UTC; aware ones are converted first."""
        if isinstance(d, datetime):
            if d.tzinfo is not None:
                d = d.astimezone(timezone.utc)
            return cls(d.year, d.month, d.day, d.hour, d.minute, d.second, d.microsecond)
        return cls(d.year, d.month, d.day)

    @classmethod
    def coerce(cls, value: Union["UTCDateTime", date, datetime, str]) -> "UTCDateTime":
        if isinstance(value, UTCDateTime):
            return value
        if isinstance(value, (date, datetime)):
            return cls.from_date(value)
        if isinstance(value, str):
            return cls.parse(value)
        raise TypeError(f"cannot interpret {type(value).__name__} as a UTC date")

    # ---------------------------------------------------------
    # Views
    # ---------------------------------------------------------
    @property
    def jd(self) -> float:
        return to_day(self)

    def weekday(self) -> int:
        """0 = Sunday .. 6 = Saturday."""
        return weekday_of(self.jd)

    def date_key(self) -> Tuple[int, int, int]:
        return (self.year, self.month, self.day)

    def start_of_day(self) -> "UTCDateTime":
        return replace(self, hour=0, minute=0, second=0, microsecond=0)

    def is_midnight(self) -> bool:
        return (self.hour, self.minute, self.second, self.microsecond) == (0, 0, 0, 0)

    def date_iso(self) -> str:
        return f"{_format_year(self.year)}-{self.month:02d}-{self.day:02d}"

    def isoformat(self) -> str:
        out = f"{self.date_iso()}T{self.hour:02d}:{self.minute:02d}:{self.second:02d}"
        if self.microsecond:
            out += f".{self.microsecond // 1000:03d}"
        return out + "Z"

    def to_datetime(self) -> datetime:
        if self.year < 1:
            raise InvalidDateError(f"{self.date_iso()} is before the datetime range")
        return datetime(
            self.year, self.month, self.day,
            self.hour, self.minute, self.second, self.microsecond,
            tzinfo=timezone.utc,
        )

    def __str__(self) -> str:
        return self.isoformat()


# ============================================================
# Calendar fields <-> Julian Day (Meeus, Astronomical Algorithms ch. 7)
# ============================================================

def to_day(ts: UTCDateTime) -> float:
    """
    Julian Day (noon referenced) of a UTC instant, including its time of day.
    Gregorian correction applies from 1582-10-15, Julian rules before.
    """
    Y, M = ts.year, ts.month
    D = (
        ts.day
        + ts.hour / 24.0
        + ts.minute / 1440.0
        + ts.second / 86400.0
        + ts.microsecond / 86400000000.0
    )

    if M <= 2:
        y, m = Y - 1, M + 12
    else:
        y, m = Y, M

    if is_gregorian(Y, M, ts.day):
        a = y // 100
        b = 2 - a + a // 4
    else:
        b = 0

    return math.floor(365.25 * (y + 4716)) + math.floor(30.6001 * (m + 1)) + D + b - 1524.5


def from_day(jd: float) -> UTCDateTime:
    """
    Inverse of to_day, resolved to the millisecond.

    Rounding that lands on midnight carries into the next day. Years below 100
    are returned unchanged.
    """
    Z = math.floor(jd + 0.5)
    ms = round((jd + 0.5 - Z) * _MS_PER_DAY)
    if ms >= _MS_PER_DAY:
        Z += 1
        ms -= _MS_PER_DAY

    if Z < GREGORIAN_REFORM_JDN:
        A = Z
    else:
        alpha = math.floor((Z - 1867216.25) / 36524.25)
        A = Z + 1 + alpha - alpha // 4

    B = A + 1524
    C = math.floor((B - 122.1) / 365.25)
    D = math.floor(365.25 * C)
    E = math.floor((B - D) / 30.6001)

    day = B - D - math.floor(30.6001 * E)
    month = E - 1 if E < 14 else E - 13
    year = C - 4716 if month > 2 else C - 4715

    hour, rem = divmod(ms, 3_600_000)
    minute, rem = divmod(rem, 60_000)
    second, millis = divmod(rem, 1000)
    return UTCDateTime(int(year), int(month), int(day), int(hour), int(minute), int(second), int(millis) * 1000)


# ============================================================
# Day arithmetic on continuous days
# ============================================================

def weekday_of(jd: float) -> int:
    """0 = Sunday .. 6 = Saturday, for the UTC civil day containing jd."""
    return int(math.floor(jd + 1.5)) % 7


def start_of_day(jd: float) -> float:
    """JD of 00:00 UTC on the civil day containing jd."""
    return to_day(from_day(jd).start_of_day())


def is_midnight(jd: float) -> bool:
    return from_day(jd).is_midnight()


def add_days(ts: UTCDateTime, days: float) -> UTCDateTime:
    return from_day(to_day(ts) + days)


def add_months(ts: UTCDateTime, months: int) -> UTCDateTime:
    """Calendar month step; a day past the end of the target month rolls forward."""
    index = ts.year * 12 + (ts.month - 1) + months
    year, month0 = divmod(index, 12)
    try:
        return replace(ts, year=year, month=month0 + 1)
    except InvalidDateError:
        first = replace(ts, year=year, month=month0 + 1, day=1)
        return add_days(first, ts.day - 1)


def add_years(ts: UTCDateTime, years: int) -> UTCDateTime:
    return add_months(ts, 12 * years)
