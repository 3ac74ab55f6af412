"""
Calendar-safe points in time.

A Timestamp wraps a timezone-aware datetime whose tzinfo is frozen to a fixed
UTC offset. Day and month shifts are checked: they return None instead of
raising when the result would leave the range ``datetime`` can represent.
"""

from datetime import datetime, timedelta, timezone
from functools import total_ordering
from typing import Optional

from dateutil import parser as dateutil_parser
from dateutil.relativedelta import relativedelta
from tzlocal import get_localzone


def _fixed_offset(dt: datetime) -> datetime:
    return dt.replace(tzinfo=timezone(dt.utcoffset()))


@total_ordering
class Timestamp:
    """An immutable, ordered point in time with a fixed UTC offset."""

    __slots__ = ("_dt",)

    def __init__(self, dt: datetime):
        if dt.tzinfo is None or dt.utcoffset() is None:
            raise ValueError(f"Timestamp needs a timezone-aware datetime, got {dt!r}")
        self._dt = _fixed_offset(dt)

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def now(cls, tz=None) -> "Timestamp":
        """Read the clock. Only meant for the edge of a program."""
        return cls(datetime.now(tz or get_localzone()))

    @classmethod
    def from_naive(cls, naive: datetime, tz=None) -> "Timestamp":
        """Attach the offset ``tz`` (default: local zone) has at that wall time."""
        tz = tz or get_localzone()
        return cls(naive.replace(tzinfo=tz))

    @classmethod
    def from_ymdhms(cls, year, month, day, hour=0, minute=0, second=0, tz=None) -> "Timestamp":
        return cls.from_naive(datetime(year, month, day, hour, minute, second), tz)

    @classmethod
    def fromisoformat(cls, text: str, tz=None) -> "Timestamp":
        """
        Parse an ISO 8601 string. Values without an offset are read as wall
        time in ``tz`` (default: local zone).
        """
        dt = dateutil_parser.isoparse(text)
        if dt.tzinfo is None:
            return cls.from_naive(dt, tz)
        return cls(dt)

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    def to_datetime(self) -> datetime:
        """The wrapped timezone-aware datetime."""
        return self._dt

    @property
    def offset(self) -> timedelta:
        return self._dt.utcoffset()

    def weekday(self) -> int:
        """Monday is 0, Sunday is 6."""
        return self._dt.weekday()

    def to_naive(self) -> datetime:
        return self._dt.replace(tzinfo=None)

    def isoformat(self) -> str:
        return self._dt.isoformat()

    # -------------------------------------------------------------------------
    # Truncation
    # -------------------------------------------------------------------------

    def at_midnight(self) -> "Timestamp":
        """Same calendar day at 00:00:00."""
        return Timestamp(self._dt.replace(hour=0, minute=0, second=0, microsecond=0))

    def first_of_month(self) -> "Timestamp":
        return Timestamp(self.at_midnight()._dt.replace(day=1))

    def first_of_year(self) -> "Timestamp":
        return Timestamp(self.at_midnight()._dt.replace(month=1, day=1))

    # -------------------------------------------------------------------------
    # Checked arithmetic
    # -------------------------------------------------------------------------

    def add_days(self, days: int) -> Optional["Timestamp"]:
        try:
            return Timestamp(self._dt + timedelta(days=days))
        except OverflowError:
            return None

    def sub_days(self, days: int) -> Optional["Timestamp"]:
        return self.add_days(-days)

    def add_months(self, months: int) -> Optional["Timestamp"]:
        """
        Shift by whole calendar months.

        The day of month is clamped to the length of the target month, so
        January 31st plus one month is the last day of February.
        """
        try:
            return Timestamp(self._dt + relativedelta(months=months))
        except (OverflowError, ValueError):
            return None

    def sub_months(self, months: int) -> Optional["Timestamp"]:
        return self.add_months(-months)

    # -------------------------------------------------------------------------
    # Comparison
    # -------------------------------------------------------------------------

    def __eq__(self, other):
        if not isinstance(other, Timestamp):
            return NotImplemented
        return self._dt == other._dt

    def __lt__(self, other):
        if not isinstance(other, Timestamp):
            return NotImplemented
        return self._dt < other._dt

    def __hash__(self):
        return hash(self._dt)

    def __sub__(self, other):
        if not isinstance(other, Timestamp):
            return NotImplemented
        return self._dt - other._dt

    def __str__(self) -> str:
        return self.isoformat()

    def __repr__(self) -> str:
        return f"Timestamp({self.isoformat()!r})"
