"""
Half-open time intervals.

A TimeSpan covers ``[start, end)``: it includes its start and excludes its
end. ``start < end`` holds for every instance; the constructor and
:meth:`TimeSpan.extend` raise :class:`~timespanparser.errors.EndBeforeStart`
rather than build an empty or inverted span.
"""

from datetime import timedelta
from typing import Any, Dict, Optional

from .errors import EndBeforeStart
from .timestamp import Timestamp


class TimeSpan:
    """The interval ``[start, end)`` between two Timestamps."""

    __slots__ = ("_start", "_end")

    def __init__(self, start: Timestamp, end: Timestamp):
        if end <= start:
            raise EndBeforeStart(start, end)
        self._start = start
        self._end = end

    @property
    def start(self) -> Timestamp:
        return self._start

    @property
    def end(self) -> Timestamp:
        return self._end

    @property
    def duration(self) -> timedelta:
        return self._end - self._start

    def extend(self, other: "TimeSpan") -> "TimeSpan":
        """
        Return a new span from the start of ``self`` to the end of ``other``.

        Example: "yesterday" extended by "today" covers both days up to now.

        :raises EndBeforeStart: if ``other`` ends at or before ``self`` starts.
        """
        return TimeSpan(self._start, other.end)

    def overlaps(self, record_start: Timestamp, record_end: Optional[Timestamp] = None) -> bool:
        """
        Whether a tracked record touches this span.

        A record is selected when ``record_end >= start`` and
        ``record_start < end``. A record that is still running has no end
        and counts as unbounded.
        """
        if record_end is not None and record_end < self._start:
            return False
        return record_start < self._end

    def __contains__(self, timestamp: Timestamp) -> bool:
        return self._start <= timestamp < self._end

    def __iter__(self):
        yield self._start
        yield self._end

    def __eq__(self, other):
        if not isinstance(other, TimeSpan):
            return NotImplemented
        return self._start == other._start and self._end == other._end

    def __hash__(self):
        return hash((self._start, self._end))

    def isoformat(self) -> str:
        return f"{self._start.isoformat()} / {self._end.isoformat()}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start": self._start.isoformat(),
            "end": self._end.isoformat(),
        }

    def __repr__(self) -> str:
        return f"TimeSpan(start={self._start.isoformat()}, end={self._end.isoformat()})"
