"""
Wall-clock time windows.

Times cross the API as ``HH:MM`` (24-hour) strings and calendar dates as
``YYYY-MM-DD``. Internally a window is a half-open interval of minutes since
midnight, which keeps stride arithmetic and overlap checks integer-only.
"""
import re
from dataclasses import dataclass
from datetime import date, time
from typing import Union

_HHMM = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")

MINUTES_PER_DAY = 24 * 60


def parse_hhmm(value: Union[str, time]) -> int:
    """
    Convert ``HH:MM`` (or a ``datetime.time``) to minutes since midnight.

    Raises:
        ValueError: if the string is not a valid 24-hour ``HH:MM`` time.
    """
    if isinstance(value, time):
        return value.hour * 60 + value.minute
    match = _HHMM.match(value.strip()) if isinstance(value, str) else None
    if not match:
        raise ValueError(f"Invalid time {value!r}, expected HH:MM (24-hour)")
    return int(match.group(1)) * 60 + int(match.group(2))


def format_hhmm(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def minutes_to_time(minutes: int) -> time:
    return time(hour=minutes // 60, minute=minutes % 60)


def parse_date(value: Union[str, date]) -> date:
    """
    Parse a ``YYYY-MM-DD`` string.

    Raises:
        ValueError: if the string is not an ISO calendar date.
    """
    if isinstance(value, date):
        return value
    return date.fromisoformat(value.strip())


@dataclass(frozen=True, order=True)
class TimeWindow:
    """A half-open interval ``[start, end)`` in minutes since midnight."""

    start: int
    end: int

    @classmethod
    def from_strings(cls, start: str, end: str) -> "TimeWindow":
        return cls(parse_hhmm(start), parse_hhmm(end))

    @property
    def duration(self) -> int:
        return self.end - self.start

    @property
    def start_time(self) -> str:
        return format_hhmm(self.start)

    @property
    def end_time(self) -> str:
        return format_hhmm(self.end)

    def overlaps(self, other: "TimeWindow") -> bool:
        """True when the intervals share time; touching endpoints do not count."""
        return self.start < other.end and self.end > other.start

    def to_dict(self) -> dict[str, str]:
        return {"startTime": self.start_time, "endTime": self.end_time}

    def __str__(self) -> str:
        return f"{self.start_time}-{self.end_time}"
