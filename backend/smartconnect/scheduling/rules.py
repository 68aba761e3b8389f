"""
Availability rules and settings.

A rule is either a weekly recurring statement ("every Monday 09:00-12:00")
or a one-off statement for a specific calendar date. Both can be a block-out
when ``is_available`` is false.
"""
import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Iterable, Optional, Union

from smartconnect.core.exceptions import ValidationError
from smartconnect.scheduling.windows import TimeWindow, format_hhmm, parse_hhmm

logger = logging.getLogger(__name__)


class Weekday(str, Enum):
    """Days of the week, in ``date.weekday()`` order."""
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @classmethod
    def of(cls, day: date) -> "Weekday":
        return list(cls)[day.weekday()]


@dataclass(frozen=True)
class RecurringRule:
    """Open (or blocked) hours repeating every week on ``day_of_week``."""
    day_of_week: Weekday
    start: int
    end: int
    is_available: bool = True

    recurring_weekly = True

    @property
    def window(self) -> TimeWindow:
        return TimeWindow(self.start, self.end)

    def applies_to(self, day: date) -> bool:
        return self.day_of_week == Weekday.of(day)

    def group_key(self) -> tuple:
        return (self.day_of_week.value,)


@dataclass(frozen=True)
class SpecificDateRule:
    """Open (or blocked) hours on one calendar date."""
    specific_date: date
    start: int
    end: int
    is_available: bool = True
    day_of_week: Optional[Weekday] = None

    recurring_weekly = False

    def __post_init__(self):
        if self.day_of_week is None:
            object.__setattr__(self, "day_of_week", Weekday.of(self.specific_date))

    @property
    def window(self) -> TimeWindow:
        return TimeWindow(self.start, self.end)

    def applies_to(self, day: date) -> bool:
        return self.specific_date == day

    def group_key(self) -> tuple:
        return (self.day_of_week.value, self.specific_date.isoformat())


AvailabilityRule = Union[RecurringRule, SpecificDateRule]


@dataclass(frozen=True)
class SlotSettings:
    """Per-provider booking settings."""
    booking_notice: int = 24  # hours
    appointment_duration: int = 60  # minutes
    break_between_appointments: int = 15  # minutes

    def __post_init__(self):
        if self.appointment_duration <= 0:
            raise ValidationError("Appointment duration must be greater than zero")
        if self.break_between_appointments < 0:
            raise ValidationError("Break between appointments cannot be negative")
        if self.booking_notice < 0:
            raise ValidationError("Booking notice cannot be negative")

    @property
    def stride(self) -> int:
        """Minutes between consecutive slot starts."""
        return self.appointment_duration + self.break_between_appointments


def make_rule(
    start_time: str,
    end_time: str,
    *,
    recurring_weekly: bool = True,
    day_of_week: Optional[Union[str, Weekday]] = None,
    specific_date: Optional[date] = None,
    is_available: bool = True,
) -> AvailabilityRule:
    """
    Build the right rule variant from boundary fields.

    Raises:
        ValidationError: on malformed times, a recurring rule without a
            weekday, or a one-off rule without a date or with a weekday
            the date does not fall on.
    """
    try:
        start = parse_hhmm(start_time)
        end = parse_hhmm(end_time)
        weekday = None
        if day_of_week:
            weekday = Weekday(str(getattr(day_of_week, "value", day_of_week)).lower())
    except ValueError as e:
        raise ValidationError(str(e)) from None

    if recurring_weekly:
        if weekday is None:
            raise ValidationError("Recurring availability requires dayOfWeek")
        return RecurringRule(
            day_of_week=weekday, start=start, end=end, is_available=is_available
        )

    if specific_date is None:
        raise ValidationError("Non-recurring availability requires specificDate")
    if weekday is not None and weekday != Weekday.of(specific_date):
        raise ValidationError(
            f"dayOfWeek {weekday.value} does not match specificDate {specific_date.isoformat()}"
        )
    return SpecificDateRule(
        specific_date=specific_date,
        start=start,
        end=end,
        is_available=is_available,
        day_of_week=weekday,
    )


def validate_rules(rules: Iterable[AvailabilityRule]) -> None:
    """
    Save-time gate for a provider's full rule set.

    Rules are grouped by weekday (recurring) or by weekday and date (one-off),
    sorted by start, and the whole batch is rejected if any adjacent pair
    overlaps or any rule has an empty or inverted range.

    Raises:
        ValidationError: describing the first offending group.
    """
    groups: dict[tuple, list[AvailabilityRule]] = defaultdict(list)
    for rule in rules:
        if rule.start >= rule.end:
            raise ValidationError(
                f"Start time {format_hhmm(rule.start)} must be before "
                f"end time {format_hhmm(rule.end)}"
            )
        groups[rule.group_key()].append(rule)

    for key, group in groups.items():
        if len(group) <= 1:
            continue
        group.sort(key=lambda r: r.start)
        for current, following in zip(group, group[1:]):
            if current.end > following.start:
                label = " ".join(key)
                logger.debug("Overlapping availability on %s: %s / %s", label, current.window, following.window)
                raise ValidationError(
                    f"Overlapping time slots on {label}: "
                    f"{current.window} and {following.window}"
                )
