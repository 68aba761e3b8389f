"""
Slot Generation

Turns a provider's availability rules into the discrete, bookable windows
of one calendar date:
- rules applying to the date (weekday match or exact date match)
- fixed-length windows stepped by duration + break
- block-out rules on the same date
- minimum booking notice relative to "now"
"""
import logging
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional

import pytz

from smartconnect.core.timezone import localize, utc_now
from smartconnect.scheduling.rules import AvailabilityRule, SlotSettings
from smartconnect.scheduling.windows import TimeWindow, minutes_to_time

logger = logging.getLogger(__name__)


def applicable_rules(
    target_date: date,
    rules: Iterable[AvailabilityRule],
    available: bool = True,
) -> List[AvailabilityRule]:
    """Rules whose weekday or specific date matches, filtered by is_available."""
    return [
        rule for rule in rules
        if rule.is_available == available and rule.applies_to(target_date)
    ]


def windows_for_rule(rule: AvailabilityRule, settings: SlotSettings) -> List[TimeWindow]:
    """
    Step through one rule's hours.

    A window is emitted only while it fits entirely before the rule's end;
    the trailing remainder is dropped rather than truncated.
    """
    windows = []
    start = rule.start
    while start + settings.appointment_duration <= rule.end:
        windows.append(TimeWindow(start, start + settings.appointment_duration))
        start += settings.stride
    return windows


def generate_slots(
    target_date: date,
    rules: Iterable[AvailabilityRule],
    settings: SlotSettings,
    now: Optional[datetime] = None,
    tz: Optional[pytz.BaseTzInfo] = None,
) -> List[TimeWindow]:
    """
    Generate bookable windows for a date.

    Args:
        target_date: calendar date in the provider's timezone
        rules: every rule of the provider (filtering happens here)
        settings: duration, break and notice
        now: current instant, aware (defaults to utc_now())
        tz: provider timezone the wall-clock times belong to (defaults to UTC)

    Returns:
        Windows ordered by start. Windows produced by different rules are
        not deduplicated.
    """
    rules = list(rules)
    tz = tz or pytz.UTC
    now = now or utc_now()

    open_rules = applicable_rules(target_date, rules, available=True)
    if not open_rules:
        return []

    windows: List[TimeWindow] = []
    for rule in open_rules:
        windows.extend(windows_for_rule(rule, settings))

    blocks = [rule.window for rule in applicable_rules(target_date, rules, available=False)]
    if blocks:
        windows = [w for w in windows if not any(w.overlaps(b) for b in blocks)]

    earliest = now + timedelta(hours=settings.booking_notice)
    windows = [
        w for w in windows
        if localize(target_date, minutes_to_time(w.start), tz) >= earliest
    ]

    windows.sort(key=lambda w: w.start)
    logger.debug("Generated %d slots for %s", len(windows), target_date.isoformat())
    return windows
