"""Tests for slot generation."""

from datetime import date, datetime, timedelta

import pytz

from smartconnect.scheduling.rules import SlotSettings, make_rule
from smartconnect.scheduling.slots import generate_slots, windows_for_rule
from smartconnect.scheduling.windows import TimeWindow

MONDAY = date(2030, 1, 7)
EARLY_NOW = pytz.UTC.localize(datetime(2030, 1, 1, 8, 0))


def starts(windows):
    return [w.start_time for w in windows]


class TestGenerateSlots:
    def test_monday_morning_with_defaults(self):
        rules = [make_rule("09:00", "12:00", day_of_week="monday")]
        slots = generate_slots(MONDAY, rules, SlotSettings(), now=EARLY_NOW)
        assert slots == [
            TimeWindow.from_strings("09:00", "10:00"),
            TimeWindow.from_strings("10:15", "11:15"),
        ]

    def test_trailing_partial_window_dropped(self):
        rules = [make_rule("09:00", "11:00", day_of_week="monday")]
        slots = generate_slots(MONDAY, rules, SlotSettings(), now=EARLY_NOW)
        assert starts(slots) == ["09:00"]

    def test_window_ending_exactly_at_rule_end_kept(self):
        rules = [make_rule("09:00", "11:15", day_of_week="monday")]
        slots = generate_slots(MONDAY, rules, SlotSettings(), now=EARLY_NOW)
        assert starts(slots) == ["09:00", "10:15"]

    def test_every_window_has_exact_duration(self):
        rules = [make_rule("08:00", "18:00", day_of_week="monday")]
        settings = SlotSettings(appointment_duration=45, break_between_appointments=10)
        slots = generate_slots(MONDAY, rules, settings, now=EARLY_NOW)
        assert slots
        assert all(w.duration == 45 for w in slots)

    def test_zero_break_gives_back_to_back_windows(self):
        rules = [make_rule("09:00", "10:30", day_of_week="monday")]
        settings = SlotSettings(appointment_duration=30, break_between_appointments=0)
        slots = generate_slots(MONDAY, rules, settings, now=EARLY_NOW)
        assert starts(slots) == ["09:00", "09:30", "10:00"]

    def test_no_rule_for_weekday(self):
        rules = [make_rule("09:00", "12:00", day_of_week="tuesday")]
        assert generate_slots(MONDAY, rules, SlotSettings(), now=EARLY_NOW) == []

    def test_no_rules_at_all(self):
        assert generate_slots(MONDAY, [], SlotSettings(), now=EARLY_NOW) == []

    def test_inverted_rule_contributes_nothing(self):
        rules = [make_rule("12:00", "09:00", day_of_week="monday")]
        assert generate_slots(MONDAY, rules, SlotSettings(), now=EARLY_NOW) == []

    def test_specific_date_rule_applies_only_on_its_date(self):
        rules = [make_rule("14:00", "15:00", recurring_weekly=False, specific_date=MONDAY)]
        assert starts(generate_slots(MONDAY, rules, SlotSettings(), now=EARLY_NOW)) == ["14:00"]
        next_monday = MONDAY + timedelta(days=7)
        assert generate_slots(next_monday, rules, SlotSettings(), now=EARLY_NOW) == []

    def test_rules_contribute_independently(self):
        rules = [
            make_rule("09:00", "10:00", day_of_week="monday"),
            make_rule("09:00", "10:00", recurring_weekly=False, specific_date=MONDAY),
        ]
        slots = generate_slots(MONDAY, rules, SlotSettings(), now=EARLY_NOW)
        assert starts(slots) == ["09:00", "09:00"]

    def test_output_sorted_by_start(self):
        rules = [
            make_rule("14:00", "16:00", day_of_week="monday"),
            make_rule("09:00", "11:00", day_of_week="monday"),
        ]
        slots = generate_slots(MONDAY, rules, SlotSettings(), now=EARLY_NOW)
        assert starts(slots) == ["09:00", "14:00"]

    def test_deterministic(self):
        rules = [
            make_rule("09:00", "12:00", day_of_week="monday"),
            make_rule("13:00", "17:00", day_of_week="monday"),
        ]
        first = generate_slots(MONDAY, rules, SlotSettings(), now=EARLY_NOW)
        second = generate_slots(MONDAY, rules, SlotSettings(), now=EARLY_NOW)
        assert first == second


class TestBlockOuts:
    def test_block_out_removes_overlapping_windows(self):
        rules = [
            make_rule("09:00", "13:00", day_of_week="monday"),
            make_rule("10:30", "11:00", recurring_weekly=False, specific_date=MONDAY, is_available=False),
        ]
        slots = generate_slots(MONDAY, rules, SlotSettings(), now=EARLY_NOW)
        # 10:15-11:15 overlaps the block; 11:30-12:30 does not
        assert starts(slots) == ["09:00", "11:30"]

    def test_block_out_touching_window_keeps_it(self):
        rules = [
            make_rule("09:00", "10:00", day_of_week="monday"),
            make_rule("10:00", "11:00", recurring_weekly=False, specific_date=MONDAY, is_available=False),
        ]
        assert starts(generate_slots(MONDAY, rules, SlotSettings(), now=EARLY_NOW)) == ["09:00"]

    def test_block_out_on_other_date_ignored(self):
        rules = [
            make_rule("09:00", "10:00", day_of_week="monday"),
            make_rule(
                "09:00", "10:00",
                recurring_weekly=False,
                specific_date=MONDAY + timedelta(days=7),
                is_available=False,
            ),
        ]
        assert starts(generate_slots(MONDAY, rules, SlotSettings(), now=EARLY_NOW)) == ["09:00"]

    def test_only_block_outs_yields_nothing(self):
        rules = [make_rule("09:00", "12:00", day_of_week="monday", is_available=False)]
        assert generate_slots(MONDAY, rules, SlotSettings(), now=EARLY_NOW) == []


class TestBookingNotice:
    rules = [make_rule("09:00", "12:00", day_of_week="monday")]

    def test_window_exactly_at_notice_boundary_kept(self):
        now = pytz.UTC.localize(datetime(2030, 1, 6, 9, 0))
        slots = generate_slots(MONDAY, self.rules, SlotSettings(booking_notice=24), now=now)
        assert starts(slots) == ["09:00", "10:15"]

    def test_window_inside_notice_dropped(self):
        now = pytz.UTC.localize(datetime(2030, 1, 6, 9, 1))
        slots = generate_slots(MONDAY, self.rules, SlotSettings(booking_notice=24), now=now)
        assert starts(slots) == ["10:15"]

    def test_zero_notice_keeps_future_windows(self):
        now = pytz.UTC.localize(datetime(2030, 1, 7, 10, 0))
        slots = generate_slots(MONDAY, self.rules, SlotSettings(booking_notice=0), now=now)
        assert starts(slots) == ["10:15"]

    def test_notice_uses_provider_timezone(self):
        # 09:00 in Chicago on MONDAY is 15:00 UTC
        chicago = pytz.timezone("America/Chicago")
        now = pytz.UTC.localize(datetime(2030, 1, 6, 14, 0))
        slots = generate_slots(MONDAY, self.rules, SlotSettings(booking_notice=24), now=now, tz=chicago)
        assert starts(slots) == ["09:00", "10:15"]

        later = pytz.UTC.localize(datetime(2030, 1, 6, 16, 0))
        slots = generate_slots(MONDAY, self.rules, SlotSettings(booking_notice=24), now=later, tz=chicago)
        assert starts(slots) == ["10:15"]


class TestWindowsForRule:
    def test_single_rule_walk(self):
        rule = make_rule("09:00", "12:00", day_of_week="monday")
        windows = windows_for_rule(rule, SlotSettings(appointment_duration=50, break_between_appointments=10))
        assert [str(w) for w in windows] == ["09:00-09:50", "10:00-10:50", "11:00-11:50"]
