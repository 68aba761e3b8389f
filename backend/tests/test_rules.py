"""Tests for availability rule construction and save-time validation."""

from datetime import date

import pytest

from smartconnect.core.exceptions import ValidationError
from smartconnect.scheduling.rules import (
    RecurringRule,
    SlotSettings,
    SpecificDateRule,
    Weekday,
    make_rule,
    validate_rules,
)


class TestMakeRule:
    def test_recurring_rule(self):
        rule = make_rule("09:00", "12:00", day_of_week="monday")
        assert isinstance(rule, RecurringRule)
        assert rule.day_of_week == Weekday.MONDAY
        assert (rule.start, rule.end) == (540, 720)
        assert rule.recurring_weekly is True

    def test_weekday_is_case_insensitive(self):
        assert make_rule("09:00", "10:00", day_of_week="Friday").day_of_week == Weekday.FRIDAY

    def test_specific_date_rule_derives_weekday(self):
        rule = make_rule("09:00", "10:00", recurring_weekly=False, specific_date=date(2030, 1, 9))
        assert isinstance(rule, SpecificDateRule)
        assert rule.day_of_week == Weekday.WEDNESDAY
        assert rule.recurring_weekly is False

    def test_recurring_without_weekday(self):
        with pytest.raises(ValidationError, match="dayOfWeek"):
            make_rule("09:00", "10:00")

    def test_specific_date_rule_accepts_matching_weekday(self):
        rule = make_rule(
            "09:00", "10:00", recurring_weekly=False, day_of_week="Monday", specific_date=date(2030, 1, 7)
        )
        assert rule.day_of_week == Weekday.MONDAY

    def test_specific_date_rule_rejects_contradicting_weekday(self):
        with pytest.raises(ValidationError, match="does not match"):
            make_rule(
                "10:00", "12:00", recurring_weekly=False, day_of_week="friday", specific_date=date(2030, 1, 7)
            )

    def test_specific_date_rule_without_date(self):
        with pytest.raises(ValidationError, match="specificDate"):
            make_rule("09:00", "10:00", recurring_weekly=False, day_of_week="monday")

    def test_unknown_weekday(self):
        with pytest.raises(ValidationError):
            make_rule("09:00", "10:00", day_of_week="funday")

    def test_malformed_time(self):
        with pytest.raises(ValidationError):
            make_rule("9am", "10:00", day_of_week="monday")


class TestValidateRules:
    def test_overlapping_monday_rules_rejected(self):
        rules = [
            make_rule("09:00", "12:00", day_of_week="monday"),
            make_rule("11:00", "13:00", day_of_week="monday"),
        ]
        with pytest.raises(ValidationError, match="Overlapping time slots on monday"):
            validate_rules(rules)

    def test_overlap_detected_regardless_of_input_order(self):
        rules = [
            make_rule("11:00", "13:00", day_of_week="monday"),
            make_rule("09:00", "12:00", day_of_week="monday"),
        ]
        with pytest.raises(ValidationError):
            validate_rules(rules)

    def test_back_to_back_rules_accepted(self):
        validate_rules([
            make_rule("09:00", "12:00", day_of_week="monday"),
            make_rule("12:00", "15:00", day_of_week="monday"),
        ])

    def test_same_hours_on_different_days_accepted(self):
        validate_rules([
            make_rule("09:00", "12:00", day_of_week="monday"),
            make_rule("09:00", "12:00", day_of_week="tuesday"),
        ])

    def test_specific_dates_grouped_by_date(self):
        validate_rules([
            make_rule("09:00", "12:00", recurring_weekly=False, specific_date=date(2030, 1, 7)),
            make_rule("09:00", "12:00", recurring_weekly=False, specific_date=date(2030, 1, 14)),
        ])

    def test_specific_date_does_not_clash_with_recurring(self):
        validate_rules([
            make_rule("09:00", "12:00", day_of_week="monday"),
            make_rule("10:00", "11:00", recurring_weekly=False, specific_date=date(2030, 1, 7)),
        ])

    def test_overlapping_specific_date_rules_rejected(self):
        day = date(2030, 1, 7)
        with pytest.raises(ValidationError):
            validate_rules([
                make_rule("09:00", "12:00", recurring_weekly=False, specific_date=day),
                make_rule("11:30", "12:30", recurring_weekly=False, specific_date=day),
            ])

    def test_mislabelled_weekday_cannot_hide_same_date_overlap(self):
        day = date(2030, 1, 7)
        with pytest.raises(ValidationError):
            validate_rules([
                make_rule("09:00", "11:00", recurring_weekly=False, specific_date=day),
                make_rule("10:00", "12:00", recurring_weekly=False, day_of_week="friday", specific_date=day),
            ])

    def test_inverted_rule_rejected(self):
        with pytest.raises(ValidationError, match="must be before"):
            validate_rules([make_rule("12:00", "09:00", day_of_week="monday")])

    def test_empty_batch_accepted(self):
        validate_rules([])


class TestSlotSettings:
    def test_defaults(self):
        s = SlotSettings()
        assert (s.booking_notice, s.appointment_duration, s.break_between_appointments) == (24, 60, 15)
        assert s.stride == 75

    def test_zero_duration_rejected(self):
        with pytest.raises(ValidationError):
            SlotSettings(appointment_duration=0)

    def test_negative_break_rejected(self):
        with pytest.raises(ValidationError):
            SlotSettings(break_between_appointments=-5)
