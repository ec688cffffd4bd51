"""Tests for slot generation."""
from datetime import date

from dutyplan.engine.slots import ShiftSlot, count_slots, generate_slots, month_days, slots_by_type
from dutyplan.models.shift import ALL_DAYS, WEEKEND, ShiftType, Weekday


class TestGenerateSlots:
    """Tests for the monthly slot list."""

    def test_june_2024_default(self):
        """June 2024: 30 days, 10 weekend days, 20 weekdays."""
        slots = generate_slots(2024, 6)
        assert len(slots) == 60
        assert slots_by_type(slots) == {
            ShiftType.DUTY_24H: 30,
            ShiftType.ROUNDS: 10,
            ShiftType.LATE: 20,
        }

    def test_ordering_by_date_then_precedence(self):
        slots = generate_slots(2024, 6)
        keys = [s.sort_key for s in slots]
        assert keys == sorted(keys)
        # June 1 is a Saturday: 24h duty, then rounds
        assert slots[0] == ShiftSlot(date(2024, 6, 1), ShiftType.DUTY_24H)
        assert slots[1] == ShiftSlot(date(2024, 6, 1), ShiftType.ROUNDS)
        # June 3 is a Monday: 24h duty, then late shift
        monday = [s for s in slots if s.date == date(2024, 6, 3)]
        assert [s.shift_type for s in monday] == [ShiftType.DUTY_24H, ShiftType.LATE]

    def test_no_duplicates(self):
        slots = generate_slots(2024, 2)
        assert len(set(slots)) == len(slots)

    def test_weekday_predicate_respected(self):
        slots = generate_slots(2024, 6)
        for s in slots:
            assert s.weekday in s.shift_type.weekdays

    def test_custom_map(self):
        slots = generate_slots(2024, 6, {ShiftType.ROUNDS: WEEKEND})
        assert len(slots) == 10
        assert all(s.shift_type == ShiftType.ROUNDS for s in slots)

    def test_empty_map(self):
        assert generate_slots(2024, 6, {}) == []
        assert count_slots(2024, 6, {}) == 0

    def test_describe(self):
        slot = ShiftSlot(date(2024, 6, 1), ShiftType.ROUNDS)
        assert slot.describe() == "2024-06-01 Ward rounds"
        assert slot.weekday == Weekday.SATURDAY


class TestCountSlots:
    """Tests for the independent slot count."""

    def test_matches_generated_length(self):
        for month in range(1, 13):
            assert count_slots(2024, month) == len(generate_slots(2024, month))

    def test_leap_february(self):
        assert len(month_days(2024, 2)) == 29
        assert count_slots(2024, 2, {ShiftType.DUTY_24H: ALL_DAYS}) == 29
        assert count_slots(2023, 2, {ShiftType.DUTY_24H: ALL_DAYS}) == 28
