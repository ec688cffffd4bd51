"""Tests for hard constraints and run state."""
from datetime import date

import pytest

from dutyplan.engine.constraints import find_candidates, is_hard_eligible, violates_rest_rule, within_duty_limit
from dutyplan.engine.slots import ShiftSlot, generate_slots
from dutyplan.engine.state import RunState
from dutyplan.models.config import GeneratorConfig
from dutyplan.models.person import Absence, Person
from dutyplan.models.shift import ALL_DAYS, WEEKDAYS, ShiftType


@pytest.fixture
def duty_slots():
    return generate_slots(2024, 6, {ShiftType.DUTY_24H: ALL_DAYS})


def _index(slots, day):
    return next(i for i, s in enumerate(slots) if s.date == day)


class TestRunState:
    """Tests for commit and undo bookkeeping."""

    def test_commit_and_undo(self, duty_slots, pair_of_equals):
        anna = pair_of_equals[0]
        state = RunState(duty_slots, pair_of_equals)

        state.commit(0, anna)
        assert state.dates_of(anna) == [date(2024, 6, 1)]
        assert state.total(anna) == 1
        assert state.count_of_type(anna, ShiftType.DUTY_24H) == 1

        state.undo(0)
        assert state.dates_of(anna) == []
        assert state.count_of_type(anna, ShiftType.DUTY_24H) == 0
        assert state.assignments == {}

    def test_double_commit_rejected(self, duty_slots, pair_of_equals):
        state = RunState(duty_slots, pair_of_equals)
        state.commit(0, pair_of_equals[0])
        with pytest.raises(ValueError):
            state.commit(0, pair_of_equals[1])

    def test_duplicate_ids_rejected(self, duty_slots):
        people = [Person(name="Anna", id=1), Person(name="Bernd", id=1)]
        with pytest.raises(ValueError, match="Duplicate person id"):
            RunState(duty_slots, people)

    def test_warnings_deduplicated_in_order(self, duty_slots, pair_of_equals):
        state = RunState(duty_slots, pair_of_equals)
        state.add_warning("b")
        state.add_warning("a")
        state.add_warning("b")
        assert state.warnings == ["b", "a"]


class TestEligibility:
    """Tests for the hard eligibility filter."""

    def test_qualification(self, duty_slots):
        p = Person(name="Anna", id=1, shift_types={ShiftType.LATE})
        state = RunState(duty_slots, [p])
        assert not is_hard_eligible(p, duty_slots[0], state)

    def test_weekday(self, duty_slots):
        p = Person(name="Anna", id=1, shift_types={ShiftType.DUTY_24H}, weekdays=WEEKDAYS)
        state = RunState(duty_slots, [p])
        saturday = ShiftSlot(date(2024, 6, 1), ShiftType.DUTY_24H)
        monday = ShiftSlot(date(2024, 6, 3), ShiftType.DUTY_24H)
        assert not is_hard_eligible(p, saturday, state)
        assert is_hard_eligible(p, monday, state)

    def test_absence_inclusive(self, duty_slots):
        p = Person(name="Anna", id=1, shift_types={ShiftType.DUTY_24H},
                   absences=[Absence(date(2024, 6, 5), date(2024, 6, 7))])
        state = RunState(duty_slots, [p])
        for d in (5, 6, 7):
            assert not is_hard_eligible(p, ShiftSlot(date(2024, 6, d), ShiftType.DUTY_24H), state)
        assert is_hard_eligible(p, ShiftSlot(date(2024, 6, 4), ShiftType.DUTY_24H), state)

    def test_same_date_booking(self, duty_slots, pair_of_equals):
        anna = pair_of_equals[0]
        state = RunState(duty_slots, pair_of_equals)
        state.commit(0, anna)
        same_day = ShiftSlot(date(2024, 6, 1), ShiftType.DUTY_24H)
        assert not is_hard_eligible(anna, same_day, state)


class TestRestRule:
    """Tests for the rest rule."""

    def test_duty_on_previous_day(self, duty_slots, pair_of_equals):
        anna = pair_of_equals[0]
        state = RunState(duty_slots, pair_of_equals)
        state.commit(_index(duty_slots, date(2024, 6, 1)), anna)
        assert violates_rest_rule(anna, ShiftSlot(date(2024, 6, 2), ShiftType.DUTY_24H), state)
        assert not violates_rest_rule(anna, ShiftSlot(date(2024, 6, 3), ShiftType.DUTY_24H), state)

    def test_absence_ending_previous_day(self, duty_slots):
        p = Person(name="Anna", id=1, shift_types={ShiftType.DUTY_24H},
                   absences=[Absence(date(2024, 6, 1), date(2024, 6, 10))])
        state = RunState(duty_slots, [p])
        assert violates_rest_rule(p, ShiftSlot(date(2024, 6, 11), ShiftType.DUTY_24H), state)
        assert not violates_rest_rule(p, ShiftSlot(date(2024, 6, 12), ShiftType.DUTY_24H), state)

    def test_rules_can_be_switched_off(self, duty_slots, pair_of_equals):
        anna = pair_of_equals[0]
        state = RunState(duty_slots, pair_of_equals)
        state.commit(0, anna)
        config = GeneratorConfig(rest_after_duty=False)
        assert not violates_rest_rule(anna, ShiftSlot(date(2024, 6, 2), ShiftType.DUTY_24H), state, config)


class TestDutyLimit:
    """Tests for the per-person duty limit."""

    def test_limit_reached(self, duty_slots):
        p = Person(name="Anna", id=1, shift_types={ShiftType.DUTY_24H}, max_duties=1)
        state = RunState(duty_slots, [p])
        assert within_duty_limit(p, state)
        state.commit(0, p)
        assert not within_duty_limit(p, state)
        assert within_duty_limit(p, state, GeneratorConfig(respect_duty_limits=False))

    def test_zero_means_unlimited(self, duty_slots, pair_of_equals):
        anna = pair_of_equals[0]
        state = RunState(duty_slots, pair_of_equals)
        for i in range(0, 10, 2):
            state.commit(i, anna)
        assert within_duty_limit(anna, state)


class TestFindCandidates:
    """Tests for the combined candidate filter."""

    def test_input_order_kept(self, duty_slots, pair_of_equals):
        state = RunState(duty_slots, pair_of_equals)
        assert find_candidates(pair_of_equals, duty_slots[0], state) == pair_of_equals

    def test_rested_person_excluded(self, duty_slots, pair_of_equals):
        anna, bernd = pair_of_equals
        state = RunState(duty_slots, pair_of_equals)
        state.commit(0, anna)
        assert find_candidates(pair_of_equals, duty_slots[1], state) == [bernd]

    def test_no_candidates_is_not_an_error(self, duty_slots):
        state = RunState(duty_slots, [])
        assert find_candidates([], duty_slots[0], state) == []
