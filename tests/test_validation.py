"""Tests for roster validation."""
from datetime import date

import pytest

from dutyplan.engine.generator import generate
from dutyplan.engine.validation import ValidationResult, Violation, validate_roster
from dutyplan.models.config import GeneratorConfig
from dutyplan.models.person import Absence, Person
from dutyplan.models.roster import OPEN_REMARK, DutyEntry, DutyStatus, Roster
from dutyplan.models.shift import WEEKDAYS, ShiftType


@pytest.fixture
def team():
    return [
        Person(name="Anna", id=1, shift_types={ShiftType.DUTY_24H},
               absences=[Absence(date(2024, 6, 10), date(2024, 6, 12))]),
        Person(name="Bernd", id=2, shift_types={ShiftType.DUTY_24H, ShiftType.LATE}, weekdays=WEEKDAYS,
               max_duties=2),
    ]


def _roster(*entries):
    roster = Roster(name="test", year=2024, month=6)
    for e in entries:
        roster.add_entry(e)
    return roster


class TestValidateRoster:
    """Tests for validate_roster."""

    def test_generated_roster_is_clean(self, sample_people):
        result = generate(sample_people, 2024, 6)
        validation = validate_roster(result.roster, sample_people)
        assert not validation.has_critical_issues
        assert validation.open_slots == result.roster.open_count

    def test_open_slot_is_warning(self, team):
        roster = _roster(DutyEntry(date(2024, 6, 3), ShiftType.DUTY_24H, status=DutyStatus.OPEN,
                                   remark=OPEN_REMARK))
        v = validate_roster(roster, team)
        assert v.open_slots == 1
        assert len(v.get_warnings()) == 1
        assert not v.has_critical_issues
        assert not v.is_valid

    def test_rest_violation(self, team):
        roster = _roster(
            DutyEntry(date(2024, 6, 3), ShiftType.DUTY_24H, 1, "Anna"),
            DutyEntry(date(2024, 6, 4), ShiftType.DUTY_24H, 1, "Anna"),
        )
        v = validate_roster(roster, team)
        assert v.rest_violations == 1
        assert v.has_critical_issues

    def test_rest_rule_switch(self, team):
        roster = _roster(
            DutyEntry(date(2024, 6, 3), ShiftType.DUTY_24H, 1, "Anna"),
            DutyEntry(date(2024, 6, 4), ShiftType.DUTY_24H, 1, "Anna"),
        )
        v = validate_roster(roster, team, GeneratorConfig(rest_after_duty=False))
        assert v.rest_violations == 0

    def test_absence_and_return_day(self, team):
        roster = _roster(
            DutyEntry(date(2024, 6, 11), ShiftType.DUTY_24H, 1, "Anna"),
            DutyEntry(date(2024, 6, 13), ShiftType.DUTY_24H, 1, "Anna"),
        )
        v = validate_roster(roster, team)
        assert v.absence_violations == 1
        assert v.return_day_violations == 1

    def test_double_booking(self, team):
        roster = _roster(
            DutyEntry(date(2024, 6, 3), ShiftType.DUTY_24H, 2, "Bernd"),
            DutyEntry(date(2024, 6, 3), ShiftType.LATE, 2, "Bernd"),
        )
        v = validate_roster(roster, team)
        assert v.double_bookings == 1
        assert roster.has_conflicts

    def test_qualification_and_weekday(self, team):
        # June 1 is a Saturday; Bernd works weekdays only and Anna has no late shifts
        roster = _roster(
            DutyEntry(date(2024, 6, 1), ShiftType.DUTY_24H, 2, "Bernd"),
            DutyEntry(date(2024, 6, 3), ShiftType.LATE, 1, "Anna"),
        )
        v = validate_roster(roster, team)
        assert v.weekday_violations == 1
        assert v.qualification_violations == 1

    def test_duty_limit(self, team):
        roster = _roster(
            DutyEntry(date(2024, 6, 3), ShiftType.DUTY_24H, 2, "Bernd"),
            DutyEntry(date(2024, 6, 5), ShiftType.DUTY_24H, 2, "Bernd"),
            DutyEntry(date(2024, 6, 7), ShiftType.DUTY_24H, 2, "Bernd"),
        )
        v = validate_roster(roster, team)
        assert v.limit_violations == 1
        assert validate_roster(roster, team, GeneratorConfig(respect_duty_limits=False)).limit_violations == 0

    def test_unknown_person(self, team):
        roster = _roster(DutyEntry(date(2024, 6, 3), ShiftType.DUTY_24H, 42, "Ghost"))
        v = validate_roster(roster, team)
        assert v.unknown_people == 1
        assert v.get_critical_violations()[0].person == "Ghost"


class TestValidationResult:
    """Tests for the result container."""

    def test_as_dict_keys(self):
        d = ValidationResult().as_dict()
        assert set(d) == {
            "open_slots", "double_bookings", "rest_violations", "absence_violations",
            "return_day_violations", "qualification_violations", "weekday_violations",
            "limit_violations", "unknown_people",
        }
        assert all(v == 0 for v in d.values())

    def test_severity_filters(self):
        r = ValidationResult()
        r.add_violation(Violation(type="open_slot", severity="warning", date="2024-06-01", message="x"))
        r.add_violation(Violation(type="rest_day", severity="critical", date="2024-06-02", message="y"))
        assert len(r.get_warnings()) == 1
        assert len(r.get_critical_violations()) == 1
        assert r.has_critical_issues
