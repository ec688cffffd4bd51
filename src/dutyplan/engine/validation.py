"""
Roster Validation
=================
Re-checks every hard rule on a finished roster and counts violations.
"""
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Dict, List, Optional, Sequence

from dutyplan.models.config import GeneratorConfig
from dutyplan.models.person import Person
from dutyplan.models.roster import Roster
from dutyplan.utils.logging_setup import get_logger, log_constraint

logger = get_logger("dutyplan.engine.validation")


@dataclass
class Violation:
    """Single violation with details."""
    type: str  # "open_slot", "double_booking", "rest_day", "absence", "return_day", ...
    severity: str  # "critical", "warning"
    date: str
    message: str
    person: str = ""
    shift: str = ""


@dataclass
class ValidationResult:
    """Validation metrics for a roster."""
    open_slots: int = 0
    double_bookings: int = 0
    rest_violations: int = 0
    absence_violations: int = 0
    return_day_violations: int = 0
    qualification_violations: int = 0
    weekday_violations: int = 0
    limit_violations: int = 0
    unknown_people: int = 0

    violations: List[Violation] = field(default_factory=list)

    def add_violation(self, v: Violation):
        self.violations.append(v)

    def as_dict(self) -> Dict[str, int]:
        return {
            "open_slots": self.open_slots,
            "double_bookings": self.double_bookings,
            "rest_violations": self.rest_violations,
            "absence_violations": self.absence_violations,
            "return_day_violations": self.return_day_violations,
            "qualification_violations": self.qualification_violations,
            "weekday_violations": self.weekday_violations,
            "limit_violations": self.limit_violations,
            "unknown_people": self.unknown_people,
        }

    @property
    def has_critical_issues(self) -> bool:
        """True if any hard rule is broken. Open slots alone are not critical."""
        return bool(self.get_critical_violations())

    @property
    def is_valid(self) -> bool:
        return not self.violations

    def get_critical_violations(self) -> List[Violation]:
        return [v for v in self.violations if v.severity == "critical"]

    def get_warnings(self) -> List[Violation]:
        return [v for v in self.violations if v.severity == "warning"]


def validate_roster(
    roster: Roster,
    people: Sequence[Person],
    config: Optional[GeneratorConfig] = None,
) -> ValidationResult:
    """
    Validate a roster against the hard rules.

    Args:
        roster: The roster to check
        people: Team the roster was generated for
        config: Rule switches (uses defaults if None)

    Returns:
        ValidationResult with counters and violation details
    """
    config = config or GeneratorConfig()
    by_id = {p.id: p for p in people}
    result = ValidationResult()

    dates_by_person = defaultdict(list)

    for e in roster.entries:
        day = e.date.isoformat()
        code = e.shift_type.code

        # 1. Open slots
        if e.is_open:
            result.open_slots += 1
            result.add_violation(Violation(
                type="open_slot", severity="warning", date=day, shift=code,
                message=f"{day} {e.shift_type.label}: no person assigned",
            ))
            continue

        person = by_id.get(e.person_id)
        if person is None:
            result.unknown_people += 1
            result.add_violation(Violation(
                type="unknown_person", severity="critical", date=day, shift=code,
                person=e.person_name or "",
                message=f"{day}: unknown person id {e.person_id}",
            ))
            continue

        dates_by_person[person.id].append(e.date)

        # 2. Qualification and weekday
        if not person.can_work(e.shift_type):
            result.qualification_violations += 1
            result.add_violation(Violation(
                type="qualification", severity="critical", date=day, shift=code, person=person.name,
                message=f"{day}: {person.name} is not qualified for {e.shift_type.label}",
            ))
        if not person.works_on(e.weekday):
            result.weekday_violations += 1
            result.add_violation(Violation(
                type="weekday", severity="critical", date=day, shift=code, person=person.name,
                message=f"{day}: {person.name} does not work on {e.weekday.label}",
            ))

        # 3. Absences
        if not person.is_available(e.date):
            result.absence_violations += 1
            result.add_violation(Violation(
                type="absence", severity="critical", date=day, shift=code, person=person.name,
                message=f"{day}: {person.name} is absent",
            ))
        if config.rest_after_absence and person.returns_on(e.date):
            result.return_day_violations += 1
            result.add_violation(Violation(
                type="return_day", severity="critical", date=day, shift=code, person=person.name,
                message=f"{day}: {person.name} returns from an absence",
            ))

    # 4. Double bookings, rest days and duty limits per person
    for person_id, dates in dates_by_person.items():
        person = by_id[person_id]
        seen = set()
        for d in sorted(dates):
            if d in seen:
                result.double_bookings += 1
                result.add_violation(Violation(
                    type="double_booking", severity="critical", date=d.isoformat(), person=person.name,
                    message=f"{d.isoformat()}: {person.name} has more than one duty",
                ))
            seen.add(d)

        if config.rest_after_duty:
            for d in sorted(seen):
                if d - timedelta(days=1) in seen:
                    result.rest_violations += 1
                    result.add_violation(Violation(
                        type="rest_day", severity="critical", date=d.isoformat(), person=person.name,
                        message=f"{d.isoformat()}: {person.name} worked the day before",
                    ))

        if config.respect_duty_limits and 0 < person.max_duties < len(dates):
            result.limit_violations += 1
            result.add_violation(Violation(
                type="duty_limit", severity="critical", date="", person=person.name,
                message=f"{person.name}: {len(dates)} duties exceed limit {person.max_duties}",
            ))

    log_constraint(logger, "Hard rules", not result.has_critical_issues,
                   f"{len(result.get_critical_violations())} critical, {result.open_slots} open")
    return result
