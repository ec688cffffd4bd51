"""Roster and duty entry models."""
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional

import pandas as pd

from .shift import SHIFT_ORDER, ShiftType, Weekday

OPEN_REMARK = "MANUAL ASSIGNMENT - no person available"


class DutyStatus(str, Enum):
    """Lifecycle state of a single duty entry."""
    PLANNED = "planned"
    CONFIRMED = "confirmed"
    OPEN = "open"
    CANCELLED = "cancelled"
    COMPLETED = "completed"

    @property
    def is_active(self) -> bool:
        """Planned or confirmed duties still count as scheduled work."""
        return self in (DutyStatus.PLANNED, DutyStatus.CONFIRMED)

    @property
    def needs_cover(self) -> bool:
        return self in (DutyStatus.OPEN, DutyStatus.CANCELLED)


class RosterStatus(str, Enum):
    """Publication state of a roster."""
    DRAFT = "draft"
    REVIEWED = "reviewed"
    PUBLISHED = "published"
    ARCHIVED = "archived"
    CANCELLED = "cancelled"

    @property
    def allowed_transitions(self) -> frozenset:
        return _ROSTER_TRANSITIONS[self]

    def can_transition_to(self, target: "RosterStatus") -> bool:
        return target in _ROSTER_TRANSITIONS[self]

    @property
    def is_editable(self) -> bool:
        return self in (RosterStatus.DRAFT, RosterStatus.REVIEWED)


_ROSTER_TRANSITIONS = {
    RosterStatus.DRAFT: frozenset([RosterStatus.REVIEWED, RosterStatus.CANCELLED]),
    RosterStatus.REVIEWED: frozenset([RosterStatus.DRAFT, RosterStatus.PUBLISHED, RosterStatus.CANCELLED]),
    RosterStatus.PUBLISHED: frozenset([RosterStatus.REVIEWED, RosterStatus.ARCHIVED]),
    RosterStatus.ARCHIVED: frozenset(),
    RosterStatus.CANCELLED: frozenset([RosterStatus.DRAFT]),
}


@dataclass
class DutyEntry:
    """One staffed (or open) duty on one date."""
    date: date
    shift_type: ShiftType
    person_id: Optional[int] = None
    person_name: Optional[str] = None
    status: DutyStatus = DutyStatus.PLANNED
    remark: str = ""

    def __post_init__(self):
        if isinstance(self.shift_type, str) and not isinstance(self.shift_type, ShiftType):
            self.shift_type = ShiftType.from_string(self.shift_type)
        if isinstance(self.status, str) and not isinstance(self.status, DutyStatus):
            self.status = DutyStatus(self.status)

    @property
    def is_assigned(self) -> bool:
        return self.person_id is not None

    @property
    def is_open(self) -> bool:
        return self.person_id is None

    @property
    def weekday(self) -> Weekday:
        return Weekday.from_date(self.date)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "weekday": self.weekday.value,
            "shift": self.shift_type.code,
            "person_id": self.person_id,
            "person": self.person_name or "",
            "status": self.status.value,
            "remark": self.remark,
        }


@dataclass
class Roster:
    """Complete duty plan for one month.

    Statistics are derived from the entries on demand and never stored.
    """

    name: str
    year: int
    month: int
    entries: List[DutyEntry] = field(default_factory=list)
    status: RosterStatus = RosterStatus.DRAFT
    remark: str = ""

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month must be in 1..12, got {self.month}")

    @property
    def period(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    def add_entry(self, entry: DutyEntry):
        self.entries.append(entry)

    def change_status(self, target: RosterStatus):
        """Move to ``target``; forbidden transitions raise ``ValueError``."""
        target = RosterStatus(target)
        if not self.status.can_transition_to(target):
            raise ValueError(
                f"Roster status cannot change from {self.status.value} to {target.value}"
            )
        self.status = target

    # ========== Queries ==========

    def entries_on(self, day: date) -> List[DutyEntry]:
        return [e for e in self.entries if e.date == day]

    def entries_for(self, person_id: int) -> List[DutyEntry]:
        return [e for e in self.entries if e.person_id == person_id]

    def entries_of_type(self, shift_type: ShiftType) -> List[DutyEntry]:
        return [e for e in self.entries if e.shift_type == shift_type]

    def entries_with_status(self, status: DutyStatus) -> List[DutyEntry]:
        return [e for e in self.entries if e.status == status]

    def open_entries(self) -> List[DutyEntry]:
        return [e for e in self.entries if e.is_open]

    # ========== Statistics ==========

    def counts_by_person(self) -> Dict[int, int]:
        """Number of assigned entries per person id."""
        return dict(Counter(e.person_id for e in self.entries if e.is_assigned))

    def counts_by_type(self) -> Dict[ShiftType, int]:
        """Number of entries per shift type, in precedence order."""
        counts = Counter(e.shift_type for e in self.entries)
        return {st: counts[st] for st in SHIFT_ORDER if st in counts}

    @property
    def open_count(self) -> int:
        return sum(1 for e in self.entries if e.is_open)

    @property
    def assignment_rate(self) -> float:
        """Percentage of entries with a person, 0.0 for an empty roster."""
        if not self.entries:
            return 0.0
        assigned = sum(1 for e in self.entries if e.is_assigned)
        return assigned / len(self.entries) * 100.0

    @property
    def is_fully_assigned(self) -> bool:
        return all(e.is_assigned for e in self.entries)

    def conflicts(self) -> List[str]:
        """Describe every person booked more than once on the same date."""
        booked = defaultdict(list)
        for e in self.entries:
            if e.is_assigned:
                booked[(e.person_id, e.date)].append(e)

        problems = []
        for (person_id, day), entries in booked.items():
            if len(entries) > 1:
                name = entries[0].person_name or f"id {person_id}"
                types = "/".join(e.shift_type.code for e in entries)
                problems.append(f"{name} has {len(entries)} duties on {day.isoformat()} ({types})")
        return problems

    @property
    def has_conflicts(self) -> bool:
        return bool(self.conflicts())

    def to_dataframe(self) -> pd.DataFrame:
        """Convert entries to a DataFrame."""
        columns = ["date", "weekday", "shift", "person_id", "person", "status", "remark"]
        if not self.entries:
            return pd.DataFrame(columns=columns)
        return pd.DataFrame([e.to_dict() for e in self.entries], columns=columns)

    def summary(self) -> Dict[str, Any]:
        """Get summary dictionary for display."""
        return {
            "name": self.name,
            "period": self.period,
            "status": self.status.value,
            "duties": len(self.entries),
            "open": self.open_count,
            "assignment_rate": round(self.assignment_rate, 1),
            "by_type": {st.code: n for st, n in self.counts_by_type().items()},
            "conflicts": len(self.conflicts()),
        }
