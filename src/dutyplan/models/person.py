"""Person model for staff members and their absences."""
from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from itertools import count
from typing import FrozenSet, Iterable, List, Optional

from .shift import ALL_DAYS, ShiftType, Weekday


class AbsenceKind(str, Enum):
    """Reasons for being unavailable."""
    VACATION = "vacation"
    SICKNESS = "sickness"
    TRAINING = "training"
    SPECIAL_LEAVE = "special_leave"
    PUBLIC_HOLIDAY = "public_holiday"
    BUSINESS_TRIP = "business_trip"
    PERSONAL = "personal"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").capitalize()

    @property
    def is_plannable(self) -> bool:
        """True if the absence is known in advance."""
        return self is not AbsenceKind.SICKNESS

    @classmethod
    def from_string(cls, s: str) -> "AbsenceKind":
        key = str(s).strip().lower().replace(" ", "_")
        aliases = {"u": cls.VACATION, "urlaub": cls.VACATION, "k": cls.SICKNESS, "sick": cls.SICKNESS}
        if key in aliases:
            return aliases[key]
        return cls(key)


@dataclass(frozen=True)
class Absence:
    """Closed date interval [start, end] during which a person is unavailable."""
    start: date
    end: date
    kind: AbsenceKind = AbsenceKind.VACATION
    note: str = ""

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError(f"Absence start {self.start} is after end {self.end}")

    def contains(self, day: date) -> bool:
        """True if ``day`` falls inside the interval, both ends included."""
        return self.start <= day <= self.end

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1

    def overlaps(self, other: "Absence") -> bool:
        return not (self.end < other.start or self.start > other.end)

    def to_string(self) -> str:
        """Serialize as ``start/end/kind``."""
        return f"{self.start.isoformat()}/{self.end.isoformat()}/{self.kind.value}"

    @classmethod
    def from_string(cls, s: str) -> "Absence":
        """Parse ``start/end[/kind]`` with ISO dates."""
        parts = [p.strip() for p in str(s).split("/")]
        if len(parts) not in (2, 3):
            raise ValueError(f"Absence must be 'start/end[/kind]', got {s!r}")
        kind = AbsenceKind.from_string(parts[2]) if len(parts) == 3 and parts[2] else AbsenceKind.VACATION
        return cls(date.fromisoformat(parts[0]), date.fromisoformat(parts[1]), kind)


# Source of ids for people created without one
_unset_ids = count(1)


@dataclass
class Person:
    """A staff member with eligibility rules. Read-only input for the generator."""

    name: str
    id: int = 0  # 0 = unset, replaced by a unique negative id
    weekdays: FrozenSet[Weekday] = ALL_DAYS
    shift_types: FrozenSet[ShiftType] = frozenset()
    absences: List[Absence] = field(default_factory=list)
    max_duties: int = 0  # 0 = unlimited

    def __post_init__(self):
        """Validate and normalize fields."""
        self.name = str(self.name).strip()
        if self.id == 0:
            self.id = -next(_unset_ids)
        self.weekdays = frozenset(_as_weekday(d) for d in self.weekdays)
        self.shift_types = frozenset(_as_shift_type(s) for s in self.shift_types)
        self.absences = list(self.absences)
        if self.max_duties < 0:
            self.max_duties = 0

    def is_available(self, day: date) -> bool:
        """True unless ``day`` falls in one of the absences."""
        return not any(a.contains(day) for a in self.absences)

    def works_on(self, weekday: Weekday) -> bool:
        return weekday in self.weekdays

    def can_work(self, shift_type: ShiftType) -> bool:
        return shift_type in self.shift_types

    def returns_on(self, day: date) -> bool:
        """True if an absence ended the day before ``day``."""
        previous = day - timedelta(days=1)
        return any(a.end == previous for a in self.absences)

    def absence_on(self, day: date) -> Optional[Absence]:
        for a in self.absences:
            if a.contains(day):
                return a
        return None

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "id": self.id,
            "weekdays": ",".join(d.value for d in sorted(self.weekdays, key=lambda d: d.day_number)),
            "shift_types": ",".join(s.value for s in sorted(self.shift_types, key=lambda s: s.precedence)),
            "max_duties": self.max_duties,
            "absences": ";".join(a.to_string() for a in self.absences),
        }

    @classmethod
    def from_dict(cls, d: dict) -> "Person":
        """Create from dictionary."""
        return cls(
            name=d.get("name", ""),
            id=int(d.get("id", 0)),
            weekdays=_split(d.get("weekdays"), ALL_DAYS),
            shift_types=_split(d.get("shift_types"), frozenset()),
            max_duties=int(d.get("max_duties", 0) or 0),
            absences=[Absence.from_string(a) for a in _split(d.get("absences"), [], sep=";")],
        )


def _split(value, default: Iterable, sep: str = ","):
    """Split a delimited string; collections pass through unchanged."""
    if value is None:
        return default
    if isinstance(value, str):
        items = [v.strip() for v in value.split(sep) if v.strip()]
        return items if items else default
    return value


def _as_weekday(value) -> Weekday:
    return value if isinstance(value, Weekday) else Weekday.from_string(value)


def _as_shift_type(value) -> ShiftType:
    return value if isinstance(value, ShiftType) else ShiftType.from_string(value)
