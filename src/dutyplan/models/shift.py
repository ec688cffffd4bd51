"""Shift type definitions and weekday constants."""
from datetime import date
from enum import Enum
from typing import FrozenSet, List


class Weekday(str, Enum):
    """Days of the week, in calendar order (Monday first)."""
    MONDAY = "Mon"
    TUESDAY = "Tue"
    WEDNESDAY = "Wed"
    THURSDAY = "Thu"
    FRIDAY = "Fri"
    SATURDAY = "Sat"
    SUNDAY = "Sun"

    @property
    def label(self) -> str:
        """Full display name."""
        return self.name.capitalize()

    @property
    def day_number(self) -> int:
        """Position matching ``date.weekday()`` (Monday = 0)."""
        return list(Weekday).index(self)

    @property
    def is_weekend(self) -> bool:
        return self in (Weekday.SATURDAY, Weekday.SUNDAY)

    @classmethod
    def from_date(cls, day: date) -> "Weekday":
        """Weekday of a calendar date."""
        return list(cls)[day.weekday()]

    @classmethod
    def from_string(cls, s: str) -> "Weekday":
        """Parse weekday from short codes, full names or German abbreviations."""
        key = str(s).strip().lower()
        if key in DAY_ALIASES:
            return DAY_ALIASES[key]
        raise ValueError(f"Unknown weekday: {s!r}")


DAY_ALIASES = {
    "mon": Weekday.MONDAY, "monday": Weekday.MONDAY, "mo": Weekday.MONDAY, "montag": Weekday.MONDAY,
    "tue": Weekday.TUESDAY, "tuesday": Weekday.TUESDAY, "di": Weekday.TUESDAY, "dienstag": Weekday.TUESDAY,
    "wed": Weekday.WEDNESDAY, "wednesday": Weekday.WEDNESDAY, "mi": Weekday.WEDNESDAY, "mittwoch": Weekday.WEDNESDAY,
    "thu": Weekday.THURSDAY, "thursday": Weekday.THURSDAY, "do": Weekday.THURSDAY, "donnerstag": Weekday.THURSDAY,
    "fri": Weekday.FRIDAY, "friday": Weekday.FRIDAY, "fr": Weekday.FRIDAY, "freitag": Weekday.FRIDAY,
    "sat": Weekday.SATURDAY, "saturday": Weekday.SATURDAY, "sa": Weekday.SATURDAY, "samstag": Weekday.SATURDAY,
    "sun": Weekday.SUNDAY, "sunday": Weekday.SUNDAY, "so": Weekday.SUNDAY, "sonntag": Weekday.SUNDAY,
}

# Day constants
WEEKDAYS: FrozenSet[Weekday] = frozenset(
    [Weekday.MONDAY, Weekday.TUESDAY, Weekday.WEDNESDAY, Weekday.THURSDAY, Weekday.FRIDAY]
)
WEEKEND: FrozenSet[Weekday] = frozenset([Weekday.SATURDAY, Weekday.SUNDAY])
ALL_DAYS: FrozenSet[Weekday] = WEEKDAYS | WEEKEND


class ShiftType(str, Enum):
    """Duty kinds staffed by the planner. Declaration order is the fixed precedence."""
    DUTY_24H = "24h"   # Full-day duty, every day
    ROUNDS = "V"       # Ward rounds, weekends only
    LATE = "S"         # Late shift, Monday to Friday

    @property
    def code(self) -> str:
        """Short code used in exports."""
        return self.value

    @property
    def label(self) -> str:
        """Display name."""
        return {
            ShiftType.DUTY_24H: "24h duty",
            ShiftType.ROUNDS: "Ward rounds",
            ShiftType.LATE: "Late shift",
        }[self]

    @property
    def weekdays(self) -> FrozenSet[Weekday]:
        """Weekdays on which this shift type must be staffed."""
        return {
            ShiftType.DUTY_24H: ALL_DAYS,
            ShiftType.ROUNDS: WEEKEND,
            ShiftType.LATE: WEEKDAYS,
        }[self]

    @property
    def precedence(self) -> int:
        """Position in the fixed processing order."""
        return SHIFT_ORDER.index(self)

    @classmethod
    def from_string(cls, s: str) -> "ShiftType":
        """Parse shift type from its code, member name or display name."""
        key = str(s).strip().lower()
        for member in cls:
            if key in (member.value.lower(), member.name.lower(), member.label.lower()):
                return member
        aliases = {
            "24": cls.DUTY_24H, "24h dienst": cls.DUTY_24H, "duty": cls.DUTY_24H,
            "visiten": cls.ROUNDS, "rounds": cls.ROUNDS,
            "spaet": cls.LATE, "spät": cls.LATE, "spätdienst": cls.LATE, "late": cls.LATE,
        }
        if key in aliases:
            return aliases[key]
        raise ValueError(f"Unknown shift type: {s!r}")


# Ordered list for processing and display
SHIFT_ORDER: List[ShiftType] = list(ShiftType)
