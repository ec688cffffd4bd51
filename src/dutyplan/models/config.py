"""Generator configuration."""
from dataclasses import dataclass, field
from typing import Dict, FrozenSet

from .shift import SHIFT_ORDER, ShiftType, Weekday


def default_shift_weekdays() -> Dict[ShiftType, FrozenSet[Weekday]]:
    """Each shift type staffed on its own weekdays."""
    return {st: st.weekdays for st in SHIFT_ORDER}


@dataclass
class GeneratorConfig:
    """Configuration for the roster generator."""

    # Which shift types to staff, and on which weekdays
    shift_weekdays: Dict[ShiftType, FrozenSet[Weekday]] = field(default_factory=default_shift_weekdays)

    # Ranking
    no_duty_score: float = 1000.0  # Spacing score of a person without duties
    spacing_tolerance: float = 0.1

    # Hard rules
    rest_after_duty: bool = True  # No duty the day after a duty
    rest_after_absence: bool = True  # No duty the day after an absence ends
    respect_duty_limits: bool = True

    def __post_init__(self):
        self.shift_weekdays = {
            ShiftType(st) if not isinstance(st, ShiftType) else st: frozenset(
                d if isinstance(d, Weekday) else Weekday.from_string(d) for d in days
            )
            for st, days in self.shift_weekdays.items()
        }

    @property
    def shift_types(self):
        """Configured shift types in precedence order."""
        return [st for st in SHIFT_ORDER if st in self.shift_weekdays]

    def to_dict(self) -> Dict:
        """Serialize to dictionary."""
        return {
            "shift_weekdays": {
                st.value: [d.value for d in sorted(self.shift_weekdays[st], key=lambda d: d.day_number)]
                for st in self.shift_types
            },
            "no_duty_score": self.no_duty_score,
            "spacing_tolerance": self.spacing_tolerance,
            "rest_after_duty": self.rest_after_duty,
            "rest_after_absence": self.rest_after_absence,
            "respect_duty_limits": self.respect_duty_limits,
        }

    @classmethod
    def from_dict(cls, d: Dict) -> "GeneratorConfig":
        """Create from dictionary."""
        cfg = cls()
        for key, value in d.items():
            if hasattr(cfg, key):
                if key == "shift_weekdays":
                    value = {
                        ShiftType.from_string(st): frozenset(Weekday.from_string(x) for x in days)
                        for st, days in value.items()
                    }
                setattr(cfg, key, value)
        return cfg
