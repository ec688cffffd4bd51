"""
Slot Model
==========
Enumerates every (date, shift type) pair to staff in a month.

Slots come out ordered by date, then by shift type precedence, and are
addressed by their position in that list for the rest of a run.
"""
import calendar
from dataclasses import dataclass
from datetime import date
from typing import Dict, FrozenSet, List, Optional

from dutyplan.models.shift import SHIFT_ORDER, ShiftType, Weekday
from dutyplan.utils.logging_setup import get_logger, log_function_call

logger = get_logger("dutyplan.engine.slots")

ShiftWeekdays = Dict[ShiftType, FrozenSet[Weekday]]


@dataclass(frozen=True)
class ShiftSlot:
    """One duty to staff: a shift type on a date."""
    date: date
    shift_type: ShiftType

    @property
    def weekday(self) -> Weekday:
        return Weekday.from_date(self.date)

    @property
    def sort_key(self):
        return (self.date, self.shift_type.precedence)

    def describe(self) -> str:
        """Human-readable ``<date> <shift label>`` used in messages."""
        return f"{self.date.isoformat()} {self.shift_type.label}"


def month_days(year: int, month: int) -> List[date]:
    """All calendar dates of a month."""
    _, last = calendar.monthrange(year, month)
    return [date(year, month, d) for d in range(1, last + 1)]


def _resolve(shift_weekdays: Optional[ShiftWeekdays]) -> ShiftWeekdays:
    if shift_weekdays is None:
        return {st: st.weekdays for st in SHIFT_ORDER}
    return shift_weekdays


@log_function_call
def generate_slots(
    year: int,
    month: int,
    shift_weekdays: Optional[ShiftWeekdays] = None,
) -> List[ShiftSlot]:
    """
    Build the ordered slot list for a month.

    Args:
        year: Target year
        month: Target month (1-12)
        shift_weekdays: Weekdays per shift type (defaults to each type's own)

    Returns:
        Slots sorted by date, then shift type precedence
    """
    shift_weekdays = _resolve(shift_weekdays)
    types = [st for st in SHIFT_ORDER if st in shift_weekdays]

    slots = [
        ShiftSlot(day, st)
        for day in month_days(year, month)
        for st in types
        if Weekday.from_date(day) in shift_weekdays[st]
    ]

    logger.debug(f"Generated {len(slots)} slots for {year:04d}-{month:02d}")
    return slots


def count_slots(
    year: int,
    month: int,
    shift_weekdays: Optional[ShiftWeekdays] = None,
) -> int:
    """Number of slots in a month, counted per weekday without building them."""
    shift_weekdays = _resolve(shift_weekdays)
    per_weekday: Dict[Weekday, int] = {}
    for day in month_days(year, month):
        wd = Weekday.from_date(day)
        per_weekday[wd] = per_weekday.get(wd, 0) + 1
    return sum(
        per_weekday.get(wd, 0)
        for days in shift_weekdays.values()
        for wd in days
    )


def slots_by_type(slots: List[ShiftSlot]) -> Dict[ShiftType, int]:
    """Count slots per shift type."""
    counts: Dict[ShiftType, int] = {}
    for s in slots:
        counts[s.shift_type] = counts.get(s.shift_type, 0) + 1
    return counts
