# dutyplan/models - Data models for the duty planner
from .config import GeneratorConfig
from .person import Absence, AbsenceKind, Person
from .roster import OPEN_REMARK, DutyEntry, DutyStatus, Roster, RosterStatus
from .shift import ALL_DAYS, SHIFT_ORDER, WEEKDAYS, WEEKEND, ShiftType, Weekday
from .wish import MonthlyWish, WishType

__all__ = [
    "Person", "Absence", "AbsenceKind",
    "ShiftType", "Weekday", "SHIFT_ORDER", "WEEKDAYS", "WEEKEND", "ALL_DAYS",
    "Roster", "DutyEntry", "DutyStatus", "RosterStatus", "OPEN_REMARK",
    "GeneratorConfig",
    "MonthlyWish", "WishType",
]
