"""Turns the solved slot list into a Roster."""
from typing import Dict, List, Optional, Sequence

from dutyplan.models.person import Person
from dutyplan.models.roster import OPEN_REMARK, DutyEntry, DutyStatus, Roster
from dutyplan.utils.logging_setup import get_logger

from .slots import ShiftSlot

logger = get_logger("dutyplan.engine.assembler")


def default_roster_name(year: int, month: int) -> str:
    return f"Duty roster {year:04d}-{month:02d}"


def assemble_roster(
    slots: Sequence[ShiftSlot],
    assignments: Dict[int, Person],
    year: int,
    month: int,
    name: Optional[str] = None,
) -> Roster:
    """
    Build the roster entries in slot order.

    Assigned slots become PLANNED entries bound to their person; the rest
    become OPEN entries carrying the manual assignment remark.
    """
    roster = Roster(name=name or default_roster_name(year, month), year=year, month=month)

    for index, slot in enumerate(slots):
        person = assignments.get(index)
        if person is None:
            roster.add_entry(DutyEntry(
                date=slot.date,
                shift_type=slot.shift_type,
                status=DutyStatus.OPEN,
                remark=OPEN_REMARK,
            ))
        else:
            roster.add_entry(DutyEntry(
                date=slot.date,
                shift_type=slot.shift_type,
                person_id=person.id,
                person_name=person.name,
                status=DutyStatus.PLANNED,
            ))

    logger.debug(
        f"Assembled {len(roster.entries)} entries, {roster.open_count} open, "
        f"rate={roster.assignment_rate:.1f}%"
    )
    return roster


def verify_roster(roster: Roster) -> List[str]:
    """Re-check that nobody is booked twice on a date."""
    problems = roster.conflicts()
    for p in problems:
        logger.error(f"Conflict in {roster.period}: {p}")
    return problems
