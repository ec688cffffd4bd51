"""Run-scoped mutable state of one generation run."""
from datetime import date
from typing import Dict, List, Sequence

from dutyplan.models.person import Person
from dutyplan.models.shift import ShiftType

from .slots import ShiftSlot


class RunState:
    """
    Assignment state owned by a single ``RosterGenerator.generate()`` call.

    ``assignments`` maps slot index to person, so undoing a slot is a
    dictionary removal. Per-person dates and per-type counts always
    reflect exactly the committed assignments.
    """

    def __init__(self, slots: Sequence[ShiftSlot], people: Sequence[Person]):
        self.slots = list(slots)
        self.people = list(people)

        seen = set()
        for p in self.people:
            if p.id in seen:
                raise ValueError(f"Duplicate person id {p.id} ({p.name})")
            seen.add(p.id)

        self.assignments: Dict[int, Person] = {}
        self.dates_by_person: Dict[int, List[date]] = {p.id: [] for p in self.people}
        self.type_counts: Dict[int, Dict[ShiftType, int]] = {p.id: {} for p in self.people}
        self._warnings: Dict[str, None] = {}  # insertion-ordered set

    # ========== Commit / Undo ==========

    def commit(self, index: int, person: Person):
        slot = self.slots[index]
        if index in self.assignments:
            raise ValueError(f"Slot {index} ({slot.describe()}) is already assigned")
        self.assignments[index] = person
        self.dates_by_person[person.id].append(slot.date)
        counts = self.type_counts[person.id]
        counts[slot.shift_type] = counts.get(slot.shift_type, 0) + 1

    def undo(self, index: int):
        person = self.assignments.pop(index)
        slot = self.slots[index]
        self.dates_by_person[person.id].remove(slot.date)
        counts = self.type_counts[person.id]
        counts[slot.shift_type] -= 1
        if counts[slot.shift_type] == 0:
            del counts[slot.shift_type]

    # ========== History ==========

    def dates_of(self, person: Person) -> List[date]:
        return self.dates_by_person.get(person.id, [])

    def has_duty_on(self, person: Person, day: date) -> bool:
        return day in self.dates_of(person)

    def total(self, person: Person) -> int:
        return len(self.dates_of(person))

    def count_of_type(self, person: Person, shift_type: ShiftType) -> int:
        return self.type_counts.get(person.id, {}).get(shift_type, 0)

    # ========== Warnings ==========

    def add_warning(self, message: str):
        self._warnings[message] = None

    @property
    def warnings(self) -> List[str]:
        return list(self._warnings)
