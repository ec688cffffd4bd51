"""
Hard Constraints
================
Eligibility filter and rest rule applied to every slot during the search.

A person is a feasible candidate for a slot when they are hard-eligible,
do not violate the rest rule and are still below their duty limit.
Exclusion is never an error.
"""
from datetime import timedelta
from typing import List, Optional, Sequence

from dutyplan.models.config import GeneratorConfig
from dutyplan.models.person import Person
from dutyplan.utils.logging_setup import TRACE, get_logger

from .slots import ShiftSlot
from .state import RunState

logger = get_logger("dutyplan.engine.constraints")


def is_hard_eligible(person: Person, slot: ShiftSlot, state: RunState) -> bool:
    """Qualified, works that weekday, not absent, not yet on duty that date."""
    if not person.can_work(slot.shift_type):
        return False
    if not person.works_on(slot.weekday):
        return False
    if not person.is_available(slot.date):
        return False
    return not state.has_duty_on(person, slot.date)


def violates_rest_rule(
    person: Person,
    slot: ShiftSlot,
    state: RunState,
    config: Optional[GeneratorConfig] = None,
) -> bool:
    """True if the person worked, or came back from an absence, the day before."""
    config = config or GeneratorConfig()
    previous = slot.date - timedelta(days=1)
    if config.rest_after_duty and state.has_duty_on(person, previous):
        return True
    if config.rest_after_absence and person.returns_on(slot.date):
        return True
    return False


def within_duty_limit(
    person: Person,
    state: RunState,
    config: Optional[GeneratorConfig] = None,
) -> bool:
    """True unless the person already holds ``max_duties`` assignments."""
    config = config or GeneratorConfig()
    if not config.respect_duty_limits or person.max_duties <= 0:
        return True
    return state.total(person) < person.max_duties


def find_candidates(
    people: Sequence[Person],
    slot: ShiftSlot,
    state: RunState,
    config: Optional[GeneratorConfig] = None,
) -> List[Person]:
    """
    All feasible candidates for a slot, in input order.

    Args:
        people: Team members
        slot: Slot to staff
        state: Current run state
        config: Generator configuration

    Returns:
        People passing every hard rule for the slot
    """
    config = config or GeneratorConfig()
    candidates = []
    for p in people:
        if not is_hard_eligible(p, slot, state):
            continue
        if violates_rest_rule(p, slot, state, config):
            logger.log(TRACE, f"{slot.describe()}: {p.name} needs a rest day")
            continue
        if not within_duty_limit(p, state, config):
            logger.log(TRACE, f"{slot.describe()}: {p.name} reached {p.max_duties} duties")
            continue
        candidates.append(p)
    return candidates
