"""
Candidate Ranking
=================
Total order over feasible candidates for one slot.

Criteria, first difference wins:
    1. Spacing: larger minimum distance in days to the person's duties
       (ties within the tolerance fall through)
    2. Fewer duties so far
    3. Fewer duties of this shift type so far
    4. Name, ascending
"""
import functools
from datetime import date
from typing import Iterable, List, Optional

from dutyplan.models.config import GeneratorConfig
from dutyplan.models.person import Person

from .slots import ShiftSlot
from .state import RunState


def spacing_score(day: date, assigned: Iterable[date], no_duty_score: float = 1000.0) -> float:
    """Minimum absolute day distance from ``day`` to any assigned date."""
    distances = [abs((day - d).days) for d in assigned]
    if not distances:
        return no_duty_score
    return float(min(distances))


def compare(
    a: Person,
    b: Person,
    slot: ShiftSlot,
    state: RunState,
    config: Optional[GeneratorConfig] = None,
) -> int:
    """Negative if ``a`` should be preferred over ``b``."""
    config = config or GeneratorConfig()

    score_a = spacing_score(slot.date, state.dates_of(a), config.no_duty_score)
    score_b = spacing_score(slot.date, state.dates_of(b), config.no_duty_score)
    if abs(score_a - score_b) > config.spacing_tolerance:
        return -1 if score_a > score_b else 1

    total_a, total_b = state.total(a), state.total(b)
    if total_a != total_b:
        return total_a - total_b

    type_a = state.count_of_type(a, slot.shift_type)
    type_b = state.count_of_type(b, slot.shift_type)
    if type_a != type_b:
        return type_a - type_b

    if a.name != b.name:
        return -1 if a.name < b.name else 1
    return 0


def rank_candidates(
    candidates: Iterable[Person],
    slot: ShiftSlot,
    state: RunState,
    config: Optional[GeneratorConfig] = None,
) -> List[Person]:
    """Candidates sorted best first."""
    config = config or GeneratorConfig()
    key = functools.cmp_to_key(lambda a, b: compare(a, b, slot, state, config))
    return sorted(candidates, key=key)
