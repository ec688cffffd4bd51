"""
Roster Generator
================
Recursive assignment search over the ordered slot list of a month.

At each slot the feasible candidates are ranked and tried in order:
commit, recurse, undo on failure. A slot with no working candidate is
left open with a warning and the search moves on. Because reaching the
end of the list always counts as success, the first ranked candidate is
kept at every slot and earlier choices are never revisited.
"""
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from dutyplan.models.config import GeneratorConfig
from dutyplan.models.person import Person
from dutyplan.models.roster import Roster
from dutyplan.utils.logging_setup import TRACE, RunLogger, get_logger, log_constraint

from .assembler import assemble_roster, default_roster_name, verify_roster
from .constraints import find_candidates
from .ranking import rank_candidates
from .slots import ShiftSlot, generate_slots
from .state import RunState

logger = get_logger("dutyplan.engine")

ProgressCallback = Callable[[float], None]


@dataclass
class GenerationResult:
    """Outcome of one generation run."""
    roster: Roster
    warnings: List[str] = field(default_factory=list)
    success: bool = True

    @property
    def open_count(self) -> int:
        return self.roster.open_count

    @property
    def assignment_rate(self) -> float:
        return self.roster.assignment_rate

    def summary_line(self) -> str:
        """One-line outcome for logs and the CLI."""
        if not self.success:
            message = self.warnings[0] if self.warnings else "unknown error"
            return f"FAILED {self.roster.period}: {message}"
        return (
            f"OK {self.roster.period}: {len(self.roster.entries)} duties, "
            f"{self.assignment_rate:.1f}% assigned, {len(self.warnings)} warnings"
        )


class RosterGenerator:
    """
    Generates the duty roster for one month.

    Each ``generate()`` call builds its own RunState, so one instance can
    be run repeatedly and gives identical results for identical input.
    """

    def __init__(
        self,
        people: Sequence[Person],
        year: int,
        month: int,
        config: Optional[GeneratorConfig] = None,
    ):
        if not 1 <= month <= 12:
            raise ValueError(f"Month must be in 1..12, got {month}")
        self.people = list(people)
        self.year = year
        self.month = month
        self.config = config or GeneratorConfig()
        self._progress: Optional[ProgressCallback] = None
        self._slots: List[ShiftSlot] = []
        self._state: Optional[RunState] = None
        self.rlog = RunLogger("dutyplan.engine")

    def set_progress_callback(self, callback: Optional[ProgressCallback]):
        """Register ``callback(fraction)``, called for every visited slot index."""
        self._progress = callback

    def generate(self) -> GenerationResult:
        self.rlog.phase(f"Generating roster {self.year:04d}-{self.month:02d}")
        try:
            self._slots = generate_slots(self.year, self.month, self.config.shift_weekdays)
            self._state = RunState(self._slots, self.people)
            self.rlog.step(f"{len(self._slots)} slots, {len(self.people)} people")
            self.rlog.detail("config", self.config.to_dict())

            with self.rlog.section("Assignment search"):
                self._assign(0)
            self.rlog.step(f"{len(self._state.assignments)} of {len(self._slots)} slots assigned")

            roster = assemble_roster(self._slots, self._state.assignments, self.year, self.month)
            log_constraint(logger, "No double booking", not verify_roster(roster))
            result = GenerationResult(roster=roster, warnings=self._state.warnings, success=True)
        except Exception as e:
            logger.exception(f"Roster generation failed: {e}")
            result = GenerationResult(
                roster=Roster(default_roster_name(self.year, self.month), self.year, self.month),
                warnings=[f"Critical error: {e}"],
                success=False,
            )
        finally:
            self._state = None

        logger.info(result.summary_line())
        return result

    # ========== Search ==========

    def _assign(self, index: int) -> bool:
        self._report_progress(index)
        slots = self._slots
        state = self._state

        if index >= len(slots):
            return True

        slot = slots[index]
        candidates = find_candidates(self.people, slot, state, self.config)
        ranked = rank_candidates(candidates, slot, state, self.config)

        logger.debug(f"{slot.describe()}: {len(ranked)} candidates")
        for person in ranked:
            state.commit(index, person)
            logger.log(TRACE, f"{slot.describe()} -> {person.name}")
            if self._assign(index + 1):
                return True
            state.undo(index)
            logger.log(TRACE, f"{slot.describe()} undo {person.name}")

        message = f"MANUAL ASSIGNMENT: {slot.describe()} - no person available"
        state.add_warning(message)
        logger.warning(message)
        return self._assign(index + 1)

    def _report_progress(self, index: int):
        if self._progress is None:
            return
        total = len(self._slots)
        self._progress(index / total if total else 1.0)


def generate(
    people: Sequence[Person],
    year: int,
    month: int,
    config: Optional[GeneratorConfig] = None,
    progress: Optional[ProgressCallback] = None,
) -> GenerationResult:
    """
    Generate the duty roster for a month.

    Args:
        people: Team members
        year: Target year
        month: Target month (1-12)
        config: Generator configuration (uses defaults if None)
        progress: Optional callback receiving the fraction of slots visited

    Returns:
        GenerationResult with roster, warnings and success flag
    """
    generator = RosterGenerator(people, year, month, config)
    generator.set_progress_callback(progress)
    return generator.generate()
