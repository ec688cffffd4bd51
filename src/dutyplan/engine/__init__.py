# dutyplan/engine - Slot model, hard rules, ranking and assignment search
from .assembler import assemble_roster, verify_roster
from .constraints import find_candidates, is_hard_eligible, violates_rest_rule, within_duty_limit
from .generator import GenerationResult, RosterGenerator, generate
from .ranking import compare, rank_candidates, spacing_score
from .slots import ShiftSlot, count_slots, generate_slots
from .state import RunState
from .stats import PersonStats, calculate_person_stats, stats_to_dataframe, type_distribution, weekday_distribution
from .validation import ValidationResult, Violation, validate_roster

__all__ = [
    "generate",
    "RosterGenerator",
    "GenerationResult",
    "RunState",
    "ShiftSlot",
    "generate_slots",
    "count_slots",
    "is_hard_eligible",
    "violates_rest_rule",
    "within_duty_limit",
    "find_candidates",
    "spacing_score",
    "compare",
    "rank_candidates",
    "assemble_roster",
    "verify_roster",
    "validate_roster",
    "ValidationResult",
    "Violation",
    "PersonStats",
    "calculate_person_stats",
    "stats_to_dataframe",
    "type_distribution",
    "weekday_distribution",
]
