"""
Centralized Person Statistics
=============================
Per-person and per-roster statistics shared by the CLI and the exports.
"""
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

import pandas as pd

from dutyplan.models.person import Person
from dutyplan.models.roster import Roster
from dutyplan.models.shift import SHIFT_ORDER, ShiftType, Weekday
from dutyplan.models.wish import MonthlyWish, WishType
from dutyplan.utils.logging_setup import get_logger

logger = get_logger("dutyplan.engine.stats")


@dataclass
class PersonStats:
    """Statistics for a single person."""
    person_id: int
    name: str
    by_type: Dict[ShiftType, int] = field(default_factory=dict)
    total: int = 0
    weekend: int = 0      # Duties on Saturday or Sunday
    max_duties: int = 0   # 0 = unlimited
    min_spacing: int = 0  # Smallest gap in days between two duties, 0 = fewer than two

    def count(self, shift_type: ShiftType) -> int:
        return self.by_type.get(shift_type, 0)

    @property
    def limit_reached(self) -> bool:
        return self.max_duties > 0 and self.total >= self.max_duties


def calculate_person_stats(roster: Roster, people: Sequence[Person]) -> List[PersonStats]:
    """
    Calculate statistics for all people.

    Args:
        roster: Generated roster
        people: Team members (people without duties get zero rows)

    Returns:
        List of PersonStats in input order
    """
    stats = []
    for p in people:
        entries = roster.entries_for(p.id)
        dates = sorted(e.date for e in entries)
        gaps = [(b - a).days for a, b in zip(dates, dates[1:])]

        stats.append(PersonStats(
            person_id=p.id,
            name=p.name,
            by_type=dict(Counter(e.shift_type for e in entries)),
            total=len(entries),
            weekend=sum(1 for e in entries if e.weekday.is_weekend),
            max_duties=p.max_duties,
            min_spacing=min(gaps) if gaps else 0,
        ))

    logger.debug(f"Calculated stats for {len(stats)} people, {roster.period}")
    return stats


def stats_to_dict_list(stats: List[PersonStats]) -> List[Dict]:
    """Convert stats to list of dicts for DataFrame or export."""
    rows = []
    for s in stats:
        row = {"Name": s.name}
        for st in SHIFT_ORDER:
            row[st.code] = s.count(st)
        row.update({
            "Total": s.total,
            "Weekend": s.weekend,
            "Limit": s.max_duties or "",
            "Min spacing": s.min_spacing,
        })
        rows.append(row)
    return rows


def stats_to_dataframe(stats: List[PersonStats]) -> pd.DataFrame:
    columns = ["Name"] + [st.code for st in SHIFT_ORDER] + ["Total", "Weekend", "Limit", "Min spacing"]
    return pd.DataFrame(stats_to_dict_list(stats), columns=columns)


def type_distribution(roster: Roster) -> pd.DataFrame:
    """Person × shift type counts of assigned entries."""
    df = roster.to_dataframe()
    codes = [st.code for st in SHIFT_ORDER]
    df = df[df["person"] != ""]
    if df.empty:
        return pd.DataFrame(columns=codes)
    table = pd.crosstab(df["person"], df["shift"])
    return table.reindex(columns=codes, fill_value=0)


def weekday_distribution(roster: Roster) -> Dict[Weekday, int]:
    """Assigned entries per weekday, Monday first."""
    counts = Counter(e.weekday for e in roster.entries if e.is_assigned)
    return {wd: counts.get(wd, 0) for wd in Weekday}


def evaluate_wishes(roster: Roster, wishes: List[MonthlyWish]) -> Dict[str, int]:
    """
    Mark soft wishes as fulfilled or not and count them.

    A free-day wish holds when the person has no duty that date; a duty
    wish holds when the person has a 24h duty that date. Vacation wishes
    are hard and already enforced as absences.
    """
    counts = {"free": 0, "free_fulfilled": 0, "duty": 0, "duty_fulfilled": 0}
    for w in wishes:
        on_day = [e for e in roster.entries_on(w.date) if e.person_id == w.person_id]
        if w.wish_type == WishType.FREE:
            w.fulfilled = not on_day
            counts["free"] += 1
            counts["free_fulfilled"] += int(w.fulfilled)
        elif w.wish_type == WishType.DUTY:
            w.fulfilled = any(e.shift_type == ShiftType.DUTY_24H for e in on_day)
            counts["duty"] += 1
            counts["duty_fulfilled"] += int(w.fulfilled)
    return counts
