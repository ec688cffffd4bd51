"""CSV loading and saving for team data."""
from pathlib import Path
from typing import List, Union

import pandas as pd

from dutyplan.models.person import Person
from dutyplan.models.shift import SHIFT_ORDER
from dutyplan.utils.logging_setup import get_logger, log_function_call

logger = get_logger("dutyplan.io.csv")

TEAM_COLUMNS = ["id", "name", "weekdays", "shift_types", "max_duties", "absences"]


def _safe_int(value, default: int = 0) -> int:
    """Safely convert value to int."""
    try:
        return int(float(value))
    except (ValueError, TypeError):
        return default


@log_function_call
def load_team(source: Union[str, Path, pd.DataFrame]) -> List[Person]:
    """
    Load team from CSV file or DataFrame.

    Blank ``weekdays`` means every day, blank ``shift_types`` means every
    shift type. Rows without an ``id`` get the next free number.

    Args:
        source: Path to CSV file or pandas DataFrame

    Returns:
        List of Person objects
    """
    if isinstance(source, pd.DataFrame):
        df = source.copy()
    else:
        df = pd.read_csv(source, dtype=str)

    df = df.fillna("")

    # Required column
    if "name" not in df.columns:
        raise ValueError("CSV must have a 'name' column")

    people = []
    for idx, row in df.iterrows():
        name = str(row["name"]).strip()
        if not name:
            continue

        shift_types = str(row.get("shift_types", "")).strip()
        try:
            person = Person.from_dict({
                "name": name,
                "id": _safe_int(row.get("id"), 0),
                "weekdays": str(row.get("weekdays", "")),
                "shift_types": shift_types or ",".join(st.value for st in SHIFT_ORDER),
                "max_duties": _safe_int(row.get("max_duties"), 0),
                "absences": str(row.get("absences", "")),
            })
        except ValueError as e:
            raise ValueError(f"Row {idx + 1} ({name}): {e}") from e
        people.append(person)

    # Generated (negative) ids become sequential numbers after the largest given id
    next_id = max([p.id for p in people] + [0]) + 1
    for p in people:
        if p.id < 0:
            p.id = next_id
            next_id += 1

    logger.info(f"Loaded {len(people)} people")
    return people


def save_team(people: List[Person], path: Union[str, Path]) -> None:
    """
    Save team to CSV file.

    Args:
        people: List of Person objects
        path: Output path
    """
    df = team_to_dataframe(people)
    if df.empty:
        df = pd.DataFrame(columns=TEAM_COLUMNS)
    df.to_csv(path, index=False)
    logger.info(f"Saved {len(people)} people to {path}")


def team_to_dataframe(people: List[Person]) -> pd.DataFrame:
    """Convert team list to DataFrame for display."""
    if not people:
        return pd.DataFrame()
    return pd.DataFrame([p.to_dict() for p in people], columns=TEAM_COLUMNS)
