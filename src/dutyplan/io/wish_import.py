"""
Monthly Wish Import
===================
Reads the monthly wish sheet and turns vacation wishes into absences.

Sheet layout (first worksheet):
    Row 1, column B onward: dates (date cells or dd.mm.yyyy / d.m.yyyy)
    Column A, row 2 onward: person names
    Cells: U = vacation (hard), F = free day (soft), D = duty wish (soft)
"""
import io
from collections import Counter, defaultdict
from dataclasses import dataclass, field, replace
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union
from zipfile import BadZipFile

from openpyxl import Workbook, load_workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils.exceptions import InvalidFileException

from dutyplan.engine.slots import month_days
from dutyplan.models.person import Absence, AbsenceKind, Person
from dutyplan.models.shift import Weekday
from dutyplan.models.wish import MonthlyWish, WishType
from dutyplan.utils.logging_setup import get_logger, log_function_call

logger = get_logger("dutyplan.io.wishes")

DATE_FORMAT = "%d.%m.%Y"  # also accepts d.m.yyyy
VACATION_NOTE = "wish import"


@dataclass
class WishImportResult:
    """Parsed wishes plus everything that went wrong while reading them."""
    wishes: List[MonthlyWish] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    period: Optional[str] = None  # YYYY-MM of the first date column

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def is_success(self) -> bool:
        return not self.errors and bool(self.wishes)

    def counts_by_type(self) -> Dict[WishType, int]:
        counts = Counter(w.wish_type for w in self.wishes)
        return {wt: counts.get(wt, 0) for wt in WishType}

    def summary(self) -> str:
        parts = [f"{len(self.wishes)} wishes"]
        parts += [f"{n} {wt.label.lower()}" for wt, n in self.counts_by_type().items() if n]
        if self.warnings:
            parts.append(f"{len(self.warnings)} warnings")
        if self.errors:
            parts.append(f"{len(self.errors)} errors")
        return ", ".join(parts)


def normalize_name(name: str) -> str:
    """Lowercase and fold German umlauts for matching."""
    return (
        str(name).strip().lower()
        .replace("ä", "ae").replace("ö", "oe").replace("ü", "ue").replace("ß", "ss")
    )


def parse_header_date(value) -> Optional[date]:
    """Parse a header cell into a date, or None."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip() if value is not None else ""
    if not text:
        return None
    try:
        return datetime.strptime(text, DATE_FORMAT).date()
    except ValueError:
        return None


class _NameMatcher:
    def __init__(self, people: Sequence[Person]):
        self.by_name = {normalize_name(p.name): p for p in people}

    def exact(self, name: str) -> Optional[Person]:
        return self.by_name.get(normalize_name(name))

    def partial(self, name: str) -> Optional[Person]:
        key = normalize_name(name)
        for known, person in self.by_name.items():
            if known in key or key in known:
                return person
        return None


def _cell_text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


@log_function_call
def import_wishes(
    source: Union[str, Path, io.BytesIO],
    people: Sequence[Person],
) -> WishImportResult:
    """
    Read a monthly wish sheet.

    Args:
        source: Path or buffer of an .xlsx file
        people: Known team members to match names against

    Returns:
        WishImportResult; unreadable or empty files produce errors, not exceptions
    """
    result = WishImportResult()
    matcher = _NameMatcher(people)

    try:
        wb = load_workbook(source, data_only=True)
    except (OSError, ValueError, BadZipFile, InvalidFileException) as e:
        logger.error(f"Cannot read wish file {source}: {e}")
        result.errors.append(f"Cannot read file: {e}")
        return result

    rows = list(wb.worksheets[0].iter_rows(values_only=True))

    if len(rows) < 2:
        result.errors.append("Sheet is empty or has no data rows")
        return result

    # Header: dates from column B
    columns: Dict[int, date] = {}
    for col, value in enumerate(rows[0][1:], start=1):
        d = parse_header_date(value)
        if d is not None:
            columns[col] = d
        elif _cell_text(value):
            result.warnings.append(f"Column {col + 1}: '{_cell_text(value)}' is not a date")

    if not columns:
        result.errors.append("No date columns found in header row")
        return result

    first = next(iter(columns.values()))
    result.period = f"{first.year:04d}-{first.month:02d}"

    for row_num, row in enumerate(rows[1:], start=2):
        name = _cell_text(row[0]) if row else ""
        if not name:
            continue

        person = matcher.exact(name)
        if person is None:
            person = matcher.partial(name)
            if person is None:
                result.warnings.append(f"Row {row_num}: person '{name}' not found")
                continue
            result.warnings.append(f"Row {row_num}: '{name}' matched to '{person.name}'")

        for col, d in columns.items():
            if (d.year, d.month) != (first.year, first.month):
                continue
            code = _cell_text(row[col]).upper() if col < len(row) else ""
            if not code:
                continue
            wish_type = WishType.from_code(code)
            if wish_type is None:
                result.warnings.append(f"Row {row_num}, column {col + 1}: unknown wish code '{code}'")
                continue
            result.wishes.append(MonthlyWish(person.id, person.name, d, wish_type))

    logger.info(f"Wish import {result.period}: {result.summary()}")
    for w in result.warnings:
        logger.warning(w)
    return result


def apply_vacations(people: Sequence[Person], wishes: Sequence[MonthlyWish]) -> List[Person]:
    """
    Copies of ``people`` with vacation wishes added as absences.

    Consecutive vacation days become one interval.
    """
    days_by_person: Dict[int, List[date]] = defaultdict(list)
    for w in wishes:
        if w.wish_type == WishType.VACATION:
            days_by_person[w.person_id].append(w.date)

    updated = []
    for p in people:
        days = sorted(set(days_by_person.get(p.id, [])))
        absences = list(p.absences)
        start = prev = None
        for d in days:
            if start is None:
                start = prev = d
            elif d == prev + timedelta(days=1):
                prev = d
            else:
                absences.append(Absence(start, prev, AbsenceKind.VACATION, VACATION_NOTE))
                start = prev = d
        if start is not None:
            absences.append(Absence(start, prev, AbsenceKind.VACATION, VACATION_NOTE))
        updated.append(replace(p, absences=absences))
    return updated


def create_wish_template(
    people: Sequence[Person],
    year: int,
    month: int,
    output: Union[str, Path, io.BytesIO],
) -> None:
    """Write an empty wish sheet for a month, one row per person."""
    wb = Workbook()
    ws = wb.active
    ws.title = f"Wishes {year:04d}-{month:02d}"

    ws.cell(row=1, column=1, value="Name").font = Font(bold=True)
    weekend_fill = PatternFill(start_color="EEEEEE", end_color="EEEEEE", fill_type="solid")
    for col, day in enumerate(month_days(year, month), start=2):
        cell = ws.cell(row=1, column=col, value=day.strftime("%d.%m.%Y"))
        cell.font = Font(bold=True)
        cell.alignment = Alignment(horizontal="center", text_rotation=90)
        if Weekday.from_date(day).is_weekend:
            cell.fill = weekend_fill

    for r, p in enumerate(sorted(people, key=lambda x: x.name), start=2):
        ws.cell(row=r, column=1, value=p.name)

    ws.column_dimensions["A"].width = 24
    ws.freeze_panes = "B2"

    if isinstance(output, io.BytesIO):
        wb.save(output)
    else:
        wb.save(str(output))
