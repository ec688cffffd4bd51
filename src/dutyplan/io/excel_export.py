"""Excel and CSV export for duty rosters."""
import io
from pathlib import Path
from typing import List, Optional, Union

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from dutyplan.engine.stats import calculate_person_stats, stats_to_dataframe
from dutyplan.engine.slots import month_days
from dutyplan.models.person import Person
from dutyplan.models.roster import Roster
from dutyplan.models.shift import SHIFT_ORDER, ShiftType, Weekday
from dutyplan.utils.logging_setup import get_logger

logger = get_logger("dutyplan.io.excel")

# Color scheme for shift columns
SHIFT_COLORS = {
    ShiftType.DUTY_24H.code: "DDEEFF",
    ShiftType.ROUNDS.code: "E6CCFF",
    ShiftType.LATE.code: "FFE4CC",
}
OPEN_COLOR = "FFC7CE"
WEEKEND_COLOR = "EEEEEE"
OPEN_LABEL = "OPEN"

# Border styles
THIN = Side(border_style="thin", color="CCCCCC")
DOUBLE_BLACK = Side(border_style="double", color="000000")
BORDER_THIN = Border(top=THIN, bottom=THIN, left=THIN, right=THIN)
BORDER_WEEK_END = Border(top=THIN, bottom=DOUBLE_BLACK, left=THIN, right=THIN)


def _fill(color: str) -> PatternFill:
    return PatternFill(start_color=color, end_color=color, fill_type="solid")


def _write_dashboard(ws, roster: Roster, people: List[Person], warnings: List[str]):
    summary_data = [
        ["Indicator", "Value"],
        ["Roster", roster.name],
        ["Month", roster.period],
        ["Status", roster.status.value],
        ["People", len(people)],
        ["Duties", len(roster.entries)],
        ["Open", roster.open_count],
        ["Assignment rate (%)", round(roster.assignment_rate, 1)],
    ]
    for i, row_data in enumerate(summary_data, start=1):
        for j, val in enumerate(row_data, start=1):
            cell = ws.cell(row=i, column=j, value=val)
            if i == 1:
                cell.font = Font(bold=True)

    # Duties per shift type
    start = len(summary_data) + 2
    ws.cell(row=start, column=1, value="Duties per shift type").font = Font(bold=True)
    for i, (st, n) in enumerate(roster.counts_by_type().items(), start=1):
        ws.cell(row=start + i, column=1, value=st.label)
        ws.cell(row=start + i, column=2, value=n)

    # Warnings
    if warnings:
        start = ws.max_row + 2
        ws.cell(row=start, column=1, value="Warnings").font = Font(bold=True)
        for i, w in enumerate(warnings, start=1):
            ws.cell(row=start + i, column=1, value=w)

    ws.column_dimensions["A"].width = 60
    ws.column_dimensions["B"].width = 24
    ws.freeze_panes = "A2"


def _write_plan(ws, roster: Roster):
    """Date × shift type matrix; open duties highlighted."""
    types = [st for st in SHIFT_ORDER if st in roster.counts_by_type()]
    headers = ["Date", "Day"] + [st.label for st in types]
    for j, h in enumerate(headers, start=1):
        cell = ws.cell(row=1, column=j, value=h)
        cell.font = Font(bold=True)
        cell.alignment = Alignment(horizontal="center", vertical="center")
        if j > 2:
            cell.fill = _fill(SHIFT_COLORS[types[j - 3].code])

    for r, day in enumerate(month_days(roster.year, roster.month), start=2):
        wd = Weekday.from_date(day)
        border = BORDER_WEEK_END if wd == Weekday.SUNDAY else BORDER_THIN

        date_cell = ws.cell(row=r, column=1, value=day)
        date_cell.number_format = "DD.MM.YYYY"
        ws.cell(row=r, column=2, value=wd.value)
        for c in (1, 2):
            ws.cell(row=r, column=c).border = border
            if wd.is_weekend:
                ws.cell(row=r, column=c).fill = _fill(WEEKEND_COLOR)

        entries = {e.shift_type: e for e in roster.entries_on(day)}
        for c, st in enumerate(types, start=3):
            cell = ws.cell(row=r, column=c)
            cell.border = border
            cell.alignment = Alignment(horizontal="center", vertical="center")
            entry = entries.get(st)
            if entry is None:
                continue
            if entry.is_open:
                cell.value = OPEN_LABEL
                cell.fill = _fill(OPEN_COLOR)
                cell.font = Font(bold=True)
            else:
                cell.value = entry.person_name

    ws.column_dimensions["A"].width = 12
    ws.column_dimensions["B"].width = 6
    for c in range(3, len(headers) + 1):
        ws.column_dimensions[get_column_letter(c)].width = 20
    ws.freeze_panes = "C2"


def _write_people(ws, roster: Roster, people: List[Person]):
    stats = stats_to_dataframe(calculate_person_stats(roster, people))
    for j, col in enumerate(stats.columns, start=1):
        ws.cell(row=1, column=j, value=col).font = Font(bold=True)
    for i in range(len(stats)):
        for j in range(len(stats.columns)):
            ws.cell(row=2 + i, column=1 + j, value=stats.iat[i, j])
    ws.column_dimensions["A"].width = 24
    for i in range(2, len(stats.columns) + 1):
        ws.column_dimensions[get_column_letter(i)].width = 12
    ws.freeze_panes = "A2"


def export_roster_to_excel(
    roster: Roster,
    people: List[Person],
    output: Union[str, Path, io.BytesIO],
    warnings: Optional[List[str]] = None,
) -> None:
    """
    Export a roster to an Excel workbook.

    Sheets: Dashboard (summary and warnings), Plan (date × shift type),
    People (per-person synthesis).

    Args:
        roster: Roster to export
        people: Team members
        output: File path or BytesIO buffer
        warnings: Generation warnings to list on the dashboard
    """
    wb = Workbook()

    # ========== Dashboard Sheet ==========
    ws_db = wb.active
    ws_db.title = "Dashboard"
    _write_dashboard(ws_db, roster, people, warnings or [])

    # ========== Plan Sheet ==========
    _write_plan(wb.create_sheet("Plan"), roster)

    # ========== People Sheet ==========
    _write_people(wb.create_sheet("People"), roster, people)

    if isinstance(output, io.BytesIO):
        wb.save(output)
    else:
        wb.save(str(output))
    logger.info(f"Exported {roster.period} to Excel")


def export_roster_to_csv(roster: Roster, output: Union[str, Path, io.StringIO]) -> None:
    """Export duty entries to CSV."""
    df = roster.to_dataframe()
    if isinstance(output, io.StringIO):
        df.to_csv(output, index=False)
    else:
        df.to_csv(str(output), index=False)
