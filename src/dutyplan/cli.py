from __future__ import annotations

import argparse
import json
from datetime import datetime
from typing import Tuple

from dutyplan.engine.generator import generate
from dutyplan.engine.stats import calculate_person_stats, evaluate_wishes
from dutyplan.engine.validation import validate_roster
from dutyplan.io.csv_loader import load_team
from dutyplan.io.excel_export import export_roster_to_csv, export_roster_to_excel
from dutyplan.io.wish_import import apply_vacations, import_wishes
from dutyplan.utils.logging_setup import get_logger, setup_logging

logger = get_logger("dutyplan.cli")

_VERBOSITY = {0: "WARNING", 1: "INFO", 2: "DEBUG"}


def _parse_month(value: str) -> Tuple[int, int]:
    try:
        parsed = datetime.strptime(value.strip(), "%Y-%m")
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM, got {value!r}")
    return parsed.year, parsed.month


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="dutyplan", description="Monthly duty roster generator")
    p.add_argument("--team", required=True, help="Team CSV (name, weekdays, shift_types, ...)")
    p.add_argument("--month", required=True, type=_parse_month, help="Target month, YYYY-MM")
    p.add_argument("--wishes", help="Monthly wish sheet (.xlsx); vacation wishes become absences")
    p.add_argument("--excel", help="Write the roster to this .xlsx file")
    p.add_argument("--csv", help="Write the duty entries to this CSV file")
    p.add_argument("--json", dest="json_out", action="store_true", help="JSON output (summary)")
    p.add_argument("--log-file", default=None, help="Also log to this file")
    p.add_argument("-v", "--verbose", action="count", default=0)
    return p


def main(argv: list[str] | None = None) -> int:
    p = _build_parser()
    args = p.parse_args(argv)

    level = _VERBOSITY.get(args.verbose, "TRACE")
    # Keep stdout parseable in JSON mode
    setup_logging(level=level, log_file=args.log_file, console_level="ERROR" if args.json_out else None)
    year, month = args.month

    try:
        people = load_team(args.team)
    except (OSError, ValueError) as e:
        p.error(f"cannot load team: {e}")

    wishes, wish_warnings = [], []
    if args.wishes:
        imported = import_wishes(args.wishes, people)
        if imported.has_errors:
            p.error(f"cannot import wishes: {'; '.join(imported.errors)}")
        wishes, wish_warnings = imported.wishes, imported.warnings
        people = apply_vacations(people, wishes)

    result = generate(people, year, month)
    if not result.success:
        logger.error(result.summary_line())

    validation = validate_roster(result.roster, people)
    wish_counts = evaluate_wishes(result.roster, wishes) if args.wishes else None

    if result.success and args.excel:
        export_roster_to_excel(result.roster, people, args.excel, warnings=result.warnings + wish_warnings)
    if result.success and args.csv:
        export_roster_to_csv(result.roster, args.csv)

    if args.json_out:
        print(json.dumps({
            "success": result.success,
            "summary": result.roster.summary(),
            "warnings": result.warnings,
            "wish_warnings": wish_warnings,
            "wishes": wish_counts,
            "validation": validation.as_dict(),
        }, ensure_ascii=False, indent=2))
    else:
        print(result.summary_line())
        for w in result.warnings:
            print(f" - {w}")
        for w in wish_warnings:
            print(f" - wishes: {w}")
        if wish_counts is not None:
            print(f"Free-day wishes met: {wish_counts['free_fulfilled']}/{wish_counts['free']}, "
                  f"duty wishes met: {wish_counts['duty_fulfilled']}/{wish_counts['duty']}")
        if result.success:
            print("Duties per person:")
            for s in calculate_person_stats(result.roster, people):
                print(f" - {s.name}: {s.total}")

    return 0 if result.success else 1


if __name__ == "__main__":
    raise SystemExit(main())
