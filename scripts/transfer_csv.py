"""Import/export GymFlow CSV files from the command line.

Examples:
    python scripts/transfer_csv.py export-workouts exports/plans.csv
    python scripts/transfer_csv.py import-workouts plans.csv --dry-run
    python scripts/transfer_csv.py export-attendance exports/attendance.csv --named
    python scripts/transfer_csv.py validate plans.csv
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.gymflow.gymflow.container import build_container
from src.gymflow.gymflow.core.exceptions import DomainError
from src.gymflow.gymflow.main import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="GymFlow CSV import/export")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("export-workouts", help="export workout plan templates")
    p.add_argument("path")
    p.add_argument("--trainer-id", type=int, default=None)

    p = sub.add_parser("import-workouts", help="import workout plan templates")
    p.add_argument("path")
    p.add_argument("--dry-run", action="store_true", help="decode only, do not store")

    p = sub.add_parser("export-attendance", help="export the attendance report")
    p.add_argument("path")
    p.add_argument("--named", action="store_true", help="include member and class names")

    p = sub.add_parser("import-attendance", help="import an attendance report")
    p.add_argument("path")
    p.add_argument("--dry-run", action="store_true", help="decode only, do not store")

    p = sub.add_parser("validate", help="check that a file can be imported")
    p.add_argument("path")
    return parser


def run(args: argparse.Namespace, container) -> str:
    if args.command == "export-workouts":
        path = container.workout_plan_service.export_templates(args.path, trainer_id=args.trainer_id)
        return f"OK: exported workout templates -> {path}"
    if args.command == "import-workouts":
        plans = container.workout_plan_service.import_templates(args.path, persist=not args.dry_run)
        return f"OK: {len(plans)} workout plan(s) {'decoded' if args.dry_run else 'imported'}"
    if args.command == "export-attendance":
        path = container.attendance_service.export_report(args.path, named=args.named)
        return f"OK: exported attendance report -> {path}"
    if args.command == "import-attendance":
        records = container.attendance_service.import_report(args.path, persist=not args.dry_run)
        return f"OK: {len(records)} attendance record(s) {'decoded' if args.dry_run else 'imported'}"

    container.file_service.validate_file(args.path)
    return f"OK: {args.path} can be imported"


def main(argv: list[str] | None = None) -> None:
    load_dotenv(override=False)
    args = build_parser().parse_args(argv)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(db_config=settings.DB_CONFIG)
    try:
        print(run(args, container))
    except DomainError as e:
        logging.getLogger("transfer_csv").error("%s", e)
        raise SystemExit(1)


if __name__ == "__main__":
    main()
