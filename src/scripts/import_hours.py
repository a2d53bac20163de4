#!/usr/bin/env python3
"""
Import employee hours from an Excel workbook into existing projects.

Rows are grouped by project name and matched against stored projects. Matched
employees are appended; unmatched projects are listed and skipped.

Usage:
    uv run python src/scripts/import_hours.py <workbook.xlsx> [--sheet NAME] [--dry-run]
"""

import argparse
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import DB_PATH
from core.repository import ProjectRepository
from services.dates import invoice_today
from services.imports import ImportSession, apply_import, match_projects


def main():
    parser = argparse.ArgumentParser(
        description="Import employee hours from an Excel workbook"
    )
    parser.add_argument("input_file", type=Path, help="Path to the .xlsx workbook")
    parser.add_argument("--sheet", help="Sheet to import (default: first)")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show matches without writing anything",
    )

    args = parser.parse_args()

    try:
        session = ImportSession(args.input_file.name, args.input_file.read_bytes())
        entries = session.select_sheet(args.sheet)
        print(f"Found {len(entries)} employee rows in sheet '{session.selected_sheet}'")

        repository = ProjectRepository(DB_PATH)
        matches = match_projects(entries, repository.list_projects())
        for match in matches:
            if match.matched:
                print(f"  {match.project_name} -> {match.matched_project_name} ({len(match.employees)} employees)")
            else:
                print(f"  {match.project_name}: no matching project, skipped")

        if args.dry_run:
            print("\nDry run, nothing imported")
            return

        result = apply_import(repository, matches, invoice_today())
        print(f"\nImported {result.imported_employees} employees into {len(result.updated_projects)} projects")
    except Exception as e:
        print(f"\nError: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
