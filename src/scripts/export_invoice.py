#!/usr/bin/env python3
"""
Export a project's invoice as a standalone HTML document.

Usage:
    uv run python src/scripts/export_invoice.py <project_id> [--template modern]

Example:
    uv run python src/scripts/export_invoice.py 3f2a... --template corporate --output-dir output/invoices
"""

import argparse
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import DB_PATH, OUTPUT_DIR, SETTINGS_PATH
from core.repository import ProjectRepository
from services.catalog import AVAILABLE_TEMPLATES
from services.dates import invoice_today
from services.invoices import generate_invoice_document
from services.settings import TemplatePreferenceStore


def main():
    parser = argparse.ArgumentParser(
        description="Export a project's invoice as an HTML document"
    )
    parser.add_argument("project_id", help="Project ID")
    parser.add_argument(
        "--template",
        choices=[t.id for t in AVAILABLE_TEMPLATES],
        help="Template to use (default: the saved selection)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=OUTPUT_DIR / "invoices",
        help="Directory for the exported file",
    )

    args = parser.parse_args()

    try:
        project = ProjectRepository(DB_PATH).get_project(args.project_id)
        template_id = args.template or TemplatePreferenceStore(SETTINGS_PATH).load()
        document = generate_invoice_document(project, template_id, invoice_today())

        args.output_dir.mkdir(parents=True, exist_ok=True)
        output_path = args.output_dir / document.filename
        output_path.write_text(document.content, encoding="utf-8")

        print(f"Template: {template_id}")
        print(f"Employees: {document.employee_count}")
        print(f"Total: {project.currency} {document.total_amount:.2f}")
        print(f"\nInvoice exported: {output_path}")
    except Exception as e:
        print(f"\nError: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
