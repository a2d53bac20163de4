#!/usr/bin/env python3
"""
Replace all projects with three sample projects.

Invoice dates, due dates and work periods are set for the current month.

Usage:
    uv run python src/scripts/seed_db.py
"""

import sys
from datetime import date
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import DB_PATH
from core.repository import ProjectRepository
from models.projects import EmployeeCreate, ProjectCreate
from services.dates import (
    current_month_year,
    invoice_today,
    month_end_text,
    payment_due_date,
)
from services.fields import generate_invoice_number


def sample_projects(today: date) -> list[ProjectCreate]:
    invoice_date = month_end_text(today)
    common = {
        "invoice_date": invoice_date,
        "payment_due_date": payment_due_date(invoice_date, today),
        "work_period": current_month_year(today),
    }
    return [
        ProjectCreate(
            name="West Horminics",
            customer_name="ABC Corp",
            customer_address="221 Baker Street London 12345",
            contact_person="Andy Sorowsky",
            email="Andys@abccorp.sd",
            invoice_number=generate_invoice_number("West Horminics", today),
            sow_ref="Professional Services Agreement",
            invoice_purpose="Software service provided to ABC Corp",
            currency="EUR",
            status="active",
            employees=[
                EmployeeCreate(name="John Doe", rate_per_hour=15.25, hours=160),
                EmployeeCreate(name="Jane Smith", rate_per_hour=17.00, hours=160),
            ],
            **common,
        ),
        ProjectCreate(
            name="East Analytics",
            customer_name="XYZ Ltd",
            customer_address="456 Analytics Avenue, Tech City 67890",
            contact_person="Sarah Johnson",
            email="sarah@xyzltd.com",
            invoice_number=generate_invoice_number("East Analytics", today),
            sow_ref="Analytics Services Agreement",
            po_number="PO-2024-001",
            invoice_purpose="Analytics and reporting services provided to XYZ Ltd",
            currency="EUR",
            status="completed",
            employees=[
                EmployeeCreate(name="Bob Johnson", rate_per_hour=18.50, hours=140),
            ],
            **common,
        ),
        ProjectCreate(
            name="North Platform",
            customer_name="TechCorp",
            customer_address="789 Platform Street, Cloud City 11223",
            contact_person="Mike Wilson",
            email="mike@techcorp.io",
            invoice_number=generate_invoice_number("North Platform", today),
            sow_ref="Platform Development Agreement",
            invoice_purpose="Cloud platform development services provided to TechCorp",
            currency="USD",
            status="draft",
            **common,
        ),
    ]


def seed(repository: ProjectRepository, today: date) -> int:
    """Delete every project, then insert the samples. Returns the count."""
    for project in repository.list_projects():
        repository.delete_project(project.id)

    created = [repository.create_project(p) for p in sample_projects(today)]
    for project in created:
        print(f"  {project.name}: {len(project.employees)} employees, {project.currency} {project.total_amount:.2f}")
    return len(created)


def main():
    print("Seeding database...")
    count = seed(ProjectRepository(DB_PATH), invoice_today())
    print(f"\nSeeded {count} projects into {DB_PATH}")


if __name__ == "__main__":
    main()
