"""
Pytest configuration and shared fixtures.
"""

import sys
from datetime import date
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.repository import ProjectRepository  # noqa: E402
from models.projects import Employee, EmployeeCreate, Project, ProjectCreate  # noqa: E402


@pytest.fixture
def today():
    """Fixed 'today' for derived invoice fields."""
    return date(2025, 3, 10)


@pytest.fixture
def sample_project():
    """Project with two employees and stored invoice fields."""
    return Project(
        id="p-1",
        name="West Horminics",
        customer_name="ABC Corp",
        customer_address="221 Baker Street London 12345",
        contact_person="Andy Sorowsky",
        email="Andys@abccorp.sd",
        invoice_number="",
        invoice_date="2025-03-31",
        payment_due_date="2099-01-01",
        work_period="March 2025",
        sow_ref="Professional Services Agreement",
        invoice_purpose="Software service provided to ABC Corp",
        currency="EUR",
        employees=[
            Employee(id="e-1", name="John Doe", rate_per_hour=15.25, hours=160, total=1.0),
            Employee(id="e-2", name="Jane Smith", rate_per_hour=17.0, hours=160, total=1.0),
        ],
        total_amount=999.0,
    )


@pytest.fixture
def empty_project(sample_project):
    """Same project with no employees."""
    return sample_project.model_copy(update={"employees": [], "id": "p-empty"})


@pytest.fixture
def repository(tmp_path):
    """Repository backed by a fresh database file."""
    return ProjectRepository(tmp_path / "db" / "test.db")


@pytest.fixture
def project_create():
    return ProjectCreate(
        name="West Horminics",
        customer_name="ABC Corp",
        customer_address="221 Baker Street London 12345",
        contact_person="Andy Sorowsky",
        email="Andys@abccorp.sd",
        employees=[
            EmployeeCreate(name="John Doe", rate_per_hour=15.25, hours=160),
            EmployeeCreate(name="Jane Smith", rate_per_hour=17.0, hours=160),
        ],
    )


@pytest.fixture
def make_workbook():
    """Factory: {sheet name: rows} -> .xlsx bytes."""
    from io import BytesIO

    from openpyxl import Workbook

    def build(sheets: dict[str, list[list]]) -> bytes:
        wb = Workbook()
        wb.remove(wb.active)
        for title, rows in sheets.items():
            ws = wb.create_sheet(title=title)
            for row in rows:
                ws.append(row)
        buffer = BytesIO()
        wb.save(buffer)
        return buffer.getvalue()

    return build
