"""
Spreadsheet Import Service

Reads employee hours from an uploaded workbook and reconciles them against
existing projects by name.

Expected columns (first row is a header):
    A: Employee Name
    B: Project Name
    C: Rate Per Hour
    D: Hours
    E: Total Amount (optional; rate x hours when blank)

Matched groups are appended to their project; unmatched groups are reported
and never written.
"""

import re
import zipfile
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from io import BytesIO
from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterable

from openpyxl import Workbook, load_workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter
from openpyxl.utils.exceptions import InvalidFileException

from core.config import (
    IMPORT_MIN_COLUMNS,
    SAMPLE_IMPORT_HEADERS,
    SAMPLE_PROJECT_NAMES,
    SPREADSHEET_EXTENSIONS,
)
from models.projects import EmployeeCreate, Project
from services.calculator import to_number
from services.dates import current_month_year

if TYPE_CHECKING:
    from core.repository import ProjectRepository

LEADING_NUMBER_RE = re.compile(r"^\s*[-+]?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?")

NO_VALID_ROWS_MESSAGE = """No valid employee data found in spreadsheet.
Expected format:
Column A: Employee Name (e.g., "John Doe")
Column B: Project Name (e.g., "West Horminics")
Column C: Rate Per Hour (e.g., 15.25)
Column D: Hours (e.g., 160)
Column E: Total Amount (optional)"""


class SpreadsheetFormatError(Exception):
    """Upload is not a workbook openpyxl can read."""


# =============================================================================
# DATA CLASSES
# =============================================================================


@dataclass
class ImportEntry:
    """One valid spreadsheet row."""

    employee_name: str
    project_name: str
    rate: float
    hours: float
    amount: float


@dataclass
class ProjectMatch:
    """Rows sharing a project name, and the project they matched (if any)."""

    project_name: str
    employees: list[ImportEntry] = field(default_factory=list)
    matched_project_id: str | None = None
    matched_project_name: str | None = None

    @property
    def matched(self) -> bool:
        return self.matched_project_id is not None


@dataclass
class ImportResult:
    updated_projects: list[Project]
    imported_employees: int
    skipped: list[ProjectMatch]


# =============================================================================
# WORKBOOK LOADING
# =============================================================================


def load_workbook_bytes(filename: str, content: bytes):
    """
    Open an uploaded workbook.

    Raises:
        SpreadsheetFormatError: Wrong extension or unreadable content
    """
    if not filename or Path(filename).suffix.lower() not in SPREADSHEET_EXTENSIONS:
        raise SpreadsheetFormatError(f"Please upload an Excel file ({', '.join(SPREADSHEET_EXTENSIONS)})")

    try:
        return load_workbook(BytesIO(content), read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, OSError, KeyError, ValueError) as e:
        raise SpreadsheetFormatError(f"Failed to read spreadsheet: {filename}") from e


class ImportSession:
    """
    An uploaded workbook awaiting confirmation.

    The raw bytes are kept so another sheet can be selected; selecting a
    sheet replaces the previous parse results.
    """

    def __init__(self, filename: str, content: bytes):
        self.filename = filename
        self.content = content
        workbook = load_workbook_bytes(filename, content)
        try:
            self.sheet_names: list[str] = list(workbook.sheetnames)
        finally:
            workbook.close()
        self.selected_sheet: str | None = None
        self.entries: list[ImportEntry] = []

    def select_sheet(self, sheet_name: str | None = None) -> list[ImportEntry]:
        """
        Parse one sheet (the first when no name is given).

        Raises:
            ValueError: Unknown sheet, or a sheet without valid rows
        """
        sheet_name = sheet_name or self.sheet_names[0]
        if sheet_name not in self.sheet_names:
            raise ValueError(f"Sheet not found: '{sheet_name}'")

        self.selected_sheet = sheet_name
        self.entries = []

        workbook = load_workbook_bytes(self.filename, self.content)
        try:
            rows = list(workbook[sheet_name].iter_rows(values_only=True))
        finally:
            workbook.close()

        self.entries = parse_rows(rows)
        return self.entries


# =============================================================================
# PARSING
# =============================================================================


def parse_cell_number(value: Any) -> float:
    """Leading numeric prefix of a cell ('160 h' -> 160), coerced non-negative."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return to_number(value)
    if value is None:
        return 0.0
    match = LEADING_NUMBER_RE.match(str(value))
    if not match:
        return 0.0
    return to_number(match.group(0))


def cell_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def parse_rows(rows: list[tuple]) -> list[ImportEntry]:
    """
    Turn sheet rows into import entries.

    Raises:
        ValueError: Fewer than two rows, a short header or no valid rows
    """
    if len(rows) < 2:
        raise ValueError("Spreadsheet must contain at least a header row and one data row")

    header = [c for c in rows[0] if c is not None] if rows[0] else []
    if len(header) < IMPORT_MIN_COLUMNS:
        raise ValueError(
            "Spreadsheet must have at least 4 columns: Employee Name, Project Name, Rate, Hours"
        )

    entries = []
    for row in rows[1:]:
        cells = list(row) + [None] * (5 - len(row))
        employee_name = cell_text(cells[0])
        project_name = cell_text(cells[1])
        rate = parse_cell_number(cells[2])
        hours = parse_cell_number(cells[3])
        amount = parse_cell_number(cells[4]) or rate * hours

        if not (project_name and employee_name and (rate > 0 or hours > 0)):
            continue

        entries.append(
            ImportEntry(
                employee_name=employee_name,
                project_name=project_name,
                rate=rate,
                hours=hours,
                amount=amount,
            )
        )

    if not entries:
        raise ValueError(NO_VALID_ROWS_MESSAGE)
    return entries


# =============================================================================
# MATCHING
# =============================================================================


def group_by_project(entries: Iterable[ImportEntry]) -> dict[str, list[ImportEntry]]:
    """Group entries by project name, in order of first appearance."""
    grouped = defaultdict(list)
    for entry in entries:
        grouped[entry.project_name].append(entry)
    return dict(grouped)


def match_project(project_name: str, projects: list[Project]) -> Project | None:
    """
    Find the project a spreadsheet name refers to.

    Case-insensitive, trimmed. An exact match anywhere in the list wins over
    a partial (substring, either direction) match.
    """
    wanted = project_name.lower().strip()
    if not wanted:
        return None

    candidates = [(p, p.name.lower().strip()) for p in projects]
    for project, name in candidates:
        if name == wanted:
            return project
    for project, name in candidates:
        if name and (wanted in name or name in wanted):
            return project
    return None


def match_projects(entries: list[ImportEntry], projects: list[Project]) -> list[ProjectMatch]:
    matches = []
    for project_name, group in group_by_project(entries).items():
        project = match_project(project_name, projects)
        matches.append(
            ProjectMatch(
                project_name=project_name,
                employees=group,
                matched_project_id=project.id if project else None,
                matched_project_name=project.name if project else None,
            )
        )
    return matches


# =============================================================================
# APPLY
# =============================================================================


def apply_import(
    repository: "ProjectRepository",
    matches: list[ProjectMatch],
    today: date,
) -> ImportResult:
    """
    Append matched employees to their projects.

    Each touched project gets its work period set to the current month. Groups
    resolving to the same project are written as one update.
    """
    pending: dict[str, list[EmployeeCreate]] = {}
    skipped = []
    for match in matches:
        if not match.matched:
            skipped.append(match)
            continue
        pending.setdefault(match.matched_project_id, []).extend(
            EmployeeCreate(
                name=entry.employee_name,
                rate_per_hour=entry.rate,
                hours=entry.hours,
                total=entry.amount,
            )
            for entry in match.employees
        )

    work_period = current_month_year(today)
    updated = [
        repository.append_employees(project_id, employees, work_period=work_period)
        for project_id, employees in pending.items()
    ]
    return ImportResult(
        updated_projects=updated,
        imported_employees=sum(len(e) for e in pending.values()),
        skipped=skipped,
    )


# =============================================================================
# SAMPLE TEMPLATE
# =============================================================================

SAMPLE_ROWS = [
    ("John Doe", 0, 15.25, 160, 2440),
    ("Jane Smith", 0, 17.00, 160, 2720),
    ("Bob Johnson", 1, 18.50, 140, 2590),
    ("Alice Brown", 2, 16.75, 120, 2010),
]


def build_sample_workbook(project_names: list[str] | None = None) -> bytes:
    """
    Sample upload workbook, filled with the given project names.

    Falls back to placeholder project names when none exist yet.
    """
    names = list(project_names or []) or list(SAMPLE_PROJECT_NAMES)

    wb = Workbook()
    ws = wb.active
    ws.title = "Employee Data"
    ws.append(SAMPLE_IMPORT_HEADERS)
    for cell in ws[1]:
        cell.font = Font(bold=True)

    for employee, project_index, rate, hours, amount in SAMPLE_ROWS:
        if project_index < len(names):
            project_name = names[project_index]
        else:
            project_name = SAMPLE_PROJECT_NAMES[project_index]
        ws.append([employee, project_name, rate, hours, amount])

    for col in range(1, len(SAMPLE_IMPORT_HEADERS) + 1):
        ws.column_dimensions[get_column_letter(col)].width = 18

    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue()
