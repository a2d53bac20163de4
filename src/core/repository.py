"""
Project repository backed by SQLite.

Projects own an ordered employee list. Writes that touch employees refresh the
project's cached total_amount (sum of rate x hours) in the same transaction.
"""

import sqlite3
import uuid
from datetime import datetime, timezone
from pathlib import Path

from core.config import DB_PATH
from core.database import get_connection, init_schema
from models.projects import Employee, EmployeeCreate, Project, ProjectCreate, ProjectUpdate

PROJECT_COLUMNS = (
    "name",
    "description",
    "customer_name",
    "customer_address",
    "contact_person",
    "email",
    "invoice_number",
    "invoice_date",
    "payment_due_date",
    "work_period",
    "sow_ref",
    "po_number",
    "invoice_purpose",
    "currency",
    "status",
)


class NotFoundError(LookupError):
    """A project, employee or import session does not exist."""


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _new_id() -> str:
    return str(uuid.uuid4())


class ProjectRepository:
    """CRUD operations for projects and their employees."""

    def __init__(self, db_path: Path = DB_PATH):
        self.db_path = Path(db_path)
        init_schema(self.db_path)

    def _connect(self) -> sqlite3.Connection:
        return get_connection(self.db_path)

    # =========================================================================
    # READ
    # =========================================================================

    def _load_employees(self, conn: sqlite3.Connection, project_id: str) -> list[Employee]:
        rows = conn.execute(
            """
            SELECT id, name, rate_per_hour, hours, total
            FROM employees WHERE project_id = ? ORDER BY position
            """,
            (project_id,),
        ).fetchall()
        return [Employee(**dict(row)) for row in rows]

    def _load_project(self, conn: sqlite3.Connection, project_id: str) -> Project:
        row = conn.execute("SELECT * FROM projects WHERE id = ?", (project_id,)).fetchone()
        if row is None:
            raise NotFoundError(f"Project not found: {project_id}")
        return Project(**dict(row), employees=self._load_employees(conn, project_id))

    def list_projects(self) -> list[Project]:
        """All projects, most recently updated first."""
        conn = self._connect()
        try:
            ids = [
                row["id"]
                for row in conn.execute(
                    "SELECT id FROM projects ORDER BY updated_at DESC, created_at DESC"
                ).fetchall()
            ]
            return [self._load_project(conn, project_id) for project_id in ids]
        finally:
            conn.close()

    def get_project(self, project_id: str) -> Project:
        conn = self._connect()
        try:
            return self._load_project(conn, project_id)
        finally:
            conn.close()

    # =========================================================================
    # WRITE
    # =========================================================================

    def _insert_employees(
        self,
        conn: sqlite3.Connection,
        project_id: str,
        employees: list[EmployeeCreate],
        start_position: int = 0,
    ) -> None:
        for offset, employee in enumerate(employees):
            conn.execute(
                """
                INSERT INTO employees (id, project_id, position, name, rate_per_hour, hours, total)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    _new_id(),
                    project_id,
                    start_position + offset,
                    employee.name,
                    employee.rate_per_hour,
                    employee.hours,
                    employee.rate_per_hour * employee.hours,
                ),
            )

    def _refresh_total(self, conn: sqlite3.Connection, project_id: str, now: str | None = None) -> None:
        conn.execute(
            """
            UPDATE projects SET
                total_amount = (
                    SELECT COALESCE(SUM(rate_per_hour * hours), 0)
                    FROM employees WHERE project_id = ?
                ),
                updated_at = ?
            WHERE id = ?
            """,
            (project_id, now or _now(), project_id),
        )

    def create_project(self, data: ProjectCreate) -> Project:
        """Insert a project with its initial employee list."""
        project_id = _new_id()
        now = _now()
        values = data.model_dump(include=set(PROJECT_COLUMNS))

        conn = self._connect()
        try:
            with conn:
                columns = ", ".join(("id", *PROJECT_COLUMNS, "created_at", "updated_at"))
                placeholders = ", ".join("?" * (len(PROJECT_COLUMNS) + 3))
                conn.execute(
                    f"INSERT INTO projects ({columns}) VALUES ({placeholders})",
                    (project_id, *(values[c] for c in PROJECT_COLUMNS), now, now),
                )
                self._insert_employees(conn, project_id, data.employees)
                self._refresh_total(conn, project_id, now)
            return self._load_project(conn, project_id)
        finally:
            conn.close()

    def update_project(self, project_id: str, data: ProjectUpdate) -> Project:
        """
        Apply a partial update.

        Only fields set on `data` are written. A supplied employee list replaces
        the stored one; the delete and inserts commit together.
        """
        changes = data.model_dump(exclude_unset=True, exclude={"employees"})
        changes = {k: v for k, v in changes.items() if v is not None}

        conn = self._connect()
        try:
            self._load_project(conn, project_id)
            with conn:
                if changes:
                    assignments = ", ".join(f"{column} = ?" for column in changes)
                    conn.execute(
                        f"UPDATE projects SET {assignments}, updated_at = ? WHERE id = ?",
                        (*changes.values(), _now(), project_id),
                    )
                if data.employees is not None:
                    conn.execute("DELETE FROM employees WHERE project_id = ?", (project_id,))
                    self._insert_employees(conn, project_id, data.employees)
                self._refresh_total(conn, project_id)
            return self._load_project(conn, project_id)
        finally:
            conn.close()

    def delete_project(self, project_id: str) -> None:
        conn = self._connect()
        try:
            with conn:
                cursor = conn.execute("DELETE FROM projects WHERE id = ?", (project_id,))
                if cursor.rowcount == 0:
                    raise NotFoundError(f"Project not found: {project_id}")
        finally:
            conn.close()

    def add_employee(self, project_id: str, employee: EmployeeCreate) -> Project:
        return self.append_employees(project_id, [employee])

    def append_employees(
        self,
        project_id: str,
        employees: list[EmployeeCreate],
        work_period: str | None = None,
    ) -> Project:
        """
        Append employees after the existing ones (never replaces).

        Used by the spreadsheet import, which also overwrites the work period.
        """
        conn = self._connect()
        try:
            self._load_project(conn, project_id)
            with conn:
                (next_position,) = conn.execute(
                    "SELECT COALESCE(MAX(position) + 1, 0) FROM employees WHERE project_id = ?",
                    (project_id,),
                ).fetchone()
                self._insert_employees(conn, project_id, employees, next_position)
                if work_period is not None:
                    conn.execute(
                        "UPDATE projects SET work_period = ? WHERE id = ?",
                        (work_period, project_id),
                    )
                self._refresh_total(conn, project_id)
            return self._load_project(conn, project_id)
        finally:
            conn.close()

    def remove_employee(self, project_id: str, employee_id: str) -> Project:
        conn = self._connect()
        try:
            self._load_project(conn, project_id)
            with conn:
                cursor = conn.execute(
                    "DELETE FROM employees WHERE id = ? AND project_id = ?",
                    (employee_id, project_id),
                )
                if cursor.rowcount == 0:
                    raise NotFoundError(f"Employee not found: {employee_id}")
                self._refresh_total(conn, project_id)
            return self._load_project(conn, project_id)
        finally:
            conn.close()
