"""
Invoice editing session.

Editing works on a copy of the project. The live view describes the changes
its controls would dispatch; this module applies them to the copy and turns
the result into a ProjectUpdate on save. Cancelling is discarding the session.
"""

from datetime import date

from core.repository import NotFoundError
from models.projects import EmployeeCreate, Project, ProjectUpdate
from models.templates import InvoiceTemplate
from models.views import FieldChange, LiveView
from services.calculator import line_amount, to_number
from services.dates import current_month_year, payment_due_date, to_storage_date
from services.fields import derive_effective_fields, generate_invoice_number
from services.invoices import build_invoice
from services.layouts import TEXT_FIELDS
from services.live_view import MONTH_NAMES, render_live_view

EMPLOYEE_FIELDS = ("name", "rate_per_hour", "hours")


class EditSession:
    """Working copy of one project while its invoice is being edited."""

    def __init__(self, project: Project, today: date):
        self.project = project
        self.today = today

    @classmethod
    def start(cls, project: Project, today: date) -> "EditSession":
        """
        Enter edit mode.

        The copy's dates are converted to the form a date input accepts.
        """
        working = project.model_copy(deep=True)
        fields = derive_effective_fields(project, today)
        working.invoice_date = fields.invoice_date
        working.payment_due_date = fields.payment_due_date
        return cls(working, today)

    # =========================================================================
    # CHANGES
    # =========================================================================

    def apply(self, change: FieldChange) -> None:
        if change.event == "field_change":
            self.change_field(change.field, change.value)
        elif change.event == "employee_change":
            self.change_employee(change.employee_id, change.field, change.value)
        elif change.event == "remove_employee":
            self.remove_employee(change.employee_id)

    def change_field(self, field: str | None, value) -> None:
        text = "" if value is None else str(value)

        if field in TEXT_FIELDS:
            setattr(self.project, field, text)
        elif field == "invoice_date":
            self.project.invoice_date = text
            self.project.payment_due_date = payment_due_date(text, self.today)
        elif field == "work_period":
            self.project.work_period = text
        elif field == "work_period_month":
            self.change_work_period(month=text)
        elif field == "work_period_year":
            self.change_work_period(year=text)
        else:
            raise ValueError(f"Field is not editable: '{field}'")

    def change_work_period(self, month: str | None = None, year: str | None = None) -> None:
        """Replace the month and/or year of the work period, keeping the other part."""
        current = self.project.work_period.strip() or current_month_year(self.today)
        parts = current.split(" ")
        current_month = parts[0] if parts[0] in MONTH_NAMES else MONTH_NAMES[self.today.month - 1]
        current_year = parts[1] if len(parts) > 1 else str(self.today.year)

        if month is not None and month not in MONTH_NAMES:
            raise ValueError(f"Unknown month: '{month}'")
        if year is not None and not (len(year) == 4 and year.isdigit()):
            raise ValueError(f"Year must have four digits: '{year}'")
        self.project.work_period = f"{month or current_month} {year or current_year}"

    def _find_employee(self, employee_id: str | None):
        for employee in self.project.employees:
            if employee.id == employee_id:
                return employee
        raise NotFoundError(f"Employee not found: {employee_id}")

    def change_employee(self, employee_id: str | None, field: str | None, value) -> None:
        """Update one employee value. Rate and hours are coerced to numbers."""
        if field not in EMPLOYEE_FIELDS:
            raise ValueError(f"Employee field is not editable: '{field}'")
        employee = self._find_employee(employee_id)

        if field == "name":
            employee.name = "" if value is None else str(value)
        else:
            setattr(employee, field, to_number(value))
        employee.total = line_amount(employee.rate_per_hour, employee.hours)

    def remove_employee(self, employee_id: str | None) -> None:
        employee = self._find_employee(employee_id)
        self.project.employees.remove(employee)

    # =========================================================================
    # OUTPUT
    # =========================================================================

    def live_view(self, template: InvoiceTemplate) -> LiveView:
        return render_live_view(build_invoice(self.project, template, self.today), editing=True)

    def to_update(self) -> ProjectUpdate:
        """
        Persisted form of the working copy.

        Employee totals are recomputed, the invoice date is converted for
        storage and the due date follows it. An empty invoice number is saved
        as the generated one.
        """
        project = self.project
        invoice_date = to_storage_date(project.invoice_date, self.today)
        invoice_number = project.invoice_number.strip() or generate_invoice_number(
            project.name, self.today
        )

        values = {name: getattr(project, name) for name in TEXT_FIELDS}
        values.update(
            invoice_number=invoice_number,
            invoice_date=invoice_date,
            payment_due_date=payment_due_date(invoice_date, self.today),
            work_period=project.work_period,
            employees=[
                EmployeeCreate(
                    name=employee.name,
                    rate_per_hour=to_number(employee.rate_per_hour),
                    hours=to_number(employee.hours),
                    total=line_amount(employee.rate_per_hour, employee.hours),
                )
                for employee in project.employees
            ],
        )
        return ProjectUpdate(**values)
