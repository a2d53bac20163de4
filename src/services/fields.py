"""
Effective invoice fields.

Resolves which stored or derived value a render uses for the invoice number,
invoice date, payment due date and work period.
"""

import re
from dataclasses import dataclass
from datetime import date

from models.projects import Project
from services.dates import current_month_year, month_end_text, normalize_date, payment_due_date

NON_LETTERS_RE = re.compile(r"[^A-Za-z]")


@dataclass(frozen=True)
class EffectiveInvoiceFields:
    """Reconciled header values for one render. Dates are YYYY-MM-DD."""

    invoice_number: str
    invoice_date: str
    payment_due_date: str
    work_period: str


def generate_invoice_number(project_name: str, today: date) -> str:
    """
    Build an invoice number from the project name and today's month.

    Example: 'West Horminics' in March 2025 -> 'INVOICE-WEST-MAR25'
    """
    letters = NON_LETTERS_RE.sub("", project_name or "")[:4].upper()
    month = today.strftime("%b").upper()
    year = f"{today.year % 100:02d}"
    return f"INVOICE-{letters}-{month}{year}"


def resolve_invoice_number(project: Project, today: date) -> str:
    if project.invoice_number and project.invoice_number.strip():
        return project.invoice_number
    return generate_invoice_number(project.name, today)


def resolve_invoice_date(project: Project, today: date) -> str:
    if not project.invoice_date or not project.invoice_date.strip():
        return month_end_text(today)
    return normalize_date(project.invoice_date, today)


def resolve_work_period(project: Project, today: date) -> str:
    if project.work_period and project.work_period.strip():
        return project.work_period
    return current_month_year(today)


def derive_effective_fields(project: Project, today: date) -> EffectiveInvoiceFields:
    """
    Compute the effective fields for rendering.

    The stored payment_due_date is legacy display data and is never used; the
    due date always follows the resolved invoice date.
    """
    invoice_date = resolve_invoice_date(project, today)
    return EffectiveInvoiceFields(
        invoice_number=resolve_invoice_number(project, today),
        invoice_date=invoice_date,
        payment_due_date=payment_due_date(invoice_date, today),
        work_period=resolve_work_period(project, today),
    )
