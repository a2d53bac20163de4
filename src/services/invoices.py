"""
Invoice Rendering Service

Turns a project and a template into an invoice. One pure computation stage
(build_invoice) resolves effective fields, recomputes line items and formats
every display string. Two adapters consume it: services.live_view for the
editable on-screen tree and services.export for the downloadable HTML
document. Neither adapter formats values on its own.
"""

from dataclasses import dataclass
from datetime import date

from core.config import WATERMARK_TEXT
from models.projects import Project
from models.templates import InvoiceTemplate
from services.calculator import LineItem, calculate_line_items, format_money
from services.catalog import resolve_template
from services.export import export_filename, render_export_html
from services.fields import EffectiveInvoiceFields, derive_effective_fields
from services.layouts import (
    CompanyHeader,
    LayoutSpec,
    company_header,
    get_layout_spec,
    row_cells,
    table_header,
    total_cells,
)

# Project fields printed as stored; the rest come from EffectiveInvoiceFields
STORED_FIELDS = (
    "customer_name",
    "customer_address",
    "contact_person",
    "email",
    "sow_ref",
    "po_number",
    "invoice_purpose",
)


# =============================================================================
# DATA CLASSES
# =============================================================================


@dataclass(frozen=True)
class InvoiceComputation:
    """Everything a renderer needs, already formatted."""

    project: Project
    template: InvoiceTemplate
    spec: LayoutSpec
    today: date
    fields: EffectiveInvoiceFields
    field_values: dict[str, str]
    company: CompanyHeader
    columns: list[str]
    line_items: list[LineItem]
    rows: list[list[str]]
    total: float
    total_text: str
    total_row: list[str]
    watermark: str | None

    @property
    def currency(self) -> str:
        return self.project.currency


@dataclass
class InvoiceDocument:
    """Result of export generation."""

    content: str
    filename: str
    media_type: str
    invoice_number: str
    employee_count: int
    total_amount: float


# =============================================================================
# COMPUTATION
# =============================================================================


def collect_field_values(project: Project, fields: EffectiveInvoiceFields) -> dict[str, str]:
    """Display value for every field a layout section can reference."""
    values = {name: getattr(project, name) or "" for name in STORED_FIELDS}
    values.update(
        invoice_number=fields.invoice_number,
        invoice_date=fields.invoice_date,
        payment_due_date=fields.payment_due_date,
        work_period=fields.work_period,
    )
    return values


def watermark_for(spec: LayoutSpec, template: InvoiceTemplate) -> str | None:
    """Only layouts that support an overlay show one, and only when enabled."""
    if spec.supports_watermark and template.features.show_watermark:
        return WATERMARK_TEXT
    return None


def build_invoice(project: Project, template: InvoiceTemplate, today: date) -> InvoiceComputation:
    """
    Compute the invoice for one project/template/day.

    The stored total_amount and employee totals are never read; amounts are
    recomputed from the current rate and hours of each employee.
    """
    spec = get_layout_spec(template.layout)
    fields = derive_effective_fields(project, today)
    currency = project.currency

    line_items = calculate_line_items(project.employees)
    total = sum(item.amount for item in line_items)
    total_text = format_money(total, currency)

    return InvoiceComputation(
        project=project,
        template=template,
        spec=spec,
        today=today,
        fields=fields,
        field_values=collect_field_values(project, fields),
        company=company_header(spec),
        columns=table_header(spec, currency),
        line_items=line_items,
        rows=[row_cells(spec, item, currency) for item in line_items],
        total=total,
        total_text=total_text,
        total_row=total_cells(spec, total_text),
        watermark=watermark_for(spec, template),
    )


# =============================================================================
# MAIN ENTRY POINTS
# =============================================================================


def render_invoice_html(project: Project, template: InvoiceTemplate, today: date) -> str:
    """Render the export document for a project as an HTML string."""
    return render_export_html(build_invoice(project, template, today))


def generate_invoice_document(
    project: Project,
    template_id: str | None,
    today: date,
) -> InvoiceDocument:
    """
    Build the downloadable invoice for a project.

    Args:
        project: Project to render (its current employee list is used)
        template_id: Catalog template id; unknown or missing ids use standard
        today: Date used for derived fields

    Returns:
        InvoiceDocument with HTML content and the download filename
    """
    computation = build_invoice(project, resolve_template(template_id), today)
    return InvoiceDocument(
        content=render_export_html(computation),
        filename=export_filename(computation),
        media_type="text/html",
        invoice_number=computation.fields.invoice_number,
        employee_count=len(computation.line_items),
        total_amount=computation.total,
    )
