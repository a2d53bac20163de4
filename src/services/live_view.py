"""
Live view adapter.

Builds the editable on-screen invoice from an InvoiceComputation. Every
displayed string is taken from the computation as-is; this module only decides
which values are bound to controls while editing and which actions those
controls dispatch.
"""

import calendar

from core.config import LOGO_URL, WORK_PERIOD_YEAR_COUNT, WORK_PERIOD_YEARS_BEFORE
from models.views import (
    ChangeAction,
    LiveCompany,
    LiveRow,
    LiveSection,
    LiveTheme,
    LiveView,
    MonthYearOptions,
    ViewField,
)
from services.invoices import InvoiceComputation
from services.layouts import TEXT_FIELDS, ColumnSpec, FieldSpec

DUE_DATE_HINT = "(15 days after invoice date)"

MONTH_NAMES = [calendar.month_name[i] for i in range(1, 13)]

# Column key -> employee attribute bound to an inline control
ROW_CONTROLS = {
    "name": ("text", "name"),
    "rate": ("number", "rate_per_hour"),
    "hours": ("number", "hours"),
}


def field_change(field: str) -> ChangeAction:
    return ChangeAction(event="field_change", field=field)


def work_period_options(computation: InvoiceComputation) -> MonthYearOptions:
    """Month and year pickers for the work period, preselected from its value."""
    today = computation.today
    first_year = today.year - WORK_PERIOD_YEARS_BEFORE
    years = [str(first_year + i) for i in range(WORK_PERIOD_YEAR_COUNT)]

    parts = computation.fields.work_period.split(" ")
    selected_month = parts[0] if parts and parts[0] in MONTH_NAMES else MONTH_NAMES[today.month - 1]
    selected_year = parts[1] if len(parts) > 1 and parts[1].isdigit() else str(today.year)

    return MonthYearOptions(
        months=MONTH_NAMES,
        years=years,
        selected_month=selected_month,
        selected_year=selected_year,
        month_action=field_change("work_period_month"),
        year_action=field_change("work_period_year"),
    )


def build_field(computation: InvoiceComputation, field: FieldSpec, editing: bool) -> ViewField:
    value = computation.field_values[field.key]
    view_field = ViewField(key=field.key, label=field.label, value=value)

    if field.key == "payment_due_date":
        # Always derived, so it stays read-only and explains itself while editing
        if editing:
            view_field.hint = DUE_DATE_HINT
        return view_field

    if not editing:
        return view_field

    if field.key in TEXT_FIELDS:
        view_field.control = "text"
        view_field.input_value = value
        view_field.on_change = field_change(field.key)
    elif field.key == "invoice_date":
        view_field.control = "date"
        view_field.input_value = computation.fields.invoice_date
        view_field.on_change = field_change("invoice_date")
    elif field.key == "work_period":
        view_field.control = "month_year"
        view_field.input_value = value
        view_field.options = work_period_options(computation)
    return view_field


def build_row(computation: InvoiceComputation, index: int, editing: bool) -> LiveRow:
    item = computation.line_items[index]
    texts = computation.rows[index]
    cells = []
    for column, title, text in zip(computation.spec.columns, computation.columns, texts):
        cells.append(build_cell(column, title, text, item, editing))

    remove = None
    if editing:
        remove = ChangeAction(event="remove_employee", employee_id=item.employee_id)
    return LiveRow(employee_id=item.employee_id, cells=cells, remove=remove)


def build_cell(column: ColumnSpec, title: str, text: str, item, editing: bool) -> ViewField:
    cell = ViewField(key=column.key, label=title, value=text)
    if not editing or column.key not in ROW_CONTROLS:
        return cell

    control, attribute = ROW_CONTROLS[column.key]
    cell.control = control
    cell.input_value = getattr(item, attribute)
    cell.on_change = ChangeAction(
        event="employee_change",
        field=attribute,
        employee_id=item.employee_id,
    )
    return cell


def render_live_view(computation: InvoiceComputation, editing: bool = False) -> LiveView:
    """
    Describe the on-screen invoice for a computation.

    Args:
        computation: Result of services.invoices.build_invoice
        editing: When True, editable values are bound to controls

    Returns:
        LiveView whose display strings equal the export document's
    """
    spec = computation.spec
    template = computation.template

    company = LiveCompany(
        name=computation.company.name,
        subtitle=computation.company.subtitle,
        lines=list(computation.company.lines),
        logo_url=LOGO_URL if template.features.show_logo else None,
        logo_size=spec.logo_size,
    )

    sections = [
        LiveSection(
            key=section.key,
            title=section.title,
            fields=[build_field(computation, field, editing) for field in section.fields],
        )
        for section in spec.sections
    ]

    rows = [build_row(computation, i, editing) for i in range(len(computation.line_items))]

    return LiveView(
        template_id=template.id,
        layout=spec.layout.value,
        editing=editing,
        theme=LiveTheme(
            colors=template.colors,
            fonts=template.fonts,
            features=template.features,
            header_fill=spec.header_fill,
        ),
        company=company,
        title=spec.title,
        subtitle=spec.subtitle,
        sections=sections,
        columns=computation.columns,
        rows=rows,
        total_row=computation.total_row,
        grand_total=computation.total_text,
        total_caption=spec.total_caption,
        wire_note=spec.wire_note,
        footer_notes=list(spec.footer_notes),
        watermark=computation.watermark,
    )
