"""
Layout descriptions shared by the live view and the export document.

Each of the four layouts is one LayoutSpec: its title block, how invoice fields
are grouped and labelled, the table columns, the total row and the closing
notes. Both renderers read these specs and the cell helpers below, so a row
or total can only be formatted one way per layout.
"""

from dataclasses import dataclass
from enum import Enum

from core.config import COMPANY_INFO
from services.calculator import LineItem, format_hours, format_money, format_rate


class Layout(str, Enum):
    STANDARD = "standard"
    MODERN = "modern"
    MINIMAL = "minimal"
    CORPORATE = "corporate"


@dataclass(frozen=True)
class FieldSpec:
    key: str  # Project / effective field name
    label: str


@dataclass(frozen=True)
class SectionSpec:
    key: str
    title: str | None
    fields: tuple[FieldSpec, ...]


@dataclass(frozen=True)
class ColumnSpec:
    key: str  # index | name | rate | hours | amount
    title: str  # may contain {currency}
    align: str = "left"


@dataclass(frozen=True)
class LayoutSpec:
    layout: Layout
    title: str
    subtitle: str | None
    header_fill: str  # none | solid | gradient
    company_name_words: int | None  # None prints the full name on one line
    company_lines: tuple[str, ...]  # formatted with COMPANY_INFO
    logo_size: int
    sections: tuple[SectionSpec, ...]
    columns: tuple[ColumnSpec, ...]
    total_label: str
    total_label_column: str
    rate_with_currency: bool
    total_caption: str | None
    wire_note: str | None
    footer_notes: tuple[str, ...]
    supports_watermark: bool = False


@dataclass(frozen=True)
class CompanyHeader:
    name: str
    subtitle: str | None
    lines: tuple[str, ...]


# Project fields edited through a plain text input
TEXT_FIELDS = (
    "customer_name",
    "customer_address",
    "contact_person",
    "email",
    "invoice_number",
    "sow_ref",
    "po_number",
    "invoice_purpose",
)

WIRE_NOTE = "Wire transfer charges to be borne by payer"
WIRE_DETAILS_NOTE = "Electronic wire transfer details for payment on next page"


LAYOUT_SPECS: dict[Layout, LayoutSpec] = {
    Layout.STANDARD: LayoutSpec(
        layout=Layout.STANDARD,
        title="Customer Invoice (Electronic)",
        subtitle=None,
        header_fill="none",
        company_name_words=None,
        company_lines=(
            "Address: {address}",
            "{city}",
            "Ph: {phone}",
            "GST: {gst}",
            "CIN: {cin}",
            "Website: {website} Email: {email}",
        ),
        logo_size=80,
        sections=(
            SectionSpec(
                key="customer",
                title=None,
                fields=(
                    FieldSpec("customer_name", "Customer"),
                    FieldSpec("customer_address", "Address"),
                    FieldSpec("contact_person", "Contact Person"),
                    FieldSpec("email", "Email"),
                ),
            ),
            SectionSpec(
                key="invoice",
                title=None,
                fields=(
                    FieldSpec("invoice_number", "Invoice Number"),
                    FieldSpec("invoice_date", "Invoice Date"),
                    FieldSpec("payment_due_date", "Payment Due Date"),
                    FieldSpec("sow_ref", "SOW REF"),
                ),
            ),
            SectionSpec(
                key="purpose",
                title=None,
                fields=(
                    FieldSpec("invoice_purpose", "Invoice Purpose"),
                    FieldSpec("work_period", "Work period"),
                ),
            ),
        ),
        columns=(
            ColumnSpec("index", "S.No."),
            ColumnSpec("name", "Name"),
            ColumnSpec("rate", "{currency}/ph"),
            ColumnSpec("hours", "Hours"),
            ColumnSpec("amount", "Total"),
        ),
        total_label="Total",
        total_label_column="name",
        rate_with_currency=False,
        total_caption="Total Invoice Amount",
        wire_note=WIRE_NOTE,
        footer_notes=(WIRE_DETAILS_NOTE,),
    ),
    Layout.MODERN: LayoutSpec(
        layout=Layout.MODERN,
        title="INVOICE",
        subtitle="Electronic Customer Invoice",
        header_fill="gradient",
        company_name_words=2,
        company_lines=(
            "{address}",
            "{city}",
            "Ph: {phone} | {website}",
        ),
        logo_size=64,
        sections=(
            SectionSpec(
                key="bill_to",
                title="Bill To:",
                fields=(
                    FieldSpec("customer_name", "Customer"),
                    FieldSpec("customer_address", "Address"),
                    FieldSpec("contact_person", "Contact"),
                    FieldSpec("email", "Email"),
                ),
            ),
            SectionSpec(
                key="invoice",
                title=None,
                fields=(
                    FieldSpec("invoice_number", "Invoice #"),
                    FieldSpec("invoice_date", "Date"),
                    FieldSpec("payment_due_date", "Due Date"),
                    FieldSpec("work_period", "Work Period"),
                    FieldSpec("invoice_purpose", "Project"),
                ),
            ),
        ),
        columns=(
            ColumnSpec("index", "#"),
            ColumnSpec("name", "Team Member"),
            ColumnSpec("rate", "Rate ({currency}/hr)"),
            ColumnSpec("hours", "Hours"),
            ColumnSpec("amount", "Amount"),
        ),
        total_label="TOTAL",
        total_label_column="hours",
        rate_with_currency=False,
        total_caption="Total Amount",
        wire_note=WIRE_NOTE,
        footer_notes=(),
    ),
    Layout.MINIMAL: LayoutSpec(
        layout=Layout.MINIMAL,
        title="Invoice",
        subtitle=None,
        header_fill="none",
        company_name_words=2,
        company_lines=(
            "{address}, {city}",
            "{email} | {phone} | {website}",
        ),
        logo_size=64,
        sections=(
            SectionSpec(
                key="client",
                title="Client",
                fields=(
                    FieldSpec("customer_name", "Name"),
                    FieldSpec("customer_address", "Address"),
                    FieldSpec("email", "Email"),
                ),
            ),
            SectionSpec(
                key="project",
                title="Project",
                fields=(
                    FieldSpec("invoice_purpose", "Purpose"),
                    FieldSpec("work_period", "Period"),
                ),
            ),
            SectionSpec(
                key="details",
                title="Details",
                fields=(
                    FieldSpec("invoice_number", "Invoice"),
                    FieldSpec("invoice_date", "Date"),
                    FieldSpec("payment_due_date", "Due"),
                ),
            ),
        ),
        columns=(
            ColumnSpec("name", "Description"),
            ColumnSpec("rate", "Rate"),
            ColumnSpec("hours", "Hours"),
            ColumnSpec("amount", "Amount", align="right"),
        ),
        total_label="TOTAL",
        total_label_column="hours",
        rate_with_currency=True,
        total_caption=None,
        wire_note=None,
        footer_notes=("Thank you for your business",),
    ),
    Layout.CORPORATE: LayoutSpec(
        layout=Layout.CORPORATE,
        title="TAX INVOICE",
        subtitle="Customer Electronic Invoice",
        header_fill="solid",
        company_name_words=None,
        company_lines=(
            "Registered Office: {address}",
            "{city}",
            "Phone: {phone} | Email: {email}",
            "GST: {gst} | CIN: {cin}",
        ),
        logo_size=96,
        sections=(
            SectionSpec(
                key="bill_to",
                title="Bill To",
                fields=(
                    FieldSpec("customer_name", "Customer Name"),
                    FieldSpec("customer_address", "Address"),
                    FieldSpec("contact_person", "Contact Person"),
                    FieldSpec("email", "Email Address"),
                ),
            ),
            SectionSpec(
                key="invoice",
                title="Invoice Details",
                fields=(
                    FieldSpec("invoice_number", "Invoice No."),
                    FieldSpec("invoice_date", "Date"),
                    FieldSpec("payment_due_date", "Due Date"),
                    FieldSpec("sow_ref", "SOW Reference"),
                    FieldSpec("work_period", "Work Period"),
                ),
            ),
            SectionSpec(
                key="purpose",
                title=None,
                fields=(FieldSpec("invoice_purpose", "Invoice Purpose"),),
            ),
        ),
        columns=(
            ColumnSpec("index", "S.No."),
            ColumnSpec("name", "Employee Name"),
            ColumnSpec("rate", "Rate ({currency}/Hr)"),
            ColumnSpec("hours", "Hours"),
            ColumnSpec("amount", "Total Amount"),
        ),
        total_label="GRAND TOTAL:",
        total_label_column="hours",
        rate_with_currency=False,
        total_caption="TOTAL INVOICE AMOUNT",
        wire_note="* " + WIRE_NOTE,
        footer_notes=(
            WIRE_DETAILS_NOTE,
            "This is a computer generated invoice and does not require physical signature",
        ),
        supports_watermark=True,
    ),
}


def get_layout_spec(layout: str | Layout | None) -> LayoutSpec:
    """Return the spec for a layout id. Unknown ids get the standard layout."""
    try:
        return LAYOUT_SPECS[Layout(layout)]
    except ValueError:
        return LAYOUT_SPECS[Layout.STANDARD]


def company_header(spec: LayoutSpec, info: dict = COMPANY_INFO) -> CompanyHeader:
    """Company name block as arranged by the layout."""
    name = info["name"]
    subtitle = None
    if spec.company_name_words:
        words = name.split(" ")
        name = " ".join(words[: spec.company_name_words])
        subtitle = " ".join(words[spec.company_name_words :]) or None
    lines = tuple(line.format(**info) for line in spec.company_lines)
    return CompanyHeader(name=name, subtitle=subtitle, lines=lines)


def table_header(spec: LayoutSpec, currency: str) -> list[str]:
    return [column.title.format(currency=currency) for column in spec.columns]


def cell_text(spec: LayoutSpec, column: ColumnSpec, item: LineItem, currency: str) -> str:
    if column.key == "index":
        return str(item.index)
    if column.key == "name":
        return item.name
    if column.key == "rate":
        if spec.rate_with_currency:
            return format_money(item.rate_per_hour, currency)
        return format_rate(item.rate_per_hour)
    if column.key == "hours":
        return format_hours(item.hours)
    if column.key == "amount":
        return format_money(item.amount, currency)
    raise ValueError(f"Unknown column: '{column.key}'")


def row_cells(spec: LayoutSpec, item: LineItem, currency: str) -> list[str]:
    """Display strings for one employee row, in column order."""
    return [cell_text(spec, column, item, currency) for column in spec.columns]


def total_cells(spec: LayoutSpec, total_text: str) -> list[str]:
    """Total row: label in its column, amount in the amount column."""
    cells = []
    for column in spec.columns:
        if column.key == "amount":
            cells.append(total_text)
        elif column.key == spec.total_label_column:
            cells.append(spec.total_label)
        else:
            cells.append("")
    return cells
