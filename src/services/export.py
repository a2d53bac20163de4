"""
Export document renderer.

Produces the standalone HTML invoice: inline CSS, no scripts, and the company
logo as the only external reference. One Jinja2 template per layout, all
extending base.html.
"""

from pathlib import Path
from typing import TYPE_CHECKING

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from core.config import LOGO_ALT, LOGO_URL

if TYPE_CHECKING:
    from services.invoices import InvoiceComputation

TEMPLATES_DIR = Path(__file__).parent / "templates"

jinja_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    undefined=StrictUndefined,
    autoescape=select_autoescape(["html", "xml"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


def export_filename(computation: "InvoiceComputation", extension: str = "html") -> str:
    """Download filename: Invoice-<invoiceNumber>.<ext>"""
    return f"Invoice-{computation.fields.invoice_number}.{extension}"


def build_context(computation: "InvoiceComputation") -> dict:
    """Template context. Values are the computation's preformatted strings."""
    template = computation.template
    spec = computation.spec
    return {
        "doc": computation,
        "spec": spec,
        "colors": template.colors,
        "fonts": template.fonts,
        "features": template.features,
        "company": computation.company,
        "logo": {"url": LOGO_URL, "alt": LOGO_ALT, "size": spec.logo_size},
        "sections": spec.sections,
        "values": computation.field_values,
        "columns": computation.columns,
        "column_specs": spec.columns,
        "rows": computation.rows,
        "total_row": computation.total_row,
        "grand_total": computation.total_text,
        "watermark": computation.watermark,
        "page_title": f"Invoice-{computation.fields.invoice_number}",
    }


def render_export_html(computation: "InvoiceComputation") -> str:
    """Render the export document for the computation's layout."""
    jinja_template = jinja_env.get_template(f"{computation.spec.layout.value}.html")
    return jinja_template.render(**build_context(computation))
