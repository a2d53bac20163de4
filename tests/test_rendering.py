"""
Tests for invoice rendering.

The live view and the export document are produced from one computation; the
strings a reader sees must be identical in both.
"""

import pytest

from core.config import LOGO_URL
from services.catalog import AVAILABLE_TEMPLATES, get_template_by_id
from services.export import export_filename, render_export_html
from services.invoices import build_invoice, generate_invoice_document
from services.layouts import Layout
from services.live_view import render_live_view

TEMPLATE_IDS = [t.id for t in AVAILABLE_TEMPLATES]
WATERMARK_DIV = '<div class="watermark">KIZORA</div>'


def live_field_values(view) -> dict[str, str]:
    return {f.key: f.value for section in view.sections for f in section.fields}


@pytest.mark.parametrize("template_id", TEMPLATE_IDS)
def test_live_and_export_strings_match(sample_project, today, template_id):
    computation = build_invoice(sample_project, get_template_by_id(template_id), today)
    html = render_export_html(computation)
    view = render_live_view(computation)

    assert [[cell.value for cell in row.cells] for row in view.rows] == computation.rows
    for row in computation.rows:
        for cell in row:
            assert f">{cell}</td>" in html

    assert view.grand_total == computation.total_text == "EUR 5160.00"
    assert "EUR 5160.00" in html

    values = live_field_values(view)
    for key in ("invoice_number", "invoice_date", "payment_due_date"):
        assert values[key] == computation.field_values[key]
        assert values[key] in html
    assert values["invoice_number"] == "INVOICE-WEST-MAR25"
    assert values["payment_due_date"] == "2025-04-15"


@pytest.mark.parametrize("template_id", TEMPLATE_IDS)
def test_zero_employees(empty_project, today, template_id):
    computation = build_invoice(empty_project, get_template_by_id(template_id), today)
    html = render_export_html(computation)
    view = render_live_view(computation)

    assert view.rows == []
    assert view.grand_total == "EUR 0.00"
    assert "EUR 0.00" in html
    for title in computation.columns:
        assert f">{title}</th>" in html


def test_rows_use_current_rate_and_hours(sample_project, today):
    computation = build_invoice(sample_project, get_template_by_id("standard"), today)
    assert computation.rows[0] == ["1", "John Doe", "15.25", "160", "EUR 2440.00"]
    assert computation.columns == ["S.No.", "Name", "EUR/ph", "Hours", "Total"]
    assert computation.total_row == ["", "Total", "", "", "EUR 5160.00"]


def test_minimal_layout_has_no_index_column(sample_project, today):
    computation = build_invoice(sample_project, get_template_by_id("minimal"), today)
    assert computation.rows[1] == ["Jane Smith", "EUR 17.00", "160", "EUR 2720.00"]
    assert computation.total_row == ["", "", "TOTAL", "EUR 5160.00"]


def test_unknown_layout_renders_as_standard(sample_project, today):
    standard = get_template_by_id("standard")
    unknown = standard.model_copy(update={"layout": "retro"})

    computation = build_invoice(sample_project, unknown, today)
    assert computation.spec.layout == Layout.STANDARD

    expected = render_export_html(build_invoice(sample_project, standard, today))
    assert render_export_html(computation) == expected


@pytest.mark.parametrize("template_id", TEMPLATE_IDS)
def test_watermark_only_for_corporate(sample_project, today, template_id):
    computation = build_invoice(sample_project, get_template_by_id(template_id), today)
    html = render_export_html(computation)
    view = render_live_view(computation)

    if template_id == "corporate":
        assert view.watermark == "KIZORA"
        assert WATERMARK_DIV in html
    else:
        assert view.watermark is None
        assert WATERMARK_DIV not in html


def test_watermark_needs_layout_support(sample_project, today):
    standard = get_template_by_id("standard")
    features = standard.features.model_copy(update={"show_watermark": True})
    template = standard.model_copy(update={"features": features})
    assert build_invoice(sample_project, template, today).watermark is None


def test_corporate_watermark_can_be_disabled(sample_project, today):
    corporate = get_template_by_id("corporate")
    features = corporate.features.model_copy(update={"show_watermark": False})
    template = corporate.model_copy(update={"features": features})
    assert build_invoice(sample_project, template, today).watermark is None


def test_export_is_self_contained(sample_project, today):
    html = render_export_html(build_invoice(sample_project, get_template_by_id("modern"), today))
    assert html.startswith("<!DOCTYPE html>")
    assert "<style>" in html
    assert "<script" not in html
    assert "linear-gradient" in html
    assert LOGO_URL.split("?")[0] in html


def test_export_escapes_project_text(sample_project, today):
    project = sample_project.model_copy(update={"customer_name": "<b>Acme & Co</b>"})
    html = render_export_html(build_invoice(project, get_template_by_id("standard"), today))
    assert "&lt;b&gt;Acme &amp; Co&lt;/b&gt;" in html
    assert "<b>Acme" not in html


def test_generate_invoice_document(sample_project, today):
    document = generate_invoice_document(sample_project, "corporate", today)
    assert document.filename == "Invoice-INVOICE-WEST-MAR25.html"
    assert document.media_type == "text/html"
    assert document.employee_count == 2
    assert document.total_amount == 5160.0
    assert "TAX INVOICE" in document.content


def test_generate_invoice_document_unknown_template(sample_project, today):
    document = generate_invoice_document(sample_project, "retro", today)
    assert "Customer Invoice (Electronic)" in document.content


def test_export_filename_uses_stored_number(sample_project, today):
    project = sample_project.model_copy(update={"invoice_number": "INV-042"})
    computation = build_invoice(project, get_template_by_id("standard"), today)
    assert export_filename(computation) == "Invoice-INV-042.html"


class TestLiveViewControls:
    def test_read_only_when_not_editing(self, sample_project, today):
        view = render_live_view(build_invoice(sample_project, get_template_by_id("standard"), today))
        controls = {f.control for s in view.sections for f in s.fields}
        assert controls == {"readonly"}
        assert all(row.remove is None for row in view.rows)

    def test_editing_binds_controls(self, sample_project, today):
        computation = build_invoice(sample_project, get_template_by_id("corporate"), today)
        view = render_live_view(computation, editing=True)
        fields = {f.key: f for s in view.sections for f in s.fields}

        assert fields["customer_name"].control == "text"
        assert fields["customer_name"].on_change.field == "customer_name"
        assert fields["invoice_date"].control == "date"
        assert fields["invoice_date"].input_value == "2025-03-31"
        assert fields["payment_due_date"].control == "readonly"
        assert fields["payment_due_date"].hint == "(15 days after invoice date)"

        period = fields["work_period"]
        assert period.control == "month_year"
        assert period.options.selected_month == "March"
        assert period.options.selected_year == "2025"
        assert period.options.years[0] == "2023"
        assert len(period.options.years) == 10
        assert period.options.month_action.field == "work_period_month"

    def test_editing_rows(self, sample_project, today):
        view = render_live_view(
            build_invoice(sample_project, get_template_by_id("standard"), today), editing=True
        )
        row = view.rows[0]
        cells = {cell.key: cell for cell in row.cells}

        assert row.remove.event == "remove_employee"
        assert row.remove.employee_id == "e-1"
        assert cells["hours"].control == "number"
        assert cells["hours"].input_value == 160
        assert cells["hours"].on_change.field == "hours"
        assert cells["rate"].on_change.field == "rate_per_hour"
        assert cells["amount"].control == "readonly"
        assert cells["index"].control == "readonly"

    def test_theme_and_company(self, sample_project, today):
        view = render_live_view(build_invoice(sample_project, get_template_by_id("modern"), today))
        assert view.theme.header_fill == "gradient"
        assert view.theme.fonts.body == "Helvetica, sans-serif"
        assert view.company.name == "KIZORA SOFTWARE"
        assert view.company.subtitle == "PRIVATE LIMITED"
        assert view.company.logo_url == LOGO_URL
