"""Tests for effective invoice field derivation."""

from datetime import date

from services.fields import derive_effective_fields, generate_invoice_number


def test_invoice_number_from_name_and_month():
    assert generate_invoice_number("West Horminics", date(2025, 3, 10)) == "INVOICE-WEST-MAR25"


def test_invoice_number_ignores_non_letters():
    assert generate_invoice_number("A1 b-2", date(2026, 11, 2)) == "INVOICE-AB-NOV26"


def test_invoice_number_for_name_without_letters():
    assert generate_invoice_number("123", date(2025, 1, 1)) == "INVOICE--JAN25"


def test_generated_number_when_stored_is_empty(sample_project, today):
    fields = derive_effective_fields(sample_project, today)
    assert fields.invoice_number == "INVOICE-WEST-MAR25"


def test_blank_stored_number_is_treated_as_empty(sample_project, today):
    project = sample_project.model_copy(update={"invoice_number": "   "})
    assert derive_effective_fields(project, today).invoice_number == "INVOICE-WEST-MAR25"


def test_stored_number_used_verbatim(sample_project, today):
    project = sample_project.model_copy(update={"invoice_number": "INV-007"})
    assert derive_effective_fields(project, today).invoice_number == "INV-007"


def test_stored_due_date_is_ignored(sample_project, today):
    fields = derive_effective_fields(sample_project, today)
    assert fields.invoice_date == "2025-03-31"
    assert fields.payment_due_date == "2025-04-15"


def test_missing_date_and_period_default_to_current_month(sample_project, today):
    project = sample_project.model_copy(update={"invoice_date": "", "work_period": ""})
    fields = derive_effective_fields(project, today)
    assert fields.invoice_date == "2025-03-31"
    assert fields.payment_due_date == "2025-04-15"
    assert fields.work_period == "March 2025"


def test_slash_stored_date_is_normalized(sample_project, today):
    project = sample_project.model_copy(update={"invoice_date": "20/12/25"})
    fields = derive_effective_fields(project, today)
    assert fields.invoice_date == "2025-12-20"
    assert fields.payment_due_date == "2026-01-04"
