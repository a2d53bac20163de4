"""Tests for the spreadsheet import."""

from io import BytesIO

import pytest
from openpyxl import load_workbook

from core.config import SAMPLE_IMPORT_HEADERS
from models.projects import Project
from services.imports import (
    ImportSession,
    SpreadsheetFormatError,
    apply_import,
    build_sample_workbook,
    group_by_project,
    match_project,
    match_projects,
    parse_rows,
)

HEADER = ("Employee Name", "Project Name", "Rate Per Hour", "Hours", "Total Amount")


def project(name: str, project_id: str | None = None) -> Project:
    return Project(id=project_id or name, name=name)


class TestParseRows:
    def test_valid_rows(self):
        entries = parse_rows([
            HEADER,
            ("John Doe", "West Horminics", 15.25, 160, 2440),
            ("Jane Smith", "West Horminics", "17", "160", None),
        ])
        assert [e.employee_name for e in entries] == ["John Doe", "Jane Smith"]
        assert entries[1].rate == 17.0
        assert entries[1].amount == 2720.0

    def test_zero_amount_uses_rate_times_hours(self):
        (entry,) = parse_rows([HEADER, ("A", "P", 10, 2, 0)])
        assert entry.amount == 20.0

    def test_invalid_rows_dropped(self):
        entries = parse_rows([
            HEADER,
            ("", "West Horminics", 10, 1, None),
            ("John", None, 10, 1, None),
            ("Jane", "West", 0, 0, None),
            ("Bob", "West", "n/a", "8", None),
        ])
        assert [(e.employee_name, e.rate, e.hours) for e in entries] == [("Bob", 0.0, 8.0)]

    def test_leading_number_in_text_cell(self):
        (entry,) = parse_rows([HEADER, ("A", "P", "12.5 EUR", "160h", None)])
        assert (entry.rate, entry.hours) == (12.5, 160.0)

    def test_short_row_padded(self):
        (entry,) = parse_rows([HEADER, ("A", "P", 10)])
        assert entry.hours == 0
        assert entry.amount == 0

    def test_needs_data_row(self):
        with pytest.raises(ValueError, match="header row and one data row"):
            parse_rows([HEADER])

    def test_needs_four_header_columns(self):
        with pytest.raises(ValueError, match="at least 4 columns"):
            parse_rows([("Employee", "Project", "Rate"), ("A", "P", 1)])

    def test_no_valid_rows(self):
        with pytest.raises(ValueError, match="No valid employee data"):
            parse_rows([HEADER, ("", "", None, None, None)])


class TestMatching:
    def test_group_by_project_keeps_first_appearance_order(self):
        entries = parse_rows([
            HEADER,
            ("A", "North", 1, 1, None),
            ("B", "West", 1, 1, None),
            ("C", "North", 1, 1, None),
        ])
        grouped = group_by_project(entries)
        assert list(grouped) == ["North", "West"]
        assert [e.employee_name for e in grouped["North"]] == ["A", "C"]

    def test_exact_match_is_case_insensitive_and_trimmed(self):
        projects = [project("West Horminics")]
        assert match_project("  west HORMINICS ", projects).name == "West Horminics"

    def test_exact_match_preferred_over_earlier_partial(self):
        projects = [project("West Horminics Extended"), project("West Horminics")]
        assert match_project("West Horminics", projects).name == "West Horminics"

    def test_partial_match_either_direction(self):
        projects = [project("West Horminics")]
        assert match_project("Horminics", projects).name == "West Horminics"
        assert match_project("West Horminics Phase 2", projects).name == "West Horminics"

    def test_no_match(self):
        assert match_project("Unknown", [project("West Horminics")]) is None
        assert match_project("", [project("West Horminics")]) is None


class TestImportSession:
    def test_rejects_non_spreadsheet_name(self):
        with pytest.raises(SpreadsheetFormatError):
            ImportSession("hours.csv", b"a,b,c")

    def test_rejects_unreadable_content(self):
        with pytest.raises(SpreadsheetFormatError):
            ImportSession("hours.xlsx", b"not a zip file")

    def test_select_sheet(self, make_workbook):
        content = make_workbook({
            "January": [list(HEADER), ["A", "West", 10, 1, None]],
            "February": [list(HEADER), ["B", "East", 20, 2, None], ["C", "East", 20, 3, None]],
        })
        session = ImportSession("hours.xlsx", content)
        assert session.sheet_names == ["January", "February"]

        assert [e.employee_name for e in session.select_sheet()] == ["A"]
        assert session.selected_sheet == "January"

        session.select_sheet("February")
        assert [e.employee_name for e in session.entries] == ["B", "C"]

    def test_unknown_sheet(self, make_workbook):
        session = ImportSession("hours.xlsx", make_workbook({"Data": [list(HEADER)]}))
        with pytest.raises(ValueError, match="Sheet not found"):
            session.select_sheet("Other")

    def test_failed_sheet_clears_previous_results(self, make_workbook):
        content = make_workbook({
            "Good": [list(HEADER), ["A", "West", 10, 1, None]],
            "Empty": [list(HEADER)],
        })
        session = ImportSession("hours.xlsx", content)
        session.select_sheet("Good")
        with pytest.raises(ValueError):
            session.select_sheet("Empty")
        assert session.entries == []


class TestApplyImport:
    def test_appends_and_sets_work_period(self, repository, project_create, today):
        existing = repository.create_project(project_create)
        entries = parse_rows([
            HEADER,
            ("Bob Johnson", "West Horminics", 18.5, 140, None),
            ("Nobody", "Unknown Project", 10, 10, None),
        ])
        matches = match_projects(entries, repository.list_projects())

        result = apply_import(repository, matches, today)

        assert result.imported_employees == 1
        assert [m.project_name for m in result.skipped] == ["Unknown Project"]
        updated = repository.get_project(existing.id)
        assert [e.name for e in updated.employees] == ["John Doe", "Jane Smith", "Bob Johnson"]
        assert updated.work_period == "March 2025"
        assert updated.total_amount == pytest.approx(5160 + 18.5 * 140)
        assert len(repository.list_projects()) == 1

    def test_groups_matching_same_project_are_merged(self, repository, project_create, today):
        existing = repository.create_project(project_create.model_copy(update={"employees": []}))
        entries = parse_rows([
            HEADER,
            ("A", "West Horminics", 10, 1, None),
            ("B", "west horminics", 10, 2, None),
        ])
        matches = match_projects(entries, repository.list_projects())
        assert len(matches) == 2

        result = apply_import(repository, matches, today)

        assert len(result.updated_projects) == 1
        assert [e.name for e in repository.get_project(existing.id).employees] == ["A", "B"]


def test_sample_workbook_uses_project_names():
    content = build_sample_workbook(["Alpha"])
    ws = load_workbook(BytesIO(content)).active
    rows = list(ws.iter_rows(values_only=True))

    assert ws.title == "Employee Data"
    assert list(rows[0]) == SAMPLE_IMPORT_HEADERS
    assert [r[1] for r in rows[1:]] == ["Alpha", "Alpha", "East Analytics", "North Platform"]


def test_sample_workbook_parses_back():
    entries = parse_rows(list(load_workbook(BytesIO(build_sample_workbook())).active.iter_rows(values_only=True)))
    assert len(entries) == 4
    assert entries[0].amount == 2440

