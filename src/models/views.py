"""
Live (editable) invoice view.

The view is a description only: bound controls carry the ChangeAction a client
dispatches when the control changes. Applying it is the editing session's job
(services.editing), never the view's.
"""

from typing import Literal

from pydantic import BaseModel

from models.templates import TemplateColors, TemplateFeatures, TemplateFonts

ControlType = Literal["readonly", "text", "number", "date", "month_year"]
ChangeEvent = Literal["field_change", "employee_change", "remove_employee"]


class ChangeAction(BaseModel):
    """Notification a control dispatches upward."""

    event: ChangeEvent
    field: str | None = None
    employee_id: str | None = None


class MonthYearOptions(BaseModel):
    months: list[str]
    years: list[str]
    selected_month: str
    selected_year: str
    month_action: ChangeAction
    year_action: ChangeAction


class ViewField(BaseModel):
    """
    One labelled value.

    `value` is the display string and matches the export document exactly.
    `input_value` is what a bound control is initialized with.
    """

    key: str
    label: str
    value: str
    control: ControlType = "readonly"
    input_value: str | float | None = None
    hint: str | None = None
    options: MonthYearOptions | None = None
    on_change: ChangeAction | None = None


class LiveSection(BaseModel):
    key: str
    title: str | None = None
    fields: list[ViewField]


class LiveRow(BaseModel):
    employee_id: str
    cells: list[ViewField]
    remove: ChangeAction | None = None


class LiveCompany(BaseModel):
    name: str
    subtitle: str | None = None
    lines: list[str]
    logo_url: str | None = None
    logo_size: int


class LiveTheme(BaseModel):
    colors: TemplateColors
    fonts: TemplateFonts
    features: TemplateFeatures
    header_fill: str


class LiveView(BaseModel):
    """Editable on-screen invoice."""

    template_id: str
    layout: str
    editing: bool
    theme: LiveTheme
    company: LiveCompany
    title: str
    subtitle: str | None = None
    sections: list[LiveSection]
    columns: list[str]
    rows: list[LiveRow]
    total_row: list[str]
    grand_total: str
    total_caption: str | None = None
    wire_note: str | None = None
    footer_notes: list[str] = []
    watermark: str | None = None


class FieldChange(BaseModel):
    """A dispatched ChangeAction together with the new value."""

    event: ChangeEvent
    field: str | None = None
    employee_id: str | None = None
    value: str | float | None = None
