"""
Invoice template profile models.

Templates are fixed catalog data (see services.catalog), not user records.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict

TemplateCategory = Literal["invoice", "report", "statement"]
HeaderStyle = Literal["full", "compact", "split"]
TableStyle = Literal["standard", "striped", "minimal"]


class TemplateColors(BaseModel):
    model_config = ConfigDict(frozen=True)

    primary: str
    secondary: str
    text: str
    background: str


class TemplateFonts(BaseModel):
    model_config = ConfigDict(frozen=True)

    header: str
    body: str


class TemplateFeatures(BaseModel):
    model_config = ConfigDict(frozen=True)

    show_logo: bool
    show_border: bool
    show_watermark: bool
    header_style: HeaderStyle
    table_style: TableStyle


class InvoiceTemplate(BaseModel):
    """
    A named visual profile.

    `layout` is one of standard/modern/minimal/corporate for catalog entries;
    renderers treat any other value as standard.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    category: TemplateCategory = "invoice"
    layout: str
    colors: TemplateColors
    fonts: TemplateFonts
    features: TemplateFeatures
