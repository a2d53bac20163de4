"""
Invoice template catalog.

Four fixed profiles, one per layout. The set is not user-extensible; only the
selection is persisted (see services.settings).
"""

from models.templates import InvoiceTemplate, TemplateColors, TemplateFeatures, TemplateFonts

# All catalog entries share the orange palette
ORANGE_COLORS = TemplateColors(
    primary="#f97316",
    secondary="#fed7aa",
    text="#1f2937",
    background="#ffffff",
)

AVAILABLE_TEMPLATES: tuple[InvoiceTemplate, ...] = (
    InvoiceTemplate(
        id="standard",
        name="Standard Professional",
        description="Clean and professional layout with company branding",
        layout="standard",
        colors=ORANGE_COLORS,
        fonts=TemplateFonts(header="Arial, sans-serif", body="Arial, sans-serif"),
        features=TemplateFeatures(
            show_logo=True,
            show_border=True,
            show_watermark=False,
            header_style="full",
            table_style="standard",
        ),
    ),
    InvoiceTemplate(
        id="modern",
        name="Modern Gradient",
        description="Contemporary design with gradient accents and modern typography",
        layout="modern",
        colors=ORANGE_COLORS,
        fonts=TemplateFonts(header="Helvetica, sans-serif", body="Helvetica, sans-serif"),
        features=TemplateFeatures(
            show_logo=True,
            show_border=False,
            show_watermark=False,
            header_style="split",
            table_style="striped",
        ),
    ),
    InvoiceTemplate(
        id="minimal",
        name="Minimal Clean",
        description="Minimal design focusing on simplicity and readability",
        layout="minimal",
        colors=ORANGE_COLORS,
        fonts=TemplateFonts(header="Georgia, serif", body="Georgia, serif"),
        features=TemplateFeatures(
            show_logo=True,
            show_border=False,
            show_watermark=False,
            header_style="compact",
            table_style="minimal",
        ),
    ),
    InvoiceTemplate(
        id="corporate",
        name="Corporate Orange",
        description="Traditional corporate styling with professional orange theme",
        layout="corporate",
        colors=ORANGE_COLORS,
        fonts=TemplateFonts(header="Times New Roman, serif", body="Times New Roman, serif"),
        features=TemplateFeatures(
            show_logo=True,
            show_border=True,
            show_watermark=True,
            header_style="full",
            table_style="standard",
        ),
    ),
)

DEFAULT_TEMPLATE_ID = AVAILABLE_TEMPLATES[0].id

_TEMPLATES_BY_ID = {template.id: template for template in AVAILABLE_TEMPLATES}


def get_template_by_id(template_id: str | None) -> InvoiceTemplate | None:
    """Look up a catalog entry. Returns None for unknown ids."""
    if not template_id:
        return None
    return _TEMPLATES_BY_ID.get(template_id)


def get_templates_by_category(category: str) -> list[InvoiceTemplate]:
    return [t for t in AVAILABLE_TEMPLATES if t.category == category]


def resolve_template(template_id: str | None) -> InvoiceTemplate:
    """Look up a catalog entry, falling back to the default (standard)."""
    return get_template_by_id(template_id) or _TEMPLATES_BY_ID[DEFAULT_TEMPLATE_ID]
