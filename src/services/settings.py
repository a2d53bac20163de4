"""
Selected-template preference.

One global selection, stored as a small JSON file. Reading never fails: a
missing, corrupt or unrecognized value means the default template.
"""

import json
from pathlib import Path

from pydantic import BaseModel, ValidationError

from core.config import SETTINGS_PATH
from models.templates import InvoiceTemplate
from services.catalog import DEFAULT_TEMPLATE_ID, get_template_by_id, resolve_template


class TemplatePreference(BaseModel):
    selected_template_id: str = DEFAULT_TEMPLATE_ID


class TemplatePreferenceStore:
    """Load/save contract for the selected template id."""

    def __init__(self, path: Path = SETTINGS_PATH):
        self.path = Path(path)

    def load(self) -> str:
        """Return the saved template id, or the default."""
        try:
            raw = self.path.read_text(encoding="utf-8")
            preference = TemplatePreference.model_validate_json(raw)
        except (OSError, ValueError, ValidationError):
            return DEFAULT_TEMPLATE_ID

        if get_template_by_id(preference.selected_template_id) is None:
            return DEFAULT_TEMPLATE_ID
        return preference.selected_template_id

    def save(self, template_id: str) -> InvoiceTemplate:
        """Persist a new selection. Unknown ids are rejected."""
        template = get_template_by_id(template_id)
        if template is None:
            raise ValueError(f"Unknown template: '{template_id}'")

        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = TemplatePreference(selected_template_id=template.id).model_dump()
        self.path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        return template

    def selected_template(self) -> InvoiceTemplate:
        return resolve_template(self.load())
