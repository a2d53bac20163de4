"""Tests for the template catalog and the selected-template preference."""

import pytest

from services.catalog import (
    AVAILABLE_TEMPLATES,
    DEFAULT_TEMPLATE_ID,
    get_template_by_id,
    get_templates_by_category,
    resolve_template,
)
from services.settings import TemplatePreferenceStore


class TestCatalog:
    def test_four_templates_in_order(self):
        assert [t.id for t in AVAILABLE_TEMPLATES] == ["standard", "modern", "minimal", "corporate"]
        assert [t.layout for t in AVAILABLE_TEMPLATES] == ["standard", "modern", "minimal", "corporate"]

    def test_default_is_standard(self):
        assert DEFAULT_TEMPLATE_ID == "standard"

    def test_lookup(self):
        assert get_template_by_id("modern").name == "Modern Gradient"
        assert get_template_by_id("nope") is None
        assert get_template_by_id(None) is None

    def test_resolve_falls_back_to_standard(self):
        assert resolve_template("nope").id == "standard"
        assert resolve_template(None).id == "standard"
        assert resolve_template("corporate").id == "corporate"

    def test_by_category(self):
        assert len(get_templates_by_category("invoice")) == 4
        assert get_templates_by_category("report") == []

    def test_only_corporate_enables_watermark(self):
        enabled = [t.id for t in AVAILABLE_TEMPLATES if t.features.show_watermark]
        assert enabled == ["corporate"]


class TestPreferenceStore:
    def test_missing_file_loads_default(self, tmp_path):
        store = TemplatePreferenceStore(tmp_path / "settings.json")
        assert store.load() == "standard"

    def test_save_then_load(self, tmp_path):
        store = TemplatePreferenceStore(tmp_path / "nested" / "settings.json")
        store.save("modern")
        assert store.load() == "modern"
        assert store.selected_template().id == "modern"

    def test_corrupt_file_loads_default(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("{not json", encoding="utf-8")
        assert TemplatePreferenceStore(path).load() == "standard"

    def test_unknown_saved_id_loads_default(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text('{"selected_template_id": "retro"}', encoding="utf-8")
        assert TemplatePreferenceStore(path).load() == "standard"

    def test_save_rejects_unknown_id(self, tmp_path):
        store = TemplatePreferenceStore(tmp_path / "settings.json")
        with pytest.raises(ValueError):
            store.save("retro")
        assert not store.path.exists()
