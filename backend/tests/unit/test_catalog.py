"""
Unit tests for the milestone template catalog.

Tests cover:
- The standard construction catalog
- Normalization of malformed entries
- Loading catalogs from JSON files
"""

import json

import pytest

from skills.milestone_scheduler import (
    DEFAULT_CATALOG,
    STANDARD_TEMPLATES,
    InvalidCatalogError,
    MilestoneCatalog,
    MilestoneTemplate,
)


class TestStandardCatalog:
    """Tests for the built-in catalog."""

    def test_keeps_declaration_order(self):
        assert DEFAULT_CATALOG.keys() == [t["key"] for t in STANDARD_TEMPLATES]
        assert DEFAULT_CATALOG.keys()[0] == "notice"
        assert DEFAULT_CATALOG.keys()[-1] == "projectComplete"

    def test_has_every_template(self):
        assert len(DEFAULT_CATALOG) == 25

    def test_parents_are_shallower(self):
        """Every parent key references a template with a lower indent."""
        for template in DEFAULT_CATALOG.templates:
            if template.parent_key is None:
                continue
            parent = DEFAULT_CATALOG.get(template.parent_key)
            assert parent is not None
            assert parent.indent < template.indent

    def test_templates_are_immutable(self):
        template = DEFAULT_CATALOG.templates[0]
        with pytest.raises(Exception):
            template.duration = 99


class TestFromEntries:
    """Tests for MilestoneCatalog.from_entries normalization."""

    def test_skips_entry_without_key(self):
        catalog = MilestoneCatalog.from_entries([
            {"title": "No key", "duration": 3},
            {"key": "  ", "title": "Blank key"},
            {"key": "ok", "title": "Fine", "duration": 2},
        ])
        assert catalog.keys() == ["ok"]

    def test_skips_duplicate_key(self):
        catalog = MilestoneCatalog.from_entries([
            {"key": "a", "title": "First"},
            {"key": "a", "title": "Second"},
        ])
        assert len(catalog) == 1
        assert catalog.get("a").title == "First"

    def test_defaults_malformed_fields(self):
        catalog = MilestoneCatalog.from_entries([
            {"key": "x", "title": 42, "duration": "soon", "indent": "deep", "color": None},
        ])
        template = catalog.get("x")
        assert template.title == "Unnamed Milestone"
        assert template.duration == 0
        assert template.indent == 0
        assert template.color == "#3B82F6"

    def test_negative_values_clamped(self):
        catalog = MilestoneCatalog.from_entries([{"key": "x", "duration": -4, "indent": -1}])
        assert catalog.get("x").duration == 0
        assert catalog.get("x").indent == 0

    def test_numeric_strings_accepted(self):
        catalog = MilestoneCatalog.from_entries([{"key": "x", "duration": "12"}])
        assert catalog.get("x").duration == 12

    def test_parent_alias(self):
        catalog = MilestoneCatalog.from_entries([
            {"key": "p", "indent": 0},
            {"key": "c", "indent": 1, "parent": "p"},
        ])
        assert catalog.get("c").parent_key == "p"

    def test_skips_non_mapping_entries(self):
        catalog = MilestoneCatalog.from_entries([None, "oops", {"key": "ok"}])
        assert catalog.keys() == ["ok"]

    def test_accepts_template_instances(self):
        template = MilestoneTemplate(key="t", title="T", duration=1)
        assert MilestoneCatalog.from_entries([template]).templates == (template,)

    def test_non_list_yields_empty_catalog(self):
        assert len(MilestoneCatalog.from_entries({"key": "a"})) == 0
        assert len(MilestoneCatalog.from_entries(None)) == 0


class TestFromJsonFile:
    """Tests for loading catalogs from disk."""

    def test_loads_list(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps([
            {"key": "design", "title": "Design", "duration": 5},
            {"key": "build", "title": "Build", "duration": 20},
        ]))

        catalog = MilestoneCatalog.from_json_file(path)

        assert catalog.keys() == ["design", "build"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(InvalidCatalogError, match="not found"):
            MilestoneCatalog.from_json_file(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(InvalidCatalogError):
            MilestoneCatalog.from_json_file(path)

    def test_object_instead_of_list(self, tmp_path):
        path = tmp_path / "obj.json"
        path.write_text(json.dumps({"key": "a"}))
        with pytest.raises(InvalidCatalogError, match="list"):
            MilestoneCatalog.from_json_file(path)
