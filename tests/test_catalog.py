"""Tests for the capability catalog and the static tool table."""

import pytest

from core.catalog import CapabilityCatalog
from core.errors import DuplicateCapability, UnknownCapability
from core.models import ToolManifest
from tools.provider import split_reference
from tools.registry import TOOL_MANIFEST, build_catalog, summarize


class TestCapabilityCatalog:

    def test_names_keep_insertion_order(self, catalog):
        assert catalog.names() == ["echo", "fail", "other"]
        assert list(catalog) == ["echo", "fail", "other"]
        assert len(catalog) == 3

    def test_loader_for_known_name(self, catalog):
        assert catalog.loader_for("fail") == "fake:Broken"

    def test_loader_for_unknown_name(self, catalog):
        with pytest.raises(UnknownCapability, match="Tool not found in registry: nope"):
            catalog.loader_for("nope")

    def test_duplicate_names_rejected_at_build(self):
        with pytest.raises(DuplicateCapability) as info:
            CapabilityCatalog([("a", "m:A"), ("b", "m:B"), ("a", "m:C")])
        assert info.value.name == "a"

    def test_contains(self, catalog):
        assert "echo" in catalog
        assert "nope" not in catalog

    def test_from_manifest_uses_name_and_loader(self):
        rows = [
            ToolManifest(name="x", loader="pkg.mod:X", description="X tool"),
            ToolManifest(name="y", loader="pkg.mod:Y", description="Y tool"),
        ]
        catalog = CapabilityCatalog.from_manifest(rows)
        assert catalog.names() == ["x", "y"]
        assert catalog.loader_for("y") == "pkg.mod:Y"

    def test_empty_catalog(self):
        catalog = CapabilityCatalog([])
        assert catalog.names() == []
        with pytest.raises(UnknownCapability):
            catalog.loader_for("anything")


class TestToolTable:
    """The shipped Ordiscan table."""

    def test_has_thirty_unique_tools(self):
        catalog = build_catalog()
        assert len(catalog) == 30
        assert len(set(catalog.names())) == 30

    def test_main_tool_first(self):
        assert build_catalog().names()[0] == "ordiscan_main"

    def test_every_loader_is_a_handler_reference(self):
        for entry in TOOL_MANIFEST:
            module_path, attr = split_reference(entry.loader)
            assert module_path.startswith("tools.handlers."), entry.name
            assert attr.endswith("Tool"), entry.name

    def test_every_schema_is_an_object_with_api_key(self):
        for entry in TOOL_MANIFEST:
            assert entry.parameters["type"] == "object"
            assert "api_key" in entry.parameters["properties"]
            for required in entry.parameters["required"]:
                assert required in entry.parameters["properties"], entry.name

    def test_summary_counts_every_tool(self):
        counts = summarize()
        assert sum(counts.values()) == 30
        assert counts["Main"] == 1
        assert counts["Sat"] == 3
