"""Tests for the importlib-based handler provider."""

import asyncio

import pytest

from tools.handlers.base import OrdiscanTool
from tools.provider import ModuleProvider, split_reference


class TestSplitReference:

    def test_module_and_attribute(self):
        assert split_reference("tools.handlers.runes:RuneMarketTool") == (
            "tools.handlers.runes",
            "RuneMarketTool",
        )

    @pytest.mark.parametrize("loader", ["tools.handlers.runes", ":Tool", "tools.handlers.runes:", ""])
    def test_malformed(self, loader):
        with pytest.raises(ValueError):
            split_reference(loader)


class TestModuleProvider:

    def test_builds_handler_with_options(self):
        provider = ModuleProvider({"api_key": "k", "base_url": "http://api.test/v1/", "timeout": 1.5})
        handler = asyncio.run(provider.construct("tools.handlers.runes:RuneMarketTool"))

        assert isinstance(handler, OrdiscanTool)
        assert handler.name == "ordiscan_rune_market"
        assert handler.api_key == "k"
        assert handler.base_url == "http://api.test/v1"
        assert handler.timeout == 1.5

    def test_each_construct_is_a_new_instance(self):
        provider = ModuleProvider()
        first = provider.build("tools.handlers.brc20:Brc20InfoTool")
        second = provider.build("tools.handlers.brc20:Brc20InfoTool")
        assert first is not second

    def test_missing_module(self):
        with pytest.raises(ImportError):
            asyncio.run(ModuleProvider().construct("tools.handlers.nope:Tool"))

    def test_missing_attribute(self):
        with pytest.raises(AttributeError):
            asyncio.run(ModuleProvider().construct("tools.handlers.runes:NoSuchTool"))


    def test_every_table_row_builds(self):
        from tools.registry import TOOL_MANIFEST

        provider = ModuleProvider()
        for entry in TOOL_MANIFEST:
            handler = provider.build(entry.loader)
            assert handler.name == entry.name
