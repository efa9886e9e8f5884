"""Tests for the lazy FastMCP tool registration (in-memory client)."""

import asyncio
import logging

import pytest
from fastmcp import Client
from fastmcp.exceptions import ToolError

from core.catalog import CapabilityCatalog
from core.gateway import LazyGateway
from core.models import ToolManifest
from tests.conftest import FakeProvider
from tools.mcp_server import LazyTool, build_server
from tools.registry import TOOL_MANIFEST, build_catalog

ROWS = [
    ToolManifest(
        name="echo",
        loader="fake:Echo",
        description="Echo the arguments back",
        parameters={
            "type": "object",
            "properties": {"text": {"type": "string"}, "api_key": {"type": "string"}},
            "required": ["text"],
        },
    ),
    ToolManifest(name="fail", loader="fake:Broken", description="Never loads"),
]


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider(fail={"fake:Broken"})


@pytest.fixture
def gateway(provider) -> LazyGateway:
    return LazyGateway(CapabilityCatalog.from_manifest(ROWS), provider)


@pytest.fixture
def mcp(gateway):
    return build_server(gateway, ROWS)


def call(mcp, name, arguments):
    async def scenario():
        async with Client(mcp) as client:
            return await client.call_tool(name, arguments)

    return asyncio.run(scenario())


class TestRegistration:

    def test_tools_listed_without_loading(self, mcp, provider):
        async def scenario():
            async with Client(mcp) as client:
                return await client.list_tools()

        tools = {tool.name: tool for tool in asyncio.run(scenario())}

        assert set(tools) == {"echo", "fail"}
        assert tools["echo"].description == "Echo the arguments back"
        assert tools["echo"].input_schema["required"] == ["text"]
        assert provider.calls == []

    def test_full_table_registers_every_tool(self, provider):
        gateway = LazyGateway(build_catalog(), provider)
        mcp = build_server(gateway)

        tools = asyncio.run(mcp.list_tools())

        assert {tool.name for tool in tools} == {entry.name for entry in TOOL_MANIFEST}
        assert all(isinstance(tool, LazyTool) for tool in tools)
        assert provider.calls == []

    def test_rows_must_be_in_catalog(self, gateway):
        stray = ToolManifest(name="stray", loader="fake:Stray", description="Not in the catalog")
        with pytest.raises(ValueError, match="stray"):
            build_server(gateway, ROWS + [stray])


class TestCalls:

    def test_first_call_loads_then_reuses(self, mcp, provider, gateway):
        first = call(mcp, "echo", {"text": "hi"})
        second = call(mcp, "echo", {"text": "again"})

        assert first.structured_content == {"loader": "fake:Echo", "echo": {"text": "hi"}}
        assert second.structured_content["echo"] == {"text": "again"}
        assert provider.calls == ["fake:Echo"]
        assert gateway.loaded_names() == ["echo"]

    def test_load_failure_is_a_tool_error(self, mcp, provider):
        with pytest.raises(ToolError, match="Failed to load tool fail"):
            call(mcp, "fail", {})
        with pytest.raises(ToolError):
            call(mcp, "fail", {})
        # Not cached: the second call tried again.
        assert provider.calls == ["fake:Broken", "fake:Broken"]

    def test_api_key_not_logged(self, mcp, caplog):
        with caplog.at_level(logging.INFO):
            call(mcp, "echo", {"text": "hi", "api_key": "secret-key"})

        request_lines = [r.getMessage() for r in caplog.records if "echo called with" in r.getMessage()]
        assert request_lines
        assert "secret-key" not in request_lines[0]
        assert "api_key=***" in request_lines[0]
