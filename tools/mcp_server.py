# =============================================================================
# tools/mcp_server.py  -  FastMCP Tool Server (lazy Ordiscan tools)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Registers every Ordiscan tool with FastMCP at startup WITHOUT importing
#   any handler code.  The name, description and JSON schema of each tool
#   come from the static table in tools/registry.py; the handler itself is
#   built by the LazyGateway the first time the tool is called.
#
# HOW IT WORKS (the flow):
#   1. An MCP client calls a tool by name (e.g. "ordiscan_rune_market")
#   2. FastMCP routes the call to that tool's LazyTool.run()
#   3. run() asks the gateway for the handler: the first call imports and
#      builds it, every later call gets the cached instance
#   4. run() awaits handler.execute(**arguments) and returns the dict as
#      both JSON text and structured content
#
#   Gateway errors (unknown name, failed load) become ToolError, so the
#   client sees an error result carrying the gateway's message.  Remote API
#   problems are NOT errors here: handlers return {"error": ...} dicts.
#
# RUNNING THIS SERVER:
#     a) python main.py              (settings from the environment / .env)
#     b) python -m tools.mcp_server  (same thing)
# =============================================================================

import json
import logging
import sys
from typing import Annotated, Any, Iterable

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools import Tool, ToolResult
from pydantic import Field
from pydantic.json_schema import SkipJsonSchema

from core.errors import GatewayError
from core.gateway import LazyGateway
from core.models import ToolManifest
from tools.registry import TOOL_MANIFEST

SERVER_NAME = "ordiscan"

# =============================================================================
# Logging Setup
# =============================================================================
# We log to STDERR because with the stdio transport the MCP messages travel
# over STDOUT.  Anything we printed there would corrupt the protocol stream.
#
# ANSI COLOR CODES:
#     - CYAN for incoming requests (tool name + parameters)
#     - GREEN for response JSON
#     - YELLOW for intermediate status/progress messages
# =============================================================================

_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Responses (JSON output)
_YELLOW = "\033[33m"   # Status/progress messages
_RESET = "\033[0m"     # Reset to default terminal color

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    # Never echo a caller-supplied API key into the logs.
    param_str = ", ".join(
        f"{k}={'***' if k == 'api_key' else repr(v)}" for k, v in params.items()
    )
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, result: dict) -> dict:
    """Log the tool response as compact JSON in GREEN, then return it."""
    logging.info(f"{_GREEN}  ← {tool_name} response: {json.dumps(result, separators=(',', ':'))}{_RESET}")
    return result


# =============================================================================
# LazyTool - an MCP tool whose handler is built on first call
# =============================================================================
class LazyTool(Tool):
    """MCP tool that resolves its handler through the LazyGateway."""

    gateway: Annotated[SkipJsonSchema[Any], Field(exclude=True)] = None

    @classmethod
    def from_manifest(cls, entry: ToolManifest, gateway: LazyGateway) -> "LazyTool":
        return cls(
            name=entry.name,
            description=entry.description,
            parameters=entry.parameters or {"type": "object", "properties": {}},
            tags={entry.category},
            gateway=gateway,
        )

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        _log_request(self.name, **arguments)

        try:
            if not self.gateway.is_ready(self.name):
                _log_status(f"Loading handler for {self.name}")
            handler = await self.gateway.resolve(self.name)
        except GatewayError as exc:
            _log_status(str(exc))
            raise ToolError(str(exc)) from exc

        result = await handler.execute(**arguments)
        if "error" in result:
            _log_status(f"{self.name} returned an error: {result['error']}")

        _log_response(self.name, result)
        return ToolResult(
            content=json.dumps(result, indent=2),
            structured_content=result,
        )


# =============================================================================
# Server factory
# =============================================================================
def build_server(
    gateway: LazyGateway,
    manifest: Iterable[ToolManifest] = TOOL_MANIFEST,
    name: str = SERVER_NAME,
) -> FastMCP:
    """Create the FastMCP server and register one LazyTool per manifest row.

    Every row must name a capability the gateway's catalog knows about;
    registration itself never touches the Handler Provider.
    """
    mcp = FastMCP(name)
    for entry in manifest:
        if entry.name not in gateway.catalog:
            raise ValueError(f"Manifest tool {entry.name!r} is not in the catalog")
        mcp.add_tool(LazyTool.from_manifest(entry, gateway))
    return mcp


# =============================================================================
# Server entry point
# =============================================================================
if __name__ == "__main__":
    from main import main

    main()
