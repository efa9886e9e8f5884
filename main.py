# =============================================================================
# main.py  -  Entry Point for the Ordiscan MCP Server
# =============================================================================
#
# HOW TO RUN:
#   python main.py                      (streamable HTTP on 127.0.0.1:1337/mcp)
#   MCP_TRANSPORT=stdio python main.py  (for clients that spawn the server)
#
# WHAT HAPPENS:
#   1. Loads .env and reads Settings from the environment (core/config.py)
#   2. Builds the catalog from the static tool table (tools/registry.py)
#   3. Creates the LazyGateway with a ModuleProvider that imports handler
#      classes on demand (tools/provider.py)
#   4. Registers every tool with FastMCP, still without loading any handler
#   5. Warms up PRELOAD_TOOLS so the first real call is fast
#   6. Serves until interrupted
#
#   A tool that fails to warm up is logged and skipped; it is retried on its
#   first real call, and the other tools are unaffected.
# =============================================================================

import asyncio
import logging
import sys

from dotenv import load_dotenv

# Load environment variables from .env file (ORDISCAN_API_KEY, PORT, etc.)
# This must happen BEFORE Settings.from_env() reads them.
load_dotenv()

from core.config import Settings
from core.gateway import LazyGateway
from core.models import WarmUpResult
from tools.mcp_server import build_server
from tools.provider import ModuleProvider
from tools.registry import TOOL_MANIFEST, build_catalog, summarize

logger = logging.getLogger("ordiscan")


def create_gateway(settings: Settings) -> LazyGateway:
    """Wire the catalog and the module provider into a gateway."""
    catalog = build_catalog()
    provider = ModuleProvider(settings.handler_options())
    return LazyGateway(catalog, provider, debug=settings.debug)


def _print_banner(settings: Settings, results: dict[str, WarmUpResult]) -> None:
    # stderr: with the stdio transport, stdout belongs to the MCP protocol.
    out = sys.stderr
    print("=" * 70, file=out)
    print("  ORDISCAN MCP SERVER  (lazy tool loading)", file=out)
    print("=" * 70, file=out)
    for category, count in summarize(TOOL_MANIFEST).items():
        print(f"  {category:<12} {count:>3} tools", file=out)
    print(f"  {'Total':<12} {len(TOOL_MANIFEST):>3} tools", file=out)

    if results:
        loaded = [name for name, result in results.items() if result.ok]
        failed = [name for name, result in results.items() if not result.ok]
        print(f"\n  Preloaded: {', '.join(loaded) or 'none'}", file=out)
        if failed:
            print(f"  Failed to preload: {', '.join(failed)}", file=out)
    else:
        print("\n  Preloaded: none (all tools load on first use)", file=out)

    if settings.transport == "http":
        print(f"\n  Listening on http://{settings.host}:{settings.port}{settings.endpoint}", file=out)
    else:
        print("\n  Serving over stdio", file=out)
    print("=" * 70, file=out)


async def serve(settings: Settings) -> None:
    """Build everything, warm up, then run the MCP server until stopped."""
    gateway = create_gateway(settings)
    mcp = build_server(gateway, TOOL_MANIFEST)

    results = await gateway.warm_up(settings.preload_names(gateway.names()))
    failed = sum(1 for result in results.values() if not result.ok)
    logger.info(
        f"Registered {len(gateway.names())} tools, preloaded {len(results) - failed}"
        + (f" ({failed} failed)" if failed else "")
    )
    _print_banner(settings, results)

    if settings.transport == "stdio":
        await mcp.run_async(transport="stdio", show_banner=False)
    else:
        await mcp.run_async(
            transport="http",
            show_banner=False,
            host=settings.host,
            port=settings.port,
            path=settings.endpoint,
        )


def main() -> None:
    try:
        settings = Settings.from_env()
    except ValueError as exc:
        logger.error(f"Invalid configuration: {exc}")
        sys.exit(2)

    try:
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        logger.info("Shutting down")


if __name__ == "__main__":
    main()
