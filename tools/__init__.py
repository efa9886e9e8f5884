# =============================================================================
# tools/__init__.py
# =============================================================================
# This package is the MCP side of the server.
#
#   registry.py    → static table of tool names, loaders, schemas
#   provider.py    → turns a loader reference into a handler instance
#   mcp_server.py  → registers one lazy FastMCP tool per table row
#   handlers/      → the Ordiscan API handlers (imported on first use only)
#
# tools/ depends on core/; core/ never imports from tools/.
# =============================================================================
