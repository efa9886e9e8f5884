# =============================================================================
# core/models.py  -  Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses define the shape of the information that flows between
# the catalog, the gateway and the MCP server.  They carry no behavior beyond
# a couple of convenience properties.
#
#   ToolManifest  → one row of the static tool table: the name clients see,
#                   the loader reference the provider understands, and the
#                   metadata advertised before anything is loaded
#   WarmUpResult  → the outcome of warming one tool at startup
# =============================================================================

from dataclasses import dataclass, field
from typing import Any, Optional


# -----------------------------------------------------------------------------
# ToolManifest - one advertised capability
# -----------------------------------------------------------------------------
# The MCP server registers a tool from each manifest at startup.  Only
# `loader` is handed to the Handler Provider, and only when the tool is
# first called (or warmed).  Everything else is static and cheap.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ToolManifest:
    """Static description of a capability, available without loading it."""

    name: str                          # "ordiscan_rune_market"
    loader: str                        # "tools.handlers.runes:RuneMarketTool"
    description: str                   # Shown to MCP clients
    parameters: dict[str, Any] = field(default_factory=dict)   # JSON schema
    category: str = "General"          # Used for the startup summary only


# -----------------------------------------------------------------------------
# WarmUpResult - per-name outcome of LazyGateway.warm_up()
# -----------------------------------------------------------------------------
# Exactly one of `instance` / `error` is set.  A failed warm-up never stops
# the others, so the caller gets one of these for every requested name.
# -----------------------------------------------------------------------------
@dataclass
class WarmUpResult:
    """Outcome of eagerly resolving one capability."""

    name: str
    instance: Optional[Any] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None
