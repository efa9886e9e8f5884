# =============================================================================
# core/config.py  -  Startup Settings
# =============================================================================
#
# All configuration comes from environment variables.  main.py calls
# load_dotenv() first, so a local .env file works too.
#
#   PORT               HTTP port for the streamable-http transport (1337)
#   HOST               Bind address (127.0.0.1)
#   MCP_ENDPOINT       HTTP path of the MCP endpoint (/mcp)
#   MCP_TRANSPORT      "http" or "stdio" (http)
#   PRELOAD_TOOLS      Comma-separated tools to warm up before serving
#                      (ordiscan_main).  "all" warms every tool, an empty
#                      value warms nothing.
#   LAZY_DEBUG         "true" logs every load/resolve/notify event (false)
#   ORDISCAN_API_KEY   Default bearer key for the Ordiscan API
#   ORDISCAN_BASE_URL  API root (https://api.ordiscan.com/v1)
#   ORDISCAN_TIMEOUT   Per-request timeout in seconds (10)
# =============================================================================

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

DEFAULT_BASE_URL = "https://api.ordiscan.com/v1"
PRELOAD_ALL = "all"
_TRANSPORTS = ("http", "stdio")


@dataclass
class Settings:
    """Process-wide settings, read once at startup."""

    port: int = 1337
    host: str = "127.0.0.1"
    endpoint: str = "/mcp"
    transport: str = "http"
    preload_tools: list[str] = field(default_factory=lambda: ["ordiscan_main"])
    debug: bool = False
    api_key: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 10.0

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        defaults = cls()

        transport = env.get("MCP_TRANSPORT", defaults.transport).strip().lower()
        if transport not in _TRANSPORTS:
            raise ValueError(
                f"MCP_TRANSPORT must be one of {', '.join(_TRANSPORTS)}, got {transport!r}"
            )

        preload = defaults.preload_tools
        if "PRELOAD_TOOLS" in env:
            preload = _split_names(env["PRELOAD_TOOLS"])

        return cls(
            port=_int_var(env, "PORT", defaults.port),
            host=env.get("HOST", defaults.host),
            endpoint=env.get("MCP_ENDPOINT", defaults.endpoint),
            transport=transport,
            preload_tools=preload,
            debug=env.get("LAZY_DEBUG", "false").lower() == "true",
            api_key=env.get("ORDISCAN_API_KEY") or None,
            base_url=env.get("ORDISCAN_BASE_URL", defaults.base_url).rstrip("/"),
            timeout=_float_var(env, "ORDISCAN_TIMEOUT", defaults.timeout),
        )

    def handler_options(self) -> dict:
        """Keyword arguments every Ordiscan handler is constructed with."""
        return {"api_key": self.api_key, "base_url": self.base_url, "timeout": self.timeout}

    def preload_names(self, catalog_names: list[str]) -> list[str]:
        """Expand PRELOAD_TOOLS against the catalog ("all" → every name)."""
        if PRELOAD_ALL in self.preload_tools:
            return list(catalog_names)
        return list(self.preload_tools)


def _split_names(raw: str) -> list[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


def _int_var(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None


def _float_var(env: Mapping[str, str], key: str, default: float) -> float:
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{key} must be a number, got {raw!r}") from None
