# =============================================================================
# tools/provider.py  -  Module Handler Provider
# =============================================================================
#
# Turns a loader reference like "tools.handlers.runes:RuneMarketTool" into a
# ready handler instance:
#
#   1. import the module part with importlib
#   2. look up the attribute after the colon
#   3. call it with the shared handler options (API key, base URL, timeout)
#
# Importing a handler module is the expensive part we want to defer, so it
# happens in a worker thread and the event loop keeps serving other calls.
# Any ImportError / AttributeError / TypeError propagates to the gateway,
# which reports it as LoadFailed and lets the next call try again.
# =============================================================================

import asyncio
import importlib
import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)


def split_reference(loader: str) -> tuple[str, str]:
    """Split "package.module:Attr" into its module and attribute parts."""
    module_path, sep, attr = loader.partition(":")
    if not sep or not module_path or not attr:
        raise ValueError(f"Loader reference must look like 'module:Attr', got {loader!r}")
    return module_path, attr


class ModuleProvider:
    """Handler Provider that imports and instantiates handler classes."""

    def __init__(self, options: Optional[dict[str, Any]] = None):
        self.options = dict(options or {})

    async def construct(self, loader: str) -> Any:
        return await asyncio.to_thread(self.build, loader)

    def build(self, loader: str) -> Any:
        module_path, attr = split_reference(loader)
        module = importlib.import_module(module_path)
        factory = getattr(module, attr)
        logger.debug(f"Instantiating {loader}")
        return factory(**self.options)
