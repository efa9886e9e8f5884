# =============================================================================
# core/errors.py  -  Gateway Error Taxonomy
# =============================================================================
#
# Every failure the dispatch gateway can surface is one of these types:
#
#   UnknownCapability    → the name is not in the catalog (config error,
#                          never retried)
#   LoadFailed           → the Handler Provider could not build the handler
#                          (nothing cached, the next resolve() tries again)
#   ObserverFailure      → an on_ready() callback raised (logged by the
#                          notifier, never propagated)
#   DuplicateCapability  → the catalog table lists the same name twice
#   AlreadyResolved      → something tried to overwrite a cached instance
#
# The MCP layer only needs to catch GatewayError to turn any of these into a
# tool error for the client.
# =============================================================================

from typing import Any, Callable


class GatewayError(Exception):
    """Base class for everything raised by the lazy dispatch gateway."""


class UnknownCapability(GatewayError):
    """A capability name that the catalog does not know about."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Tool not found in registry: {name}")


class LoadFailed(GatewayError):
    """The Handler Provider raised (or returned nothing) while building a tool."""

    def __init__(self, name: str, cause: BaseException):
        self.name = name
        self.cause = cause
        super().__init__(f"Failed to load tool {name}: {cause}")


class DuplicateCapability(GatewayError):
    """The same capability name appears twice in a catalog table."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Duplicate tool name in registry: {name}")


class AlreadyResolved(GatewayError):
    """An instance is already cached for this name and cannot be replaced."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Tool {name} is already loaded")


class ObserverFailure(GatewayError):
    """Record of an on_ready observer that raised while being notified.

    The notifier never raises this; it builds one per failing observer, logs
    it, and hands the list back to the caller of fire_and_clear().
    """

    def __init__(self, name: str, observer: Callable[[Any], Any], cause: BaseException):
        self.name = name
        self.observer = observer
        self.cause = cause
        super().__init__(f"Error in tool loaded listener for {name}: {cause}")
