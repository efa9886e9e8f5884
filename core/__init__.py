# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains the lazy dispatch machinery: catalog, instance cache,
# readiness notifier and the gateway that ties them together.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP or any Ordiscan handler.  The
#   gateway only sees loader references and a Handler Provider, so every
#   module here can be exercised with a fake provider and no network.
# =============================================================================
