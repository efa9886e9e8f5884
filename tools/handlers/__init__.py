# =============================================================================
# tools/handlers/__init__.py
# =============================================================================
# One module per family of Ordiscan tools.  Nothing here is imported at
# startup: tools/registry.py only names the classes ("module:Class"), and
# tools/provider.py imports a module the first time one of its tools is
# called or warmed.  Keep this file free of imports so loading one family
# never drags in the others.
# =============================================================================
