# =============================================================================
# core/catalog.py  -  Capability Catalog
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Holds the fixed table of capability name → loader reference.  The table
#   is built once at startup and never changes afterwards.
#
#   - names() is stable (insertion order) and duplicate-free
#   - loader_for() fails with UnknownCapability for names not in the table
#   - a table that repeats a name is rejected when the catalog is built,
#     not when the second row is first used
# =============================================================================

from typing import Iterable, Iterator

from core.errors import DuplicateCapability, UnknownCapability
from core.models import ToolManifest


class CapabilityCatalog:
    """Immutable, ordered mapping of capability names to loader references."""

    def __init__(self, entries: Iterable[tuple[str, str]]):
        table: dict[str, str] = {}
        for name, loader in entries:
            if name in table:
                raise DuplicateCapability(name)
            table[name] = loader
        self._table = table

    @classmethod
    def from_manifest(cls, manifest: Iterable[ToolManifest]) -> "CapabilityCatalog":
        """Build a catalog from ToolManifest rows (name + loader only)."""
        return cls((entry.name, entry.loader) for entry in manifest)

    def names(self) -> list[str]:
        return list(self._table)

    def loader_for(self, name: str) -> str:
        try:
            return self._table[name]
        except KeyError:
            raise UnknownCapability(name) from None

    def __contains__(self, name: object) -> bool:
        return name in self._table

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:
        return f"CapabilityCatalog({len(self._table)} tools)"
