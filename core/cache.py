# =============================================================================
# core/cache.py  -  Instance Cache
# =============================================================================
#
# One slot per capability name, filled at most once, never evicted.  The
# gateway is the only writer; it serializes construction per name so put()
# is never raced.  An overwrite attempt is a bug and raises AlreadyResolved.
#
# None is used as "absent", so a None instance can never be stored.
# =============================================================================

from typing import Any, Optional

from core.errors import AlreadyResolved


class InstanceCache:
    """Write-once store of resolved handler instances, keyed by name."""

    def __init__(self) -> None:
        self._instances: dict[str, Any] = {}

    def get(self, name: str) -> Optional[Any]:
        return self._instances.get(name)

    def put(self, name: str, instance: Any) -> None:
        if instance is None:
            raise ValueError(f"Cannot cache an empty instance for {name}")
        if name in self._instances:
            raise AlreadyResolved(name)
        self._instances[name] = instance

    def names(self) -> list[str]:
        """Names that have been resolved, in resolution order."""
        return list(self._instances)

    def __contains__(self, name: object) -> bool:
        return name in self._instances

    def __len__(self) -> int:
        return len(self._instances)
