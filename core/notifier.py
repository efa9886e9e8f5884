# =============================================================================
# core/notifier.py  -  Readiness Notifier
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Keeps, per capability name, a list of one-shot observers that want the
#   handler instance as soon as it exists.
#
# THE CONTRACT:
#   subscribe(name, observer)        → append (fan-out is fine)
#   fire_and_clear(name, instance)   → call every observer pending *right now*
#                                      once, in subscription order, then
#                                      forget them
#
#   - The list is swapped out before any observer runs, so an observer that
#     subscribes again during firing lands in the next round, not this one.
#   - An observer that raises is logged and reported back as an
#     ObserverFailure; the remaining observers still run.
#   - There is no timeout.  If a name never resolves, its observers simply
#     stay pending for the life of the process.
# =============================================================================

import logging
from typing import Any, Callable, Iterable, Optional

from core.errors import ObserverFailure, UnknownCapability

logger = logging.getLogger(__name__)

Observer = Callable[[Any], Any]


class ReadinessNotifier:
    """Per-name lists of observers fired once when the name resolves."""

    def __init__(self, names: Iterable[str]):
        # One slot per known name, wired up front.
        self._pending: dict[str, list[Observer]] = {name: [] for name in names}

    def subscribe(self, name: str, observer: Observer) -> None:
        try:
            self._pending[name].append(observer)
        except KeyError:
            raise UnknownCapability(name) from None

    def fire_and_clear(self, name: str, instance: Any) -> list[ObserverFailure]:
        """Notify everyone waiting on `name`, then drop them.

        Returns:
            One ObserverFailure per observer that raised (usually empty).
        """
        if name not in self._pending:
            raise UnknownCapability(name)

        observers, self._pending[name] = self._pending[name], []

        failures: list[ObserverFailure] = []
        for observer in observers:
            failure = self.invoke(name, observer, instance)
            if failure is not None:
                failures.append(failure)
        return failures

    @staticmethod
    def invoke(name: str, observer: Observer, instance: Any) -> Optional[ObserverFailure]:
        """Call one observer, logging and returning its failure if it raises."""
        try:
            observer(instance)
        except Exception as exc:
            failure = ObserverFailure(name, observer, exc)
            logger.exception(f"[LazyGateway] {failure}")
            return failure
        return None

    def pending(self, name: str) -> int:
        """How many observers are still waiting for `name`."""
        try:
            return len(self._pending[name])
        except KeyError:
            raise UnknownCapability(name) from None
