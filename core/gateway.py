# =============================================================================
# core/gateway.py  -  Lazy Dispatch Gateway
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Every tool call passes through LazyGateway.resolve(name).  The gateway
#   knows the full catalog from the start, but asks the Handler Provider to
#   build a tool only the first time somebody needs it.  After that, every
#   caller gets the same cached instance.
#
# THE FLOW (resolve):
#   1. Unknown name?          → UnknownCapability (no provider call)
#   2. Already in the cache?  → return it (no provider call, no notifications)
#   3. Already being built?   → wait for that build instead of starting another
#   4. Otherwise              → start a build task:
#        provider.construct(loader) → cache.put → notifier.fire_and_clear
#      A provider error becomes LoadFailed.  Nothing is cached, nothing is
#      fired, and the next resolve() starts over from step 4.
#
# CONCURRENCY:
#   Everything runs on one asyncio event loop.  The provider call is the only
#   place a resolve() can suspend, which is where two callers for the same
#   name could interleave.  The first caller stores the build task in
#   `_inflight`; later callers find it there and await the same task.  Each
#   caller awaits through asyncio.shield(), so a caller that times out or is
#   cancelled does not cancel the build for everybody else.
#
# WARM-UP:
#   warm_up(names) resolves names one by one in the order given and records
#   the outcome of each.  A broken tool never blocks the others.
# =============================================================================

import asyncio
import inspect
import logging
from typing import Any, Iterable, Protocol

from core.cache import InstanceCache
from core.catalog import CapabilityCatalog
from core.errors import GatewayError, LoadFailed
from core.models import WarmUpResult
from core.notifier import Observer, ReadinessNotifier

logger = logging.getLogger(__name__)


class HandlerProvider(Protocol):
    """Builds a handler instance from a loader reference.

    construct() may be a coroutine function or a plain function.  It must be
    safe to call again for the same reference after a failure.
    """

    def construct(self, loader: str) -> Any: ...


class LazyGateway:
    """Resolves capability names to handler instances, building each once."""

    def __init__(
        self,
        catalog: CapabilityCatalog,
        provider: HandlerProvider,
        debug: bool = False,
    ):
        self.catalog = catalog
        self.provider = provider
        self.debug = debug
        self._cache = InstanceCache()
        self._notifier = ReadinessNotifier(catalog.names())
        self._inflight: dict[str, asyncio.Task] = {}

        self._trace(f"Registering {len(catalog)} tools for lazy loading")

    # -------------------------------------------------------------------------
    # resolve
    # -------------------------------------------------------------------------
    async def resolve(self, name: str) -> Any:
        """Return the handler for `name`, building it on first use.

        Raises:
            UnknownCapability: `name` is not in the catalog.
            LoadFailed: the provider could not build the handler.
        """
        loader = self.catalog.loader_for(name)

        instance = self._cache.get(name)
        if instance is not None:
            self._trace(f"Cache hit: {name}")
            return instance

        task = self._inflight.get(name)
        if task is None:
            self._trace(f"Loading tool: {name}")
            task = asyncio.ensure_future(self._load(name, loader))
            self._inflight[name] = task
            task.add_done_callback(_consume_exception)
        else:
            self._trace(f"Waiting on in-flight load: {name}")

        try:
            return await asyncio.shield(task)
        except LoadFailed as exc:
            # Every waiter gets its own exception object.
            raise LoadFailed(name, exc.cause) from exc.cause

    async def _load(self, name: str, loader: str) -> Any:
        try:
            try:
                instance = self.provider.construct(loader)
                if inspect.isawaitable(instance):
                    instance = await instance
            except Exception as exc:
                raise LoadFailed(name, exc) from exc
            if instance is None:
                raise LoadFailed(name, ValueError(f"provider returned nothing for {loader}"))

            self._cache.put(name, instance)
        finally:
            # Leave the in-flight slot before completing so a retry after a
            # failure starts a fresh build.
            self._inflight.pop(name, None)

        self._trace(f"Loaded tool: {name}")
        waiting = self._notifier.pending(name)
        if waiting:
            self._trace(f"Notifying {waiting} listener(s) for {name}")
        self._notifier.fire_and_clear(name, instance)
        return instance

    # -------------------------------------------------------------------------
    # warm_up
    # -------------------------------------------------------------------------
    async def warm_up(self, names: Iterable[str]) -> dict[str, WarmUpResult]:
        """Resolve `names` in order, isolating failures.

        Returns:
            An ordered dict of name → WarmUpResult, one entry per distinct
            name requested.  Unknown names and load failures are recorded as
            errors rather than raised.
        """
        names = list(names)
        if names:
            self._trace(f"Preloading {len(names)} tools: {', '.join(names)}")

        results: dict[str, WarmUpResult] = {}
        for name in names:
            if name in results:
                continue
            try:
                instance = await self.resolve(name)
            except GatewayError as exc:
                logger.error(f"[LazyGateway] Failed to preload tool {name}: {exc}", exc_info=exc)
                results[name] = WarmUpResult(name=name, error=exc)
            else:
                results[name] = WarmUpResult(name=name, instance=instance)
        return results

    # -------------------------------------------------------------------------
    # on_ready
    # -------------------------------------------------------------------------
    def on_ready(self, name: str, observer: Observer) -> None:
        """Call `observer(instance)` once `name` is loaded.

        If it is already loaded the observer runs immediately and is not
        registered.
        """
        self.catalog.loader_for(name)

        instance = self._cache.get(name)
        if instance is not None:
            self._notifier.invoke(name, observer, instance)
            return
        self._notifier.subscribe(name, observer)

    # -------------------------------------------------------------------------
    # Diagnostics
    # -------------------------------------------------------------------------
    def names(self) -> list[str]:
        return self.catalog.names()

    def is_ready(self, name: str) -> bool:
        self.catalog.loader_for(name)
        return name in self._cache

    def is_loading(self, name: str) -> bool:
        return name in self._inflight

    def loaded_names(self) -> list[str]:
        return self._cache.names()

    def _trace(self, message: str) -> None:
        logger.log(logging.INFO if self.debug else logging.DEBUG, f"[LazyGateway] {message}")


def _consume_exception(task: asyncio.Task) -> None:
    # Mark a failed build as retrieved even if every waiter went away.
    if not task.cancelled():
        task.exception()
