"""Shared pytest fixtures: fake handler providers and a clean environment."""

import asyncio
from typing import Optional

import pytest

from core.catalog import CapabilityCatalog
from core.gateway import LazyGateway

_ENV_VARS = (
    "PORT",
    "HOST",
    "MCP_ENDPOINT",
    "MCP_TRANSPORT",
    "PRELOAD_TOOLS",
    "LAZY_DEBUG",
    "ORDISCAN_API_KEY",
    "ORDISCAN_BASE_URL",
    "ORDISCAN_TIMEOUT",
)


class EchoHandler:
    """Stand-in handler: execute() returns its loader and the arguments."""

    def __init__(self, loader: str):
        self.loader = loader

    async def execute(self, **arguments):
        return {"loader": self.loader, "echo": arguments}


class FakeProvider:
    """Async Handler Provider that records every construct() call.

    Loaders listed in `fail` raise.  If a test assigns an asyncio.Event to
    `gate`, construct() blocks on it so builds can be held open.
    """

    def __init__(self, fail=()):
        self.calls: list[str] = []
        self.fail = set(fail)
        self.gate: Optional[asyncio.Event] = None

    async def construct(self, loader: str):
        self.calls.append(loader)
        if self.gate is not None:
            await self.gate.wait()
        else:
            await asyncio.sleep(0)
        if loader in self.fail:
            raise RuntimeError(f"cannot build {loader}")
        return EchoHandler(loader)


class SyncProvider:
    """Plain (non-async) provider; returns whatever `result` says."""

    def __init__(self, result="instance"):
        self.calls: list[str] = []
        self.result = result

    def construct(self, loader: str):
        self.calls.append(loader)
        return self.result


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch):
    """Keep the developer's shell settings out of the tests."""
    for key in _ENV_VARS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def catalog() -> CapabilityCatalog:
    return CapabilityCatalog([
        ("echo", "fake:Echo"),
        ("fail", "fake:Broken"),
        ("other", "fake:Other"),
    ])


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider(fail={"fake:Broken"})


@pytest.fixture
def gateway(catalog, provider) -> LazyGateway:
    return LazyGateway(catalog, provider)
