"""Tests for startup wiring (server run is stubbed out)."""

import asyncio

import pytest
from fastmcp import FastMCP

import main
from core.config import Settings


@pytest.fixture
def runs(monkeypatch):
    calls = []

    async def fake_run_async(self, transport=None, show_banner=None, **kwargs):
        calls.append({"transport": transport, **kwargs})

    monkeypatch.setattr(FastMCP, "run_async", fake_run_async)
    return calls


def test_create_gateway_knows_every_tool():
    gateway = main.create_gateway(Settings(api_key="k"))
    assert len(gateway.names()) == 30
    assert gateway.loaded_names() == []
    assert gateway.provider.options == {
        "api_key": "k",
        "base_url": "https://api.ordiscan.com/v1",
        "timeout": 10.0,
    }


def test_serve_http_with_default_preload(runs, capsys):
    settings = Settings(port=4242, endpoint="/tools")
    asyncio.run(main.serve(settings))

    assert runs == [{"transport": "http", "host": "127.0.0.1", "port": 4242, "path": "/tools"}]
    banner = capsys.readouterr().err
    assert "Preloaded: ordiscan_main" in banner
    assert "Listening on http://127.0.0.1:4242/tools" in banner


def test_serve_stdio_without_preload(runs, capsys):
    asyncio.run(main.serve(Settings(transport="stdio", preload_tools=[])))

    assert runs == [{"transport": "stdio"}]
    banner = capsys.readouterr()
    assert banner.out == ""
    assert "all tools load on first use" in banner.err


def test_bad_configuration_exits(monkeypatch):
    monkeypatch.setenv("PORT", "not-a-port")
    with pytest.raises(SystemExit) as info:
        main.main()
    assert info.value.code == 2
