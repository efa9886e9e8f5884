"""Tests for environment-driven settings."""

import pytest

from core.config import DEFAULT_BASE_URL, Settings


class TestSettings:

    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings.port == 1337
        assert settings.host == "127.0.0.1"
        assert settings.endpoint == "/mcp"
        assert settings.transport == "http"
        assert settings.preload_tools == ["ordiscan_main"]
        assert settings.debug is False
        assert settings.api_key is None
        assert settings.base_url == DEFAULT_BASE_URL
        assert settings.timeout == 10.0

    def test_reads_os_environ_by_default(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("ORDISCAN_API_KEY", "secret")
        settings = Settings.from_env()
        assert settings.port == 8080
        assert settings.api_key == "secret"

    def test_overrides(self):
        settings = Settings.from_env({
            "PORT": "9000",
            "HOST": "0.0.0.0",
            "MCP_ENDPOINT": "/tools",
            "MCP_TRANSPORT": "STDIO",
            "LAZY_DEBUG": "True",
            "ORDISCAN_BASE_URL": "http://localhost:4000/v1/",
            "ORDISCAN_TIMEOUT": "2.5",
        })
        assert settings.port == 9000
        assert settings.host == "0.0.0.0"
        assert settings.endpoint == "/tools"
        assert settings.transport == "stdio"
        assert settings.debug is True
        assert settings.base_url == "http://localhost:4000/v1"
        assert settings.timeout == 2.5

    def test_preload_list(self):
        settings = Settings.from_env({"PRELOAD_TOOLS": " ordiscan_main, ordiscan_tx_info ,,"})
        assert settings.preload_tools == ["ordiscan_main", "ordiscan_tx_info"]

    def test_empty_preload_disables_warm_up(self):
        settings = Settings.from_env({"PRELOAD_TOOLS": ""})
        assert settings.preload_names(["a", "b"]) == []

    def test_preload_all(self):
        settings = Settings.from_env({"PRELOAD_TOOLS": "all"})
        assert settings.preload_names(["a", "b"]) == ["a", "b"]

    def test_empty_api_key_is_none(self):
        assert Settings.from_env({"ORDISCAN_API_KEY": ""}).api_key is None

    @pytest.mark.parametrize("key,value", [
        ("PORT", "http"),
        ("ORDISCAN_TIMEOUT", "soon"),
    ])
    def test_bad_numbers(self, key, value):
        with pytest.raises(ValueError, match=key):
            Settings.from_env({key: value})

    def test_bad_transport(self):
        with pytest.raises(ValueError, match="MCP_TRANSPORT"):
            Settings.from_env({"MCP_TRANSPORT": "carrier-pigeon"})

    def test_handler_options(self):
        settings = Settings(api_key="k", base_url="http://x", timeout=3.0)
        assert settings.handler_options() == {"api_key": "k", "base_url": "http://x", "timeout": 3.0}
