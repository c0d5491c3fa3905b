"""
Tests for the provider registry.
"""

import json
from urllib.parse import urlsplit

import pytest

import config
import providers
from dataroid_provider import DataroidProvider

COLLECTOR_URL = "https://api.dataroid.com/collector/collect/event"


@pytest.fixture(autouse=True)
def fresh_registry():
    providers.reset_providers()
    yield
    providers.reset_providers()


class TestRegistry:
    """Provider lookup and dispatch."""

    def test_enabled_providers(self):
        assert [p.key for p in providers.get_providers()] == ["DATAROID"]

    def test_instances_are_cached(self):
        assert providers.get_providers()[0] is providers.get_providers()[0]

    def test_get_provider(self):
        assert isinstance(providers.get_provider("DATAROID"), DataroidProvider)
        assert providers.get_provider("NOPE") is None

    def test_get_provider_for_url(self):
        assert providers.get_provider_for_url(COLLECTOR_URL + "?x=1").key == "DATAROID"
        assert providers.get_provider_for_url("https://other-dataroid.com/collector/collect/event") is None

    def test_parse_request(self):
        body = json.dumps({"events": [{"eventName": "login"}]})
        result = providers.parse_request(COLLECTOR_URL, body)

        assert result["provider"]["key"] == "DATAROID"
        assert [d["key"] for d in result["data"]] == ["eventName", "hostname", "requestType"]

    def test_parse_request_with_split_url(self):
        result = providers.parse_request(urlsplit(COLLECTOR_URL))
        assert result["data"][0]["value"] == "api.dataroid.com"

    def test_parse_request_unmatched(self):
        assert providers.parse_request("https://example.com/") is None

    def test_disabled_provider(self, monkeypatch):
        monkeypatch.setattr(config, "DISABLED_PROVIDERS", {"DATAROID"})

        assert providers.get_providers() == []
        assert providers.get_provider_for_url(COLLECTOR_URL) is None
