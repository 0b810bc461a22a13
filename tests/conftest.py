"""Shared fixtures for provider, manager and server tests."""

import httpx
import pytest

from multi_provider_mcp.config import EvolutionConfig, ExampleConfig
from multi_provider_mcp.utils.http_client import HttpClient

from .helpers import RecordingBackend


@pytest.fixture
def backend() -> RecordingBackend:
    return RecordingBackend()


@pytest.fixture
def evolution_config() -> EvolutionConfig:
    return EvolutionConfig(
        enabled=True,
        instancia="minha-instancia",
        apikey="secret-key",
        api_base="evolution.local:8080"
    )


@pytest.fixture
def http_client(backend, evolution_config) -> HttpClient:
    return HttpClient(
        headers=evolution_config.default_headers,
        transport=httpx.MockTransport(backend)
    )


@pytest.fixture
def example_config() -> ExampleConfig:
    return ExampleConfig(enabled=True)
