"""Pytest configuration and fixtures."""

import pytest
import os
from typing import Any, List
from unittest.mock import AsyncMock
from dotenv import load_dotenv

# Load test environment variables
load_dotenv()

# Set test environment before nexflow.infra.config is imported
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("VEYRAX_API_KEY", "test-veyrax-key")
os.environ.setdefault("OPENAI_API_KEY", "test-openai-key")

from fastapi.testclient import TestClient

from nexflow.main import app
from nexflow.services.relay import RequestRelay, get_relay
from nexflow.services.tool_catalog import ToolCatalog


WEATHER_CATALOG = [
    {"name": "weather", "methods": [{"name": "get", "parameters": {"city": "string"}}]},
]


class FakeLLM:
    """Stands in for OpenAIChatClient and records every completion."""

    def __init__(self, calls: List[str], selection: str, explanation: str = "It is 18 degrees in Paris."):
        self.calls = calls
        self.selection = selection
        self.explanation = explanation
        self.messages: List[Any] = []

    async def complete(self, messages, json_mode=False):
        self.messages.append((messages, json_mode))
        if json_mode:
            self.calls.append("select")
            if isinstance(self.selection, Exception):
                raise self.selection
            return self.selection
        self.calls.append("explain")
        if isinstance(self.explanation, Exception):
            raise self.explanation
        return self.explanation


class FakeTools:
    """Stands in for VeyraXClient and records every tool call."""

    def __init__(self, calls: List[str], result: Any):
        self.calls = calls
        self.result = result
        self.call_tool = AsyncMock(side_effect=self._call_tool)
        self.get_tools = AsyncMock(return_value=WEATHER_CATALOG)

    async def _call_tool(self, tool_name, method_name, parameters):
        self.calls.append("execute")
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


@pytest.fixture
def calls():
    """Ordered log of upstream calls made by fakes."""
    return []


@pytest.fixture
def ready_catalog():
    catalog = ToolCatalog()
    catalog.set(WEATHER_CATALOG)
    return catalog


@pytest.fixture
def make_client(calls, ready_catalog):
    """Build a TestClient whose relay uses fake upstreams."""

    def _make(
        selection='{"tool": "weather", "method": "get", "parameters": {"city": "Paris"}}',
        result=None,
        explanation="It is 18 degrees in Paris.",
        catalog=None,
    ):
        llm = FakeLLM(calls, selection, explanation)
        tools = FakeTools(calls, {"temp": 18} if result is None else result)
        relay = RequestRelay(llm, tools, catalog or ready_catalog)
        app.dependency_overrides[get_relay] = lambda: relay
        client = TestClient(app)
        return client, relay

    yield _make
    app.dependency_overrides.clear()
