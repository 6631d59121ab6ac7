"""Tests for the /process and status routes."""

from datetime import datetime

import httpx
import pytest

from nexflow.services.tool_catalog import ToolCatalog


class TestProcessValidation:
    """Requests without a question are rejected before any upstream call."""

    @pytest.mark.parametrize("payload", [{}, {"question": ""}, {"question": None}, {"other": "x"}])
    def test_missing_question_returns_400(self, make_client, calls, payload):
        client, relay = make_client()

        response = client.post("/process", json=payload)

        assert response.status_code == 400
        assert response.json() == {"error": "Question is required"}
        assert calls == []
        relay.tools.call_tool.assert_not_called()

    def test_empty_body_returns_400(self, make_client, calls):
        client, _ = make_client()

        response = client.post("/process")

        assert response.status_code == 400
        assert response.json() == {"error": "Question is required"}
        assert calls == []

    def test_non_string_question_returns_400(self, make_client, calls):
        client, _ = make_client()

        response = client.post("/process", json={"question": 42})

        assert response.status_code == 400
        assert response.json() == {"error": "Question is required"}
        assert calls == []


class TestProcessFlow:
    """Happy path and upstream failures."""

    def test_weather_question(self, make_client, calls):
        client, relay = make_client()

        response = client.post("/process", json={"question": "What's the weather in Paris?"})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["gpt_response"]["tool"] == "weather"
        assert data["gpt_response"]["method"] == "get"
        assert data["gpt_response"]["parameters"] == {"city": "Paris"}
        assert data["tool_result"]["temp"] == 18
        assert isinstance(data["final_response"], str) and data["final_response"]

    def test_upstream_calls_run_in_order(self, make_client, calls):
        client, _ = make_client()

        client.post("/process", json={"question": "What's the weather in Paris?"})

        assert calls == ["select", "execute", "explain"]

    def test_selection_reaches_executor_unchanged(self, make_client):
        client, relay = make_client(
            selection='{"tool": "gmail", "method": "send_message", "parameters": {"to": "a@b.c", "body": "hi"}}'
        )

        client.post("/process", json={"question": "Email a@b.c saying hi"})

        relay.tools.call_tool.assert_awaited_once_with(
            "gmail", "send_message", {"to": "a@b.c", "body": "hi"}
        )

    def test_explainer_sees_question_and_result(self, make_client):
        client, relay = make_client()

        client.post("/process", json={"question": "What's the weather in Paris?"})

        messages, json_mode = relay.llm.messages[-1]
        assert json_mode is False
        assert "What's the weather in Paris?" in messages[1]["content"]
        assert '{"temp": 18}' in messages[1]["content"]

    def test_provider_error_payload_is_a_result(self, make_client, calls):
        client, _ = make_client(result={"error": "city not found"})

        response = client.post("/process", json={"question": "Weather in Atlantis?"})

        assert response.status_code == 200
        assert response.json()["tool_result"] == {"error": "city not found"}
        assert calls == ["select", "execute", "explain"]

    def test_executor_network_error_returns_500(self, make_client, calls):
        client, _ = make_client(result=httpx.ConnectError("Connection refused"))

        response = client.post("/process", json={"question": "What's the weather in Paris?"})

        assert response.status_code == 500
        assert "Connection refused" in response.json()["error"]
        assert "final_response" not in response.json()
        assert calls == ["select", "execute"]

    def test_selector_failure_stops_pipeline(self, make_client, calls):
        client, relay = make_client(selection=RuntimeError("model overloaded"))

        response = client.post("/process", json={"question": "What's the weather in Paris?"})

        assert response.status_code == 500
        assert response.json() == {"error": "model overloaded"}
        assert calls == ["select"]
        relay.tools.call_tool.assert_not_called()

    def test_malformed_selection_returns_500(self, make_client, calls):
        client, relay = make_client(selection='{"tool": "weather"}')

        response = client.post("/process", json={"question": "What's the weather in Paris?"})

        assert response.status_code == 500
        assert "Invalid tool selection" in response.json()["error"]
        assert "method" in response.json()["error"]
        assert calls == ["select"]

    def test_dot_segment_tool_is_rejected(self, make_client, calls):
        client, relay = make_client(
            selection='{"tool": "..", "method": "get-tools", "parameters": {}}'
        )

        response = client.post("/process", json={"question": "List the tools"})

        assert response.status_code == 500
        assert "Invalid tool selection" in response.json()["error"]
        assert calls == ["select"]
        relay.tools.call_tool.assert_not_called()

    def test_explainer_failure_returns_500(self, make_client, calls):
        client, _ = make_client(explanation=RuntimeError("explanation timed out"))

        response = client.post("/process", json={"question": "What's the weather in Paris?"})

        assert response.status_code == 500
        assert response.json() == {"error": "explanation timed out"}
        assert calls == ["select", "execute", "explain"]

    def test_catalog_not_loaded_returns_503(self, make_client, calls):
        catalog = ToolCatalog()
        catalog.fail("Error fetching tools: boom")
        client, _ = make_client(catalog=catalog)

        response = client.post("/process", json={"question": "What's the weather in Paris?"})

        assert response.status_code == 503
        assert response.json() == {"error": "Tool catalog is not available"}
        assert calls == []


class TestStatusRoutes:
    """Root, health and readiness."""

    def test_root(self, make_client):
        client, _ = make_client()

        response = client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "active"
        assert data["message"] == "Welcome to NexFlow API"
        assert data["timestamp"].endswith("Z")
        datetime.fromisoformat(data["timestamp"].replace("Z", "+00:00"))

    def test_root_ignores_catalog_state(self, make_client):
        client, _ = make_client(catalog=ToolCatalog())

        assert client.get("/").json()["status"] == "active"

    def test_ready_when_catalog_loaded(self, make_client):
        client, _ = make_client()

        response = client.get("/health/ready")

        assert response.status_code == 200
        assert response.json() == {"status": "ready", "catalog": "ready"}

    def test_not_ready_while_loading(self, make_client):
        client, _ = make_client(catalog=ToolCatalog())

        response = client.get("/health/ready")

        assert response.status_code == 503
        assert response.json() == {"status": "not_ready", "catalog": "loading"}

    def test_request_id_is_echoed(self, make_client):
        client, _ = make_client()

        response = client.get("/health", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"
        assert "X-Response-Time-Ms" in response.headers

    def test_cors_allows_any_origin(self, make_client):
        client, _ = make_client()

        response = client.options(
            "/process",
            headers={
                "Origin": "https://example.com",
                "Access-Control-Request-Method": "POST",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"
        assert "POST" in response.headers["access-control-allow-methods"]
