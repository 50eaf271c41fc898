"""
Unit Tests for the OpenRouter LLM Service

The HTTP session is replaced with a MagicMock, so no network is used.
"""

import json

import pytest
import requests
from unittest.mock import MagicMock, patch

from northwind_ai.services import llm_service
from northwind_ai.services.llm_service import OpenRouterService, get_llm_service


URL = "https://openrouter.test/api/v1/chat/completions"


def _response(status_code: int, text: str) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    return response


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def service(session):
    return OpenRouterService(session=session, timeout=5)


def test_missing_api_key_makes_no_network_call(service, session):
    result = service.call(URL, "", "test/model", "Hello?")

    assert result.success is False
    assert "API key is not configured" in result.message
    session.post.assert_not_called()


def test_none_api_key_makes_no_network_call(service, session):
    result = service.call(URL, None, "test/model", "Hello?")

    assert result.success is False
    session.post.assert_not_called()


def test_successful_completion(service, session):
    session.post.return_value = _response(
        200, json.dumps({"choices": [{"message": {"content": "Hello"}}]})
    )

    result = service.call(URL, "key-123", "test/model", "Say hello")

    assert result.success is True
    assert result.message == "Hello"


def test_request_shape(service, session):
    session.post.return_value = _response(
        200, json.dumps({"choices": [{"message": {"content": "ok"}}]})
    )

    service.call(URL, "key-123", "test/model", "Say hello")

    args, kwargs = session.post.call_args
    assert args[0] == URL
    assert kwargs["headers"]["Authorization"] == "Bearer key-123"
    assert kwargs["json"] == {
        "model": "test/model",
        "messages": [{"role": "user", "content": "Say hello"}],
    }
    assert kwargs["timeout"] == 5


def test_non_2xx_status_embeds_code_and_body(service, session):
    session.post.return_value = _response(500, "server error")

    result = service.call(URL, "key-123", "test/model", "Hi")

    assert result.success is False
    assert "500" in result.message
    assert "server error" in result.message


def test_transport_error(service, session):
    session.post.side_effect = requests.exceptions.ConnectionError("Connection refused")

    result = service.call(URL, "key-123", "test/model", "Hi")

    assert result.success is False
    assert result.message.startswith("Network error:")
    assert "Connection refused" in result.message


def test_timeout_is_a_transport_error(service, session):
    session.post.side_effect = requests.exceptions.Timeout("read timed out")

    result = service.call(URL, "key-123", "test/model", "Hi")

    assert result.success is False
    assert "read timed out" in result.message


def test_malformed_json(service, session):
    session.post.return_value = _response(200, "<html>not json</html>")

    result = service.call(URL, "key-123", "test/model", "Hi")

    assert result.success is False
    assert result.message.startswith("Failed to parse API response:")


@pytest.mark.parametrize("body", [
    {"choices": []},
    {"result": "Hello"},
    {"choices": [{"message": {}}]},
    {"choices": [{"message": {"content": 42}}]},
])
def test_unexpected_shape_is_a_parse_failure(service, session, body):
    session.post.return_value = _response(200, json.dumps(body))

    result = service.call(URL, "key-123", "test/model", "Hi")

    assert result.success is False
    assert result.message.startswith("Failed to parse API response:")


def test_null_content_is_empty_text(service, session):
    session.post.return_value = _response(
        200, json.dumps({"choices": [{"message": {"content": None}}]})
    )

    result = service.call(URL, "key-123", "test/model", "Hi")

    assert result.success is True
    assert result.message == ""


def test_other_exceptions_are_mapped(service, session):
    session.post.side_effect = RuntimeError("boom")

    result = service.call(URL, "key-123", "test/model", "Hi")

    assert result.success is False
    assert result.message == "Unexpected error: boom"


def test_timeout_defaults_from_environment(monkeypatch, session):
    monkeypatch.setenv("OPENROUTER_TIMEOUT_SECONDS", "12.5")

    assert OpenRouterService(session=session).timeout == 12.5


def test_shared_service_is_created_once():
    with patch.object(llm_service, "_openrouter_service", None):
        first = get_llm_service()
        second = get_llm_service()

    assert first is second
