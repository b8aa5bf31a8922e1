"""Tests for the Groq completion provider."""

import logging
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from openai import AuthenticationError, BadRequestError

from groqchat.ai import GroqProvider
from groqchat.ai.groq_provider import _log_retry
from groqchat.errors import CompletionError


def _response(content="Hello!", finish_reason="stop"):
    return SimpleNamespace(
        model="llama-3.1-8b-instant",
        choices=[
            SimpleNamespace(
                finish_reason=finish_reason,
                message=SimpleNamespace(content=content),
            )
        ],
        usage=SimpleNamespace(prompt_tokens=5, completion_tokens=2, total_tokens=7),
    )


def _provider(**kwargs):
    provider = GroqProvider(api_key="gsk_test_key_1234567890", **kwargs)
    provider.client = MagicMock()
    provider.client.chat.completions.create = AsyncMock(return_value=_response())
    return provider


def _http_response(status_code: int) -> httpx.Response:
    request = httpx.Request("POST", "https://api.groq.com/openai/v1/chat/completions")
    return httpx.Response(status_code, request=request)


def test_client_uses_groq_endpoint():
    provider = GroqProvider(api_key="gsk_test_key_1234567890")

    assert str(provider.client.base_url).rstrip("/") == "https://api.groq.com/openai/v1"
    assert provider.model == "llama-3.1-8b-instant"


def test_format_messages_sends_only_given_text():
    provider = _provider()
    assert provider.format_messages("hi") == [{"role": "user", "content": "hi"}]


def test_format_messages_prepends_system_prompt():
    provider = _provider(system_prompt="Be brief.")
    assert provider.format_messages("hi") == [
        {"role": "system", "content": "Be brief."},
        {"role": "user", "content": "hi"},
    ]


@pytest.mark.asyncio
async def test_complete_returns_reply_content():
    provider = _provider()

    assert await provider.complete("hi") == "Hello!"

    provider.client.chat.completions.create.assert_awaited_once_with(
        model="llama-3.1-8b-instant",
        messages=[{"role": "user", "content": "hi"}],
        stream=False,
    )


@pytest.mark.asyncio
async def test_complete_without_choices_returns_empty_text():
    provider = _provider()
    provider.client.chat.completions.create.return_value = SimpleNamespace(
        model="m", choices=[], usage=None
    )

    assert await provider.complete("hi") == ""


@pytest.mark.asyncio
async def test_complete_with_null_content_returns_empty_text():
    provider = _provider()
    provider.client.chat.completions.create.return_value = _response(content=None)

    assert await provider.complete("hi") == ""


@pytest.mark.asyncio
async def test_truncated_reply_is_marked():
    provider = _provider()
    provider.client.chat.completions.create.return_value = _response("partial", "length")

    assert await provider.complete("hi") == "partial\n[Response was truncated due to length limit]"


@pytest.mark.asyncio
async def test_authentication_error_is_wrapped_and_sanitized():
    provider = _provider()
    provider.client.chat.completions.create.side_effect = AuthenticationError(
        "Invalid API key gsk_abcdefghijklmnop",
        response=_http_response(401),
        body=None,
    )

    with patch("groqchat.ai.groq_provider.log_event") as mock_log:
        with pytest.raises(CompletionError) as exc_info:
            await provider.complete("hi")

    assert "gsk_abcdefghijklmnop" not in exc_info.value.reason
    assert "[REDACTED_API_KEY]" in exc_info.value.reason
    assert isinstance(exc_info.value.__cause__, AuthenticationError)

    event, = [c for c in mock_log.call_args_list if c.args[0] == "ai_error"]
    assert event.kwargs["summary"] == "Groq rejected the API key"
    assert event.kwargs["http_status"] == 401
    assert event.kwargs["http_method"] == "POST"
    assert "gsk_abcdefghijklmnop" not in event.kwargs["error"]


@pytest.mark.asyncio
async def test_bad_request_is_not_retried():
    provider = _provider()
    provider.client.chat.completions.create.side_effect = BadRequestError(
        "model not found",
        response=_http_response(400),
        body=None,
    )

    with pytest.raises(CompletionError, match="model not found"):
        await provider.complete("hi")

    assert provider.client.chat.completions.create.await_count == 1


@pytest.mark.asyncio
async def test_unexpected_error_is_wrapped():
    provider = _provider()
    provider.client.chat.completions.create.side_effect = RuntimeError("socket closed")

    with pytest.raises(CompletionError, match="socket closed"):
        await provider.complete("hi")


@pytest.mark.asyncio
async def test_malformed_response_is_wrapped():
    provider = _provider()
    provider.client.chat.completions.create.return_value = SimpleNamespace(
        choices=[SimpleNamespace(finish_reason="stop")], usage=None
    )

    with pytest.raises(CompletionError):
        await provider.complete("hi")


@pytest.mark.asyncio
async def test_truncated_reply_logs_warning():
    provider = _provider()
    provider.client.chat.completions.create.return_value = _response("partial", "length")

    with patch("groqchat.ai.groq_provider.log_event") as mock_log:
        await provider.complete("hi")

    response_event = mock_log.call_args_list[-1]
    assert response_event.args[0] == "ai_response"
    assert response_event.kwargs["level"] == logging.WARNING
    assert response_event.kwargs["finish_reason"] == "length"


def test_retry_hook_logs_attempt():
    error = ConnectionError("reset by gsk_abcdefghijklmnop")
    retry_state = SimpleNamespace(
        attempt_number=2,
        outcome=SimpleNamespace(exception=lambda: error),
        next_action=SimpleNamespace(sleep=2.0),
    )

    with patch("groqchat.ai.groq_provider.log_event") as mock_log:
        _log_retry(retry_state)

    mock_log.assert_called_once_with(
        "ai_retry",
        level=logging.WARNING,
        provider="groq",
        attempt=2,
        sleep_sec=2.0,
        error_type="ConnectionError",
        error="reset by [REDACTED_API_KEY]",
    )
