"""Groq provider implementation for groqchat.

Note: Groq exposes an OpenAI-compatible API, so the official OpenAI SDK is
used with Groq's base URL.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from openai import (
    APIConnectionError,
    APIStatusError,
    APITimeoutError,
    AuthenticationError,
    BadRequestError,
    InternalServerError,
    RateLimitError,
)
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..constants import DEFAULT_MODEL, GROQ_BASE_URL
from ..errors import CompletionError
from ..logging import log_event, sanitize_error_message
from ..timeouts import (
    COMPLETION_BACKOFF_INITIAL_SEC,
    COMPLETION_BACKOFF_MAX_SEC,
    COMPLETION_RETRY_ATTEMPTS,
    DEFAULT_PROFILE_TIMEOUT_SEC,
    completion_timeout,
)

PROVIDER_NAME = "groq"

TRANSIENT_ERRORS = (APIConnectionError, RateLimitError, APITimeoutError, InternalServerError)

# finish_reason values that change what the user sees.
TRUNCATED_NOTICE = "\n[Response was truncated due to length limit]"
FILTERED_TEXT = "[Response was filtered due to content policy]"


def _log_retry(retry_state: RetryCallState) -> None:
    """tenacity ``before_sleep`` hook: one ``ai_retry`` event per retried attempt."""
    error = retry_state.outcome.exception() if retry_state.outcome else None
    log_event(
        "ai_retry",
        level=logging.WARNING,
        provider=PROVIDER_NAME,
        attempt=retry_state.attempt_number,
        sleep_sec=retry_state.next_action.sleep if retry_state.next_action else None,
        error_type=type(error).__name__ if error else None,
        error=sanitize_error_message(str(error)) if error else None,
    )


def _http_context(error: Exception) -> dict[str, Any]:
    """Request line and status of a failed Groq call, where the SDK exposes them."""
    context: dict[str, Any] = {}
    request = getattr(error, "request", None)
    if request is not None:
        context["http_method"] = str(request.method)
        context["http_url"] = str(request.url)
    status = getattr(error, "status_code", None)
    if status is not None:
        context["http_status"] = status
    return context


class GroqProvider:
    """Groq chat-completions provider.

    Each request carries only the message it is given (plus the optional
    system prompt); conversation history is never sent.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        timeout: float = DEFAULT_PROFILE_TIMEOUT_SEC,
        base_url: str = GROQ_BASE_URL,
        system_prompt: str | None = None,
    ):
        """Initialize Groq provider.

        Args:
            api_key: Groq API key (sent as bearer credential)
            model: Model identifier
            timeout: Read timeout per request in seconds (0 = no timeout)
            base_url: OpenAI-compatible endpoint root
            system_prompt: Optional system instruction prepended to requests
        """
        from openai import AsyncOpenAI

        self.model = model
        self.timeout = timeout
        self.system_prompt = system_prompt

        self.client: Any = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=completion_timeout(timeout),
            max_retries=0,  # We handle retries explicitly with tenacity
        )

    def format_messages(self, text: str) -> list[dict[str, str]]:
        """Build the request payload for a single user message."""
        messages = [{"role": "user", "content": text}]
        if self.system_prompt:
            messages.insert(0, {"role": "system", "content": self.system_prompt})
        return messages

    @retry(
        retry=retry_if_exception_type(TRANSIENT_ERRORS),
        wait=wait_exponential(
            multiplier=COMPLETION_BACKOFF_INITIAL_SEC,
            min=COMPLETION_BACKOFF_INITIAL_SEC,
            max=COMPLETION_BACKOFF_MAX_SEC,
        ),
        stop=stop_after_attempt(COMPLETION_RETRY_ATTEMPTS),
        before_sleep=_log_retry,
        reraise=True,
    )
    async def _create_chat_completion(self, messages: list[dict[str, str]]):
        """Create a non-streaming chat completion with retries on transient errors."""
        return await self.client.chat.completions.create(
            model=self.model,
            messages=messages,
            stream=False,
        )

    async def complete(self, text: str) -> str:
        """Send one user message and return the reply text.

        Raises:
            CompletionError: On any transport, API or response failure
        """
        messages = self.format_messages(text)
        log_event(
            "ai_request",
            level=logging.INFO,
            provider=PROVIDER_NAME,
            model=self.model,
            input_chars=len(text),
            has_system_prompt=bool(self.system_prompt),
        )
        started = time.perf_counter()

        try:
            response = await self._create_chat_completion(messages)
            content, finish_reason = self._extract_content(response)
        except AuthenticationError as e:
            raise self._failure(e, started, "Groq rejected the API key") from e
        except BadRequestError as e:
            raise self._failure(
                e, started, f"Groq rejected the request for '{self.model}'"
            ) from e
        except TRANSIENT_ERRORS as e:
            raise self._failure(
                e, started, f"Groq unreachable after {COMPLETION_RETRY_ATTEMPTS} attempts"
            ) from e
        except APIStatusError as e:
            raise self._failure(e, started, f"Groq answered HTTP {e.status_code}") from e
        except Exception as e:
            raise self._failure(e, started, "Unexpected failure calling Groq") from e

        usage = getattr(response, "usage", None)
        log_event(
            "ai_response",
            level=logging.INFO if finish_reason in (None, "stop") else logging.WARNING,
            provider=PROVIDER_NAME,
            model=getattr(response, "model", None) or self.model,
            latency_ms=round((time.perf_counter() - started) * 1000, 1),
            output_chars=len(content),
            finish_reason=finish_reason,
            input_tokens=getattr(usage, "prompt_tokens", None),
            output_tokens=getattr(usage, "completion_tokens", None),
            total_tokens=getattr(usage, "total_tokens", None),
        )
        return content

    @staticmethod
    def _extract_content(response: Any) -> tuple[str, str | None]:
        choices = getattr(response, "choices", None)
        if not choices:
            return "", None

        choice = choices[0]
        finish_reason = getattr(choice, "finish_reason", None)
        content = getattr(choice.message, "content", None) or ""

        if finish_reason == "length":
            content += TRUNCATED_NOTICE
        elif finish_reason == "content_filter":
            content = FILTERED_TEXT
        return content, finish_reason

    def _failure(self, error: Exception, started: float, summary: str) -> CompletionError:
        """Log a failed completion and build the error shown in the conversation."""
        reason = sanitize_error_message(str(error)) or type(error).__name__
        log_event(
            "ai_error",
            level=logging.ERROR,
            provider=PROVIDER_NAME,
            model=self.model,
            summary=summary,
            latency_ms=round((time.perf_counter() - started) * 1000, 1),
            error_type=type(error).__name__,
            error=reason,
            **_http_context(error),
        )
        return CompletionError(reason)
