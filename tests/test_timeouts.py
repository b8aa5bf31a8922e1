"""Tests for completion timeout helpers."""

import httpx

from groqchat.timeouts import (
    GROQ_CONNECT_TIMEOUT_SEC,
    completion_timeout,
    format_timeout,
)


def test_completion_timeout_sets_read_limit():
    timeout = completion_timeout(45)

    assert isinstance(timeout, httpx.Timeout)
    assert timeout.read == 45
    assert timeout.connect == GROQ_CONNECT_TIMEOUT_SEC


def test_zero_timeout_waits_indefinitely():
    assert completion_timeout(0) is None


def test_format_timeout():
    assert format_timeout(0) == "none (waits for Groq indefinitely)"
    assert format_timeout(30) == "30s per reply"
    assert format_timeout(2.5) == "2.5s per reply"
