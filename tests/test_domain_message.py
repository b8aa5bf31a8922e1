"""Tests for typed message models."""

import pytest

from groqchat.domain.message import Message, NewMessage, utc_now_roundtrip


def test_new_message_constructors():
    assert NewMessage.user("hi") == NewMessage(role="user", content="hi")
    reply = NewMessage.assistant("caption", reply_to="aaaaaaaa", image="https://img.test/x")
    assert reply.role == "assistant"
    assert reply.reply_to == "aaaaaaaa"
    assert reply.image == "https://img.test/x"


def test_from_raw_round_trip_keeps_unknown_keys():
    raw = {
        "id": "aaaaaaaa",
        "created_utc": "2026-01-01T00:00:00.000000Z",
        "role": "assistant",
        "content": "hello",
        "reply_to": "bbbbbbbb",
        "custom": 1,
    }

    message = Message.from_raw(raw)

    assert message.is_assistant
    assert message.extras == {"custom": 1}
    assert message.to_dict() == raw


def test_from_raw_joins_line_arrays():
    message = Message.from_raw({"id": "a1b2c3d4", "role": "user", "content": ["a", "b"]})
    assert message.content == "a\nb"


@pytest.mark.parametrize(
    ("raw", "error"),
    [
        ("text", "expected object"),
        ({"role": "user", "content": "x"}, "missing id"),
        ({"id": "a", "role": "user"}, "missing content"),
        ({"id": "a", "role": "system", "content": "x"}, "unknown role 'system'"),
        ({"id": "a", "role": "user", "content": 5}, "content must be a string"),
    ],
)
def test_from_raw_rejects_invalid_messages(raw, error):
    with pytest.raises(ValueError, match=error):
        Message.from_raw(raw, index=3)


def test_to_dict_omits_unset_optional_fields():
    message = Message(id="aaaaaaaa", role="user", content="x", created_utc="t")
    assert message.to_dict() == {"id": "aaaaaaaa", "created_utc": "t", "role": "user", "content": "x"}


def test_utc_now_roundtrip_format():
    stamp = utc_now_roundtrip()
    assert stamp.endswith("Z")
    assert "." in stamp
