"""Tests for message id generation and prefix resolution."""

from groqchat.message_ids import generate_message_id, resolve_message_id


def test_generate_message_id_basic():
    issued = set()
    message_id = generate_message_id(issued)

    assert len(message_id) == 8
    int(message_id, 16)
    assert message_id in issued


def test_generate_message_id_uniqueness():
    issued = set()
    ids = [generate_message_id(issued) for _ in range(200)]

    assert len(ids) == len(set(ids))
    assert len(issued) == 200


def test_generate_message_id_grows_digits_on_collisions():
    # A one-digit space fills quickly, forcing longer ids.
    issued = set()
    for _ in range(40):
        generate_message_id(issued, min_digits=1)

    assert any(len(message_id) > 1 for message_id in issued)


def test_resolve_message_id_exact_and_prefix():
    known = ["3fa91c07", "3fb00000", "a0000001"]

    assert resolve_message_id("3fa91c07", known) == "3fa91c07"
    assert resolve_message_id("3fa", known) == "3fa91c07"
    assert resolve_message_id("A0", known) == "a0000001"


def test_resolve_message_id_ambiguous_or_missing():
    known = ["3fa91c07", "3fb00000"]

    assert resolve_message_id("3f", known) is None
    assert resolve_message_id("ff", known) is None
    assert resolve_message_id("  ", known) is None
