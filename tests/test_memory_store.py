"""Tests for the in-memory message store."""

import pytest

from groqchat.domain.message import NewMessage
from groqchat.errors import MessageNotFoundError, StoreError
from groqchat.store import InMemoryMessageStore


@pytest.mark.asyncio
async def test_append_assigns_id_and_timestamp():
    store = InMemoryMessageStore()

    message = await store.append(NewMessage.user("hello"))

    assert len(message.id) >= 8
    int(message.id, 16)
    assert message.created_utc.endswith("Z")
    assert message.role == "user"


@pytest.mark.asyncio
async def test_returned_messages_are_copies():
    store = InMemoryMessageStore()
    message = await store.append(NewMessage.user("hello"))

    message.content = "mutated"

    assert (await store.scan_ordered())[0].content == "hello"


@pytest.mark.asyncio
async def test_injected_failures_raise_store_error():
    store = InMemoryMessageStore(fail_on={"append", "scan_ordered"})

    with pytest.raises(StoreError, match="append failed"):
        await store.append(NewMessage.user("hello"))
    with pytest.raises(StoreError, match="scan_ordered failed"):
        await store.scan_ordered()


@pytest.mark.asyncio
async def test_update_and_delete_unknown_id():
    store = InMemoryMessageStore()

    with pytest.raises(MessageNotFoundError):
        await store.update_content("ffffffff", "x")
    with pytest.raises(MessageNotFoundError):
        await store.delete_by_id("ffffffff")


@pytest.mark.asyncio
async def test_delete_by_relation_counts_deleted():
    store = InMemoryMessageStore()
    user = await store.append(NewMessage.user("q"))
    await store.append(NewMessage.assistant("a", reply_to=user.id))

    assert await store.delete_by_relation(user.id) == 1
    assert [m.id for m in await store.scan_ordered()] == [user.id]
