"""Tests for the SQLite store."""
import asyncio

import pytest

from chat_room_api.app.core.db import DuplicateKeyError, Store
from chat_room_api.app.core.errors import StoreError


@pytest.mark.asyncio
async def test_queries_do_not_block_the_event_loop(store):
    ticks = 0

    async def ticker():
        nonlocal ticks
        while True:
            ticks += 1
            await asyncio.sleep(0)

    task = asyncio.create_task(ticker())
    try:
        for _ in range(50):
            await store.fetchall("SELECT name FROM participants")
    finally:
        task.cancel()
        await asyncio.gather(task, return_exceptions=True)

    assert ticks > 0


@pytest.mark.asyncio
async def test_write_result(store):
    result = await store.execute(
        "INSERT INTO participants (name, last_status) VALUES (?, ?)", ("alice", 1)
    )

    assert result.rowcount == 1
    assert await store.fetchone("SELECT name, last_status FROM participants") == {
        "name": "alice",
        "last_status": 1,
    }


@pytest.mark.asyncio
async def test_duplicate_key(store):
    sql = "INSERT INTO participants (name, last_status) VALUES (?, ?)"
    await store.execute(sql, ("alice", 1))

    with pytest.raises(DuplicateKeyError):
        await store.execute(sql, ("alice", 2))


@pytest.mark.asyncio
async def test_integer_too_large_is_a_store_error(store):
    with pytest.raises(StoreError):
        await store.fetchall("SELECT id FROM messages LIMIT ?", (10 ** 20,))


@pytest.mark.asyncio
async def test_open_failure(tmp_path):
    # A directory cannot be opened as a database file.
    store = Store(str(tmp_path))

    with pytest.raises(StoreError):
        await store.open()

    assert not store.available
    with pytest.raises(StoreError):
        await store.fetchall("SELECT 1")


@pytest.mark.asyncio
async def test_close_is_idempotent(tmp_path):
    store = Store(str(tmp_path / "chat.db"))
    await store.open()

    await store.close()
    await store.close()

    assert not store.available
