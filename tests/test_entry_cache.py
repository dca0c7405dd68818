"""Tests for the invalidate-and-refetch entry cache."""

import asyncio

import pytest

from textstore.client.cache import EntryCache
from textstore.client.models import AuthEvent
from textstore.client.session import SessionMonitor
from textstore.core.errors import RemoteError
from tests.fakes import FakeSessionFeed, InMemoryRemoteStore


async def start_cache(feed: FakeSessionFeed, store: InMemoryRemoteStore) -> EntryCache:
    monitor = SessionMonitor(feed)
    cache = EntryCache(store, monitor)
    await monitor.start()
    return cache


@pytest.mark.asyncio
async def test_no_session_means_no_fetch() -> None:
    feed = FakeSessionFeed(None)
    store = InMemoryRemoteStore(feed)
    cache = await start_cache(feed, store)

    assert await cache.list() == []
    cache.invalidate()
    await cache.settle()

    assert not cache.enabled
    assert store.calls == []


@pytest.mark.asyncio
async def test_list_is_newest_first(feed, store, alice) -> None:
    await store.insert_entry("first", "one", alice.user_id)
    await store.insert_entry("second", "two", alice.user_id)
    await store.insert_entry("third", "three", alice.user_id)

    cache = await start_cache(feed, store)
    entries = await cache.list()

    assert [entry.title for entry in entries] == ["third", "second", "first"]
    assert cache.is_loaded
    assert not cache.is_stale


@pytest.mark.asyncio
async def test_list_reuses_loaded_value(feed, store) -> None:
    cache = await start_cache(feed, store)
    await cache.list()
    await cache.list()

    assert store.count("list") == 1


@pytest.mark.asyncio
async def test_fetch_failure_keeps_last_known_entries(feed, store, alice) -> None:
    await store.insert_entry("kept", "value", alice.user_id)
    cache = await start_cache(feed, store)
    before = await cache.list()

    store.fail("list", "connection reset")
    cache.invalidate()
    with pytest.raises(RemoteError, match="connection reset"):
        await cache.settle()

    assert cache.entries == before
    assert cache.error is not None
    assert cache.error.message == "connection reset"


@pytest.mark.asyncio
async def test_list_retries_after_failed_fetch(feed, store, alice) -> None:
    store.fail("list", "timeout")
    cache = await start_cache(feed, store)
    with pytest.raises(RemoteError):
        await cache.list()

    await store.insert_entry("later", "value", alice.user_id)
    entries = await cache.list()

    assert [entry.title for entry in entries] == ["later"]
    assert cache.error is None


@pytest.mark.asyncio
async def test_invalidations_during_fetch_collapse(feed, store, alice) -> None:
    gate = asyncio.Event()
    store.list_gates.append(gate)
    cache = await start_cache(feed, store)
    await asyncio.sleep(0)
    assert cache.is_loading

    await store.insert_entry("written meanwhile", "value", alice.user_id)
    cache.invalidate()
    cache.invalidate()
    cache.invalidate()
    gate.set()
    await cache.settle()

    assert store.count("list") == 2
    assert [entry.title for entry in cache.entries] == ["written meanwhile"]


@pytest.mark.asyncio
async def test_fetch_from_previous_user_is_discarded(feed, store, alice, bob) -> None:
    await store.insert_entry("alice's", "private", alice.user_id)
    gate = asyncio.Event()
    store.list_gates.append(gate)
    cache = await start_cache(feed, store)
    await asyncio.sleep(0)

    feed.sign_in(bob)
    await store.insert_entry("bob's", "mine", bob.user_id)
    gate.set()
    await cache.settle()

    assert [entry.title for entry in cache.entries] == ["bob's"]
    assert all(entry.owner_id == bob.user_id for entry in cache.entries)


@pytest.mark.asyncio
async def test_sign_out_clears_and_disables(feed, store, alice) -> None:
    await store.insert_entry("entry", "value", alice.user_id)
    cache = await start_cache(feed, store)
    await cache.list()

    feed.emit(AuthEvent.SIGNED_OUT, None)

    assert cache.entries == []
    assert not cache.enabled
    assert await cache.list() == []
    assert store.count("list") == 1


@pytest.mark.asyncio
async def test_token_refresh_does_not_refetch(feed, store, alice) -> None:
    cache = await start_cache(feed, store)
    await cache.list()

    feed.emit(AuthEvent.TOKEN_REFRESHED, alice.model_copy(update={"access_token": "rotated"}))
    await cache.settle()

    assert store.count("list") == 1


@pytest.mark.asyncio
async def test_invalidate_bumps_generation(feed, store) -> None:
    cache = await start_cache(feed, store)
    await cache.settle()
    generation = cache.generation

    cache.invalidate()
    assert cache.generation == generation + 1
    assert cache.is_stale
    await cache.settle()
    assert not cache.is_stale
