"""Deduplication cache unit tests."""

import asyncio

import pytest
from vende_client.dedup import DedupCache, request_key
from vende_client.exceptions import ApiError


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def test_request_key_is_stable() -> None:
    """Parameter order does not change the key."""
    a = request_key("get", "/products", {"limit": 10, "companyId": "c1"})
    b = request_key("GET", "/products", {"companyId": "c1", "limit": 10})
    assert a == b
    assert a.startswith("GET /products?")


def test_request_key_nested_and_none() -> None:
    """Nested mappings are sorted and None values dropped."""
    a = request_key("GET", "/p", {"filter": {"b": 1, "a": [1, 2]}, "q": None})
    b = request_key("GET", "/p", {"filter": {"a": [1, 2], "b": 1}})
    assert a == b
    assert request_key("GET", "/p", {"q": "x"}) != request_key("GET", "/p", {"q": "y"})
    assert request_key("GET", "/p") == request_key("GET", "/p", {})


async def test_concurrent_calls_share_one_request() -> None:
    """Two identical in-flight reads trigger a single call."""
    cache = DedupCache()
    release = asyncio.Event()
    calls = 0

    async def factory() -> list[str]:
        nonlocal calls
        calls += 1
        await release.wait()
        return ["p1"]

    key = request_key("GET", "/products")
    first = asyncio.ensure_future(cache.run(key, factory))
    second = asyncio.ensure_future(cache.run(key, factory))
    await asyncio.sleep(0)
    assert key in cache
    release.set()
    results = await asyncio.gather(first, second)
    assert calls == 1
    assert results[0] is results[1]
    assert len(cache) == 0


async def test_entry_removed_after_settlement() -> None:
    """Sequential reads each issue their own call."""
    cache = DedupCache()
    calls = 0

    async def factory() -> int:
        nonlocal calls
        calls += 1
        return calls

    assert await cache.run("k", factory) == 1
    assert "k" not in cache
    assert await cache.run("k", factory) == 2
    assert calls == 2


async def test_failure_shared_and_removed() -> None:
    """All callers see the same failure and the entry is dropped."""
    cache = DedupCache()
    release = asyncio.Event()
    calls = 0

    async def factory() -> None:
        nonlocal calls
        calls += 1
        await release.wait()
        raise ApiError(code="HTTP_500_ERROR", message="boom", status=500)

    first = asyncio.ensure_future(cache.run("k", factory))
    second = asyncio.ensure_future(cache.run("k", factory))
    await asyncio.sleep(0)
    release.set()
    results = await asyncio.gather(first, second, return_exceptions=True)
    assert calls == 1
    assert all(isinstance(r, ApiError) for r in results)
    assert results[0] is results[1]
    assert "k" not in cache


async def test_stale_pending_entry_is_replaced() -> None:
    """A pending entry older than the window is not reused."""
    clock = FakeClock()
    cache = DedupCache(window_ms=5000, clock=clock)
    first_release = asyncio.Event()
    calls = 0

    async def slow() -> str:
        nonlocal calls
        calls += 1
        await first_release.wait()
        return "stale"

    async def fast() -> str:
        nonlocal calls
        calls += 1
        return "fresh"

    first = asyncio.ensure_future(cache.run("k", slow))
    await asyncio.sleep(0)
    clock.now += 5.0
    assert await cache.run("k", fast) == "fresh"
    assert calls == 2
    first_release.set()
    assert await first == "stale"
    assert "k" not in cache


async def test_stale_settlement_keeps_replacement() -> None:
    """An old call settling does not evict the newer entry."""
    clock = FakeClock()
    cache = DedupCache(window_ms=5000, clock=clock)
    old_release = asyncio.Event()
    new_release = asyncio.Event()

    async def old() -> str:
        await old_release.wait()
        return "old"

    async def new() -> str:
        await new_release.wait()
        return "new"

    first = asyncio.ensure_future(cache.run("k", old))
    await asyncio.sleep(0)
    clock.now += 6.0
    second = asyncio.ensure_future(cache.run("k", new))
    await asyncio.sleep(0)
    old_release.set()
    assert await first == "old"
    assert "k" in cache
    new_release.set()
    assert await second == "new"
    assert "k" not in cache


async def test_cancelled_caller_does_not_cancel_shared_call() -> None:
    """Cancelling one waiter leaves the shared call running for the others."""
    cache = DedupCache()
    release = asyncio.Event()

    async def factory() -> str:
        await release.wait()
        return "ok"

    first = asyncio.ensure_future(cache.run("k", factory))
    second = asyncio.ensure_future(cache.run("k", factory))
    await asyncio.sleep(0)
    first.cancel()
    with pytest.raises(asyncio.CancelledError):
        await first
    release.set()
    assert await second == "ok"


async def test_clear() -> None:
    """clear() forgets pending entries."""
    cache = DedupCache()
    release = asyncio.Event()

    async def factory() -> str:
        await release.wait()
        return "ok"

    pending = asyncio.ensure_future(cache.run("k", factory))
    await asyncio.sleep(0)
    assert len(cache) == 1
    cache.clear()
    assert len(cache) == 0
    release.set()
    assert await pending == "ok"
