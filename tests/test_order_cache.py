"""
Tests for the lazy per-account order cache
"""

import asyncio
import pytest
from unittest.mock import AsyncMock, MagicMock

from accountdesk.external_apis import ApiTransportError
from accountdesk.models import AccountId, OrderCacheState, OrderStatus
from accountdesk.services.order_cache import OrderCache


@pytest.fixture
def client(make_order):
    """API client whose order fetch returns one outstanding and one paid order."""
    client = MagicMock()
    client.list_account_orders = AsyncMock(return_value=[
        make_order("43491", OrderStatus.CONFIRMED),
        make_order("43490", OrderStatus.PAID),
    ])
    return client


@pytest.mark.asyncio
async def test_second_trigger_reuses_cache(client):
    """Triggering the same account twice issues exactly one fetch."""
    cache = OrderCache(client)
    account_id = AccountId("acct-1")

    first = await cache.ensure_loaded(account_id)
    second = await cache.ensure_loaded(account_id)

    assert client.list_account_orders.await_count == 1
    client.list_account_orders.assert_awaited_with(account_id, limit=5)
    assert first is second
    assert first.state is OrderCacheState.LOADED
    assert cache.order_numbers(account_id) == ["43491", "43490"]
    assert cache.outstanding_count(account_id) == 1


@pytest.mark.asyncio
async def test_trigger_while_loading_is_noop(make_order):
    """A trigger for an account that is already loading does not start a second fetch."""
    release = asyncio.Event()

    async def slow_fetch(account_id, limit):
        await release.wait()
        return [make_order("1")]

    client = MagicMock()
    client.list_account_orders = AsyncMock(side_effect=slow_fetch)
    cache = OrderCache(client)
    account_id = AccountId("acct-1")

    first = asyncio.ensure_future(cache.ensure_loaded(account_id))
    await asyncio.sleep(0)
    assert cache.is_loading(account_id)

    second = asyncio.ensure_future(cache.ensure_loaded(account_id))
    await asyncio.sleep(0)
    release.set()
    results = await asyncio.gather(first, second)

    assert client.list_account_orders.await_count == 1
    assert results[0] is results[1]
    assert not cache.is_loading(account_id)


@pytest.mark.asyncio
async def test_different_accounts_fetch_independently(client):
    cache = OrderCache(client)
    await asyncio.gather(cache.ensure_loaded(AccountId("a")), cache.ensure_loaded(AccountId("b")))

    assert client.list_account_orders.await_count == 2
    assert set(cache) == {"a", "b"}
    assert len(cache) == 2


@pytest.mark.asyncio
async def test_failed_fetch_clears_loading_and_can_retry(make_order):
    client = MagicMock()
    client.list_account_orders = AsyncMock(side_effect=[ApiTransportError("connection reset"), [make_order("7")]])
    cache = OrderCache(client)
    account_id = AccountId("acct-1")

    entry = await cache.ensure_loaded(account_id)
    assert entry.state is OrderCacheState.FAILED
    assert "connection reset" in entry.error
    assert not cache.is_loading(account_id)
    assert cache.orders_for(account_id) == []
    assert cache.outstanding_count(account_id) == 0

    entry = await cache.ensure_loaded(account_id)
    assert entry.state is OrderCacheState.LOADED
    assert client.list_account_orders.await_count == 2


def test_untouched_account_is_absent(client):
    cache = OrderCache(client)
    account_id = AccountId("never-opened")

    assert cache.entry(account_id).state is OrderCacheState.ABSENT
    assert account_id not in cache
    assert cache.order_numbers(account_id) == []
    client.list_account_orders.assert_not_called()
