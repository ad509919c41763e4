"""
Tests for the accounts list manager
"""

import asyncio

import pytest
from unittest.mock import AsyncMock, MagicMock

from accountdesk.external_apis import ApiTransportError
from accountdesk.mocks import MockAccountApiClient
from accountdesk.models import AccountId, FilterColumn, OrderCacheState, SortField, StatusFilter
from accountdesk.services import AccountListManager


@pytest.fixture
def mock_client():
    """Mock API with 62 generated accounts."""
    return MockAccountApiClient()


@pytest.fixture
def manager(mock_client):
    return AccountListManager(mock_client)


@pytest.mark.asyncio
async def test_pagination_scenario(manager, mock_client):
    """50 on the first page, 12 on the second, then no more fetches."""
    await manager.load_first_page()
    assert len(manager.accounts) == 50
    assert manager.has_more
    assert manager.state.pagination.offset == 50

    assert await manager.load_more()
    assert len(manager.accounts) == 62
    assert not manager.has_more

    assert not await manager.load_more()
    assert mock_client.calls["list_accounts"] == 2


@pytest.mark.asyncio
async def test_load_more_uses_offset(make_account):
    client = MagicMock()
    client.list_accounts = AsyncMock(side_effect=[
        [make_account(f"A{i}", f"Account {i}") for i in range(50)],
        [make_account(f"B{i}", f"Account B{i}") for i in range(12)],
    ])
    manager = AccountListManager(client)

    await manager.load_first_page()
    await manager.load_more()

    client.list_accounts.assert_any_await(limit=50, offset=0)
    client.list_accounts.assert_awaited_with(limit=50, offset=50)
    assert not manager.has_more


@pytest.mark.asyncio
async def test_load_more_without_more_is_noop(manager, mock_client):
    await manager.load_all()
    before = manager.accounts
    calls = mock_client.calls["list_accounts"]

    assert not await manager.load_more()
    assert manager.accounts is before
    assert mock_client.calls["list_accounts"] == calls


@pytest.mark.asyncio
async def test_load_more_failure_keeps_rows(manager, mock_client):
    await manager.load_first_page()
    mock_client.failing.add("list_accounts")

    await manager.load_more()

    assert len(manager.accounts) == 50
    assert manager.error == "Failed to load accounts"
    assert manager.has_more

    # The user retries once the API is back
    mock_client.failing.clear()
    await manager.load_more()
    assert len(manager.accounts) == 62
    assert manager.error is None


@pytest.mark.asyncio
async def test_first_page_failure_sets_error():
    client = MagicMock()
    client.list_accounts = AsyncMock(side_effect=ApiTransportError("refused"))
    manager = AccountListManager(client)

    await manager.load_first_page()

    assert manager.accounts == ()
    assert manager.error == "Failed to load accounts"
    assert not manager.state.pagination.busy


@pytest.mark.asyncio
async def test_clearing_search_reloads_first_page(manager, mock_client):
    await manager.load_all()
    assert len(manager.accounts) == 62

    await manager.set_search("yuma")
    visible = manager.visible_accounts()
    assert visible
    assert all(a.location == "Yuma, AZ" for a in visible)
    assert mock_client.calls["list_accounts"] == 2

    await manager.set_search("")
    assert mock_client.calls["list_accounts"] == 3
    assert len(manager.accounts) == 50
    assert manager.has_more


@pytest.mark.asyncio
async def test_page_from_before_search_reset_is_discarded(make_account):
    """A load_more still in flight when the search is cleared must not land in the reloaded list."""
    rows = [make_account(f"A{i:03d}", f"Account {i:03d}") for i in range(150)]
    release = asyncio.Event()

    async def list_accounts(limit, offset):
        if offset == 100:
            await release.wait()
        return rows[offset:offset + limit]

    client = MagicMock()
    client.list_accounts = AsyncMock(side_effect=list_accounts)
    manager = AccountListManager(client)

    await manager.load_first_page()
    await manager.load_more()
    await manager.set_search("x")

    pending = asyncio.ensure_future(manager.load_more())
    await asyncio.sleep(0)
    assert manager.state.pagination.loading_more

    await manager.set_search("")
    release.set()
    await pending

    assert [a.code for a in manager.accounts] == [f"A{i:03d}" for i in range(50)]
    assert manager.state.pagination.offset == 50
    assert manager.has_more
    assert not manager.state.pagination.busy

    # Paging continues from the reloaded position
    await manager.load_more()
    assert [a.code for a in manager.accounts] == [f"A{i:03d}" for i in range(100)]


@pytest.mark.asyncio
async def test_clearing_column_filter_keeps_pages(manager, mock_client):
    await manager.load_all()
    manager.set_column_filter(FilterColumn.NAME, "growers 06")
    assert len(manager.visible_accounts()) == 3

    manager.set_column_filter(FilterColumn.NAME, "")
    assert len(manager.visible_accounts()) == 62
    assert mock_client.calls["list_accounts"] == 2


@pytest.mark.asyncio
async def test_phone_search_through_manager(manager):
    await manager.load_first_page()

    await manager.set_search("9165550123")
    assert [a.code for a in manager.visible_accounts()] == ["ACC-001"]

    await manager.set_search("917")
    assert manager.visible_accounts() == []


@pytest.mark.asyncio
async def test_status_filter_and_sort(manager):
    await manager.load_all()
    manager.set_status_filter(StatusFilter.INACTIVE)
    manager.toggle_sort(SortField.CODE)
    manager.toggle_sort(SortField.CODE)

    visible = [a.code for a in manager.visible_accounts()]
    assert visible == ["ACC-056", "ACC-049", "ACC-042", "ACC-035", "ACC-028", "ACC-021", "ACC-014", "ACC-007"]
    assert manager.status_counts() == (62, 54, 8)


@pytest.mark.asyncio
async def test_open_orders_twice_fetches_once(manager, mock_client):
    await manager.load_first_page()
    account_id = AccountId("acct-0002")

    await manager.open_orders(account_id)
    manager.click_outside()
    await manager.open_orders(account_id)

    assert mock_client.calls["list_account_orders"] == 1
    assert manager.state.open_popover == account_id


@pytest.mark.asyncio
async def test_opening_second_popover_closes_first(manager):
    await manager.load_first_page()

    await manager.open_orders(AccountId("acct-0001"))
    assert manager.state.open_popover == "acct-0001"

    await manager.open_orders(AccountId("acct-0002"))
    assert manager.state.open_popover == "acct-0002"

    manager.close_orders()
    assert manager.state.open_popover is None


@pytest.mark.asyncio
async def test_order_fetch_failure_is_isolated(manager, mock_client):
    await manager.load_first_page()
    mock_client.failing.add("list_account_orders")

    entry = await manager.open_orders(AccountId("acct-0003"))

    assert entry.state is OrderCacheState.FAILED
    assert manager.error is None
    assert len(manager.accounts) == 50


@pytest.mark.asyncio
async def test_search_matches_cached_order_number(manager):
    await manager.load_first_page()
    await manager.set_search("43002")
    assert manager.visible_accounts() == []

    # Order 43002 is between acct-0002 (seller) and acct-0003 (buyer)
    await manager.open_orders(AccountId("acct-0003"))
    assert [a.code for a in manager.visible_accounts()] == ["ACC-003"]


@pytest.mark.asyncio
async def test_created_account_is_shown_first(manager, make_account):
    await manager.load_first_page()
    manager.account_created(make_account("ACC-999", "Brand New Buyer"))

    assert manager.accounts[0].code == "ACC-999"
    assert len(manager.accounts) == 51
