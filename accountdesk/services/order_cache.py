"""Lazy per-account cache of recent orders for the orders popover."""

import asyncio
import logging
from collections.abc import Mapping
from typing import Dict, Iterator, List, Optional

from accountdesk.config import RECENT_ORDERS_LIMIT
from accountdesk.external_apis.errors import AccountApiError
from accountdesk.models.account import AccountId
from accountdesk.models.order import Order
from accountdesk.models.view_state import ABSENT_ENTRY, OrderCacheEntry, OrderCacheState

logger = logging.getLogger(__name__)


class OrderCache(Mapping):
    """
    Mapping of account id to its cached recent orders.

    Entries move ABSENT -> LOADING -> LOADED or FAILED. A LOADED entry is
    never re-fetched during the session. A FAILED entry is fetched again the
    next time it is triggered. At most one fetch per account is in flight;
    triggering an account that is already loading waits on the same fetch.
    Fetches are never cancelled, so a response that arrives after its popover
    closed still fills the cache.
    """

    def __init__(self, client, limit: int = RECENT_ORDERS_LIMIT):
        """
        Initialize the cache.

        Args:
            client: AccountApiClient or any object with list_account_orders()
            limit: Number of recent orders fetched per account
        """
        self.client = client
        self.limit = limit
        self._entries: Dict[AccountId, OrderCacheEntry] = {}
        self._in_flight: Dict[AccountId, asyncio.Task] = {}

    def __getitem__(self, account_id: AccountId) -> OrderCacheEntry:
        return self._entries[account_id]

    def __iter__(self) -> Iterator[AccountId]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def entry(self, account_id: AccountId) -> OrderCacheEntry:
        return self._entries.get(account_id, ABSENT_ENTRY)

    def is_loading(self, account_id: AccountId) -> bool:
        return self.entry(account_id).state is OrderCacheState.LOADING

    def orders_for(self, account_id: AccountId) -> List[Order]:
        return list(self.entry(account_id).orders)

    def order_numbers(self, account_id: AccountId) -> List[str]:
        return [order.order_no for order in self.entry(account_id).orders]

    def outstanding_count(self, account_id: AccountId) -> int:
        return self.entry(account_id).outstanding_count

    async def ensure_loaded(self, account_id: AccountId) -> OrderCacheEntry:
        """
        Make sure the account's recent orders are cached.

        Returns:
            The entry after the fetch settles (LOADED or FAILED)
        """
        entry = self.entry(account_id)
        if entry.state is OrderCacheState.LOADED:
            return entry

        task = self._in_flight.get(account_id)
        if task is None:
            self._entries[account_id] = OrderCacheEntry(state=OrderCacheState.LOADING)
            task = asyncio.ensure_future(self._fetch(account_id))
            self._in_flight[account_id] = task
        else:
            logger.debug(f"Orders for account {account_id} already loading")

        # A caller giving up must not abort the shared fetch
        return await asyncio.shield(task)

    async def _fetch(self, account_id: AccountId) -> OrderCacheEntry:
        entry: Optional[OrderCacheEntry] = None
        try:
            orders = await self.client.list_account_orders(account_id, limit=self.limit)
            entry = OrderCacheEntry(state=OrderCacheState.LOADED, orders=tuple(orders))
            logger.info(f"Cached {len(orders)} orders for account {account_id}")
        except AccountApiError as e:
            logger.error(f"Error fetching orders for account {account_id}: {str(e)}")
            entry = OrderCacheEntry(state=OrderCacheState.FAILED, error=str(e))
        finally:
            self._in_flight.pop(account_id, None)
            if entry is None:
                # Cancelled or unexpected failure: drop the loading flag anyway
                self._entries.pop(account_id, None)
            else:
                self._entries[account_id] = entry
        return entry
