"""Accounts list view-state manager."""

import logging
from typing import List, Optional, Tuple

from accountdesk.config import LOAD_ACCOUNTS_ERROR, PAGE_SIZE
from accountdesk.external_apis.errors import AccountApiError
from accountdesk.models.account import Account, AccountId
from accountdesk.models.view_state import (
    FilterColumn, OrderCacheEntry, Pagination, SortField, StatusFilter, ViewState
)
from accountdesk.services import reducers
from accountdesk.services.order_cache import OrderCache
from accountdesk.services.projection import project_accounts, status_counts

logger = logging.getLogger(__name__)


class AccountListManager:
    """
    Holds the accounts list state and drives it from user actions.

    State lives in an immutable ViewState that is swapped through the pure
    reducers; this class only adds the API calls around them.
    """

    def __init__(self, client, order_cache: Optional[OrderCache] = None, page_size: int = PAGE_SIZE):
        """
        Initialize the manager.

        Args:
            client: AccountApiClient (or the mock) used for every fetch
            order_cache: Shared order cache; a new one over the same client by default
            page_size: Accounts per page
        """
        self.client = client
        self.order_cache = order_cache or OrderCache(client)
        self.state = ViewState(pagination=Pagination(page_size=page_size))

    @property
    def accounts(self) -> Tuple[Account, ...]:
        return self.state.accounts

    @property
    def has_more(self) -> bool:
        return self.state.pagination.has_more

    @property
    def error(self) -> Optional[str]:
        return self.state.error

    async def load_first_page(self) -> None:
        """Fetch page one, discarding anything loaded before."""
        await self._fetch_page(append=False)

    async def load_more(self) -> bool:
        """
        Append the next page.

        Returns:
            False without fetching when the end was reached or a fetch is in flight
        """
        pagination = self.state.pagination
        if not pagination.has_more:
            logger.debug("No more accounts to load")
            return False
        if pagination.busy:
            logger.debug("Accounts page already loading")
            return False
        await self._fetch_page(append=True)
        return True

    async def load_all(self) -> None:
        """Keep loading pages until the API returns a short page or fails."""
        if not self.state.accounts and self.has_more:
            await self.load_first_page()
        while self.has_more and not self.error:
            await self.load_more()

    async def _fetch_page(self, append: bool) -> None:
        offset = self.state.pagination.offset if append else 0
        limit = self.state.pagination.page_size
        self.state = reducers.begin_load(self.state, append)
        generation = self.state.pagination.generation
        try:
            page = await self.client.list_accounts(limit=limit, offset=offset)
        except AccountApiError as e:
            if self._is_stale(generation, offset):
                return
            logger.error(f"Error loading accounts at offset {offset}: {str(e)}")
            self.state = reducers.page_failed(self.state, LOAD_ACCOUNTS_ERROR)
            return

        if self._is_stale(generation, offset):
            return
        self.state = reducers.page_loaded(self.state, page, append)
        logger.info(
            f"Loaded {len(page)} accounts at offset {offset}; "
            f"{len(self.state.accounts)} held, has_more={self.has_more}"
        )

    def _is_stale(self, generation: int, offset: int) -> bool:
        # A reset load started while this page was in flight
        if generation == self.state.pagination.generation:
            return False
        logger.info(f"Discarding accounts page at offset {offset} from an earlier load")
        return True

    async def set_search(self, query: str) -> None:
        """
        Update the search box.

        Clearing a non-empty query back to empty reloads from the first page,
        dropping pages appended by load_more.
        """
        previous = self.state.search_query
        self.state = reducers.set_search_query(self.state, query)
        if previous.strip() and not query.strip():
            logger.info("Search cleared, reloading accounts from the first page")
            await self.load_first_page()

    def set_column_filter(self, column: FilterColumn, value) -> None:
        self.state = reducers.set_column_filter(self.state, column, value)

    def set_status_filter(self, status: StatusFilter) -> None:
        self.state = reducers.set_column_filter(self.state, FilterColumn.STATUS, status)

    def clear_column_filters(self) -> None:
        self.state = reducers.clear_column_filters(self.state)

    def toggle_sort(self, field: SortField) -> None:
        self.state = reducers.toggle_sort(self.state, field)

    async def open_orders(self, account_id: AccountId) -> OrderCacheEntry:
        """Open an account's orders popover (closing any other) and load its orders."""
        self.state = reducers.open_popover(self.state, account_id)
        return await self.order_cache.ensure_loaded(account_id)

    def close_orders(self) -> None:
        self.state = reducers.close_popover(self.state)

    def click_outside(self) -> None:
        self.state = reducers.click_outside(self.state)

    def account_created(self, account: Account) -> None:
        """Result of the external create-account action."""
        self.state = reducers.prepend_account(self.state, account)

    def visible_accounts(self) -> List[Account]:
        return project_accounts(self.state, self.order_cache.order_numbers)

    def status_counts(self) -> Tuple[int, int, int]:
        return status_counts(self.state.accounts)
