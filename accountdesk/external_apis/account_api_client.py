"""HTTP client for the dashboard accounts and invoices API."""

import asyncio
import logging
from typing import Dict, Any, Optional, List

import aiohttp

from accountdesk.config import (
    API_URL,
    ACCOUNTS_PATH,
    INVOICES_PATH,
    PAGE_SIZE,
    RECENT_ORDERS_LIMIT,
    REQUEST_TIMEOUT_SECONDS,
)
from accountdesk.external_apis.errors import (
    AccountApiError,
    AccountNotFoundError,
    ApiStatusError,
    ApiTransportError,
)
from accountdesk.models.account import Account, AccountId
from accountdesk.models.forms import AddressForm, ContactForm
from accountdesk.models.order import Order

logger = logging.getLogger(__name__)


class AccountApiClient:
    """Client for the accounts, addresses, contacts and invoices endpoints."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize the API client.

        Args:
            base_url: API root, defaults to ACCOUNTDESK_API_URL or the local server
            timeout: Total request timeout in seconds
            session: Optional shared aiohttp session. When omitted each request
                opens and closes its own session.
        """
        self.base_url = (base_url or API_URL).rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout or REQUEST_TIMEOUT_SECONDS)
        self._session = session
        logger.info(f"Initialized AccountApiClient for {self.base_url}")

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        payload: Optional[Dict[str, Any]] = None
    ) -> Any:
        """
        Send one request and decode the JSON body.

        Raises:
            ApiTransportError: the request failed before a response arrived
            ApiStatusError: the API answered with a non-success status
        """
        url = f"{self.base_url}{path}"
        query = {key: str(value) for key, value in (params or {}).items() if value is not None}

        async def send(session: aiohttp.ClientSession) -> Any:
            async with session.request(method, url, params=query, json=payload) as response:
                if response.status >= 400:
                    body = await response.text()
                    logger.error(f"{method} {path} failed with status {response.status}: {body[:200]}")
                    raise ApiStatusError(response.status)
                try:
                    return await response.json(content_type=None)
                except ValueError as e:
                    logger.error(f"{method} {path} returned a body that is not JSON: {str(e)}")
                    raise AccountApiError(f"Invalid JSON from {path}") from e

        try:
            if self._session is not None:
                return await send(self._session)
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                return await send(session)
        except AccountApiError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"{method} {path} failed: {str(e)}")
            raise ApiTransportError(str(e)) from e

    async def list_accounts(
        self,
        limit: int = PAGE_SIZE,
        offset: int = 0,
        search: Optional[str] = None
    ) -> List[Account]:
        """
        Fetch one page of accounts.

        Args:
            limit: Page size
            offset: Number of accounts to skip
            search: Optional server-side search string

        Returns:
            Accounts in API order, each with embedded addresses and contacts
        """
        data = await self._request(
            "GET", ACCOUNTS_PATH,
            params={"limit": limit, "offset": offset, "search": search or None}
        )
        accounts = [Account.from_api(item) for item in data or []]
        logger.info(f"Fetched {len(accounts)} accounts (limit={limit}, offset={offset})")
        return accounts

    async def get_account(self, account_id: AccountId) -> Account:
        """
        Fetch a single account with its addresses and contacts.

        Raises:
            AccountNotFoundError: the account does not exist
        """
        try:
            data = await self._request("GET", f"{ACCOUNTS_PATH}/{account_id}")
        except ApiStatusError as e:
            if e.status == 404:
                raise AccountNotFoundError(account_id) from e
            raise

        if not data:
            logger.warning(f"Account {account_id} not found")
            raise AccountNotFoundError(account_id)
        return Account.from_api(data)

    async def list_account_orders(
        self,
        account_id: AccountId,
        limit: int = RECENT_ORDERS_LIMIT
    ) -> List[Order]:
        """
        Fetch the most recent invoices where the account is seller or buyer.

        Returns:
            Orders, most recent first, with embedded line items
        """
        data = await self._request(
            "GET", INVOICES_PATH,
            params={"accountId": account_id, "limit": limit}
        )
        orders = [Order.from_api(item) for item in data or []]
        logger.info(f"Fetched {len(orders)} orders for account {account_id}")
        return orders

    async def create_address(self, account_id: AccountId, form: AddressForm) -> None:
        """Create an address under the account. Callers re-fetch the account afterwards."""
        await self._request("POST", f"{ACCOUNTS_PATH}/{account_id}/addresses", payload=form.to_payload())
        logger.info(f"Created address for account {account_id}")

    async def create_contact(self, account_id: AccountId, form: ContactForm) -> None:
        """Create a contact under the account. Callers re-fetch the account afterwards."""
        await self._request("POST", f"{ACCOUNTS_PATH}/{account_id}/contacts", payload=form.to_payload())
        logger.info(f"Created contact for account {account_id}")
