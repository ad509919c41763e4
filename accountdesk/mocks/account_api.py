"""Mock dashboard API client for development and testing."""

import asyncio
import logging
import uuid
from collections import Counter
from typing import Dict, Any, List, Optional, Set

from accountdesk.config import PAGE_SIZE, RECENT_ORDERS_LIMIT
from accountdesk.external_apis.errors import AccountNotFoundError, ApiTransportError
from accountdesk.models.account import Account, AccountId
from accountdesk.models.forms import AddressForm, ContactForm
from accountdesk.models.order import Order

logger = logging.getLogger(__name__)

_CITIES = [
    ("Fresno", "CA", "93721"),
    ("Sacramento", "CA", "95814"),
    ("Modesto", "CA", "95354"),
    ("Yuma", "AZ", "85364"),
    ("Salinas", "CA", "93901"),
]

_ORDER_STATUSES = ["paid", "confirmed", "posted_to_qb", "cancelled", "draft"]


class MockAccountApiClient:
    """
    A mock API client with the same coroutine interface as AccountApiClient.

    Records are held as API-shaped dictionaries and parsed on the way out, so
    the mock exercises the same from_api conversions as the real client.
    """

    def __init__(
        self,
        accounts: Optional[List[Dict[str, Any]]] = None,
        orders: Optional[List[Dict[str, Any]]] = None,
        delay: float = 0.0
    ):
        """
        Initialize the mock client.

        Args:
            accounts: API-shaped account records; generated sample data when omitted
            orders: API-shaped invoice records; generated sample data when omitted
            delay: Seconds each call sleeps before answering
        """
        self.accounts = accounts if accounts is not None else self._generate_mock_accounts()
        self.orders = orders if orders is not None else self._generate_mock_orders(self.accounts)
        self.delay = delay
        self.calls: Counter = Counter()
        self.failing: Set[str] = set()  # Method names that raise ApiTransportError
        logger.info(f"Initialized mock API client with {len(self.accounts)} accounts and {len(self.orders)} orders")

    def _generate_mock_accounts(self, count: int = 62) -> List[Dict[str, Any]]:
        """
        Generate deterministic sample accounts.

        62 accounts gives one full page of 50 and a short page of 12.
        """
        accounts = []
        for i in range(1, count + 1):
            account_id = f"acct-{i:04d}"
            city, state, postal_code = _CITIES[i % len(_CITIES)]
            accounts.append({
                "id": account_id,
                "code": f"ACC-{i:03d}",
                "name": f"Valley Growers {i:03d}",
                "active": i % 7 != 0,  # Every 7th account is inactive
                "createdAt": f"2025-01-{(i % 28) + 1:02d}T09:00:00.000Z",
                "addresses": [] if i % 11 == 0 else [{
                    "id": f"addr-{i:04d}",
                    "accountId": account_id,
                    "type": "billing",
                    "line1": f"{100 + i} Orchard Rd",
                    "city": city,
                    "state": state,
                    "postalCode": postal_code,
                    "isPrimary": True,
                }],
                "contacts": [] if i % 13 == 0 else [{
                    "id": f"cont-{i:04d}",
                    "accountId": account_id,
                    "name": f"Buyer {i:03d}",
                    "email": f"buyer{i:03d}@valleygrowers.example",
                    "phone": f"(916) 555-{i:04d}",
                    "isPrimary": True,
                }],
            })

        # Fixed phone used by the search examples
        accounts[0]["contacts"][0]["phone"] = "(916) 555-0123"
        return accounts

    def _generate_mock_orders(self, accounts: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Generate invoices between consecutive accounts, newest first."""
        orders = []
        for i in range(1, min(len(accounts), 30)):
            seller = accounts[i - 1]
            buyer = accounts[i]
            orders.append({
                "id": f"ord-{i:04d}",
                "orderNo": f"{43000 + i}",
                "qboDocNumber": f"INV-{1000 + i}",
                "orderDate": f"2025-06-{(i % 28) + 1:02d}T12:00:00.000Z",
                "status": _ORDER_STATUSES[i % len(_ORDER_STATUSES)],
                "sellerAccountId": seller["id"],
                "sellerAccountName": seller["name"],
                "buyerAccountId": buyer["id"],
                "buyerAccountName": buyer["name"],
                "totalAmount": f"{1000 + i * 25}.00",
                "lines": [{
                    "productCode": "ALMOND-NP",
                    "productDescription": "Nonpareil - 23/25",
                    "quantity": "40",
                    "uom": "lb",
                    "total": f"{1000 + i * 25}.00",
                }],
            })
        orders.sort(key=lambda order: order["orderDate"], reverse=True)
        return orders

    async def _enter(self, method: str) -> None:
        self.calls[method] += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if method in self.failing:
            logger.error(f"Mock {method} failing on request")
            raise ApiTransportError(f"Mock {method} failure")

    def _find_account(self, account_id: str) -> Dict[str, Any]:
        for account in self.accounts:
            if account["id"] == account_id:
                return account
        raise AccountNotFoundError(account_id)

    async def list_accounts(self, limit: int = PAGE_SIZE, offset: int = 0, search: Optional[str] = None) -> List[Account]:
        await self._enter("list_accounts")
        records = self.accounts
        if search:
            needle = search.casefold()
            records = [a for a in records if needle in a["name"].casefold() or needle in a["code"].casefold()]
        return [Account.from_api(record) for record in records[offset:offset + limit]]

    async def get_account(self, account_id: AccountId) -> Account:
        await self._enter("get_account")
        return Account.from_api(self._find_account(account_id))

    async def list_account_orders(self, account_id: AccountId, limit: int = RECENT_ORDERS_LIMIT) -> List[Order]:
        await self._enter("list_account_orders")
        matching = [
            order for order in self.orders
            if account_id in (order["sellerAccountId"], order["buyerAccountId"])
        ]
        return [Order.from_api(order) for order in matching[:limit]]

    async def create_address(self, account_id: AccountId, form: AddressForm) -> None:
        await self._enter("create_address")
        account = self._find_account(account_id)
        record = form.to_payload()
        record.update({"id": str(uuid.uuid4()), "accountId": account_id})
        account.setdefault("addresses", []).append(record)

    async def create_contact(self, account_id: AccountId, form: ContactForm) -> None:
        await self._enter("create_contact")
        account = self._find_account(account_id)
        record = form.to_payload()
        record.update({"id": str(uuid.uuid4()), "accountId": account_id})
        account.setdefault("contacts", []).append(record)
