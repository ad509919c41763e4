"""Accounts list CLI

Loads accounts from the dashboard API (or the in-memory mock), applies the
same search, column filters and sort as the dashboard grid, and prints the
result. Optionally shows one account's recent orders.
"""

import sys
import logging
import asyncio
import argparse
from typing import List

from dotenv import load_dotenv

# Load environment variables from .env file before reading configuration
load_dotenv()

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

from accountdesk.config import EMPTY_PLACEHOLDER, NO_CONTACT_PLACEHOLDER, NO_LOCATION_PLACEHOLDER
from accountdesk.external_apis import AccountApiClient
from accountdesk.mocks import MockAccountApiClient
from accountdesk.models import (
    Account, AccountId, ColumnFilters, FilterColumn, OrderCacheState, SortDirection, SortField,
    StatusFilter,
)
from accountdesk.services import AccountListManager


def format_account_row(account: Account, outstanding: int = 0) -> str:
    """One grid row; missing contact or address shows a placeholder."""
    contact = account.primary_contact
    contact_label = contact.name if contact else NO_CONTACT_PLACEHOLDER
    email = contact.email if contact and contact.email else EMPTY_PLACEHOLDER
    phone = contact.phone if contact and contact.phone else EMPTY_PLACEHOLDER
    location = account.location or NO_LOCATION_PLACEHOLDER
    status = "Active" if account.active else "Inactive"
    badge = f" [{outstanding} outstanding]" if outstanding else ""
    return (
        f"{account.code:<10} {account.name[:30]:<30} {location:<20} {email[:32]:<32} "
        f"{phone:<16} {contact_label[:20]:<20} {status}{badge}"
    )


def format_filters(filters: ColumnFilters) -> str:
    """Summary of the active column filters, empty when none are set."""
    if filters.is_empty:
        return ""
    parts = [
        f"{label}={value}"
        for label, value in (("code", filters.code), ("name", filters.name), ("location", filters.location))
        if value
    ]
    if filters.status is not StatusFilter.ALL:
        parts.append(f"status={filters.status.value}")
    return "Filters: " + ", ".join(parts)


def format_orders(manager: AccountListManager, account_id: AccountId) -> List[str]:
    entry = manager.order_cache.entry(account_id)
    if entry.state is OrderCacheState.FAILED:
        return [f"  Could not load orders: {entry.error}"]
    if not entry.orders:
        return ["  No orders found"]

    lines = []
    for order in entry.orders:
        date = order.order_date.strftime("%Y-%m-%d") if order.order_date else EMPTY_PLACEHOLDER
        flag = "  OUTSTANDING" if order.is_outstanding else ""
        document = f" ({order.document_number})" if order.document_number else ""
        lines.append(
            f"  #{order.order_no}{document} {date} {order.status.value:<13} "
            f"{order.seller_account_name} -> {order.buyer_account_name} "
            f"${order.total_amount:,.2f}{flag}"
        )
        for line in order.lines:
            lines.append(f"      {line.product_code} x {line.quantity:g} {line.uom or ''} ${line.total:,.2f}")
    return lines


async def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Accounts list")
    parser.add_argument("--mock", action="store_true", help="Use the in-memory mock API instead of the HTTP API")
    parser.add_argument("--api-url", help="Override ACCOUNTDESK_API_URL")
    parser.add_argument("--search", default="", help="Search name, code, contacts, addresses and cached order numbers")
    parser.add_argument("--sort", choices=[f.value for f in SortField], default=SortField.NAME.value, help="Sort field")
    parser.add_argument("--desc", action="store_true", help="Sort descending")
    parser.add_argument("--status", choices=[s.value for s in StatusFilter], default=StatusFilter.ALL.value,
                        help="Status column filter")
    parser.add_argument("--code", default="", help="Code column filter")
    parser.add_argument("--name", default="", help="Name column filter")
    parser.add_argument("--location", default="", help="Location column filter (city, state)")
    parser.add_argument("--all-pages", action="store_true", help="Keep loading pages until the end of data")
    parser.add_argument("--orders", help="Account ID whose recent orders should be shown")

    args = parser.parse_args()

    client = MockAccountApiClient() if args.mock else AccountApiClient(base_url=args.api_url)
    manager = AccountListManager(client)

    if args.all_pages:
        await manager.load_all()
    else:
        await manager.load_first_page()

    if manager.error:
        logger.error(manager.error)
        sys.exit(1)

    # Default sort is name ascending; a different field starts ascending too
    sort_field = SortField(args.sort)
    if sort_field is not manager.state.sort.field:
        manager.toggle_sort(sort_field)
    if args.desc and manager.state.sort.direction is SortDirection.ASC:
        manager.toggle_sort(sort_field)

    manager.set_column_filter(FilterColumn.CODE, args.code)
    manager.set_column_filter(FilterColumn.NAME, args.name)
    manager.set_column_filter(FilterColumn.LOCATION, args.location)
    manager.set_status_filter(StatusFilter(args.status))

    if args.orders:
        await manager.open_orders(AccountId(args.orders))

    await manager.set_search(args.search)

    rows = manager.visible_accounts()
    total, active, inactive = manager.status_counts()
    filters = format_filters(manager.state.column_filters)
    if filters:
        print(filters)
    print(f"All ({total})  Active ({active})  Inactive ({inactive})  Showing {len(rows)}")
    for account in rows:
        print(format_account_row(account, manager.order_cache.outstanding_count(account.id)))
    if manager.has_more:
        print("More accounts available (use --all-pages)")

    if args.orders:
        print(f"\nRecent orders for {args.orders}:")
        for line in format_orders(manager, AccountId(args.orders)):
            print(line)


def run():
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
