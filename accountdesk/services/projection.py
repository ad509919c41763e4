"""
Filter, sort and count the loaded accounts for display.

Everything here is a pure function of the view state and the order cache;
nothing fetches or mutates.
"""

import locale
import logging
from typing import Callable, Iterable, List, Tuple

from accountdesk.models.account import Account
from accountdesk.models.view_state import (
    ColumnFilters, SortDirection, SortField, SortState, StatusFilter, ViewState
)
from accountdesk.utils.text import contains_text, phone_matches

logger = logging.getLogger(__name__)

# Callable returning the cached order numbers of one account
OrderNumberLookup = Callable[[str], Iterable[str]]


def _no_orders(account_id: str) -> Iterable[str]:
    return ()


def matches_search(account: Account, query: str, order_numbers: OrderNumberLookup = _no_orders) -> bool:
    """
    True when any searchable field of the account contains the query.

    Searched: name, code, contact name/email/phone, address lines, city,
    state, postal code and the order numbers cached for the account.
    """
    query = query.strip()
    if not query:
        return True

    if contains_text(account.name, query) or contains_text(account.code, query):
        return True

    for contact in account.contacts:
        if contains_text(contact.name, query) or contains_text(contact.email, query):
            return True
        if phone_matches(contact.phone, query):
            return True

    for address in account.addresses:
        fields = (address.line1, address.line2, address.city, address.state, address.postal_code)
        if any(contains_text(value, query) for value in fields):
            return True

    return any(contains_text(order_no, query) for order_no in order_numbers(account.id))


def passes_column_filters(account: Account, filters: ColumnFilters) -> bool:
    """Every non-empty column filter must match."""
    if filters.code and not contains_text(account.code, filters.code):
        return False
    if filters.name and not contains_text(account.name, filters.name):
        return False
    if filters.location and not contains_text(account.location, filters.location):
        return False
    if filters.status is StatusFilter.ACTIVE and not account.active:
        return False
    if filters.status is StatusFilter.INACTIVE and account.active:
        return False
    return True


def _collation_key(value: str) -> str:
    return locale.strxfrm(value.casefold())


def sort_key(account: Account, field: SortField):
    if field is SortField.CODE:
        return _collation_key(account.code)
    if field is SortField.NAME:
        return _collation_key(account.name)
    if field is SortField.LOCATION:
        return _collation_key(account.location)
    # Active accounts first
    return 0 if account.active else 1


def sort_accounts(accounts: Iterable[Account], sort: SortState) -> List[Account]:
    return sorted(
        accounts,
        key=lambda account: sort_key(account, sort.field),
        reverse=sort.direction is SortDirection.DESC,
    )


def project_accounts(state: ViewState, order_numbers: OrderNumberLookup = _no_orders) -> List[Account]:
    """
    Produce the accounts to render for the given view state.

    Args:
        state: Current view state
        order_numbers: Lookup of cached order numbers per account, used by search

    Returns:
        Filtered and sorted accounts
    """
    visible = [
        account for account in state.accounts
        if matches_search(account, state.search_query, order_numbers)
        and passes_column_filters(account, state.column_filters)
    ]
    logger.debug(f"Projected {len(visible)} of {len(state.accounts)} accounts")
    return sort_accounts(visible, state.sort)


def status_counts(accounts: Iterable[Account]) -> Tuple[int, int, int]:
    """Return (all, active, inactive) counts for the status filter badges."""
    total = active = 0
    for account in accounts:
        total += 1
        if account.active:
            active += 1
    return total, active, total - active
