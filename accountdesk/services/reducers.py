"""
Pure state transitions for the accounts list.

Each reducer takes a ViewState and returns a new one. None of them perform
I/O; AccountListManager pairs them with the API calls.
"""

from dataclasses import replace
from typing import Iterable, Union

from accountdesk.models.account import Account, AccountId
from accountdesk.models.view_state import (
    ColumnFilters, FilterColumn, SortField, SortState, StatusFilter, ViewState
)


def set_search_query(state: ViewState, query: str) -> ViewState:
    return replace(state, search_query=query)


def set_column_filter(state: ViewState, column: FilterColumn, value: Union[str, StatusFilter]) -> ViewState:
    """Set one column filter; the status column takes a StatusFilter (or its string value)."""
    column = FilterColumn(column)
    if column is FilterColumn.STATUS:
        filters = replace(state.column_filters, status=StatusFilter(value))
    else:
        filters = replace(state.column_filters, **{column.value: str(value)})
    return replace(state, column_filters=filters)


def clear_column_filters(state: ViewState) -> ViewState:
    return replace(state, column_filters=ColumnFilters())


def toggle_sort(state: ViewState, field: SortField) -> ViewState:
    """Re-selecting the active field flips direction; a new field starts ascending."""
    field = SortField(field)
    if state.sort.field is field:
        sort = replace(state.sort, direction=state.sort.direction.flipped())
    else:
        sort = SortState(field=field)
    return replace(state, sort=sort)


def begin_load(state: ViewState, append: bool) -> ViewState:
    """
    Mark a page fetch as in flight.

    A non-append load is a full reset: the collection is emptied, paging
    starts again from offset 0 and the load generation moves on, so pages
    requested before the reset are discarded when they arrive.
    """
    if append:
        pagination = replace(state.pagination, loading_more=True)
        return replace(state, pagination=pagination, error=None)

    pagination = replace(
        state.pagination,
        offset=0,
        has_more=True,
        loading=True,
        loading_more=False,
        generation=state.pagination.generation + 1,
    )
    return replace(state, accounts=(), pagination=pagination, error=None)


def page_loaded(state: ViewState, page: Iterable[Account], append: bool) -> ViewState:
    page = tuple(page)
    accounts = state.accounts + page if append else page
    pagination = replace(
        state.pagination,
        offset=len(accounts),
        has_more=len(page) >= state.pagination.page_size,
        loading=False,
        loading_more=False,
    )
    return replace(state, accounts=accounts, pagination=pagination)


def page_failed(state: ViewState, message: str) -> ViewState:
    """Keep whatever rows are loaded and surface a retryable error."""
    pagination = replace(state.pagination, loading=False, loading_more=False)
    return replace(state, pagination=pagination, error=message)


def open_popover(state: ViewState, account_id: AccountId) -> ViewState:
    """Open the orders popover for one account; any other popover closes."""
    return replace(state, open_popover=account_id)


def close_popover(state: ViewState) -> ViewState:
    return replace(state, open_popover=None)


# A click anywhere outside the open popover closes it
click_outside = close_popover


def prepend_account(state: ViewState, account: Account) -> ViewState:
    """Show a newly created account at the top of the list."""
    return replace(state, accounts=(account,) + state.accounts)
