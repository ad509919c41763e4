"""Typed records for accounts, orders, forms and list view state."""

from accountdesk.models.account import Account, AccountId, Address, AddressType, Contact
from accountdesk.models.order import Order, OrderLine, OrderStatus
from accountdesk.models.forms import AddressForm, ContactForm, FormValidationError
from accountdesk.models.view_state import (
    ColumnFilters, FilterColumn, OrderCacheEntry, OrderCacheState, Pagination,
    SortDirection, SortField, SortState, StatusFilter, ViewState
)

__all__ = [
    "Account", "AccountId", "Address", "AddressType", "Contact",
    "Order", "OrderLine", "OrderStatus",
    "AddressForm", "ContactForm", "FormValidationError",
    "ColumnFilters", "FilterColumn", "OrderCacheEntry", "OrderCacheState", "Pagination",
    "SortDirection", "SortField", "SortState", "StatusFilter", "ViewState",
]
