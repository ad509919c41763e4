"""
Immutable view state for the accounts list.

Every change to the list (search, filters, sort, paging, popover) produces a
new ViewState through the reducers in accountdesk.services.reducers.
"""

import enum
from dataclasses import dataclass, field
from typing import Optional, Tuple

from accountdesk.config import PAGE_SIZE
from accountdesk.models.account import Account, AccountId
from accountdesk.models.order import Order


class SortField(str, enum.Enum):
    CODE = "code"
    NAME = "name"
    LOCATION = "location"
    STATUS = "status"


class SortDirection(str, enum.Enum):
    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


class StatusFilter(str, enum.Enum):
    ALL = "all"
    ACTIVE = "active"
    INACTIVE = "inactive"


class FilterColumn(str, enum.Enum):
    CODE = "code"
    NAME = "name"
    LOCATION = "location"
    STATUS = "status"


@dataclass(frozen=True)
class ColumnFilters:
    code: str = ""
    name: str = ""
    location: str = ""
    status: StatusFilter = StatusFilter.ALL

    @property
    def is_empty(self) -> bool:
        return not (self.code or self.name or self.location) and self.status is StatusFilter.ALL


@dataclass(frozen=True)
class SortState:
    field: SortField = SortField.NAME
    direction: SortDirection = SortDirection.ASC


@dataclass(frozen=True)
class Pagination:
    offset: int = 0  # Offset of the next page to fetch
    page_size: int = PAGE_SIZE
    has_more: bool = True
    loading: bool = False  # First page in flight
    loading_more: bool = False  # Follow-up page in flight
    generation: int = 0  # Bumped by every reset load; older responses are dropped

    @property
    def busy(self) -> bool:
        return self.loading or self.loading_more


@dataclass(frozen=True)
class ViewState:
    accounts: Tuple[Account, ...] = ()
    search_query: str = ""
    column_filters: ColumnFilters = field(default_factory=ColumnFilters)
    sort: SortState = field(default_factory=SortState)
    pagination: Pagination = field(default_factory=Pagination)
    open_popover: Optional[AccountId] = None
    error: Optional[str] = None


class OrderCacheState(str, enum.Enum):
    ABSENT = "absent"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True)
class OrderCacheEntry:
    """One account's slot in the order cache."""
    state: OrderCacheState = OrderCacheState.ABSENT
    orders: Tuple[Order, ...] = ()
    error: Optional[str] = None

    @property
    def outstanding_count(self) -> int:
        return sum(1 for order in self.orders if order.is_outstanding)


ABSENT_ENTRY = OrderCacheEntry()
