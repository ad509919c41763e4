"""Accounts list and detail services."""

from accountdesk.services.account_detail_service import AccountDetailManager
from accountdesk.services.account_list_service import AccountListManager
from accountdesk.services.order_cache import OrderCache
from accountdesk.services.projection import project_accounts, status_counts

__all__ = [
    "AccountDetailManager",
    "AccountListManager",
    "OrderCache",
    "project_accounts",
    "status_counts",
]
