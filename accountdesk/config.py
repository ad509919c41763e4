"""
Configuration constants for the accounts dashboard client.
"""

import os

# Remote API
DEFAULT_API_URL = "http://localhost:2000"  # Local API server used during development
API_URL = os.environ.get("ACCOUNTDESK_API_URL", DEFAULT_API_URL)
REQUEST_TIMEOUT_SECONDS = float(os.environ.get("ACCOUNTDESK_REQUEST_TIMEOUT", "15"))

# API paths
ACCOUNTS_PATH = "/api/accounts"
INVOICES_PATH = "/api/invoices"

# Pagination
PAGE_SIZE = 50  # Accounts fetched per page; a shorter page means end of data

# Orders popover
RECENT_ORDERS_LIMIT = 5  # Most recent orders fetched per account

# Order statuses that are never counted as outstanding
SETTLED_ORDER_STATUSES = ("paid", "cancelled")

# Address defaults
DEFAULT_COUNTRY = "US"

# User-facing error messages (one per view)
LOAD_ACCOUNTS_ERROR = "Failed to load accounts"
LOAD_ACCOUNT_ERROR = "Failed to load account"
ACCOUNT_NOT_FOUND_ERROR = "Account not found"
ADD_ADDRESS_ERROR = "Failed to add address"
ADD_CONTACT_ERROR = "Failed to add contact"

# Placeholders for absent optional fields
EMPTY_PLACEHOLDER = "-"
NO_CONTACT_PLACEHOLDER = "No contact"
NO_LOCATION_PLACEHOLDER = "No address"
