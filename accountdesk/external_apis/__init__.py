"""External API clients for the dashboard backend."""

# Import all client classes for easy access
from .account_api_client import AccountApiClient
from .errors import AccountApiError, AccountNotFoundError, ApiStatusError, ApiTransportError

__all__ = [
    'AccountApiClient',
    'AccountApiError',
    'AccountNotFoundError',
    'ApiStatusError',
    'ApiTransportError',
]
