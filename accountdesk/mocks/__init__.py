"""In-memory stand-ins for the dashboard API."""

from .account_api import MockAccountApiClient

__all__ = ["MockAccountApiClient"]
