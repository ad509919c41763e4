"""Errors raised by the dashboard API clients."""

from typing import Optional


class AccountApiError(Exception):
    """Base class for every failure talking to the dashboard API."""


class ApiTransportError(AccountApiError):
    """The request never produced a response (connection refused, timeout, ...)."""


class ApiStatusError(AccountApiError):
    """The API answered with a non-success status."""

    def __init__(self, status: int, message: Optional[str] = None):
        self.status = status
        super().__init__(message or f"API responded with status {status}")


class AccountNotFoundError(ApiStatusError):
    """The requested account does not exist (404 or a null body)."""

    def __init__(self, account_id: str):
        self.account_id = account_id
        super().__init__(404, f"Account {account_id} not found")
