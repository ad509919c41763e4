"""Account list view-state manager and API client for the accounts dashboard."""

__version__ = "0.1.0"
