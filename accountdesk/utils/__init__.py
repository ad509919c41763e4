"""Utilities package for common functions."""

from .parsing import parse_date, parse_amount
from .text import contains_text, normalize_phone, phone_matches

__all__ = ['parse_date', 'parse_amount', 'contains_text', 'normalize_phone', 'phone_matches']
