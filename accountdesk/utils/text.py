"""Text matching helpers shared by search and column filters."""

import re
from typing import Optional

_NON_DIGITS = re.compile(r"\D")


def normalize_phone(phone: Optional[str]) -> str:
    """Strip every non-digit character, so "(916) 555-0123" becomes "9165550123"."""
    if not phone:
        return ""
    return _NON_DIGITS.sub("", phone)


def contains_text(value: Optional[str], needle: str) -> bool:
    """Case-insensitive substring test; a missing value never matches."""
    if not value:
        return False
    return needle.casefold() in value.casefold()


def phone_matches(phone: Optional[str], query: str) -> bool:
    """
    Match a phone number against a search query.

    The query matches when it is a substring of the phone as written, or when
    its digits are a substring of the phone's digits. A query without any
    digits only gets the verbatim comparison.
    """
    if not phone:
        return False
    if contains_text(phone, query):
        return True
    query_digits = normalize_phone(query)
    if not query_digits:
        return False
    return query_digits in normalize_phone(phone)
