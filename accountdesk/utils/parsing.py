"""Common parsing utility functions.

This module contains helper functions for parsing the dates and amounts
returned by the dashboard API.
"""

import logging
from datetime import datetime
from typing import Optional, Union

logger = logging.getLogger(__name__)


def parse_date(date_value: Optional[Union[str, datetime]]) -> Optional[datetime]:
    """
    Parse an API date value into a datetime object.

    Args:
        date_value: ISO-8601 timestamp (with or without a trailing Z), a plain
            date string, or an existing datetime

    Returns:
        datetime object or None if parsing fails
    """
    if not date_value:
        return None

    if isinstance(date_value, datetime):
        return date_value

    if not isinstance(date_value, str):
        logger.warning(f"Unknown date type: {type(date_value)}, value: {date_value}")
        return None

    value = date_value.strip()

    # JSON timestamps use a Z suffix for UTC
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"

    try:
        return datetime.fromisoformat(value)
    except ValueError:
        pass

    date_formats = [
        '%Y-%m-%dT%H:%M:%S.%f%z',  # 2025-01-30T10:15:00.000+00:00
        '%Y-%m-%d %H:%M:%S',       # 2025-01-30 10:15:00
        '%m/%d/%Y',                # 01/30/2025
    ]

    for fmt in date_formats:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue

    logger.warning(f"Could not parse date string: {date_value}")
    return None


def parse_amount(amount_value: Optional[Union[str, int, float]]) -> Optional[float]:
    """
    Parse an amount value into a float.

    The API serialises numeric columns as strings, e.g. "1250.00".

    Args:
        amount_value: Amount as string, int, or float

    Returns:
        float value or None if parsing fails
    """
    if amount_value is None:
        return None

    if isinstance(amount_value, bool):
        logger.warning(f"Unknown amount type: {type(amount_value)}, value: {amount_value}")
        return None

    if isinstance(amount_value, (int, float)):
        return float(amount_value)

    if isinstance(amount_value, str):
        try:
            # Remove currency symbols and commas
            clean_amount = amount_value.replace(',', '')
            clean_amount = ''.join(c for c in clean_amount if c.isdigit() or c in '.-')

            return float(clean_amount) if clean_amount else None

        except ValueError:
            logger.warning(f"Could not parse amount: {amount_value}")
            return None

    logger.warning(f"Unknown amount type: {type(amount_value)}, value: {amount_value}")
    return None
