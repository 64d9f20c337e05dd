#!/usr/bin/env python3
"""
Utility functions for the web application.
"""

from typing import Optional, Any, Union
from datetime import date, datetime


def safe_int(value: Optional[Any], default: int = 0) -> int:
    """
    Safely convert value to int.

    Args:
        value: Value to convert.
        default: Default value if conversion fails or value is None.

    Returns:
        Integer value.
    """
    if value is None or isinstance(value, bool):
        return default

    try:
        return int(value)
    except (ValueError, TypeError):
        return default


def safe_datetime_iso(dt: Optional[Union[date, datetime, str]]) -> Optional[str]:
    """
    Safely convert a date or datetime to ISO format string.

    Strings are assumed to be pre-formatted and returned unchanged.

    Args:
        dt: Date, datetime or string.

    Returns:
        ISO format string or None.
    """
    if dt is None:
        return None
    if isinstance(dt, str):
        return dt
    return dt.isoformat()


def format_profile_image(file_name: Optional[str]) -> Optional[str]:
    """
    Public path for a stored profile image.

    Default images come back as None so the client can pick its own
    placeholder. Paths already under uploads/ are returned rooted.
    """
    if file_name is None:
        return None
    value = str(file_name).strip()
    if not value or 'default_profile' in value or value.startswith('/assets/images/'):
        return None
    if value.startswith('/uploads/') or value.startswith('uploads/'):
        return value if value.startswith('/') else f"/{value}"
    return f"/uploads/profile_images/{value}"
