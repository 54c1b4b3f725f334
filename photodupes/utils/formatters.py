"""
Formatting utilities for photodupes.

Provides human-readable formatting for numbers, timestamps and file sizes.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

# Re-export format_size from models for convenience
from ..models import format_size


def format_number(n: int) -> str:
    """
    Format large numbers with commas for readability.

    Examples:
        >>> format_number(1234567)
        '1,234,567'
    """
    return f"{n:,}"


def format_timestamp(ts: Optional[int]) -> str:
    """
    Format a Unix timestamp as a UTC date, or '-' when absent.

    Examples:
        >>> format_timestamp(1622548800)
        '2021-06-01 12:00'
        >>> format_timestamp(None)
        '-'
    """
    if ts is None:
        return "-"
    return datetime.fromtimestamp(ts, tz=timezone.utc).strftime("%Y-%m-%d %H:%M")


__all__ = ['format_number', 'format_timestamp', 'format_size']
