"""
Year filtering for scanned records.

A record's year comes from its EXIF capture date, falling back to the file's
creation time. Years are 4-digit strings, computed in UTC like the EXIF
dates themselves.
"""

from __future__ import annotations

import re
from collections import defaultdict
from datetime import datetime, timezone
from typing import Iterable, Optional

from ..models import ImageRecord


def image_year(record: ImageRecord) -> Optional[str]:
    """
    Year the image belongs to, or None if neither timestamp is set.

    Examples:
        >>> image_year(ImageRecord(path='/a.jpg', created_at=1622548800))
        '2021'
        >>> image_year(ImageRecord(path='/a.jpg')) is None
        True
    """
    ts = None
    if record.metadata is not None:
        ts = record.metadata.date
    if ts is None:
        ts = record.created_at
    if not ts:
        return None

    try:
        return str(datetime.fromtimestamp(ts, tz=timezone.utc).year)
    except (OverflowError, OSError, ValueError):
        return None


def available_years(records: Iterable[ImageRecord]) -> list[str]:
    """Distinct years present in records, newest first."""
    years = {image_year(r) for r in records}
    years.discard(None)
    return sorted(years, key=int, reverse=True)


def normalize_year_prefix(text: Optional[str]) -> str:
    """
    Reduce free text to a year search prefix: digits only, at most four.

    Examples:
        >>> normalize_year_prefix(' 20x2 ')
        '202'
    """
    return re.sub(r'\D', '', text or '')[:4]


def filter_by_years(
    records: list[ImageRecord],
    years: Optional[Iterable[str]] = None,
    prefix: Optional[str] = None,
) -> list[ImageRecord]:
    """
    Keep records from the selected years.

    An explicit year selection takes precedence over the prefix search. With
    neither, every record is returned, including those without a year.

    Args:
        records: Records to filter
        years: Exact years to keep
        prefix: Year prefix, e.g. '20' or '201'

    Returns:
        Matching records, in input order
    """
    selected = {str(y).strip() for y in years or () if str(y).strip()}
    if selected:
        return [r for r in records if image_year(r) in selected]

    prefix = normalize_year_prefix(prefix)
    if prefix:
        return [r for r in records if (image_year(r) or '').startswith(prefix)]

    return list(records)


def group_by_year(records: list[ImageRecord]) -> dict[str, list[ImageRecord]]:
    """
    Bucket records by year, newest year first.

    Records without a year are left out.
    """
    groups: dict[str, list[ImageRecord]] = defaultdict(list)
    for record in records:
        year = image_year(record)
        if year is not None:
            groups[year].append(record)

    return {year: groups[year] for year in sorted(groups, key=int, reverse=True)}


__all__ = [
    'image_year',
    'available_years',
    'normalize_year_prefix',
    'filter_by_years',
    'group_by_year',
]
