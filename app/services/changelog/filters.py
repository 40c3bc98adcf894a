"""Connector, type and date-range filtering over the flat item list."""

from __future__ import annotations

from datetime import date
from typing import Iterable, List

from app.services.changelog.cleaner import normalize_connector
from app.services.changelog.models import ReleaseFilter, ReleaseItem


def _within_dates(item: ReleaseItem, filters: ReleaseFilter) -> bool:
    if filters.from_date is None and filters.to_date is None:
        return True
    try:
        released = date.fromisoformat(item.original_date)
    except ValueError:
        return False
    if filters.from_date is not None and released < filters.from_date:
        return False
    if filters.to_date is not None and released > filters.to_date:
        return False
    return True


def filter_items(items: Iterable[ReleaseItem], filters: ReleaseFilter) -> List[ReleaseItem]:
    """Return the items matching every filter that is set, in input order."""
    connector = normalize_connector(filters.connector) if filters.connector else None
    result: List[ReleaseItem] = []
    for item in items:
        if connector is not None and item.connector != connector:
            continue
        if filters.item_type is not None and item.type != filters.item_type:
            continue
        if not _within_dates(item, filters):
            continue
        result.append(item)
    return result


def list_connectors(items: Iterable[ReleaseItem]) -> List[str]:
    """Return the distinct connector names in alphabetical order."""
    return sorted({item.connector for item in items if item.connector})
