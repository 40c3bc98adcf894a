"""Weekly release-cycle grouping anchored on Wednesday."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Tuple

from app.services.changelog.models import ReleaseCycle, ReleaseItem

logger = logging.getLogger(__name__)

ANCHOR_WEEKDAY = 2  # Wednesday, as in date.weekday()


def cycle_end_date(day: date) -> date:
    """Return the first anchor weekday on or after ``day``."""
    days_ahead = (ANCHOR_WEEKDAY - day.weekday()) % 7
    return day + timedelta(days=days_ahead)


def version_key(version: str) -> Tuple[int, ...]:
    """Sort key comparing dot components numerically ('2026.1.10.0' > '2026.1.9.0')."""
    parts: List[int] = []
    for part in version.split("."):
        try:
            parts.append(int(part))
        except ValueError:
            parts.append(-1)
    return tuple(parts)


def max_version(items: Iterable[ReleaseItem]) -> Optional[str]:
    """Return the highest member version, or None when no item carries one."""
    versions = [item.version for item in items if item.version]
    if not versions:
        return None
    return max(versions, key=version_key)


def group_into_cycles(
    items: Iterable[ReleaseItem], *, today: Optional[date] = None
) -> List[ReleaseCycle]:
    """Bucket items into weekly cycles, most recent cycle first.

    Items keep their relative input order inside a cycle. A cycle is current
    when its end date is today or later.
    """
    today = today or date.today()
    buckets: Dict[date, List[ReleaseItem]] = {}
    for item in items:
        try:
            released = date.fromisoformat(item.original_date)
        except ValueError:
            logger.warning(
                "Skipping item with invalid release date %s: %s", item.original_date, item.title
            )
            continue
        buckets.setdefault(cycle_end_date(released), []).append(item)

    cycles: List[ReleaseCycle] = []
    for end in sorted(buckets, reverse=True):
        members = buckets[end]
        cycles.append(
            ReleaseCycle(
                cycle_end_date=end,
                items=members,
                release_version=max_version(members),
                is_current_cycle=end >= today,
            )
        )
    return cycles
