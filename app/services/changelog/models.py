"""Typed models for parsed changelog sections, items and weekly cycles."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from typing import List, Optional


class ItemType(str, Enum):
    FEATURE = "Feature"
    BUG_FIX = "Bug Fix"


class SummaryCategory(str, Enum):
    CONNECTIVITY = "Global Connectivity"
    SECURITY = "Security & Governance"
    CORE = "Core Platform & Reliability"
    MERCHANT = "Merchant Experience"


@dataclass(frozen=True)
class VersionSection:
    version_id: str
    release_date: str


@dataclass(frozen=True)
class ReleaseItem:
    title: str
    type: ItemType
    connector: Optional[str]
    pr_number: Optional[str]
    pr_url: Optional[str]
    original_date: str
    version: Optional[str]


@dataclass(frozen=True)
class ReleaseFilter:
    connector: Optional[str] = None
    item_type: Optional[ItemType] = None
    from_date: Optional[date] = None
    to_date: Optional[date] = None


@dataclass
class ReleaseCycle:
    cycle_end_date: date
    items: List[ReleaseItem] = field(default_factory=list)
    release_version: Optional[str] = None
    is_current_cycle: bool = False

    @property
    def cycle_key(self) -> str:
        return self.cycle_end_date.isoformat()

    @property
    def cycle_start_date(self) -> date:
        return self.cycle_end_date - timedelta(days=6)

    @property
    def headline(self) -> str:
        """Human label for the seven days ending on the cycle date, e.g. 'Jan 1 – Jan 7'."""
        start, end = self.cycle_start_date, self.cycle_end_date
        return f"{start:%b} {start.day} – {end:%b} {end.day}"

    @property
    def expected_live_date(self) -> date:
        return self.cycle_end_date + timedelta(days=8)
