"""Fetch, parse, filter and group in one pass."""

from __future__ import annotations

from datetime import date
from typing import Iterable, List, Optional

from app.config import Settings
from app.services.changelog.fetcher import fetch_changelog
from app.services.changelog.filters import filter_items
from app.services.changelog.grouper import group_into_cycles
from app.services.changelog.models import ReleaseCycle, ReleaseFilter, ReleaseItem
from app.services.changelog.parser import parse_changelog


def load_items(settings: Settings) -> List[ReleaseItem]:
    """Fetch the configured changelog and parse it. Raises FetchError."""
    text = fetch_changelog(
        settings.changelog_url,
        timeout=settings.changelog_timeout_seconds,
        user_agent=settings.changelog_user_agent,
    )
    return parse_changelog(text, fix_keywords=settings.fix_keywords)


def build_cycles(
    items: Iterable[ReleaseItem],
    filters: Optional[ReleaseFilter] = None,
    *,
    today: Optional[date] = None,
) -> List[ReleaseCycle]:
    selected = filter_items(items, filters) if filters is not None else list(items)
    return group_into_cycles(selected, today=today)


def summary_lines(items: Iterable[ReleaseItem]) -> str:
    """Render items as '- <title> (PR #<n>)' lines for the LLM summarizer."""
    lines = []
    for item in items:
        if item.pr_number:
            lines.append(f"- {item.title} (PR #{item.pr_number})")
        else:
            lines.append(f"- {item.title}")
    return "\n".join(lines)
