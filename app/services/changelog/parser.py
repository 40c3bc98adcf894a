"""Parser for the markdown changelog: version headers and bullet items."""

from __future__ import annotations

import re
from typing import List, Optional, Sequence, Tuple

from app.services.changelog.cleaner import clean_title, normalize_connector
from app.services.changelog.models import ItemType, ReleaseItem, VersionSection

FIX_KEYWORDS = ("fix", "bug", "resolves")

HEADER_PATTERN = re.compile(r"^##\s*\[?(\d{4}\.\d{1,2}\.\d{1,2}\.\d{1,2})\]?")
CONNECTOR_PATTERN = re.compile(r"\[([A-Za-z0-9_ ]+)\]")
PR_PATTERN = re.compile(r"\[#(\d+)\]\((https://github\.com/[^)]+)\)")


def release_date_from_version(version_id: str) -> str:
    """Return 'yyyy-MM-dd' from the first three components of a version id.

    Month and day are only padded, never checked against the calendar.
    """
    year, month, day = version_id.split(".")[:3]
    return f"{int(year):04d}-{int(month):02d}-{int(day):02d}"


def classify_lines(text: str) -> List[Tuple[VersionSection, List[str]]]:
    """Split the document into version sections with their raw bullet lines."""
    sections: List[Tuple[VersionSection, List[str]]] = []
    current: Optional[List[str]] = None
    for line in text.split("\n"):
        trimmed = line.strip()
        match = HEADER_PATTERN.match(trimmed)
        if match:
            version_id = match.group(1)
            section = VersionSection(
                version_id=version_id, release_date=release_date_from_version(version_id)
            )
            current = []
            sections.append((section, current))
            continue
        if trimmed.startswith("-") and current is not None:
            content = trimmed[1:].strip()
            if content:
                current.append(content)
    return sections


def detect_type(content: str, fix_keywords: Sequence[str] = FIX_KEYWORDS) -> ItemType:
    """Bug Fix if any fix keyword occurs in the bullet, case-insensitively."""
    lower = content.lower()
    if any(keyword and keyword.lower() in lower for keyword in fix_keywords):
        return ItemType.BUG_FIX
    return ItemType.FEATURE


def extract_connector(content: str) -> Optional[str]:
    """Title-cased name from the first plain bracket token, if any."""
    match = CONNECTOR_PATTERN.search(content)
    if not match:
        return None
    raw = match.group(1).strip()
    return normalize_connector(raw) or None


def extract_pr(content: str) -> Tuple[Optional[str], Optional[str]]:
    """Return (number, url) of a GitHub PR link, or (None, None)."""
    match = PR_PATTERN.search(content)
    if not match:
        return None, None
    return match.group(1), match.group(2)


def parse_bullet(
    content: str,
    *,
    original_date: str,
    version: Optional[str],
    fix_keywords: Sequence[str] = FIX_KEYWORDS,
) -> Optional[ReleaseItem]:
    """Build a ReleaseItem from one bullet, or None when the title cleans to nothing.

    Type, connector and PR fields are read from the raw content, not from the
    cleaned title.
    """
    title = clean_title(content)
    if not title:
        return None
    pr_number, pr_url = extract_pr(content)
    return ReleaseItem(
        title=title,
        type=detect_type(content, fix_keywords),
        connector=extract_connector(content),
        pr_number=pr_number,
        pr_url=pr_url,
        original_date=original_date,
        version=version,
    )


def parse_changelog(
    text: str, *, fix_keywords: Sequence[str] = FIX_KEYWORDS
) -> List[ReleaseItem]:
    """Parse raw changelog text into a flat list of items in document order."""
    items: List[ReleaseItem] = []
    for section, bullets in classify_lines(text):
        for content in bullets:
            item = parse_bullet(
                content,
                original_date=section.release_date,
                version=section.version_id,
                fix_keywords=fix_keywords,
            )
            if item is not None:
                items.append(item)
    return items
