"""Keyword bucketing of release items into business-facing summary categories."""

from __future__ import annotations

from app.services.changelog.models import ReleaseItem, SummaryCategory

SECURITY_KEYWORDS = (
    "auth",
    "security",
    "compliance",
    "gdpr",
    "pci",
    "token",
    "vault",
    "locker",
    "permission",
    "role",
    "policy",
    "oidc",
    "sso",
)
CORE_KEYWORDS = (
    "routing",
    "infrastructure",
    "latency",
    "performance",
    "database",
    "optimization",
    "api",
    "webhook",
    "event",
    "monitoring",
    "alert",
    "rust",
    "aws",
)


def summary_category(item: ReleaseItem) -> SummaryCategory:
    """Pick a category; connector items always land in Global Connectivity."""
    if item.connector:
        return SummaryCategory.CONNECTIVITY
    text = item.title.lower()
    if any(keyword in text for keyword in SECURITY_KEYWORDS):
        return SummaryCategory.SECURITY
    if any(keyword in text for keyword in CORE_KEYWORDS):
        return SummaryCategory.CORE
    return SummaryCategory.MERCHANT
