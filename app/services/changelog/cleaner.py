"""Text normalization helpers for changelog bullets."""

from __future__ import annotations

import re

PR_LINK_PATTERN = re.compile(r"\[#\d+\]\(https://github\.com[^)]*\)")
GITHUB_URL_PATTERN = re.compile(r"\(https://github\.com[^)]*\)")
EMPTY_PARENS_PATTERN = re.compile(r"\(\s*\)")
BRACKETED_PATTERN = re.compile(r"\[[^\]]+\]")
MULTISPACE_PATTERN = re.compile(r"\s{2,}")
TRAILING_PUNCT_PATTERN = re.compile(r"[-–:,;.\s]+$")


def clean_title(raw: str) -> str:
    """Strip markdown noise from a bullet and return the display title.

    Link removal runs before bracket removal because PR links are bracketed
    too. The result may be empty; callers decide what to do with that.
    """
    cleaned = PR_LINK_PATTERN.sub("", raw)
    cleaned = GITHUB_URL_PATTERN.sub("", cleaned)
    cleaned = EMPTY_PARENS_PATTERN.sub("", cleaned)
    cleaned = cleaned.replace("**", "")
    cleaned = BRACKETED_PATTERN.sub("", cleaned)
    cleaned = cleaned.replace("`", "")
    cleaned = MULTISPACE_PATTERN.sub(" ", cleaned)
    cleaned = cleaned.strip()
    cleaned = TRAILING_PUNCT_PATTERN.sub("", cleaned)
    return cleaned


def normalize_connector(raw: str) -> str:
    """Title-case a connector token: 'ADYEN', 'adyen' and 'Adyen' all give 'Adyen'."""
    if not raw:
        return ""
    words = raw.lower().split(" ")
    return " ".join(word[:1].upper() + word[1:] for word in words)
