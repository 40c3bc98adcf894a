"""Retrieval of the raw changelog document."""

from __future__ import annotations

import logging

import requests  # type: ignore[import-untyped]

REQUEST_TIMEOUT = 20.0

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """Raised when the changelog cannot be retrieved."""


def fetch_changelog(
    url: str,
    *,
    session: requests.Session | None = None,
    timeout: float = REQUEST_TIMEOUT,
    user_agent: str | None = None,
) -> str:
    """GET the changelog once and return its text. No retries."""
    headers = {"User-Agent": user_agent} if user_agent else {}
    getter = session.get if session is not None else requests.get
    try:
        resp = getter(url, headers=headers, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as exc:
        logger.warning("Changelog fetch failed for %s: %s", url, exc)
        raise FetchError(f"Failed to fetch changelog from {url}: {exc}") from exc
    return resp.text
