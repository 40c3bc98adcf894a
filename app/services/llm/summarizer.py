"""Weekly summary and PR classification requests for the LLM."""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, List, Sequence

from app.services.changelog.models import ReleaseItem
from app.services.changelog.pipeline import summary_lines
from app.services.llm.client import LLMClient, LLMError

logger = logging.getLogger(__name__)

EMPTY_SUMMARY = "<p>No items to summarize.</p>"
CODE_FENCE_PATTERN = re.compile(r"```[a-zA-Z]*")
CLASSIFICATION_CATEGORIES = {"connectivity", "experience", "core"}

SUMMARY_SYSTEM_PROMPT = (
    "You are a Product Manager technical writer. You synthesize lists of PRs into "
    "cohesive, professional release notes."
)
CLASSIFY_SYSTEM_PROMPT = "You are a product classification engine."


def strip_code_fences(text: str) -> str:
    return CODE_FENCE_PATTERN.sub("", text).strip()


def build_summary_prompt(items: Sequence[ReleaseItem], week_date: str) -> str:
    return (
        "You are writing the official weekly release notes.\n"
        f"Week of: {week_date}\n"
        "Audience: merchant business heads and product managers.\n\n"
        f"Input data (PR titles):\n{summary_lines(items)}\n\n"
        "Identify 3-4 major themes, group related connectors, list the top highlights and "
        "categorize the rest into 'Connector expansions and enhancements', "
        "'Customer and access management' and 'Routing and core improvements'. "
        "Return only an HTML <div>, no markdown."
    )


def generate_weekly_summary(
    client: LLMClient, items: Sequence[ReleaseItem], week_date: str
) -> str:
    """Return summary HTML for one cycle. Raises LLMError on upstream failure."""
    if not items:
        return EMPTY_SUMMARY
    reply = client.chat(
        messages=[
            {"role": "system", "content": SUMMARY_SYSTEM_PROMPT},
            {"role": "user", "content": build_summary_prompt(items, week_date)},
        ],
        temperature=0.5,
    )
    return strip_code_fences(reply)


def build_classification_prompt(items: Sequence[ReleaseItem]) -> str:
    listing = "\n".join(f"ID:{item.pr_number} Title:{item.title}" for item in items)
    return (
        "Classify each PR into exactly one bucket by impact:\n"
        "1. 'connectivity': payment connectors, wallets or payment methods "
        "(subGroup = connector name).\n"
        "2. 'experience': things merchants see or use such as dashboard, analytics or "
        "authentication (subGroup = feature area).\n"
        "3. 'core': routing, database, refactoring, CI/CD (subGroup = component).\n\n"
        'Output strictly a JSON object: {"classifications": '
        '[{"prNumber": "123", "category": "connectivity", "subGroup": "Adyen"}]}'
        f"\n\nInput:\n{listing}"
    )


def _clean_classifications(payload: Any) -> List[Dict[str, str]]:
    entries = payload.get("classifications") if isinstance(payload, dict) else None
    if not isinstance(entries, list):
        return []
    cleaned: List[Dict[str, str]] = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        category = str(entry.get("category", "")).lower()
        if category not in CLASSIFICATION_CATEGORIES:
            continue
        cleaned.append(
            {
                "prNumber": str(entry.get("prNumber", "")),
                "category": category,
                "subGroup": str(entry.get("subGroup", "")),
            }
        )
    return cleaned


def classify_items(client: LLMClient, items: Sequence[ReleaseItem]) -> List[Dict[str, str]]:
    """Ask the LLM to bucket PRs; any failure yields an empty list."""
    if not items:
        return []
    try:
        reply = client.chat(
            messages=[
                {"role": "system", "content": CLASSIFY_SYSTEM_PROMPT},
                {"role": "user", "content": build_classification_prompt(items)},
            ],
            temperature=0.1,
            response_format={"type": "json_object"},
        )
        payload = json.loads(strip_code_fences(reply))
    except (LLMError, ValueError) as exc:
        logger.warning("Categorization failed: %s", exc)
        return []
    return _clean_classifications(payload)
