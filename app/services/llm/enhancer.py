"""Batch enhancement of release items through the LLM, tolerant of bad replies."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Sequence

from app.services.changelog.models import ReleaseItem
from app.services.llm.client import LLMClient, LLMError

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 5
JSON_ARRAY_PATTERN = re.compile(r"\[[\s\S]*\]")
JSON_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")

SYSTEM_PROMPT = (
    "You are a technical product manager specializing in payment systems and developer "
    "tools. Rewrite release notes so they are clear for product and business teams.\n\n"
    "IMPORTANT: Respond with valid JSON only, no explanations."
)


@dataclass
class EnhancedItem:
    item: ReleaseItem
    enhanced_title: str
    description: str
    business_impact: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self.item)
        data["type"] = self.item.type.value
        data["enhanced_title"] = self.enhanced_title
        data["description"] = self.description
        data["business_impact"] = self.business_impact
        return data


def _unenhanced(items: Sequence[ReleaseItem]) -> List[EnhancedItem]:
    return [
        EnhancedItem(item=item, enhanced_title=item.title, description=item.title)
        for item in items
    ]


def build_enhancement_prompt(items: Sequence[ReleaseItem]) -> str:
    entries = []
    for idx, item in enumerate(items, start=1):
        lines = [f'{idx}. Original: "{item.title}"', f"   Type: {item.type.value}"]
        if item.connector:
            lines.append(f"   Connector: {item.connector}")
        lines.append(f"   PR: #{item.pr_number or 'N/A'}")
        entries.append("\n".join(lines))
    return (
        "Enhance the following release notes. For each item provide enhanced_title "
        "(5-10 words), description (1-2 sentences) and business_impact.\n\n"
        "Input items:\n" + "\n".join(entries) + "\n\n"
        'Respond with a JSON array only: [{"enhanced_title": "...", "description": "...", '
        '"business_impact": "..."}]'
    )


def extract_json_payload(text: str) -> Any:
    """Decode the first JSON array (or else object) embedded in a reply."""
    match = JSON_ARRAY_PATTERN.search(text) or JSON_OBJECT_PATTERN.search(text)
    return json.loads(match.group(0) if match else text)


def _entries_from_payload(payload: Any) -> List[Any]:
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in ("enhanced_items", "items"):
            if isinstance(payload.get(key), list):
                return payload[key]
    return []


def _first(entry: Dict[str, Any], *keys: str) -> Optional[str]:
    for key in keys:
        value = entry.get(key)
        if value:
            return str(value)
    return None


def _merge_batch(batch: Sequence[ReleaseItem], entries: List[Any]) -> List[EnhancedItem]:
    if len(entries) != len(batch):
        logger.warning(
            "LLM returned %d entries for a batch of %d; unmatched items keep their titles",
            len(entries),
            len(batch),
        )
    merged: List[EnhancedItem] = []
    for idx, original in enumerate(batch):
        entry = entries[idx] if idx < len(entries) else None
        if not isinstance(entry, dict):
            merged.extend(_unenhanced([original]))
            continue
        merged.append(
            EnhancedItem(
                item=original,
                enhanced_title=_first(entry, "enhanced_title", "title", "enhancedTitle")
                or original.title,
                description=_first(entry, "description", "desc") or original.title,
                business_impact=_first(entry, "business_impact", "impact", "businessImpact"),
            )
        )
    return merged


def enhance_items(
    client: LLMClient,
    items: Sequence[ReleaseItem],
    *,
    batch_size: int = DEFAULT_BATCH_SIZE,
    temperature: float = 0.7,
) -> List[EnhancedItem]:
    """Enhance items in batches; any failing batch keeps its original titles."""
    if not items:
        return []
    batch_size = max(1, batch_size)
    enhanced: List[EnhancedItem] = []
    for start in range(0, len(items), batch_size):
        batch = items[start : start + batch_size]
        try:
            reply = client.chat(
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": build_enhancement_prompt(batch)},
                ],
                temperature=temperature,
                max_tokens=2000,
            )
        except LLMError as exc:
            logger.warning("LLM enhancement failed, keeping original titles: %s", exc)
            enhanced.extend(_unenhanced(batch))
            continue

        try:
            entries = _entries_from_payload(extract_json_payload(reply))
        except ValueError as exc:
            logger.warning("Failed to parse LLM response: %s; reply: %s", exc, reply[:500])
            entries = []

        if entries:
            enhanced.extend(_merge_batch(batch, entries))
        else:
            enhanced.extend(_unenhanced(batch))
    return enhanced
