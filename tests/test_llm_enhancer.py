import json

from app.services.changelog.models import ItemType, ReleaseItem
from app.services.llm.client import LLMError
from app.services.llm.enhancer import enhance_items, extract_json_payload
from app.services.llm.summarizer import EMPTY_SUMMARY, classify_items, generate_weekly_summary


class ScriptedClient:
    """Stands in for LLMClient: returns queued replies or raises queued errors."""

    def __init__(self, replies: list) -> None:
        self.replies = list(replies)
        self.prompts: list[str] = []

    def chat(self, messages, **kwargs) -> str:
        self.prompts.append(messages[-1]["content"])
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


def make_item(title: str, pr_number: str | None = "1") -> ReleaseItem:
    return ReleaseItem(
        title=title,
        type=ItemType.FEATURE,
        connector=None,
        pr_number=pr_number,
        pr_url=None,
        original_date="2026-01-07",
        version="2026.1.7.0",
    )


def test_extract_json_payload_ignores_surrounding_prose() -> None:
    reply = 'Sure! Here you go:\n[{"enhanced_title": "A"}]\nHope that helps.'
    assert extract_json_payload(reply) == [{"enhanced_title": "A"}]


def test_enhance_items_maps_aliases_by_position() -> None:
    reply = json.dumps(
        {
            "enhanced_items": [
                {
                    "title": "Installments for Adyen",
                    "desc": "Split payments.",
                    "impact": "More sales",
                },
                {"enhanced_title": "Faster refunds", "description": "Refunds settle sooner."},
            ]
        }
    )
    client = ScriptedClient([reply])
    result = enhance_items(client, [make_item("a"), make_item("b")])  # type: ignore[arg-type]
    titles = [entry.enhanced_title for entry in result]
    assert titles == ["Installments for Adyen", "Faster refunds"]
    assert result[0].business_impact == "More sales"
    assert result[1].business_impact is None
    assert result[1].item.title == "b"


def test_enhance_items_batches_and_falls_back_per_batch() -> None:
    client = ScriptedClient(["not json at all", '[{"enhanced_title": "C+"}]'])
    items = [make_item("a"), make_item("b"), make_item("c")]
    result = enhance_items(client, items, batch_size=2)  # type: ignore[arg-type]
    assert len(client.prompts) == 2
    assert [entry.enhanced_title for entry in result] == ["a", "b", "C+"]
    assert result[0].description == "a"


def test_enhance_items_survives_llm_errors() -> None:
    client = ScriptedClient([LLMError("down")])
    result = enhance_items(client, [make_item("a")])  # type: ignore[arg-type]
    assert result[0].enhanced_title == "a"
    assert result[0].to_dict()["type"] == "Feature"


def test_enhance_items_empty() -> None:
    assert enhance_items(ScriptedClient([]), []) == []  # type: ignore[arg-type]


def test_weekly_summary_strips_code_fences() -> None:
    client = ScriptedClient(["```html\n<div>Highlights</div>\n```"])
    items = [make_item("Add payouts", "42")]
    html = generate_weekly_summary(client, items, "2026-01-07")  # type: ignore[arg-type]
    assert html == "<div>Highlights</div>"
    assert "- Add payouts (PR #42)" in client.prompts[0]


def test_weekly_summary_without_items_skips_llm() -> None:
    client = ScriptedClient([])
    assert generate_weekly_summary(client, [], "2026-01-07") == EMPTY_SUMMARY  # type: ignore[arg-type]


def test_classify_items_sanitizes_reply() -> None:
    reply = (
        "```json\n"
        '{"classifications": [{"prNumber": "1", "category": "Connectivity", "subGroup": "Adyen"},'
        ' "junk", {"prNumber": "2", "category": "marketing"}]}\n```'
    )
    result = classify_items(ScriptedClient([reply]), [make_item("a")])  # type: ignore[arg-type]
    assert result == [{"prNumber": "1", "category": "connectivity", "subGroup": "Adyen"}]


def test_classify_items_returns_empty_on_failure() -> None:
    items = [make_item("a")]
    assert classify_items(ScriptedClient(["{broken"]), items) == []  # type: ignore[arg-type]
    assert classify_items(ScriptedClient([LLMError("x")]), items) == []  # type: ignore[arg-type]


def test_enhance_items_short_reply_keeps_every_item() -> None:
    client = ScriptedClient(['[{"enhanced_title": "A+"}]'])
    items = [make_item(title) for title in "abcde"]
    result = enhance_items(client, items)  # type: ignore[arg-type]
    assert [entry.item.title for entry in result] == ["a", "b", "c", "d", "e"]
    assert [entry.enhanced_title for entry in result] == ["A+", "b", "c", "d", "e"]


def test_enhance_items_long_reply_ignores_extra_entries() -> None:
    client = ScriptedClient(['[{"enhanced_title": "A+"}, {"enhanced_title": "X"}]'])
    result = enhance_items(client, [make_item("a")])  # type: ignore[arg-type]
    assert len(result) == 1
    assert result[0].item.title == "a"
    assert result[0].enhanced_title == "A+"
