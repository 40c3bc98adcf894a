from datetime import date
from pathlib import Path

from app.services.changelog.categories import summary_category
from app.services.changelog.filters import filter_items, list_connectors
from app.services.changelog.models import ItemType, ReleaseFilter, SummaryCategory
from app.services.changelog.parser import parse_changelog
from app.services.changelog.pipeline import build_cycles, summary_lines

FIXTURES = Path(__file__).parent / "fixtures"


def load_items():
    return parse_changelog((FIXTURES / "changelog_sample.md").read_text(encoding="utf-8"))


def test_no_filters_returns_items_unchanged() -> None:
    items = load_items()
    assert filter_items(items, ReleaseFilter()) == items


def test_connector_and_type_are_combined_with_and() -> None:
    items = load_items()
    features = filter_items(items, ReleaseFilter(connector="Adyen", item_type=ItemType.FEATURE))
    assert [item.title for item in features] == ["Added support for installments"]
    fixes = filter_items(items, ReleaseFilter(connector="Adyen", item_type=ItemType.BUG_FIX))
    assert fixes == []


def test_connector_filter_value_is_normalized() -> None:
    items = load_items()
    assert [item.connector for item in filter_items(items, ReleaseFilter(connector="STRIPE"))] == [
        "Stripe"
    ]


def test_date_range_is_inclusive() -> None:
    items = load_items()
    selected = filter_items(
        items, ReleaseFilter(from_date=date(2026, 1, 1), to_date=date(2026, 1, 5))
    )
    assert {item.original_date for item in selected} == {"2026-01-01", "2026-01-05"}


def test_inverted_date_range_is_empty() -> None:
    items = load_items()
    inverted = ReleaseFilter(from_date=date(2026, 2, 1), to_date=date(2026, 1, 1))
    assert filter_items(items, inverted) == []


def test_list_connectors_sorted_and_unique() -> None:
    assert list_connectors(load_items()) == ["Adyen", "Stripe", "Worldpay"]


def test_build_cycles_applies_filters_before_grouping() -> None:
    cycles = build_cycles(
        load_items(), ReleaseFilter(item_type=ItemType.BUG_FIX), today=date(2026, 10, 18)
    )
    assert [cycle.cycle_key for cycle in cycles] == ["2026-01-07"]
    assert [item.title for item in cycles[0].items] == [
        "Fix refund webhook handling",
        "Resolves duplicate capture events",
        "bug in 3DS redirect",
    ]
    assert cycles[0].release_version == "2026.1.7.0"


def test_summary_lines_format() -> None:
    items = load_items()
    lines = summary_lines([items[1], items[5]]).splitlines()
    assert lines == ["- Added support for installments (PR #4821)", "- Updated docs"]


def test_summary_category_priority() -> None:
    by_title = {item.title: summary_category(item) for item in load_items()}
    assert by_title["Added support for installments"] is SummaryCategory.CONNECTIVITY
    assert by_title["Added user role permissions"] is SummaryCategory.SECURITY
    assert by_title["routing: improve latency for routing decisions"] is SummaryCategory.CORE
    assert by_title["Updated docs"] is SummaryCategory.MERCHANT
