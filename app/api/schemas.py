"""Pydantic request/response models shared by the API routers."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field

from app.services.changelog.categories import summary_category
from app.services.changelog.models import ItemType, ReleaseCycle, ReleaseItem, SummaryCategory


class ReleaseItemSchema(BaseModel):
    title: str = Field(..., min_length=1)
    type: ItemType = ItemType.FEATURE
    connector: str | None = None
    pr_number: str | None = None
    pr_url: str | None = None
    original_date: str
    version: str | None = None

    @classmethod
    def from_item(cls, item: ReleaseItem) -> "ReleaseItemSchema":
        return cls(
            title=item.title,
            type=item.type,
            connector=item.connector,
            pr_number=item.pr_number,
            pr_url=item.pr_url,
            original_date=item.original_date,
            version=item.version,
        )

    def to_item(self) -> ReleaseItem:
        return ReleaseItem(
            title=self.title,
            type=self.type,
            connector=self.connector,
            pr_number=self.pr_number,
            pr_url=self.pr_url,
            original_date=self.original_date,
            version=self.version,
        )


class CategorizedItemSchema(ReleaseItemSchema):
    category: SummaryCategory

    @classmethod
    def from_item(cls, item: ReleaseItem) -> "CategorizedItemSchema":
        base = ReleaseItemSchema.from_item(item).model_dump()
        return cls(**base, category=summary_category(item))


class ReleaseCycleSchema(BaseModel):
    cycle_key: str
    headline: str
    release_version: str | None
    is_current_cycle: bool
    expected_live_date: date
    items: list[ReleaseItemSchema]

    @classmethod
    def from_cycle(cls, cycle: ReleaseCycle) -> "ReleaseCycleSchema":
        return cls(
            cycle_key=cycle.cycle_key,
            headline=cycle.headline,
            release_version=cycle.release_version,
            is_current_cycle=cycle.is_current_cycle,
            expected_live_date=cycle.expected_live_date,
            items=[ReleaseItemSchema.from_item(item) for item in cycle.items],
        )
