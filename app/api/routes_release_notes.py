"""Routes exposing parsed changelog items and weekly release cycles."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.schemas import CategorizedItemSchema, ReleaseCycleSchema
from app.config import Settings, get_settings
from app.services.changelog.fetcher import FetchError
from app.services.changelog.filters import filter_items, list_connectors
from app.services.changelog.models import ItemType, ReleaseFilter, ReleaseItem
from app.services.changelog.pipeline import build_cycles, load_items

router = APIRouter(prefix="/release-notes", tags=["release-notes"])


def _load_or_502(settings: Settings) -> list[ReleaseItem]:
    try:
        return load_items(settings)
    except FetchError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY, detail="Failed to load data"
        ) from exc


def release_filter(
    connector: str | None = None,
    item_type: Annotated[ItemType | None, Query(alias="type")] = None,
    from_date: date | None = None,
    to_date: date | None = None,
) -> ReleaseFilter:
    return ReleaseFilter(
        connector=connector or None,
        item_type=item_type,
        from_date=from_date,
        to_date=to_date,
    )


@router.get("", response_model=list[ReleaseCycleSchema])
def release_cycles(
    filters: Annotated[ReleaseFilter, Depends(release_filter)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> list[ReleaseCycleSchema]:
    """Weekly cycles ending on Wednesday, most recent first."""
    items = _load_or_502(settings)
    return [ReleaseCycleSchema.from_cycle(cycle) for cycle in build_cycles(items, filters)]


@router.get("/items", response_model=list[CategorizedItemSchema])
def release_items(
    filters: Annotated[ReleaseFilter, Depends(release_filter)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> list[CategorizedItemSchema]:
    items = filter_items(_load_or_502(settings), filters)
    return [CategorizedItemSchema.from_item(item) for item in items]


@router.get("/connectors", response_model=list[str])
def connectors(settings: Annotated[Settings, Depends(get_settings)]) -> list[str]:
    return list_connectors(_load_or_502(settings))
