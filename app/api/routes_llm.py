"""Routes forwarding release items to the LLM for summaries and enhancement."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from app.api.schemas import ReleaseItemSchema
from app.config import Settings, get_settings
from app.services.llm.client import LLMClient, LLMError
from app.services.llm.enhancer import enhance_items
from app.services.llm.summarizer import classify_items, generate_weekly_summary

MAX_PROMPT_LEN = 2000

router = APIRouter(prefix="/llm", tags=["llm"])


class SmokeRequest(BaseModel):
    prompt: str = Field(..., max_length=MAX_PROMPT_LEN)
    model: str | None = Field(default=None, description="Optional model override")


class SmokeResponse(BaseModel):
    ok: bool
    model: str
    text: str


class ItemsRequest(BaseModel):
    items: list[ReleaseItemSchema]


class SummaryRequest(ItemsRequest):
    week_date: str = ""


class SummaryResponse(BaseModel):
    summary: str


class EnhancedItemSchema(ReleaseItemSchema):
    enhanced_title: str
    description: str
    business_impact: str | None = None


class EnhanceResponse(BaseModel):
    items: list[EnhancedItemSchema]


class Classification(BaseModel):
    prNumber: str
    category: str
    subGroup: str


class ClassifyResponse(BaseModel):
    classifications: list[Classification]


def get_llm_client(settings: Annotated[Settings, Depends(get_settings)]) -> LLMClient:
    return LLMClient(
        base_url=settings.ai_base_url,
        api_key=settings.ai_api_key,
        default_model=settings.ai_model_id,
        fallback_model=settings.ai_fallback_model,
    )


@router.post("/smoke", response_model=SmokeResponse, status_code=status.HTTP_200_OK)
def smoke(
    payload: SmokeRequest,
    settings: Annotated[Settings, Depends(get_settings)],
    client: Annotated[LLMClient, Depends(get_llm_client)],
) -> SmokeResponse:
    """Simple endpoint to verify LLM connectivity and the fallback path."""
    model_name = payload.model or settings.ai_model_id
    try:
        text = client.chat(
            messages=[{"role": "user", "content": payload.prompt}],
            model=model_name,
            timeout_s=20.0,
        )
    except LLMError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc

    return SmokeResponse(ok=True, model=model_name, text=text)


@router.post("/summary", response_model=SummaryResponse)
def summary(
    payload: SummaryRequest, client: Annotated[LLMClient, Depends(get_llm_client)]
) -> SummaryResponse:
    items = [entry.to_item() for entry in payload.items]
    try:
        html = generate_weekly_summary(client, items, payload.week_date)
    except LLMError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY, detail="Failed to generate summary"
        ) from exc
    return SummaryResponse(summary=html)


@router.post("/enhance", response_model=EnhanceResponse)
def enhance(
    payload: ItemsRequest,
    settings: Annotated[Settings, Depends(get_settings)],
    client: Annotated[LLMClient, Depends(get_llm_client)],
) -> EnhanceResponse:
    """Enhance titles; malformed LLM output falls back to the original titles."""
    enhanced = enhance_items(
        client,
        [entry.to_item() for entry in payload.items],
        batch_size=settings.enhance_batch_size,
        temperature=settings.ai_temperature,
    )
    return EnhanceResponse(items=[EnhancedItemSchema(**item.to_dict()) for item in enhanced])


@router.post("/categorize", response_model=ClassifyResponse)
def categorize(
    payload: ItemsRequest, client: Annotated[LLMClient, Depends(get_llm_client)]
) -> ClassifyResponse:
    classifications = classify_items(client, [entry.to_item() for entry in payload.items])
    return ClassifyResponse(
        classifications=[Classification(**entry) for entry in classifications]
    )
