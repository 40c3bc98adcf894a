"""Health and readiness routes."""

from fastapi import APIRouter, HTTPException

from app.config import get_settings

router = APIRouter()


@router.get("/health")
def health() -> dict[str, str]:
    """Simple liveness probe."""
    return {"status": "ok"}


@router.get("/ready")
def ready() -> dict[str, str]:
    """
    Readiness probe.

    Checks that a changelog source URL is configured in settings.
    """
    settings = get_settings()
    if not settings.changelog_configured:
        raise HTTPException(status_code=503, detail="CHANGELOG_URL is not configured")
    return {"status": "ok"}
