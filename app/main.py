"""FastAPI entrypoint for the Weekly Release Notes service."""

import logging

from fastapi import FastAPI

from app.api.routes_health import router as health_router
from app.api.routes_llm import router as llm_router
from app.api.routes_release_notes import router as release_notes_router


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    application = FastAPI(
        title="Weekly Release Notes",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    application.include_router(health_router)
    application.include_router(release_notes_router)
    application.include_router(llm_router)
    return application


app = create_app()
