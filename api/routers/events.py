"""Event ingestion and retrieval endpoints."""

from typing import Any

from fastapi import APIRouter, Body, Depends, Header

from api.dependencies import get_pipeline, require_user
from ingestion.pipeline import IngestionPipeline

router = APIRouter(tags=["Events"])


@router.post("/event")
async def post_event(
    payload: dict[str, Any] | None = Body(default=None),
    x_api_key: str | None = Header(default=None),
    pipeline: IngestionPipeline = Depends(get_pipeline),
):
    """Accept a device report. Falls trigger an SMS alert in the background."""
    return await pipeline.submit_event(x_api_key, payload)


@router.get("/events")
async def get_events(
    _email: str = Depends(require_user),
    pipeline: IngestionPipeline = Depends(get_pipeline),
):
    """Every stored event, oldest first."""
    return await pipeline.list_events()
