"""Health check endpoint."""

import time

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
async def health(request: Request):
    """Liveness probe. Returns 200 while the process is up."""
    dispatcher = request.app.state.dispatcher
    return {
        "status": "ok",
        "sms": "configured" if dispatcher.configured else "disabled",
        "pending_alerts": dispatcher.pending_count,
        "uptime_sec": round(time.time() - request.app.state.start_time, 1),
    }
