"""FastAPI dependency injection."""

from fastapi import Header, Request

from auth import AuthGate
from ingestion.pipeline import IngestionPipeline


def get_pipeline(request: Request) -> IngestionPipeline:
    return request.app.state.pipeline


def get_auth_gate(request: Request) -> AuthGate:
    return request.app.state.auth_gate


def require_user(
    request: Request,
    authorization: str | None = Header(default=None),
) -> str:
    """Bearer-token gate. Returns the authenticated email or raises AuthError (401)."""
    return get_auth_gate(request).verify(authorization)
