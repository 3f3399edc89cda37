"""Signup and login endpoints."""

from fastapi import APIRouter, Depends

from api.dependencies import get_auth_gate
from auth import AuthGate
from ingestion.schemas import LoginRequest, SignupRequest

router = APIRouter(tags=["Authentication"])


@router.post("/signup")
async def signup(body: SignupRequest, gate: AuthGate = Depends(get_auth_gate)):
    return await gate.signup(body.name, body.email, body.password)


@router.post("/login")
async def login(body: LoginRequest, gate: AuthGate = Depends(get_auth_gate)):
    token = await gate.login(body.email, body.password)
    return {"token": token}
