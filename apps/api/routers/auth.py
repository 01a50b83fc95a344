from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from apps.api.deps import get_auth_service, get_settings, session_token
from apps.api.schemas.auth import LoginRequest
from apps.api.schemas.common import envelope
from core.config import Settings
from services.auth.service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login")
def login(
    payload: LoginRequest,
    response: Response,
    auth: AuthService = Depends(get_auth_service),
    cfg: Settings = Depends(get_settings),
):
    user, token = auth.login(payload.email, payload.password)
    response.set_cookie(
        cfg.SESSION_COOKIE_NAME,
        token,
        max_age=cfg.ACCESS_TOKEN_EXPIRE_MIN * 60,
        httponly=True,
        secure=cfg.COOKIE_SECURE,
        samesite="lax",
        path="/",
    )
    return envelope(user=user.model_dump(), token=token)


@router.get("/verify")
def verify(
    token: str | None = Depends(session_token),
    auth: AuthService = Depends(get_auth_service),
):
    user = auth.verify(token)
    return envelope(user=user.model_dump())


@router.post("/logout")
def logout(response: Response, cfg: Settings = Depends(get_settings)):
    # tokens are stateless; dropping the cookie is all there is to sign-out
    response.delete_cookie(cfg.SESSION_COOKIE_NAME, path="/")
    return envelope(message="Signed out")
