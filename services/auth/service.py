from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from core.config import Settings
from core.errors import Unauthorized
from core.security import create_access_token, decode_token, hash_password, verify_password
from domain.models import AuthUser, StaffCreate
from services.persistence.repositories import StaffRepository

logger = logging.getLogger(__name__)

BAD_CREDENTIALS = "Invalid email or password"


def _public(staff: dict[str, Any]) -> AuthUser:
    return AuthUser(email=staff["email"], name=staff["name"], role=staff["role"])


class AuthService:
    def __init__(self, repo: StaffRepository, cfg: Settings):
        self.repo = repo
        self.cfg = cfg

    def login(self, email: str, password: str) -> tuple[AuthUser, str]:
        staff = self.repo.find_by_email(email, with_password=True)
        if not staff or not verify_password(password, staff.get("password") or "", cfg=self.cfg):
            logger.warning("login failed email=%s", email.strip().lower())
            raise Unauthorized(BAD_CREDENTIALS)
        user = _public(staff)
        token = create_access_token(
            staff["email"], {"name": user.name, "role": user.role}, cfg=self.cfg
        )
        logger.info("login ok email=%s role=%s", user.email, user.role)
        return user, token

    def verify(self, token: str | None) -> AuthUser:
        if not token:
            raise Unauthorized("Unauthorized")
        claims = decode_token(token, cfg=self.cfg)
        staff = self.repo.find_by_email(claims["sub"])
        if not staff:
            # account removed after the token was issued
            raise Unauthorized("Invalid or expired token")
        return _public(staff)

    def create_staff(self, payload: StaffCreate) -> dict[str, Any]:
        now = datetime.now(timezone.utc)
        values = payload.model_dump(by_alias=True)
        values.update(
            email=str(payload.email).strip().lower(),
            password=hash_password(payload.password, cfg=self.cfg),
            createdAt=now,
            updatedAt=now,
        )
        staff = self.repo.insert(values)
        logger.info("staff account created email=%s role=%s", staff["email"], staff["role"])
        return staff
