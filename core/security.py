from __future__ import annotations

import time
from functools import lru_cache
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from core.config import Settings, settings
from core.errors import Unauthorized

ALGO = "HS256"


@lru_cache(maxsize=None)
def _pwd_context(rounds: int) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def hash_password(plain: str, cfg: Settings = settings) -> str:
    return _pwd_context(cfg.BCRYPT_ROUNDS).hash(plain)


def verify_password(plain: str, hashed: str, cfg: Settings = settings) -> bool:
    # the cost is read from the hash itself, so any rounds setting verifies
    return _pwd_context(cfg.BCRYPT_ROUNDS).verify(plain, hashed)


def create_access_token(sub: str, claims: dict[str, Any], cfg: Settings = settings) -> str:
    now = int(time.time())
    payload = {**claims, "sub": sub, "iat": now, "exp": now + cfg.ACCESS_TOKEN_EXPIRE_MIN * 60}
    return jwt.encode(payload, cfg.SECRET_KEY, algorithm=ALGO)


def decode_token(tok: str, cfg: Settings = settings) -> dict[str, Any]:
    try:
        payload = jwt.decode(tok, cfg.SECRET_KEY, algorithms=[ALGO])
    except JWTError as e:
        raise Unauthorized("Invalid or expired token") from e
    if not payload.get("sub"):
        raise Unauthorized("Invalid or expired token")
    return payload


def bearer_token(authorization: str | None) -> str | None:
    """Pull the token out of an `Authorization: Bearer <token>` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()
