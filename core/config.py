from __future__ import annotations

import os

from pydantic import BaseModel


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


class Settings(BaseModel):
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-change-me")
    ACCESS_TOKEN_EXPIRE_MIN: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MIN", "60"))
    SESSION_COOKIE_NAME: str = os.getenv("SESSION_COOKIE_NAME", "portal_session")
    COOKIE_SECURE: bool = _flag("COOKIE_SECURE", "false")
    BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "12"))

    MONGO_URL: str = os.getenv("MONGO_URL", "mongodb://localhost:27017")
    MONGO_DB: str = os.getenv("MONGO_DB", "student_portal")

    ALLOWED_MIME: set[str] = {
        "application/pdf",
        "image/jpeg",
        "image/png",
    }
    MAX_UPLOAD_MB: int = int(os.getenv("MAX_UPLOAD_MB", "5"))
    CERT_UPLOAD_PREFIX: str = os.getenv("CERT_UPLOAD_PREFIX", "/uploads/certificates")

    # Pending -> {Approved, Rejected} terminal; off means any status may be written.
    ENFORCE_STATUS_TRANSITIONS: bool = _flag("ENFORCE_STATUS_TRANSITIONS", "false")

    CORS_ALLOW_ORIGINS: list[str] = os.getenv("CORS_ALLOW_ORIGINS", "http://localhost:8501").split(
        ","
    )

    # console
    API_BASE_URL: str = os.getenv("API_BASE_URL", "http://localhost:8000")
    PAGE_SIZE: int = int(os.getenv("PAGE_SIZE", "5"))


settings = Settings()
