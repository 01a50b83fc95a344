from fastapi import Depends, Header, Request
from pymongo.database import Database

from core.config import Settings
from core.security import bearer_token
from domain.models import AuthUser
from services.auth.service import AuthService
from services.catalog.service import CatalogService
from services.certificates.service import CertificateService
from services.persistence.repositories import (
    CategoryRepository,
    CertificateRepository,
    StaffRepository,
    StudentRepository,
)
from services.students.service import StudentService


def get_settings(request: Request) -> Settings:
    """Settings the app was built with."""
    return request.app.state.settings


def get_db(request: Request) -> Database:
    """Database handle opened once by the app factory."""
    return request.app.state.db


def get_student_service(
    db: Database = Depends(get_db), cfg: Settings = Depends(get_settings)
) -> StudentService:
    return StudentService(StudentRepository(db), enforce_transitions=cfg.ENFORCE_STATUS_TRANSITIONS)


def get_certificate_service(
    db: Database = Depends(get_db), cfg: Settings = Depends(get_settings)
) -> CertificateService:
    return CertificateService(CertificateRepository(db), cfg)


def get_catalog_service(db: Database = Depends(get_db)) -> CatalogService:
    return CatalogService(CategoryRepository(db))


def get_auth_service(
    db: Database = Depends(get_db), cfg: Settings = Depends(get_settings)
) -> AuthService:
    return AuthService(StaffRepository(db), cfg)


def session_token(
    request: Request,
    authorization: str | None = Header(default=None),
    cfg: Settings = Depends(get_settings),
) -> str | None:
    """Bearer header wins; falls back to the httpOnly session cookie."""
    return bearer_token(authorization) or request.cookies.get(cfg.SESSION_COOKIE_NAME)


def require_staff(
    token: str | None = Depends(session_token),
    auth: AuthService = Depends(get_auth_service),
) -> AuthUser:
    return auth.verify(token)
