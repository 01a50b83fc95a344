import os

# must be set before core.config is imported
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SECRET_KEY", "test-secret")

import mongomock  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from apps.api.main import create_app  # noqa: E402
from core.config import Settings  # noqa: E402
from domain.models import StaffCreate  # noqa: E402
from factories import ADMIN_EMAIL, ADMIN_PASSWORD  # noqa: E402
from services.auth.service import AuthService  # noqa: E402
from services.certificates.service import CertificateService  # noqa: E402
from services.persistence.mongo import ensure_indexes  # noqa: E402
from services.persistence.repositories import (  # noqa: E402
    CertificateRepository,
    StaffRepository,
    StudentRepository,
)
from services.students.service import StudentService  # noqa: E402


@pytest.fixture
def cfg():
    return Settings(SECRET_KEY="test-secret", BCRYPT_ROUNDS=4)


@pytest.fixture
def db():
    database = mongomock.MongoClient()["portal_test"]
    ensure_indexes(database)
    return database


@pytest.fixture
def students(db):
    return StudentService(StudentRepository(db))


@pytest.fixture
def certificates(db, cfg):
    return CertificateService(CertificateRepository(db), cfg)


@pytest.fixture
def auth(db, cfg):
    return AuthService(StaffRepository(db), cfg)


@pytest.fixture
def admin(auth):
    return auth.create_staff(
        StaffCreate(email=ADMIN_EMAIL, password=ADMIN_PASSWORD, name="Admin User", role="admin")
    )


@pytest.fixture
def client(db, cfg):
    with TestClient(create_app(cfg, db)) as c:
        yield c


@pytest.fixture
def staff_headers(client, admin):
    res = client.post("/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert res.status_code == 200
    # header auth only; cookie flow has its own tests
    client.cookies.clear()
    return {"Authorization": f"Bearer {res.json()['token']}"}
