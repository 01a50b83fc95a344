"""
Seed reference data out of band.

    python -m scripts.seed courses [--file scripts/data/courses.json]
    python -m scripts.seed staff --email admin@example.com --name "Admin User" --role admin

The staff password is read from SEED_STAFF_PASSWORD or prompted for.
"""

from __future__ import annotations

import argparse
import getpass
import json
import logging
import os
from pathlib import Path

from pydantic import ValidationError as SchemaError

from core.config import settings
from core.errors import Conflict
from core.logging import configure_logging
from domain.models import Category, StaffCreate
from services.auth.service import AuthService
from services.catalog.service import CatalogService
from services.persistence.mongo import connect, ensure_indexes
from services.persistence.repositories import CategoryRepository, StaffRepository

logger = logging.getLogger(__name__)

DEFAULT_COURSES = Path(__file__).parent / "data" / "courses.json"


def load_categories(path: Path) -> list[Category]:
    raw = json.loads(path.read_text(encoding="utf-8"))
    return [Category.model_validate(c) for c in raw.get("categories", [])]


def seed_courses(db, path: Path) -> int:
    return CatalogService(CategoryRepository(db)).replace_catalog(load_categories(path))


def seed_staff(db, payload: StaffCreate) -> bool:
    """False when the account already exists."""
    try:
        AuthService(StaffRepository(db), settings).create_staff(payload)
    except Conflict:
        logger.info("staff account %s already exists", payload.email)
        return False
    return True


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="seed", description=__doc__.splitlines()[1])
    sub = parser.add_subparsers(dest="what", required=True)

    p_courses = sub.add_parser("courses", help="replace the course catalog")
    p_courses.add_argument("--file", type=Path, default=DEFAULT_COURSES)

    p_staff = sub.add_parser("staff", help="create a staff account")
    p_staff.add_argument("--email", required=True)
    p_staff.add_argument("--name", required=True)
    p_staff.add_argument("--role", choices=["admin", "staff"], default="admin")

    args = parser.parse_args(argv)
    configure_logging()

    client = connect(settings)
    try:
        db = client[settings.MONGO_DB]
        ensure_indexes(db)
        if args.what == "courses":
            n = seed_courses(db, args.file)
            logger.info("seeded %d course categories from %s", n, args.file)
            return 0
        password = os.getenv("SEED_STAFF_PASSWORD") or getpass.getpass("Password: ")
        try:
            payload = StaffCreate(
                email=args.email, password=password, name=args.name, role=args.role
            )
        except SchemaError as e:
            logger.error("invalid staff account: %s", e.errors()[0].get("msg"))
            return 2
        seed_staff(db, payload)
        return 0
    finally:
        client.close()


if __name__ == "__main__":
    raise SystemExit(main())
