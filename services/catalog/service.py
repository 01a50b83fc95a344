from __future__ import annotations

import logging
from typing import Any

from domain.models import Category
from services.persistence.repositories import CategoryRepository

logger = logging.getLogger(__name__)


class CatalogService:
    """Course catalog: categories -> optional subcategories -> courses."""

    def __init__(self, repo: CategoryRepository):
        self.repo = repo

    def list_categories(self) -> list[dict[str, Any]]:
        return self.repo.all()

    def create_category(self, payload: Category) -> dict[str, Any]:
        category = self.repo.insert(payload.model_dump(by_alias=True))
        logger.info("course category created name=%s", payload.name)
        return category

    def replace_catalog(self, categories: list[Category]) -> int:
        n = self.repo.replace_all([c.model_dump(by_alias=True) for c in categories])
        logger.info("course catalog replaced categories=%d", n)
        return n
