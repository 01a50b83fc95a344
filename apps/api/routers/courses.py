from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from apps.api.deps import get_catalog_service, require_staff
from apps.api.schemas.common import envelope
from domain.models import Category
from services.catalog.service import CatalogService

router = APIRouter(prefix="/courses", tags=["courses"])


@router.get("")
def list_courses(svc: CatalogService = Depends(get_catalog_service)):
    return envelope(data={"categories": svc.list_categories()})


@router.post("", dependencies=[Depends(require_staff)])
def create_category(payload: Category, svc: CatalogService = Depends(get_catalog_service)):
    category = svc.create_category(payload)
    return JSONResponse(
        envelope(data=category, message="Course category created successfully"),
        status_code=status.HTTP_201_CREATED,
    )
