from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from apps.api.deps import get_certificate_service, require_staff
from apps.api.schemas.certificates import CertificateStatusUpdate
from apps.api.schemas.common import envelope
from domain.models import CertificateCreate
from domain.value_objects import CertificateFilter
from services.certificates.service import CertificateService

router = APIRouter(prefix="/certificates", tags=["certificates"])


@router.get("", dependencies=[Depends(require_staff)])
def list_certificates(
    status: str | None = None,
    student_id: str | None = Query(None, alias="studentId"),
    nic: str | None = None,
    svc: CertificateService = Depends(get_certificate_service),
):
    certs = svc.list_certificates(CertificateFilter(status=status, student_id=student_id, nic=nic))
    return envelope(data=certs, count=len(certs))


@router.post("")
def upload_certificate(
    payload: CertificateCreate, svc: CertificateService = Depends(get_certificate_service)
):
    cert = svc.create_certificate(payload)
    return JSONResponse(
        envelope(data=cert, message="Certificate uploaded successfully"),
        status_code=status.HTTP_201_CREATED,
    )


@router.get("/{certificate_id}", dependencies=[Depends(require_staff)])
def get_certificate(
    certificate_id: str, svc: CertificateService = Depends(get_certificate_service)
):
    return envelope(data=svc.get_certificate(certificate_id))


@router.patch("/{certificate_id}", dependencies=[Depends(require_staff)])
def review_certificate(
    certificate_id: str,
    payload: CertificateStatusUpdate,
    svc: CertificateService = Depends(get_certificate_service),
):
    cert = svc.set_status(certificate_id, payload.status)
    return envelope(data=cert, message=f"Certificate marked {cert['status']}")
