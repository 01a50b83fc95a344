from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Any

from core.config import Settings
from core.errors import NotFound, ValidationError
from domain.models import CertificateCreate, CertificateStatus
from domain.value_objects import CertificateFilter
from services.persistence.repositories import CertificateRepository
from services.query.predicates import build_certificate_query

logger = logging.getLogger(__name__)

SAFE_NAME = re.compile(r"[^A-Za-z0-9._-]")


def storage_path(prefix: str, file_name: str, at: datetime) -> str:
    """`<prefix>/<epoch millis>_<sanitized name>`; the binary itself lives elsewhere."""
    name = SAFE_NAME.sub("_", file_name.replace("\\", "/").split("/")[-1]) or "upload"
    return f"{prefix.rstrip('/')}/{int(at.timestamp() * 1000)}_{name}"


class CertificateService:
    def __init__(self, repo: CertificateRepository, cfg: Settings):
        self.repo = repo
        self.cfg = cfg

    def list_certificates(self, flt: CertificateFilter) -> list[dict[str, Any]]:
        return self.repo.find(build_certificate_query(flt))

    def get_certificate(self, certificate_id: str) -> dict[str, Any]:
        cert = self.repo.get(certificate_id)
        if cert is None:
            raise NotFound("Certificate not found")
        return cert

    def create_certificate(self, payload: CertificateCreate) -> dict[str, Any]:
        if payload.file_type not in self.cfg.ALLOWED_MIME:
            raise ValidationError(f"Unsupported file type: {payload.file_type}")
        if payload.file_size > self.cfg.MAX_UPLOAD_MB * 1024 * 1024:
            raise ValidationError(f"File exceeds the {self.cfg.MAX_UPLOAD_MB}MB limit")

        now = datetime.now(timezone.utc)
        values = payload.model_dump(by_alias=True)
        values.update(
            fileUrl=storage_path(self.cfg.CERT_UPLOAD_PREFIX, payload.file_name, now),
            status=CertificateStatus.PENDING.value,
            uploadDate=now,
            createdAt=now,
            updatedAt=now,
        )
        cert = self.repo.insert(values)
        logger.info("certificate uploaded id=%s student=%s", cert["_id"], payload.student_id)
        return cert

    def set_status(self, certificate_id: str, status: CertificateStatus | str) -> dict[str, Any]:
        try:
            value = CertificateStatus(status).value
        except ValueError as e:
            raise ValidationError(f"Invalid status '{status}'") from e
        cert = self.repo.update(
            certificate_id, {"status": value, "updatedAt": datetime.now(timezone.utc)}
        )
        if cert is None:
            raise NotFound("Certificate not found")
        logger.info("certificate status id=%s -> %s", certificate_id, value)
        return cert
