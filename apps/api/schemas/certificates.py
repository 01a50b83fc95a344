from pydantic import BaseModel, ConfigDict

from domain.models import CertificateStatus


class CertificateStatusUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    status: CertificateStatus
