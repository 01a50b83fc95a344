from dataclasses import dataclass


@dataclass(frozen=True)
class StudentFilter:
    status: str | None = None  # "all" or None means any status
    search: str | None = None
    include_disabled: bool = False


@dataclass(frozen=True)
class CertificateFilter:
    status: str | None = None
    student_id: str | None = None
    nic: str | None = None
