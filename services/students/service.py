from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from core.errors import Conflict, NotFound, ValidationError
from domain.models import StudentCreate, StudentStatus, StudentUpdate, can_transition
from domain.value_objects import StudentFilter
from services.persistence.repositories import StudentRepository
from services.query.predicates import build_student_query

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class StudentService:
    """
    Registration records and their review lifecycle.

    Status moves Pending -> Approved | Rejected through admin action. The
    service only guards that graph when `enforce_transitions` is set;
    otherwise any valid status may be written at any time (last write wins).
    """

    def __init__(self, repo: StudentRepository, enforce_transitions: bool = False):
        self.repo = repo
        self.enforce_transitions = enforce_transitions

    def list_students(self, flt: StudentFilter) -> list[dict[str, Any]]:
        return self.repo.find(build_student_query(flt))

    def get_student(self, student_id: str) -> dict[str, Any]:
        student = self.repo.get(student_id)
        if student is None:
            raise NotFound("Student not found")
        return student

    def create_student(self, payload: StudentCreate) -> dict[str, Any]:
        values = payload.model_dump(by_alias=True)
        if self.repo.nic_taken(values["nic"]):
            raise Conflict(f"A student with NIC '{values['nic']}' is already registered")
        now = _now()
        values.update(
            status=StudentStatus.PENDING.value,
            disabled=False,
            appliedDate=now,
            createdAt=now,
            updatedAt=now,
        )
        student = self.repo.insert(values)
        logger.info("student registered id=%s course=%s", student["_id"], values["selectedCourse"])
        return student

    def update_student(self, student_id: str, patch: StudentUpdate) -> dict[str, Any]:
        values = patch.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)
        if not values:
            raise ValidationError("No fields to update")

        current = self.get_student(student_id)
        if "nic" in values and values["nic"] != current.get("nic"):
            if self.repo.nic_taken(values["nic"], exclude_id=student_id):
                raise Conflict(f"A student with NIC '{values['nic']}' is already registered")
        if "status" in values and self.enforce_transitions:
            current_status = current.get("status", StudentStatus.PENDING.value)
            if not can_transition(current_status, values["status"]):
                raise Conflict(
                    f"Cannot change status from {current.get('status')} to {values['status']}"
                )

        values["updatedAt"] = _now()
        student = self.repo.update(student_id, values)
        if student is None:
            # removed between the read and the write
            raise NotFound("Student not found")
        if "status" in values and values["status"] != current.get("status"):
            logger.info(
                "student status changed id=%s %s -> %s",
                student_id,
                current.get("status"),
                values["status"],
            )
        return student

    def set_disabled(self, student_id: str, disabled: bool) -> dict[str, Any]:
        student = self.repo.update(student_id, {"disabled": bool(disabled), "updatedAt": _now()})
        if student is None:
            raise NotFound("Student not found")
        logger.info("student %s id=%s", "disabled" if disabled else "enabled", student_id)
        return student

    def delete_student(self, student_id: str) -> None:
        if not self.repo.delete(student_id):
            raise NotFound("Student not found")
        logger.warning("student deleted id=%s", student_id)
