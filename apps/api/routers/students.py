from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from apps.api.deps import get_student_service, require_staff
from apps.api.schemas.common import envelope
from apps.api.schemas.students import DisabledToggle
from domain.models import StudentCreate, StudentUpdate
from domain.value_objects import StudentFilter
from services.students.service import StudentService

router = APIRouter(prefix="/students", tags=["students"])


@router.get("", dependencies=[Depends(require_staff)])
def list_students(
    status: str | None = None,
    search: str | None = None,
    show_disabled: bool = Query(False, alias="showDisabled"),
    svc: StudentService = Depends(get_student_service),
):
    students = svc.list_students(
        StudentFilter(status=status, search=search, include_disabled=show_disabled)
    )
    return envelope(data=students, count=len(students))


@router.post("")
def register_student(payload: StudentCreate, svc: StudentService = Depends(get_student_service)):
    student = svc.create_student(payload)
    return JSONResponse(
        envelope(data=student, message="Registration submitted successfully"),
        status_code=status.HTTP_201_CREATED,
    )


@router.get("/{student_id}", dependencies=[Depends(require_staff)])
def get_student(student_id: str, svc: StudentService = Depends(get_student_service)):
    return envelope(data=svc.get_student(student_id))


@router.patch("/{student_id}", dependencies=[Depends(require_staff)])
def update_student(
    student_id: str,
    payload: StudentUpdate,
    svc: StudentService = Depends(get_student_service),
):
    student = svc.update_student(student_id, payload)
    return envelope(data=student, message="Student updated successfully")


@router.put("/{student_id}", dependencies=[Depends(require_staff)])
def toggle_student(
    student_id: str,
    payload: DisabledToggle,
    svc: StudentService = Depends(get_student_service),
):
    student = svc.set_disabled(student_id, payload.disabled)
    action = "disabled" if payload.disabled else "enabled"
    return envelope(data=student, message=f"Student {action} successfully")


@router.delete("/{student_id}", dependencies=[Depends(require_staff)])
def delete_student(student_id: str, svc: StudentService = Depends(get_student_service)):
    svc.delete_student(student_id)
    return envelope(message="Student deleted successfully")
