"""
Storage-neutral filter predicates for list queries.

Builders turn optional filter parameters into a predicate tree: every present
parameter ANDs in, a search term ORs across a fixed field set. The tree can be
evaluated in memory with `matches()` or translated by the persistence layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from core.errors import ValidationError
from domain.models import CertificateStatus, StudentStatus
from domain.value_objects import CertificateFilter, StudentFilter

STUDENT_SEARCH_FIELDS = (
    "fullName",
    "selectedCourse",
    "preferredStudyCenter",
    "nic",
    "email",
)


@dataclass(frozen=True)
class Eq:
    field: str
    value: Any

    def matches(self, doc: dict[str, Any]) -> bool:
        return doc.get(self.field) == self.value


@dataclass(frozen=True)
class NotEq:
    """Also true when the field is missing."""

    field: str
    value: Any

    def matches(self, doc: dict[str, Any]) -> bool:
        return doc.get(self.field) != self.value


@dataclass(frozen=True)
class Contains:
    """Case-insensitive literal substring match."""

    field: str
    text: str

    def matches(self, doc: dict[str, Any]) -> bool:
        value = doc.get(self.field)
        if value is None:
            return False
        return self.text.lower() in str(value).lower()


@dataclass(frozen=True)
class AnyOf:
    clauses: tuple[Predicate, ...]

    def matches(self, doc: dict[str, Any]) -> bool:
        return any(c.matches(doc) for c in self.clauses)


@dataclass(frozen=True)
class AllOf:
    clauses: tuple[Predicate, ...] = ()

    def matches(self, doc: dict[str, Any]) -> bool:
        return all(c.matches(doc) for c in self.clauses)


Predicate = Union[Eq, NotEq, Contains, AnyOf, AllOf]


def _status_value(
    raw: str | None, allowed: type[StudentStatus] | type[CertificateStatus]
) -> str | None:
    if raw is None:
        return None
    raw = raw.strip()
    if not raw or raw.lower() == "all":
        return None
    try:
        return allowed(raw).value
    except ValueError:
        choices = ", ".join(s.value for s in allowed)
        raise ValidationError(f"Invalid status '{raw}'. Expected one of: {choices}") from None


def search_clause(term: str | None, fields: tuple[str, ...]) -> AnyOf | None:
    text = (term or "").strip()
    if not text:
        return None
    return AnyOf(tuple(Contains(f, text) for f in fields))


def build_student_query(params: StudentFilter) -> AllOf:
    clauses: list[Predicate] = []
    if not params.include_disabled:
        clauses.append(NotEq("disabled", True))
    status = _status_value(params.status, StudentStatus)
    if status:
        clauses.append(Eq("status", status))
    search = search_clause(params.search, STUDENT_SEARCH_FIELDS)
    if search:
        clauses.append(search)
    return AllOf(tuple(clauses))


def build_certificate_query(params: CertificateFilter) -> AllOf:
    clauses: list[Predicate] = []
    status = _status_value(params.status, CertificateStatus)
    if status:
        clauses.append(Eq("status", status))
    if params.student_id:
        clauses.append(Eq("studentId", params.student_id))
    if params.nic:
        clauses.append(Eq("nic", params.nic))
    return AllOf(tuple(clauses))
