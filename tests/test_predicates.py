import pytest

from core.errors import ValidationError
from domain.value_objects import CertificateFilter, StudentFilter
from services.persistence.mongo import to_mongo
from services.query.predicates import (
    AllOf,
    AnyOf,
    Contains,
    Eq,
    NotEq,
    build_certificate_query,
    build_student_query,
)

ROWS = [
    {"fullName": "Alice Perera", "selectedCourse": "Web Development", "nic": "N1",
     "email": "a@x.com", "preferredStudyCenter": "Main Campus", "status": "Pending"},
    {"fullName": "Bob Silva", "selectedCourse": "Accounting", "nic": "N2",
     "email": "ALICE.backup@x.com", "preferredStudyCenter": "City Center",
     "status": "Approved", "disabled": True},
    {"fullName": "Carol Fernando", "selectedCourse": "Marketing", "nic": "N3",
     "email": "c@x.com", "preferredStudyCenter": "Alice Springs Centre", "status": "Rejected"},
    {"fullName": "Dan Jayasuriya", "selectedCourse": "Cybersecurity", "nic": "N4",
     "email": "d@x.com", "preferredStudyCenter": "Main Campus", "status": "Pending",
     "disabled": False},
]


def _names(pred, rows=ROWS):
    return [r["fullName"] for r in rows if pred.matches(r)]


def test_default_filter_hides_disabled_only():
    pred = build_student_query(StudentFilter())
    assert pred == AllOf((NotEq("disabled", True),))
    assert _names(pred) == ["Alice Perera", "Carol Fernando", "Dan Jayasuriya"]


def test_include_disabled_drops_the_visibility_clause():
    pred = build_student_query(StudentFilter(include_disabled=True))
    assert pred == AllOf(())
    assert len(_names(pred)) == len(ROWS)


@pytest.mark.parametrize("status", [None, "", "all", "ALL"])
def test_all_or_missing_status_adds_no_constraint(status):
    pred = build_student_query(StudentFilter(status=status, include_disabled=True))
    assert not any(isinstance(c, Eq) for c in pred.clauses)


def test_status_filter_matches_exact_value():
    pred = build_student_query(StudentFilter(status="Pending"))
    assert _names(pred) == ["Alice Perera", "Dan Jayasuriya"]


def test_unknown_status_is_rejected():
    with pytest.raises(ValidationError, match="Invalid status"):
        build_student_query(StudentFilter(status="Archived"))


def test_search_is_case_insensitive_union_across_fields():
    pred = build_student_query(StudentFilter(search="alice", include_disabled=True))
    # name, email and study centre all count
    assert _names(pred) == ["Alice Perera", "Bob Silva", "Carol Fernando"]


def test_search_combines_with_visibility_and_status():
    pred = build_student_query(StudentFilter(search="ALICE", status="Rejected"))
    assert _names(pred) == ["Carol Fernando"]


def test_blank_search_is_ignored():
    pred = build_student_query(StudentFilter(search="   "))
    assert not any(isinstance(c, AnyOf) for c in pred.clauses)


def test_contains_skips_missing_fields():
    assert not Contains("certifications", "x").matches({"fullName": "x"})


def test_certificate_query_ands_exact_filters():
    pred = build_certificate_query(CertificateFilter(status="Verified", student_id="S1", nic="N1"))
    assert pred == AllOf((Eq("status", "Verified"), Eq("studentId", "S1"), Eq("nic", "N1")))


def test_certificate_query_rejects_student_statuses():
    with pytest.raises(ValidationError):
        build_certificate_query(CertificateFilter(status="Approved"))


def test_mongo_translation():
    pred = build_student_query(StudentFilter(status="Pending", search="a.b"))
    query = to_mongo(pred)
    assert query["$and"][0] == {"disabled": {"$ne": True}}
    assert query["$and"][1] == {"status": "Pending"}
    ors = query["$and"][2]["$or"]
    assert {"fullName": {"$regex": r"a\.b", "$options": "i"}} in ors
    assert len(ors) == 5


def test_mongo_translation_of_trivial_trees():
    assert to_mongo(AllOf(())) == {}
    assert to_mongo(AllOf((Eq("nic", "N1"),))) == {"nic": "N1"}
