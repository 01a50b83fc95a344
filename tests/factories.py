from domain.models import StudentCreate

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "password123"


def student_fields(**overrides):
    fields = {
        "fullName": "Alice Perera",
        "dateOfBirth": "2001-04-12",
        "address": "12 Temple Road, Kandy",
        "phoneNumber": "0771234567",
        "email": "alice@example.com",
        "nic": "200110301234",
        "middleSchoolResults": "9A",
        "highSchoolResults": "3A",
        "preferredStudyCenter": "Main Campus",
        "selectedCategory": "Information Technology",
        "selectedSubcategory": "Software Development",
        "selectedCourse": "Web Development",
    }
    fields.update(overrides)
    return fields


def make_student(**overrides) -> StudentCreate:
    return StudentCreate.model_validate(student_fields(**overrides))


def certificate_fields(**overrides):
    fields = {
        "studentId": "S-001",
        "nic": "200110301234",
        "certificateType": "A/L Results",
        "issuingInstitution": "Department of Examinations",
        "issueDate": "2020-03-01",
        "fileName": "transcript.pdf",
        "fileSize": 204800,
        "fileType": "application/pdf",
    }
    fields.update(overrides)
    return fields
