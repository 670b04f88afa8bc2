"""
Tests for payload validation.

Tests:
- Required fields on every insert variant
- Enum fields fail closed
- Login and registration rules
- Structured field errors
"""

import pytest

from jobboard.core.errors import PayloadValidationError
from jobboard.core.validation import collect_errors, validate_payload
from jobboard.schemas.schemas import (
    ApplicationCreate, ApplicationStatusUpdate, ApprovalUpdate, ExperienceLevel, JobCreate,
    JobStatus, JobStatusUpdate, JobType, LoginRequest, RegisterRequest, UserCreate, UserRole,
)


@pytest.fixture
def user_payload():
    return {
        "username": "janedoe",
        "password": "secret123",
        "email": "jane@jobportal.com",
        "name": "Jane Doe",
    }


@pytest.fixture
def job_payload():
    return {
        "title": "Data Engineer",
        "company": "Acme",
        "description": "Pipelines",
        "location": "Berlin",
        "type": "full-time",
        "postedBy": 3,
    }


class TestRequiredFields:
    """Missing required fields are reported by name."""

    @pytest.mark.parametrize("field", ["username", "password", "email", "name"])
    def test_user_create_missing_field(self, user_payload, field):
        del user_payload[field]
        with pytest.raises(PayloadValidationError) as exc_info:
            validate_payload(UserCreate, user_payload)
        assert field in exc_info.value.fields()

    @pytest.mark.parametrize(
        "field", ["title", "company", "description", "location", "type", "postedBy"]
    )
    def test_job_create_missing_field(self, job_payload, field):
        del job_payload[field]
        errors = collect_errors(JobCreate, job_payload)
        assert [e.field for e in errors] == [field]
        assert errors[0].message == "Field required"

    @pytest.mark.parametrize("field", ["jobId", "userId"])
    def test_application_requires_both_references(self, field):
        payload = {"jobId": 1, "userId": 2}
        del payload[field]
        errors = collect_errors(ApplicationCreate, payload)
        assert [e.field for e in errors] == [field]

    def test_application_accepts_references_and_cover_letter(self):
        application = validate_payload(
            ApplicationCreate, {"jobId": 1, "userId": 2, "coverLetter": "Hire me"}
        )
        assert application.job_id == 1
        assert application.user_id == 2
        assert application.cover_letter == "Hire me"

    def test_application_ignores_server_assigned_fields(self):
        application = validate_payload(
            ApplicationCreate, {"jobId": 1, "userId": 2, "status": "accepted", "id": 99}
        )
        assert application.model_dump() == {"job_id": 1, "user_id": 2, "cover_letter": None}

    def test_application_rejects_non_integer_reference(self):
        errors = collect_errors(ApplicationCreate, {"jobId": "1", "userId": 2})
        assert [e.field for e in errors] == ["jobId"]


class TestUserCreate:
    def test_defaults(self, user_payload):
        user = validate_payload(UserCreate, user_payload)
        assert user.role == UserRole.jobseeker
        assert user.skills == []
        assert user.company is None

    def test_null_skills_become_empty(self, user_payload):
        user_payload["skills"] = None
        assert validate_payload(UserCreate, user_payload).skills == []

    def test_comma_separated_skills_are_split(self, user_payload):
        user_payload["skills"] = "Python, SQL,  ,Docker"
        assert validate_payload(UserCreate, user_payload).skills == ["Python", "SQL", "Docker"]

    def test_skills_must_be_text(self, user_payload):
        user_payload["skills"] = ["Python", 3]
        errors = collect_errors(UserCreate, user_payload)
        assert [e.field for e in errors] == ["skills.1"]

    def test_invalid_email(self, user_payload):
        user_payload["email"] = "not-an-email"
        errors = collect_errors(UserCreate, user_payload)
        assert [e.field for e in errors] == ["email"]

    def test_short_password(self, user_payload):
        user_payload["password"] = "abc"
        errors = collect_errors(UserCreate, user_payload)
        assert errors[0].field == "password"
        assert errors[0].message == "Password must be at least 6 characters"

    def test_approval_flag_is_not_accepted(self, user_payload):
        user_payload["isApproved"] = True
        user = validate_payload(UserCreate, user_payload)
        assert not hasattr(user, "is_approved")


class TestEnums:
    """Values outside the declared set are rejected, values inside pass unchanged."""

    @pytest.mark.parametrize("value", [t.value for t in JobType])
    def test_job_type_accepted(self, job_payload, value):
        job_payload["type"] = value
        assert validate_payload(JobCreate, job_payload).type == JobType(value)

    @pytest.mark.parametrize("value", ["Full-Time", "fulltime", "temporary", ""])
    def test_job_type_rejected(self, job_payload, value):
        job_payload["type"] = value
        errors = collect_errors(JobCreate, job_payload)
        assert [e.field for e in errors] == ["type"]

    def test_experience_level(self, job_payload):
        job_payload["experienceLevel"] = "senior"
        assert validate_payload(JobCreate, job_payload).experience_level == ExperienceLevel.senior
        job_payload["experienceLevel"] = "principal"
        assert [e.field for e in collect_errors(JobCreate, job_payload)] == ["experienceLevel"]

    def test_role_rejected(self, user_payload):
        user_payload["role"] = "superuser"
        assert [e.field for e in collect_errors(UserCreate, user_payload)] == ["role"]

    @pytest.mark.parametrize("value", [s.value for s in JobStatus])
    def test_job_status_update_accepted(self, value):
        assert validate_payload(JobStatusUpdate, {"status": value}).status.value == value

    def test_job_status_update_rejected(self):
        assert collect_errors(JobStatusUpdate, {"status": "archived"})[0].field == "status"

    def test_application_status_update_rejected(self):
        assert collect_errors(ApplicationStatusUpdate, {"status": "hired"})[0].field == "status"

    def test_approval_requires_boolean(self):
        assert validate_payload(ApprovalUpdate, {"approved": False}).approved is False
        assert collect_errors(ApprovalUpdate, {"approved": "yes"})[0].field == "approved"


class TestLogin:
    def test_valid(self):
        login = validate_payload(LoginRequest, {"username": "jane", "password": "secret123"})
        assert login.username == "jane"

    def test_short_username(self):
        errors = collect_errors(LoginRequest, {"username": "jo", "password": "secret123"})
        assert [(e.field, e.message) for e in errors] == [("username", "Username is required")]

    def test_short_password(self):
        errors = collect_errors(LoginRequest, {"username": "jane", "password": "12345"})
        assert [(e.field, e.message) for e in errors] == [
            ("password", "Password must be at least 6 characters")
        ]

    def test_both_fields_reported(self):
        errors = collect_errors(LoginRequest, {})
        assert {e.field for e in errors} == {"username", "password"}


class TestRegister:
    def test_matching_passwords(self, user_payload):
        user_payload["confirmPassword"] = user_payload["password"]
        request = validate_payload(RegisterRequest, user_payload)
        user = request.to_user_create()
        assert isinstance(user, UserCreate)
        assert user.password == "secret123"

    def test_mismatch_is_attached_to_confirmation_only(self, user_payload):
        user_payload["confirmPassword"] = "different1"
        errors = collect_errors(RegisterRequest, user_payload)
        assert [(e.field, e.message) for e in errors] == [
            ("confirmPassword", "Passwords don't match")
        ]

    def test_missing_confirmation(self, user_payload):
        errors = collect_errors(RegisterRequest, user_payload)
        assert [e.field for e in errors] == ["confirmPassword"]

    @pytest.mark.parametrize("role", ["jobseeker", "employer"])
    def test_self_service_roles(self, user_payload, role):
        user_payload.update(confirmPassword=user_payload["password"], role=role)
        assert validate_payload(RegisterRequest, user_payload).role == UserRole(role)

    def test_admin_role_cannot_register(self, user_payload):
        user_payload.update(confirmPassword=user_payload["password"], role="admin")
        errors = collect_errors(RegisterRequest, user_payload)
        assert [(e.field, e.message) for e in errors] == [("role", "Invalid role")]

    def test_admin_role_allowed_on_insert_variant(self, user_payload):
        user_payload["role"] = "admin"
        assert validate_payload(UserCreate, user_payload).role == UserRole.admin

    def test_invalid_password_not_double_reported(self, user_payload):
        user_payload["password"] = "abc"
        user_payload["confirmPassword"] = "abcdefg"
        errors = collect_errors(RegisterRequest, user_payload)
        assert [e.field for e in errors] == ["password"]


class TestPayloadValidationError:
    def test_message_is_first_error(self):
        with pytest.raises(PayloadValidationError) as exc_info:
            validate_payload(LoginRequest, {"username": "jo", "password": "secret123"})
        err = exc_info.value
        assert err.message == "Username is required"
        assert err.to_dict() == {
            "message": "Username is required",
            "errors": [{"field": "username", "message": "Username is required"}],
        }

    def test_non_object_payload(self):
        errors = collect_errors(LoginRequest, ["not", "a", "dict"])
        assert errors[0].field == "__root__"
