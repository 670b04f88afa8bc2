"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.

Each entity has a read record (what the store returns) and an insert
variant (what a client may send on creation). Server-assigned fields
(ids, timestamps, status, approval flag) never appear in insert variants.
JSON keys are camelCase on the wire, snake_case in Python.
"""

from pydantic import (
    BaseModel, ConfigDict, EmailStr, Field, StrictBool, StrictInt,
    ValidationInfo, field_validator,
)
from pydantic.alias_generators import to_camel
from typing import Optional, List, Any
from datetime import datetime
from enum import Enum

from jobboard.core.validation import FieldError


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================
# ENUMS
# ============================================================

class UserRole(str, Enum):
    jobseeker = "jobseeker"
    employer = "employer"
    admin = "admin"


class JobType(str, Enum):
    full_time = "full-time"
    part_time = "part-time"
    contract = "contract"
    internship = "internship"


class ExperienceLevel(str, Enum):
    entry = "entry"
    mid = "mid"
    senior = "senior"
    executive = "executive"


class JobStatus(str, Enum):
    active = "active"
    closed = "closed"
    pending = "pending"
    flagged = "flagged"


class ApplicationStatus(str, Enum):
    pending = "pending"
    reviewed = "reviewed"
    interviewed = "interviewed"
    accepted = "accepted"
    rejected = "rejected"


def split_comma_list(value: Any) -> Any:
    """Accept "a, b, c" wherever a list of strings is expected."""
    if value is None:
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return value


# ============================================================
# USER SCHEMAS
# ============================================================

class UserResponse(CamelModel):
    """User record without the credential."""
    id: int
    username: str
    email: str
    name: str
    role: UserRole
    company: Optional[str] = None
    location: Optional[str] = None
    skills: List[str] = []
    resume: Optional[str] = None
    bio: Optional[str] = None
    is_approved: bool = True
    created_at: datetime


class User(UserResponse):
    """Full stored user record. `password` holds the bcrypt hash."""
    password: str

    def public(self) -> UserResponse:
        return UserResponse.model_validate(self.model_dump(exclude={"password"}))


class UserCreate(CamelModel):
    username: str
    password: str
    email: EmailStr
    name: str = Field(..., min_length=1, max_length=100)
    role: UserRole = UserRole.jobseeker
    company: Optional[str] = None
    location: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    resume: Optional[str] = None
    bio: Optional[str] = None

    @field_validator("username")
    @classmethod
    def username_length(cls, value: str) -> str:
        if len(value.strip()) < 3:
            raise ValueError("Username must be at least 3 characters")
        return value.strip()

    @field_validator("password")
    @classmethod
    def password_length(cls, value: str) -> str:
        if len(value) < 6:
            raise ValueError("Password must be at least 6 characters")
        return value

    @field_validator("skills", mode="before")
    @classmethod
    def skills_from_text(cls, value: Any) -> Any:
        return split_comma_list(value)


class RegisterRequest(UserCreate):
    """Registration form: the user insert variant plus a confirmation field."""
    confirm_password: str

    @field_validator("confirm_password")
    @classmethod
    def passwords_match(cls, value: str, info: ValidationInfo) -> str:
        if len(value) < 6:
            raise ValueError("Password must be at least 6 characters")
        password = info.data.get("password")
        # password already failed on its own, its error is enough
        if password is not None and value != password:
            raise ValueError("Passwords don't match")
        return value

    @field_validator("role")
    @classmethod
    def self_service_role(cls, value: UserRole) -> UserRole:
        # Admin accounts are only created by seeding
        if value == UserRole.admin:
            raise ValueError("Invalid role")
        return value

    def to_user_create(self) -> UserCreate:
        return UserCreate.model_validate(self.model_dump(exclude={"confirm_password"}))


class UserProfileUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    company: Optional[str] = None
    location: Optional[str] = None
    skills: Optional[List[str]] = None
    resume: Optional[str] = None
    bio: Optional[str] = None

    @field_validator("skills", mode="before")
    @classmethod
    def skills_from_text(cls, value: Any) -> Any:
        if value is None:
            return None
        return split_comma_list(value)


# ============================================================
# AUTH SCHEMAS
# ============================================================

class LoginRequest(CamelModel):
    username: str
    password: str

    @field_validator("username")
    @classmethod
    def username_required(cls, value: str) -> str:
        if len(value) < 3:
            raise ValueError("Username is required")
        return value

    @field_validator("password")
    @classmethod
    def password_length(cls, value: str) -> str:
        if len(value) < 6:
            raise ValueError("Password must be at least 6 characters")
        return value


class TokenResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


# ============================================================
# JOB SCHEMAS
# ============================================================

class Job(CamelModel):
    id: int
    title: str
    company: str
    description: str
    location: str
    type: JobType
    salary: Optional[str] = None
    requirements: Optional[str] = None
    experience_level: Optional[ExperienceLevel] = None
    posted_by: int
    status: JobStatus = JobStatus.active
    created_at: datetime
    updated_at: datetime
    deadline: Optional[datetime] = None


class JobFields(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    company: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1, max_length=200)
    type: JobType
    salary: Optional[str] = None
    requirements: Optional[str] = None
    experience_level: Optional[ExperienceLevel] = None
    deadline: Optional[datetime] = None


class JobCreate(JobFields):
    posted_by: StrictInt


class JobPostRequest(JobFields):
    """Body of POST /jobs. The poster comes from the token and the company
    defaults to the employer's own company."""
    company: Optional[str] = Field(None, max_length=200)


class JobUpdate(CamelModel):
    """Owner edits. Status changes go through admin moderation only."""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    company: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = Field(None, min_length=1, max_length=200)
    type: Optional[JobType] = None
    salary: Optional[str] = None
    requirements: Optional[str] = None
    experience_level: Optional[ExperienceLevel] = None
    deadline: Optional[datetime] = None


class JobStatusUpdate(CamelModel):
    status: JobStatus


class JobFilters(CamelModel):
    search: Optional[str] = None
    location: Optional[str] = None
    type: Optional[JobType] = None
    experience: Optional[ExperienceLevel] = None
    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1, le=50)


class JobListResponse(CamelModel):
    jobs: List[Job]
    total: int
    page: int
    page_size: int


# ============================================================
# APPLICATION SCHEMAS
# ============================================================

class Application(CamelModel):
    id: int
    job_id: int
    user_id: int
    status: ApplicationStatus = ApplicationStatus.pending
    cover_letter: Optional[str] = None
    applied_at: datetime
    updated_at: datetime


class ApplicationWithJob(Application):
    job: Job


class ApplicationWithApplicant(Application):
    user: UserResponse


class ApplicationCreate(CamelModel):
    job_id: StrictInt
    user_id: StrictInt
    cover_letter: Optional[str] = None


class ApplyRequest(CamelModel):
    cover_letter: Optional[str] = None


class ApplicationStatusUpdate(CamelModel):
    status: ApplicationStatus


# ============================================================
# MODERATION SCHEMAS
# ============================================================

class ApprovalUpdate(CamelModel):
    approved: StrictBool


# ============================================================
# SUMMARY / STATS SCHEMAS
# ============================================================

class ApplicationCounts(CamelModel):
    total: int = 0
    pending: int = 0
    reviewed: int = 0
    interviewed: int = 0


class StatusBadge(CamelModel):
    label: str
    style: str


class CompletionItem(CamelModel):
    label: str
    done: bool


class ProfileCompletion(CamelModel):
    percent: int
    items: List[CompletionItem]


class AdminStats(CamelModel):
    total_users: int
    total_jobs: int
    pending_approvals: int
    flagged_jobs: int
    applications_today: int


class EmployerStats(CamelModel):
    active_listings: int
    total_applicants: int


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class ErrorResponse(CamelModel):
    """Body of every error response."""
    message: str
    errors: List[FieldError] = []
