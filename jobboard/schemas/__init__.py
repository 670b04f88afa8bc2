"""
Schemas module - Request/Response schemas for API endpoints.

- Records: what the store returns (User, Job, Application)
- Insert variants: what clients may send on creation (UserCreate, JobCreate, ApplicationCreate)
- Partial shapes: status and approval updates, profile edits
"""

from jobboard.schemas.schemas import (
    Application, ApplicationCreate, ApplicationStatus, ExperienceLevel, Job, JobCreate,
    JobStatus, JobType, LoginRequest, RegisterRequest, User, UserCreate, UserRole,
)

__all__ = [
    "Application", "ApplicationCreate", "ApplicationStatus", "ExperienceLevel",
    "Job", "JobCreate", "JobStatus", "JobType", "LoginRequest", "RegisterRequest",
    "User", "UserCreate", "UserRole",
]
