"""
Record Store

Plain-SQL access to users, jobs and applications. Every write returns the
updated record so callers refresh exactly the views that depend on it;
there is no cache to invalidate behind their back.

Rows are mapped onto the read schemas (User, Job, Application) on the way
out; insert variants and partial updates come in already validated.
"""

import json
import logging
from enum import Enum
from functools import lru_cache
from typing import Any, Callable, Dict, List, Optional, Tuple

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from jobboard.core.errors import ConflictError, NotFoundError
from jobboard.db.database import get_db_session
from jobboard.schemas.schemas import (
    Application, ApplicationCreate, ApplicationStatus, ApplicationWithApplicant,
    ApplicationWithJob, Job, JobCreate, JobFilters, JobStatus, JobUpdate,
    User, UserCreate, UserProfileUpdate,
)

logger = logging.getLogger(__name__)

USER_COLUMNS = (
    "id, username, password, email, name, role, company, location, skills, "
    "resume, bio, is_approved, created_at"
)
JOB_COLUMNS = (
    "id, title, company, description, location, type, salary, requirements, "
    "experience_level, posted_by, status, created_at, updated_at, deadline"
)
APPLICATION_COLUMNS = "id, job_id, user_id, status, cover_letter, applied_at, updated_at"

# NOT NULL columns that partial updates may not blank out
_REQUIRED_JOB_FIELDS = {"title", "company", "description", "location", "type", "status"}
_REQUIRED_USER_FIELDS = {"name", "skills"}


def _db_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, list):
        return json.dumps(value)
    return value


def _row_to_user(row) -> User:
    data = dict(row)
    skills = data.get("skills")
    data["skills"] = json.loads(skills) if skills else []
    return User.model_validate(data)


def _row_to_job(row) -> Job:
    return Job.model_validate(dict(row))


def _row_to_application(row) -> Application:
    return Application.model_validate(dict(row))


def _assignments(values: Dict[str, Any], required: set) -> Dict[str, Any]:
    return {
        field: _db_value(value)
        for field, value in values.items()
        if not (value is None and field in required)
    }


class JobBoardStore:
    """
    Repository over the relational store.

    Usage:
        store = get_store()
        job = store.update_job_status(3, JobStatus.closed)
    """

    def __init__(self, session_factory: Callable = get_db_session):
        self._session = session_factory

    # ============================================================
    # USERS
    # ============================================================

    def get_user(self, user_id: int) -> Optional[User]:
        with self._session() as db:
            row = db.execute(
                text(f"SELECT {USER_COLUMNS} FROM users WHERE id = :id"),
                {"id": user_id}
            ).mappings().fetchone()
        return _row_to_user(row) if row else None

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._session() as db:
            row = db.execute(
                text(f"SELECT {USER_COLUMNS} FROM users WHERE username = :username"),
                {"username": username}
            ).mappings().fetchone()
        return _row_to_user(row) if row else None

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._session() as db:
            row = db.execute(
                text(f"SELECT {USER_COLUMNS} FROM users WHERE LOWER(email) = LOWER(:email)"),
                {"email": email}
            ).mappings().fetchone()
        return _row_to_user(row) if row else None

    def create_user(self, data: UserCreate, password_hash: str, is_approved: bool) -> User:
        """Insert a user. `password_hash` replaces the plain password."""
        params = {
            "username": data.username, "password": password_hash, "email": data.email,
            "name": data.name, "role": data.role.value, "company": data.company,
            "location": data.location, "skills": json.dumps(data.skills),
            "resume": data.resume, "bio": data.bio, "is_approved": is_approved,
        }
        try:
            with self._session() as db:
                user_id = db.execute(
                    text("""
                        INSERT INTO users (username, password, email, name, role, company,
                            location, skills, resume, bio, is_approved)
                        VALUES (:username, :password, :email, :name, :role, :company,
                            :location, :skills, :resume, :bio, :is_approved)
                        RETURNING id
                    """),
                    params
                ).scalar_one()
        except IntegrityError as exc:
            raise ConflictError("Username or email already registered") from exc

        logger.info("Created user %s (%s, role=%s)", user_id, data.username, data.role.value)
        return self.get_user(user_id)

    def update_user(self, user_id: int, updates: UserProfileUpdate) -> User:
        values = _assignments(updates.model_dump(exclude_unset=True), _REQUIRED_USER_FIELDS)
        with self._session() as db:
            if values:
                sets = ", ".join(f"{field} = :{field}" for field in values)
                result = db.execute(
                    text(f"UPDATE users SET {sets} WHERE id = :id"),
                    {**values, "id": user_id}
                )
                if result.rowcount == 0:
                    raise NotFoundError("User", user_id)
        user = self.get_user(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    def update_user_approval(self, user_id: int, approved: bool) -> User:
        with self._session() as db:
            result = db.execute(
                text("UPDATE users SET is_approved = :approved WHERE id = :id"),
                {"approved": approved, "id": user_id}
            )
            if result.rowcount == 0:
                raise NotFoundError("User", user_id)
        return self.get_user(user_id)

    def list_users(self) -> List[User]:
        with self._session() as db:
            rows = db.execute(
                text(f"SELECT {USER_COLUMNS} FROM users ORDER BY id")
            ).mappings().fetchall()
        return [_row_to_user(r) for r in rows]

    def list_pending_employers(self) -> List[User]:
        with self._session() as db:
            rows = db.execute(
                text(f"""
                    SELECT {USER_COLUMNS} FROM users
                    WHERE role = 'employer' AND is_approved = :approved
                    ORDER BY created_at, id
                """),
                {"approved": False}
            ).mappings().fetchall()
        return [_row_to_user(r) for r in rows]

    # ============================================================
    # JOBS
    # ============================================================

    def list_jobs(self, filters: JobFilters) -> Tuple[List[Job], int]:
        """Public search. Only active jobs are ever returned, newest first."""
        where = "WHERE status = 'active'"
        params: Dict[str, Any] = {}

        if filters.search:
            where += (" AND (LOWER(title) LIKE :search OR LOWER(company) LIKE :search"
                      " OR LOWER(description) LIKE :search)")
            params["search"] = f"%{filters.search.lower()}%"
        if filters.location:
            where += " AND LOWER(location) LIKE :location"
            params["location"] = f"%{filters.location.lower()}%"
        if filters.type:
            where += " AND type = :type"
            params["type"] = filters.type.value
        if filters.experience:
            where += " AND experience_level = :experience"
            params["experience"] = filters.experience.value

        with self._session() as db:
            total = db.execute(text(f"SELECT COUNT(*) FROM jobs {where}"), params).scalar_one()
            rows = db.execute(
                text(f"""
                    SELECT {JOB_COLUMNS} FROM jobs {where}
                    ORDER BY created_at DESC, id DESC
                    LIMIT :limit OFFSET :offset
                """),
                {**params, "limit": filters.limit, "offset": (filters.page - 1) * filters.limit}
            ).mappings().fetchall()

        return [_row_to_job(r) for r in rows], total

    def get_job(self, job_id: int) -> Optional[Job]:
        with self._session() as db:
            row = db.execute(
                text(f"SELECT {JOB_COLUMNS} FROM jobs WHERE id = :id"),
                {"id": job_id}
            ).mappings().fetchone()
        return _row_to_job(row) if row else None

    def create_job(self, data: JobCreate) -> Job:
        with self._session() as db:
            job_id = db.execute(
                text("""
                    INSERT INTO jobs (title, company, description, location, type, salary,
                        requirements, experience_level, posted_by, deadline)
                    VALUES (:title, :company, :description, :location, :type, :salary,
                        :requirements, :experience_level, :posted_by, :deadline)
                    RETURNING id
                """),
                {field: _db_value(value) for field, value in data.model_dump().items()}
            ).scalar_one()

        logger.info("Job %s posted by user %s", job_id, data.posted_by)
        return self.get_job(job_id)

    def update_job(self, job_id: int, updates: JobUpdate) -> Job:
        values = _assignments(updates.model_dump(exclude_unset=True), _REQUIRED_JOB_FIELDS)
        sets = "".join(f"{field} = :{field}, " for field in values)
        with self._session() as db:
            result = db.execute(
                text(f"UPDATE jobs SET {sets}updated_at = CURRENT_TIMESTAMP WHERE id = :id"),
                {**values, "id": job_id}
            )
            if result.rowcount == 0:
                raise NotFoundError("Job", job_id)
        return self.get_job(job_id)

    def update_job_status(self, job_id: int, status: JobStatus) -> Job:
        with self._session() as db:
            result = db.execute(
                text("UPDATE jobs SET status = :status, updated_at = CURRENT_TIMESTAMP WHERE id = :id"),
                {"status": status.value, "id": job_id}
            )
            if result.rowcount == 0:
                raise NotFoundError("Job", job_id)
        return self.get_job(job_id)

    def delete_job(self, job_id: int) -> None:
        """Delete a job together with its applications."""
        with self._session() as db:
            db.execute(text("DELETE FROM applications WHERE job_id = :id"), {"id": job_id})
            result = db.execute(text("DELETE FROM jobs WHERE id = :id"), {"id": job_id})
            if result.rowcount == 0:
                raise NotFoundError("Job", job_id)
        logger.info("Deleted job %s", job_id)

    def list_employer_jobs(self, employer_id: int) -> List[Job]:
        with self._session() as db:
            rows = db.execute(
                text(f"""
                    SELECT {JOB_COLUMNS} FROM jobs WHERE posted_by = :uid
                    ORDER BY created_at DESC, id DESC
                """),
                {"uid": employer_id}
            ).mappings().fetchall()
        return [_row_to_job(r) for r in rows]

    def list_flagged_jobs(self) -> List[Job]:
        with self._session() as db:
            rows = db.execute(
                text(f"SELECT {JOB_COLUMNS} FROM jobs WHERE status = 'flagged' ORDER BY updated_at DESC, id DESC")
            ).mappings().fetchall()
        return [_row_to_job(r) for r in rows]

    def list_all_jobs(self) -> List[Job]:
        with self._session() as db:
            rows = db.execute(text(f"SELECT {JOB_COLUMNS} FROM jobs ORDER BY id")).mappings().fetchall()
        return [_row_to_job(r) for r in rows]

    # ============================================================
    # APPLICATIONS
    # ============================================================

    def get_application(self, application_id: int) -> Optional[Application]:
        with self._session() as db:
            row = db.execute(
                text(f"SELECT {APPLICATION_COLUMNS} FROM applications WHERE id = :id"),
                {"id": application_id}
            ).mappings().fetchone()
        return _row_to_application(row) if row else None

    def get_user_application_for_job(self, user_id: int, job_id: int) -> Optional[Application]:
        with self._session() as db:
            row = db.execute(
                text(f"""
                    SELECT {APPLICATION_COLUMNS} FROM applications
                    WHERE user_id = :uid AND job_id = :jid
                """),
                {"uid": user_id, "jid": job_id}
            ).mappings().fetchone()
        return _row_to_application(row) if row else None

    def create_application(self, data: ApplicationCreate) -> Application:
        """Insert an application. One per (job, user) pair."""
        try:
            with self._session() as db:
                application_id = db.execute(
                    text("""
                        INSERT INTO applications (job_id, user_id, cover_letter)
                        VALUES (:job_id, :user_id, :cover_letter)
                        RETURNING id
                    """),
                    data.model_dump()
                ).scalar_one()
        except IntegrityError as exc:
            raise ConflictError("You have already applied to this job") from exc

        logger.info("User %s applied to job %s", data.user_id, data.job_id)
        return self.get_application(application_id)

    def update_application_status(self, application_id: int, status: ApplicationStatus) -> Application:
        with self._session() as db:
            result = db.execute(
                text("""
                    UPDATE applications SET status = :status, updated_at = CURRENT_TIMESTAMP
                    WHERE id = :id
                """),
                {"status": status.value, "id": application_id}
            )
            if result.rowcount == 0:
                raise NotFoundError("Application", application_id)
        return self.get_application(application_id)

    def list_applications_for_job(self, job_id: int) -> List[ApplicationWithApplicant]:
        with self._session() as db:
            rows = db.execute(
                text(f"""
                    SELECT {APPLICATION_COLUMNS} FROM applications WHERE job_id = :jid
                    ORDER BY applied_at DESC, id DESC
                """),
                {"jid": job_id}
            ).mappings().fetchall()

            results = []
            for r in rows:
                user_row = db.execute(
                    text(f"SELECT {USER_COLUMNS} FROM users WHERE id = :id"),
                    {"id": r["user_id"]}
                ).mappings().fetchone()
                if user_row is None:
                    continue
                results.append(ApplicationWithApplicant(
                    **_row_to_application(r).model_dump(),
                    user=_row_to_user(user_row).public()
                ))
        return results

    def list_user_applications(self, user_id: int) -> List[ApplicationWithJob]:
        with self._session() as db:
            rows = db.execute(
                text(f"""
                    SELECT {APPLICATION_COLUMNS} FROM applications WHERE user_id = :uid
                    ORDER BY applied_at DESC, id DESC
                """),
                {"uid": user_id}
            ).mappings().fetchall()

            results = []
            for r in rows:
                job_row = db.execute(
                    text(f"SELECT {JOB_COLUMNS} FROM jobs WHERE id = :id"),
                    {"id": r["job_id"]}
                ).mappings().fetchone()
                if job_row is None:
                    continue
                results.append(ApplicationWithJob(
                    **_row_to_application(r).model_dump(),
                    job=_row_to_job(job_row)
                ))
        return results

    def list_all_applications(self) -> List[Application]:
        with self._session() as db:
            rows = db.execute(
                text(f"SELECT {APPLICATION_COLUMNS} FROM applications ORDER BY id")
            ).mappings().fetchall()
        return [_row_to_application(r) for r in rows]


@lru_cache()
def get_store() -> JobBoardStore:
    return JobBoardStore()
