"""
Moderation Service

Admin-only status flips on users and jobs:
- employer approval (User.is_approved)
- flagged job approval/removal (Job.status -> active / closed)

Content is never re-validated here. Both transitions are idempotent: when
the target already holds the requested state, the stored record comes back
untouched and nothing is written.
"""

import logging

from jobboard.core.errors import ForbiddenError, NotFoundError
from jobboard.db.store import JobBoardStore
from jobboard.schemas.schemas import Job, JobStatus, User, UserRole

logger = logging.getLogger(__name__)


def _require_admin(actor: User) -> None:
    if actor.role != UserRole.admin:
        logger.warning("User %s (%s) attempted a moderation action", actor.id, actor.role.value)
        raise ForbiddenError("Admins only")


def set_employer_approval(store: JobBoardStore, actor: User, user_id: int, approved: bool) -> User:
    """
    Set an employer's approval flag. Jobs the employer already posted are left alone.

    Raises:
        ForbiddenError if `actor` is not an admin
        NotFoundError if the user is missing or is not an employer
    """
    _require_admin(actor)

    user = store.get_user(user_id)
    if user is None:
        raise NotFoundError("User", user_id)
    if user.role != UserRole.employer:
        raise NotFoundError("Employer", user_id)
    if user.is_approved == approved:
        return user

    updated = store.update_user_approval(user_id, approved)
    logger.info("Admin %s %s user %s", actor.id, "approved" if approved else "rejected", user_id)
    return updated


def approve_employer(store: JobBoardStore, actor: User, user_id: int) -> User:
    return set_employer_approval(store, actor, user_id, True)


def reject_employer(store: JobBoardStore, actor: User, user_id: int) -> User:
    return set_employer_approval(store, actor, user_id, False)


def set_job_status(store: JobBoardStore, actor: User, job_id: int, status: JobStatus) -> Job:
    _require_admin(actor)

    job = store.get_job(job_id)
    if job is None:
        raise NotFoundError("Job", job_id)
    if job.status == status:
        return job

    updated = store.update_job_status(job_id, status)
    logger.info("Admin %s moved job %s from %s to %s",
                actor.id, job_id, job.status.value, status.value)
    return updated


def approve_job(store: JobBoardStore, actor: User, job_id: int) -> Job:
    return set_job_status(store, actor, job_id, JobStatus.active)


def remove_job(store: JobBoardStore, actor: User, job_id: int) -> Job:
    return set_job_status(store, actor, job_id, JobStatus.closed)
