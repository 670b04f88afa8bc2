"""
Admin Routes

GET /admin/users - All users
GET /admin/pending-approvals - Employers waiting for approval
PUT /admin/users/{user_id}/approve - Approve or reject an employer
GET /admin/flagged-jobs - Jobs flagged for review
PUT /admin/jobs/{job_id}/status - Set a job's status
GET /admin/stats - Site-wide counters
"""

from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends

from jobboard.core.auth import get_current_user, require_roles
from jobboard.db.store import JobBoardStore, get_store
from jobboard.schemas.schemas import (
    AdminStats, ApprovalUpdate, Job, JobStatusUpdate, User, UserResponse, UserRole,
)
from jobboard.services import moderation
from jobboard.services.derivation import admin_stats

router = APIRouter(prefix="/admin", tags=["Admin"])

require_admin = require_roles(UserRole.admin)


@router.get("/users", response_model=List[UserResponse])
async def list_users(
    admin: User = Depends(require_admin),
    store: JobBoardStore = Depends(get_store),
):
    return [u.public() for u in store.list_users()]


@router.get("/pending-approvals", response_model=List[UserResponse])
async def list_pending_approvals(
    admin: User = Depends(require_admin),
    store: JobBoardStore = Depends(get_store),
):
    return [u.public() for u in store.list_pending_employers()]


@router.put("/users/{user_id}/approve", response_model=UserResponse)
async def approve_user(
    user_id: int,
    update: ApprovalUpdate,
    actor: User = Depends(get_current_user),
    store: JobBoardStore = Depends(get_store),
):
    """Body: {"approved": true|false}."""
    return moderation.set_employer_approval(store, actor, user_id, update.approved).public()


@router.get("/flagged-jobs", response_model=List[Job])
async def list_flagged_jobs(
    admin: User = Depends(require_admin),
    store: JobBoardStore = Depends(get_store),
):
    return store.list_flagged_jobs()


@router.put("/jobs/{job_id}/status", response_model=Job)
async def update_job_status(
    job_id: int,
    update: JobStatusUpdate,
    actor: User = Depends(get_current_user),
    store: JobBoardStore = Depends(get_store),
):
    """Approve a flagged job with "active", remove it with "closed"."""
    return moderation.set_job_status(store, actor, job_id, update.status)


@router.get("/stats", response_model=AdminStats)
async def get_admin_stats(
    admin: User = Depends(require_admin),
    store: JobBoardStore = Depends(get_store),
):
    # Timestamps are stored as naive UTC
    now = datetime.now(timezone.utc).replace(tzinfo=None)
    return admin_stats(store.list_users(), store.list_all_jobs(), store.list_all_applications(), now)
