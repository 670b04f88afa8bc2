"""
Application Routes

GET /applications - Get my applications
GET /applications/summary - Status bucket counts for my applications
PUT /applications/{application_id}/status - Update status (job owner or admin)
"""

from typing import List

from fastapi import APIRouter, Depends

from jobboard.core.auth import ensure_owner_or_admin, get_current_user
from jobboard.core.errors import NotFoundError
from jobboard.db.store import JobBoardStore, get_store
from jobboard.schemas.schemas import (
    Application, ApplicationCounts, ApplicationStatusUpdate, ApplicationWithJob, User,
)
from jobboard.services.derivation import summarize_applications

router = APIRouter(prefix="/applications", tags=["Applications"])


@router.get("", response_model=List[ApplicationWithJob])
async def get_my_applications(
    user: User = Depends(get_current_user),
    store: JobBoardStore = Depends(get_store),
):
    return store.list_user_applications(user.id)


@router.get("/summary", response_model=ApplicationCounts)
async def get_my_application_summary(
    user: User = Depends(get_current_user),
    store: JobBoardStore = Depends(get_store),
):
    """Total, pending, reviewed and interviewed (any decision stage) counts."""
    return summarize_applications(store.list_user_applications(user.id))


@router.put("/{application_id}/status", response_model=Application)
async def update_application_status(
    application_id: int,
    update: ApplicationStatusUpdate,
    user: User = Depends(get_current_user),
    store: JobBoardStore = Depends(get_store),
):
    """
    Set an application's status.

    Any status may be set directly; the usual flow is
    pending -> reviewed -> interviewed -> accepted/rejected.
    """
    application = store.get_application(application_id)
    if application is None:
        raise NotFoundError("Application", application_id)

    job = store.get_job(application.job_id)
    if job is None:
        raise NotFoundError("Job", application.job_id)

    ensure_owner_or_admin(user, job.posted_by)
    return store.update_application_status(application_id, update.status)
