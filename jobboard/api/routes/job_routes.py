"""
Job Routes

GET /jobs - List active jobs with filters
GET /jobs/{job_id} - Get job details
POST /jobs - Create job posting (approved employer or admin)
PUT /jobs/{job_id} - Update job (owner or admin)
DELETE /jobs/{job_id} - Delete job (owner or admin)
POST /jobs/{job_id}/apply - Apply to job (job seeker only)
GET /jobs/{job_id}/applications - Applications for a job (owner or admin)
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response

from jobboard.core.auth import ensure_can_post, ensure_owner_or_admin, get_current_user, require_roles
from jobboard.core.errors import ConflictError, NotFoundError
from jobboard.core.validation import validate_payload
from jobboard.db.store import JobBoardStore, get_store
from jobboard.schemas.schemas import (
    Application, ApplicationCreate, ApplicationWithApplicant, ApplyRequest, ExperienceLevel,
    Job, JobCreate, JobFilters, JobListResponse, JobPostRequest, JobStatus, JobType,
    JobUpdate, User, UserRole,
)

router = APIRouter(prefix="/jobs", tags=["Jobs"])


def _get_job_or_404(store: JobBoardStore, job_id: int) -> Job:
    job = store.get_job(job_id)
    if job is None:
        raise NotFoundError("Job", job_id)
    return job


@router.get("", response_model=JobListResponse)
async def list_jobs(
    search: Optional[str] = Query(None, description="Search in title, company and description"),
    location: Optional[str] = Query(None),
    type: Optional[JobType] = Query(None),
    experience: Optional[ExperienceLevel] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=50),
    store: JobBoardStore = Depends(get_store),
):
    """List active job postings. Flagged, pending and closed jobs never show up here."""
    filters = JobFilters(
        search=search, location=location, type=type, experience=experience,
        page=page, limit=limit
    )
    jobs, total = store.list_jobs(filters)
    return JobListResponse(jobs=jobs, total=total, page=page, page_size=limit)


@router.get("/{job_id}", response_model=Job)
async def get_job(job_id: int, store: JobBoardStore = Depends(get_store)):
    """Get details of a specific job."""
    return _get_job_or_404(store, job_id)


@router.post("", response_model=Job, status_code=201)
async def create_job(
    request: JobPostRequest,
    user: User = Depends(require_roles(UserRole.employer, UserRole.admin)),
    store: JobBoardStore = Depends(get_store),
):
    """Create a job posting. The poster is always the caller."""
    ensure_can_post(user)

    payload = request.model_dump(exclude_none=True)
    company = user.company or request.company
    if company:
        payload["company"] = company
    payload["posted_by"] = user.id
    job = validate_payload(JobCreate, payload)
    return store.create_job(job)


@router.put("/{job_id}", response_model=Job)
async def update_job(
    job_id: int,
    update: JobUpdate,
    user: User = Depends(get_current_user),
    store: JobBoardStore = Depends(get_store),
):
    """Update a job posting. The owner keeps ownership whatever the body says."""
    job = _get_job_or_404(store, job_id)
    ensure_owner_or_admin(user, job.posted_by)
    return store.update_job(job_id, update)


@router.delete("/{job_id}", status_code=204)
async def delete_job(
    job_id: int,
    user: User = Depends(get_current_user),
    store: JobBoardStore = Depends(get_store),
):
    """Delete a job posting. Cascades to applications."""
    job = _get_job_or_404(store, job_id)
    ensure_owner_or_admin(user, job.posted_by)
    store.delete_job(job_id)
    return Response(status_code=204)


@router.post("/{job_id}/apply", response_model=Application, status_code=201)
async def apply_to_job(
    job_id: int,
    request: ApplyRequest,
    user: User = Depends(require_roles(UserRole.jobseeker)),
    store: JobBoardStore = Depends(get_store),
):
    """Apply to a job. Job seekers only. Cannot apply twice to same job."""
    job = _get_job_or_404(store, job_id)
    if job.status != JobStatus.active:
        raise ConflictError("Job is not active")

    if store.get_user_application_for_job(user.id, job_id):
        raise ConflictError("You have already applied to this job")

    application = validate_payload(ApplicationCreate, {
        "jobId": job_id, "userId": user.id, "coverLetter": request.cover_letter,
    })
    return store.create_application(application)


@router.get("/{job_id}/applications", response_model=List[ApplicationWithApplicant])
async def get_job_applications(
    job_id: int,
    user: User = Depends(get_current_user),
    store: JobBoardStore = Depends(get_store),
):
    """Applications received for a job, with the applicants' public profiles."""
    job = _get_job_or_404(store, job_id)
    ensure_owner_or_admin(user, job.posted_by)
    return store.list_applications_for_job(job_id)
