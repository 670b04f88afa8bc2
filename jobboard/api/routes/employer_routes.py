"""
Employer Routes

GET /employer/jobs - Jobs posted by the current employer (any status)
GET /employer/stats - Active listings and applicant count
"""

from typing import List

from fastapi import APIRouter, Depends

from jobboard.core.auth import require_roles
from jobboard.db.store import JobBoardStore, get_store
from jobboard.schemas.schemas import EmployerStats, Job, User, UserRole
from jobboard.services.derivation import employer_stats

router = APIRouter(prefix="/employer", tags=["Employer"])

require_employer = require_roles(UserRole.employer)


@router.get("/jobs", response_model=List[Job])
async def get_employer_jobs(
    employer: User = Depends(require_employer),
    store: JobBoardStore = Depends(get_store),
):
    return store.list_employer_jobs(employer.id)


@router.get("/stats", response_model=EmployerStats)
async def get_employer_stats(
    employer: User = Depends(require_employer),
    store: JobBoardStore = Depends(get_store),
):
    jobs = store.list_employer_jobs(employer.id)
    applications = []
    for job in jobs:
        applications.extend(store.list_applications_for_job(job.id))
    return employer_stats(employer.id, jobs, applications)
