"""
Derivation Helpers

Pure, read-only functions over records that were already fetched. Nothing
here touches the database or mutates its input; the dashboards call these
to turn lists of records into the summaries they display.
"""

from datetime import datetime
from typing import Iterable, List, Optional, Sequence, Union

from jobboard.schemas.schemas import (
    AdminStats, Application, ApplicationCounts, ApplicationStatus, CompletionItem,
    EmployerStats, Job, JobStatus, ProfileCompletion, StatusBadge, User, UserRole,
)

MAX_RATING = 5

# Statuses that mean the application reached a decision stage. The dashboard
# only has three buckets, so accepted/rejected count as "interviewed".
INTERVIEWED_BUCKET = frozenset({
    ApplicationStatus.interviewed,
    ApplicationStatus.accepted,
    ApplicationStatus.rejected,
})

APPLICATION_BADGES = {
    ApplicationStatus.pending: StatusBadge(label="Pending", style="bg-yellow-100 text-yellow-800"),
    ApplicationStatus.reviewed: StatusBadge(label="Reviewed", style="bg-blue-100 text-blue-800"),
    ApplicationStatus.interviewed: StatusBadge(label="Interviewed", style="bg-purple-100 text-purple-800"),
    ApplicationStatus.accepted: StatusBadge(label="Accepted", style="bg-green-100 text-green-800"),
    ApplicationStatus.rejected: StatusBadge(label="Rejected", style="bg-red-100 text-red-800"),
}

JOB_BADGES = {
    JobStatus.active: StatusBadge(label="Active", style="bg-green-100 text-green-800"),
    JobStatus.closed: StatusBadge(label="Closed", style="bg-gray-100 text-gray-800"),
    JobStatus.pending: StatusBadge(label="Pending", style="bg-yellow-100 text-yellow-800"),
    JobStatus.flagged: StatusBadge(label="Flagged", style="bg-red-100 text-red-800"),
}

# (label when done, label when missing, weight)
PROFILE_SECTIONS = (
    ("Basic Information", "Basic Information Incomplete", 40),
    ("Skills Added", "No Skills Added", 30),
    ("Resume Uploaded", "Resume Not Uploaded", 15),
    ("Professional Bio Added", "Professional Bio Not Added", 15),
)


def summarize_applications(applications: Iterable[Application]) -> ApplicationCounts:
    """Count applications into the total/pending/reviewed/interviewed buckets."""
    counts = ApplicationCounts()
    for application in applications:
        counts.total += 1
        if application.status == ApplicationStatus.pending:
            counts.pending += 1
        elif application.status == ApplicationStatus.reviewed:
            counts.reviewed += 1
        elif application.status in INTERVIEWED_BUCKET:
            counts.interviewed += 1
    return counts


def _lookup_badge(table: dict, enum_cls, status) -> Optional[StatusBadge]:
    try:
        return table[enum_cls(status)]
    except (ValueError, KeyError):
        return None


def application_status_badge(status: Union[ApplicationStatus, str, None]) -> Optional[StatusBadge]:
    """Display badge for an application status; None for anything unknown."""
    return _lookup_badge(APPLICATION_BADGES, ApplicationStatus, status)


def job_status_badge(status: Union[JobStatus, str, None]) -> Optional[StatusBadge]:
    """Display badge for a job status; None for anything unknown."""
    return _lookup_badge(JOB_BADGES, JobStatus, status)


def rating_stars(rating: float) -> List[bool]:
    """
    Five "filled" flags for a 0-5 rating.

    Star i (1-indexed) is filled iff rating >= i, so 4.2 fills four stars
    and 4.99 still fills four.
    """
    if not 0 <= rating <= MAX_RATING:
        raise ValueError(f"rating must be between 0 and {MAX_RATING}, got {rating}")
    return [rating >= star for star in range(1, MAX_RATING + 1)]


def parse_requirements(requirements: Optional[str]) -> List[str]:
    """Split a job's comma-separated requirements text."""
    if not requirements:
        return []
    return [item.strip() for item in requirements.split(",") if item.strip()]


def profile_completion(user: User) -> ProfileCompletion:
    checks = (
        bool(user.name and user.email and user.location),
        bool(user.skills),
        bool(user.resume),
        bool(user.bio),
    )
    items = []
    percent = 0
    for (done_label, missing_label, weight), done in zip(PROFILE_SECTIONS, checks):
        items.append(CompletionItem(label=done_label if done else missing_label, done=done))
        if done:
            percent += weight
    return ProfileCompletion(percent=percent, items=items)


def admin_stats(
    users: Sequence[User],
    jobs: Sequence[Job],
    applications: Sequence[Application],
    now: datetime,
) -> AdminStats:
    """Site-wide counters for the admin dashboard."""
    start_of_day = now.replace(hour=0, minute=0, second=0, microsecond=0)
    return AdminStats(
        total_users=len(users),
        total_jobs=len(jobs),
        pending_approvals=sum(
            1 for u in users if u.role == UserRole.employer and not u.is_approved
        ),
        flagged_jobs=sum(1 for j in jobs if j.status == JobStatus.flagged),
        applications_today=sum(1 for a in applications if a.applied_at >= start_of_day),
    )


def employer_stats(
    employer_id: int,
    jobs: Sequence[Job],
    applications: Sequence[Application],
) -> EmployerStats:
    """Active listings and the applicants they attracted."""
    active_ids = {
        j.id for j in jobs
        if j.posted_by == employer_id and j.status == JobStatus.active
    }
    return EmployerStats(
        active_listings=len(active_ids),
        total_applicants=sum(1 for a in applications if a.job_id in active_ids),
    )
