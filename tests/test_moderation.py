"""Tests for admin moderation transitions."""

import pytest

from jobboard.core.errors import ForbiddenError, NotFoundError
from jobboard.schemas.schemas import JobStatus, UserRole
from jobboard.services import moderation


class TestEmployerApproval:
    def test_approve_only_touches_target(self, store, admin, make_user):
        target = make_user(UserRole.employer, approved=False)
        other = make_user(UserRole.employer, approved=False)
        seeker = make_user(UserRole.jobseeker)
        before = {u.id: u for u in store.list_users()}

        updated = moderation.approve_employer(store, admin, target.id)

        assert updated.is_approved is True
        after = {u.id: u for u in store.list_users()}
        assert after[target.id].is_approved is True
        for user_id in (admin.id, other.id, seeker.id):
            assert after[user_id] == before[user_id]

    def test_reject(self, store, admin, employer):
        updated = moderation.reject_employer(store, admin, employer.id)
        assert updated.is_approved is False
        assert store.get_user(employer.id).is_approved is False

    def test_idempotent(self, store, admin, make_user):
        target = make_user(UserRole.employer, approved=False)
        first = moderation.approve_employer(store, admin, target.id)
        second = moderation.approve_employer(store, admin, target.id)
        assert first == second

    def test_leaves_posted_jobs_alone(self, store, admin, employer, make_job):
        job = make_job(employer)
        moderation.reject_employer(store, admin, employer.id)
        assert store.get_job(job.id) == job

    def test_missing_user(self, store, admin):
        with pytest.raises(NotFoundError) as exc_info:
            moderation.approve_employer(store, admin, 9999)
        assert exc_info.value.message == "User not found"

    @pytest.mark.parametrize("role", [UserRole.jobseeker, UserRole.admin])
    def test_only_employers_are_moderated(self, store, admin, make_user, role):
        target = make_user(role, approved=True, username=f"target_{role.value}")
        with pytest.raises(NotFoundError) as exc_info:
            moderation.reject_employer(store, admin, target.id)
        assert exc_info.value.message == "Employer not found"
        assert store.get_user(target.id).is_approved is True

    @pytest.mark.parametrize("role", [UserRole.employer, UserRole.jobseeker])
    def test_non_admin_forbidden(self, store, make_user, role):
        actor = make_user(role)
        target = make_user(UserRole.employer, approved=False)
        with pytest.raises(ForbiddenError):
            moderation.approve_employer(store, actor, target.id)
        assert store.get_user(target.id).is_approved is False

    def test_forbidden_checked_before_existence(self, store, seeker):
        with pytest.raises(ForbiddenError):
            moderation.approve_employer(store, seeker, 9999)


class TestJobModeration:
    def test_approve_flagged_job(self, store, admin, employer, make_job):
        job = store.update_job_status(make_job(employer).id, JobStatus.flagged)
        updated = moderation.approve_job(store, admin, job.id)
        assert updated.status == JobStatus.active

    def test_remove_is_idempotent(self, store, admin, employer, make_job):
        job = store.update_job_status(make_job(employer).id, JobStatus.flagged)

        first = moderation.remove_job(store, admin, job.id)
        second = moderation.remove_job(store, admin, job.id)

        assert first.status == JobStatus.closed
        assert second == first
        assert store.get_job(job.id) == first

    def test_status_flip_skips_content_validation(self, store, admin, employer, make_job):
        job = make_job(employer, requirements="")
        store.update_job_status(job.id, JobStatus.flagged)
        updated = moderation.set_job_status(store, admin, job.id, JobStatus.active)
        assert updated.requirements == ""
        assert updated.title == job.title

    def test_missing_job(self, store, admin):
        with pytest.raises(NotFoundError) as exc_info:
            moderation.remove_job(store, admin, 4242)
        assert exc_info.value.entity == "Job"

    def test_owner_is_not_admin(self, store, employer, make_job):
        job = store.update_job_status(make_job(employer).id, JobStatus.flagged)
        with pytest.raises(ForbiddenError):
            moderation.approve_job(store, employer, job.id)
        assert store.get_job(job.id).status == JobStatus.flagged
