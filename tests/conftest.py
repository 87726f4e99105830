"""Shared builders for the test suite."""

from datetime import datetime, timedelta, timezone

import pytest

from matching.models import CandidateProfile, EmploymentType, JobPosting, JobStatus

BASE_TIME = datetime(2025, 9, 1, tzinfo=timezone.utc)


def day(n: int) -> datetime:
    return BASE_TIME + timedelta(days=n)


@pytest.fixture
def make_job():
    def _make(job_id="job-1", **overrides):
        data = {
            "id": job_id,
            "employer_id": "employer-1",
            "title": "Frontend Developer",
            "company_name": "Acme",
            "employment_type": EmploymentType.FULL_TIME,
            "location": "NYC",
            "is_remote": False,
            "skills_required": {"JavaScript"},
            "status": JobStatus.ACTIVE,
            "created_at": day(1),
        }
        data.update(overrides)
        return JobPosting(**data)

    return _make


@pytest.fixture
def seeker_profile():
    return CandidateProfile(
        id="seeker-1",
        skills={"JavaScript", "React"},
        experience_years=3,
        preferred_locations={"Remote"},
        preferred_job_types={EmploymentType.FULL_TIME},
    )


@pytest.fixture
def job_a(make_job):
    return make_job(
        "job-a",
        title="React Engineer",
        skills_required={"JavaScript", "React"},
        experience_required_min=2,
        experience_required_max=5,
        location="Remote",
        is_remote=True,
        employment_type=EmploymentType.FULL_TIME,
        created_at=day(2),
    )


@pytest.fixture
def job_b(make_job):
    return make_job(
        "job-b",
        title="Backend Contractor",
        skills_required={"JavaScript", "Python"},
        experience_required_min=2,
        experience_required_max=5,
        location="NYC",
        is_remote=False,
        employment_type=EmploymentType.CONTRACT,
        created_at=day(3),
    )
