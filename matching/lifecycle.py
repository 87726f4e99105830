"""
Job moderation and application status transitions.

Jobs are created by employers as drafts or pending approval, approved or
rejected by administrators, and expire once their expiry date passes.
Applications move through the employer's review pipeline until they reach a
terminal status. Every transition returns a new record.
"""

import logging
from datetime import datetime
from typing import Dict, FrozenSet, Optional

from .errors import InvalidTransitionError, ValidationError
from .models import Application, ApplicationStatus, JobPosting, JobStatus, utcnow

logger = logging.getLogger(__name__)

JOB_TRANSITIONS: Dict[JobStatus, FrozenSet[JobStatus]] = {
    JobStatus.DRAFT: frozenset({JobStatus.PENDING_APPROVAL, JobStatus.CLOSED}),
    JobStatus.PENDING_APPROVAL: frozenset(
        {JobStatus.ACTIVE, JobStatus.REJECTED, JobStatus.DRAFT, JobStatus.CLOSED}
    ),
    JobStatus.ACTIVE: frozenset({JobStatus.PAUSED, JobStatus.CLOSED, JobStatus.EXPIRED}),
    JobStatus.PAUSED: frozenset({JobStatus.ACTIVE, JobStatus.CLOSED, JobStatus.EXPIRED}),
    JobStatus.REJECTED: frozenset({JobStatus.DRAFT, JobStatus.PENDING_APPROVAL}),
    JobStatus.CLOSED: frozenset(),
    JobStatus.EXPIRED: frozenset(),
}

APPLICATION_TERMINAL = frozenset(
    {ApplicationStatus.HIRED, ApplicationStatus.REJECTED, ApplicationStatus.WITHDRAWN}
)


def _move_job(job: JobPosting, target: JobStatus, **updates) -> JobPosting:
    if target not in JOB_TRANSITIONS[job.status]:
        raise InvalidTransitionError("job", job.status.value, target.value)
    logger.info(f"Job {job.id}: {job.status.value} -> {target.value}")
    return job.model_copy(update={"status": target, **updates})


def submit_for_approval(job: JobPosting) -> JobPosting:
    return _move_job(job, JobStatus.PENDING_APPROVAL, rejection_reason=None)


def approve_job(job: JobPosting) -> JobPosting:
    """Publish a pending job."""
    return _move_job(job, JobStatus.ACTIVE, rejection_reason=None)


def reject_job(job: JobPosting, reason: str) -> JobPosting:
    """
    Reject a pending job.

    Raises:
        ValidationError: If no reason is given
    """
    if not reason or not reason.strip():
        raise ValidationError("A rejection reason is required")
    return _move_job(job, JobStatus.REJECTED, rejection_reason=reason.strip())


def pause_job(job: JobPosting) -> JobPosting:
    return _move_job(job, JobStatus.PAUSED)


def resume_job(job: JobPosting) -> JobPosting:
    if job.status != JobStatus.PAUSED:
        raise InvalidTransitionError("job", job.status.value, JobStatus.ACTIVE.value)
    return _move_job(job, JobStatus.ACTIVE)


def close_job(job: JobPosting) -> JobPosting:
    return _move_job(job, JobStatus.CLOSED)


def expire_if_due(job: JobPosting, now: Optional[datetime] = None) -> JobPosting:
    """Expire a live job whose expiry date has passed; otherwise return it unchanged."""
    now = now or utcnow()
    if job.expires_at is None or job.expires_at > now:
        return job
    if JobStatus.EXPIRED not in JOB_TRANSITIONS[job.status]:
        return job
    return _move_job(job, JobStatus.EXPIRED)


_STATUS_TIMESTAMPS = {
    ApplicationStatus.VIEWED: "viewed_at",
    ApplicationStatus.SHORTLISTED: "shortlisted_at",
    ApplicationStatus.HIRED: "hired_at",
    ApplicationStatus.REJECTED: "rejected_at",
}


def update_application_status(
    application: Application,
    status: ApplicationStatus,
    notes: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Application:
    """
    Move an application to a new status.

    Args:
        application: Current application record
        status: Target status
        notes: Optional reviewer notes; on rejection they become the reason
        now: Transition timestamp, defaults to the current UTC time

    Returns:
        Updated application

    Raises:
        InvalidTransitionError: If the application is already in a terminal
            status, or the move would send it back to applied
    """
    status = ApplicationStatus(status)
    if application.status in APPLICATION_TERMINAL or (
        status == ApplicationStatus.APPLIED
        and application.status != ApplicationStatus.APPLIED
    ):
        raise InvalidTransitionError(
            "application", application.status.value, status.value
        )

    now = now or utcnow()
    updates = {"status": status, "updated_at": now}
    if notes:
        updates["notes"] = notes

    stamp = _STATUS_TIMESTAMPS.get(status)
    if stamp:
        updates[stamp] = now
    if status == ApplicationStatus.REJECTED and notes:
        updates["rejection_reason"] = notes

    return application.model_copy(update=updates)
