"""Error taxonomy for the matching engine and its storage adapters."""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from .models import DecisionAction


class MatchingError(Exception):
    """Base class for engine errors."""


class ValidationError(MatchingError, ValueError):
    """Malformed input. Rejected immediately and never retried."""


class NotFoundError(MatchingError, LookupError):
    """A referenced seeker, job or application does not exist."""


class InvalidTransitionError(MatchingError):
    """A lifecycle move that the current status does not allow."""

    def __init__(self, kind: str, current: str, target: str):
        self.kind = kind
        self.current = current
        self.target = target
        super().__init__(f"Cannot move {kind} from '{current}' to '{target}'")


class PersistError(MatchingError):
    """Storage failure surfaced by a DataPort implementation."""


class DuplicateApplicationError(PersistError):
    """The store already holds an application for this (applicant, job)."""

    def __init__(self, applicant_id: str, job_id: str):
        self.applicant_id = applicant_id
        self.job_id = job_id
        super().__init__(f"Applicant {applicant_id} already applied to job {job_id}")


class DuplicateDecisionError(PersistError):
    """The store already holds a swipe for this (seeker, job)."""

    def __init__(self, seeker_id: str, job_id: str):
        self.seeker_id = seeker_id
        self.job_id = job_id
        super().__init__(f"Seeker {seeker_id} already decided on job {job_id}")


class DuplicateJobError(PersistError):
    """A posting with this id already exists."""

    def __init__(self, job_id: str):
        self.job_id = job_id
        super().__init__(f"Job {job_id} already exists")


class Conflict(BaseModel):
    """
    Typed result for a decision on an already-decided job.

    Returned rather than raised; the caller refreshes its decided set and
    moves on.
    """

    model_config = ConfigDict(frozen=True)

    seeker_id: str
    job_id: str
    action: DecisionAction
    reason: str = "already decided"
