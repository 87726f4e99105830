"""
Storage interface consumed by the matching workflow.

Any backend (relational database, hosted backend-as-a-service, the
in-memory store used by the API) can serve the engine by implementing
DataPort. Implementations must enforce uniqueness on (seeker, job) swipes
and (applicant, job) applications and report violations with
DuplicateDecisionError and DuplicateApplicationError respectively.
"""

from typing import List, Optional, Protocol, Sequence, Set, runtime_checkable

from .filters import JobFilter
from .intents import Intent
from .models import CandidateProfile, JobPosting


@runtime_checkable
class DataPort(Protocol):
    async def fetch_active_jobs(self, filters: Sequence[JobFilter] = ()) -> List[JobPosting]:
        """Return active postings matching every filter."""
        ...

    async def fetch_decided(self, seeker_id: str) -> Set[str]:
        """Return ids of jobs the seeker applied to or passed on."""
        ...

    async def fetch_saved_set(self, seeker_id: str) -> Set[str]:
        ...

    async def fetch_profile(self, seeker_id: str) -> Optional[CandidateProfile]:
        ...

    async def fetch_job(self, job_id: str) -> Optional[JobPosting]:
        ...

    async def persist(self, intents: Sequence[Intent]) -> None:
        """
        Execute intents in order.

        Raises:
            PersistError: On any storage failure; duplicates are reported with
                the dedicated subclasses
        """
        ...
