"""
In-memory DataPort implementation.

This module keeps profiles, postings, swipes, applications, saved sets and
conversation messages in dictionaries and enforces the same uniqueness
constraints a relational store would. It backs the API service and the
test suite.
"""

import asyncio
import logging
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from .errors import (
    DuplicateApplicationError,
    DuplicateDecisionError,
    DuplicateJobError,
    PersistError,
)
from .filters import JobFilter, matches_all
from .intents import (
    BootstrapConversation,
    CreateApplication,
    ExcludeFromFeed,
    Intent,
    RecordSwipe,
    ToggleSave,
)
from .models import (
    Application,
    CandidateProfile,
    ConversationMessage,
    JobPosting,
    JobStatus,
    SwipeRecord,
)

logger = logging.getLogger(__name__)


class InMemoryDataPort:
    """
    Dictionary-backed store.

    A single asyncio lock serializes writes so that the uniqueness checks
    and the inserts they guard are atomic with respect to other coroutines.
    """

    def __init__(self):
        self.profiles: Dict[str, CandidateProfile] = {}
        self.jobs: Dict[str, JobPosting] = {}
        self.swipes: Dict[Tuple[str, str], SwipeRecord] = {}
        self.applications: Dict[str, Application] = {}
        self.saved: Dict[str, Set[str]] = {}
        self.messages: List[ConversationMessage] = []
        self._lock = asyncio.Lock()

    async def upsert_profiles(self, profiles: Iterable[CandidateProfile]) -> int:
        count = 0
        async with self._lock:
            for profile in profiles:
                self.profiles[profile.id] = profile
                count += 1
        return count

    async def upsert_jobs(self, jobs: Iterable[JobPosting]) -> int:
        count = 0
        async with self._lock:
            for job in jobs:
                self.jobs[job.id] = job
                count += 1
        return count

    async def insert_job(self, job: JobPosting) -> JobPosting:
        """
        Store a new posting.

        Raises:
            DuplicateJobError: If a posting with the same id exists
        """
        async with self._lock:
            if job.id in self.jobs:
                raise DuplicateJobError(job.id)
            self.jobs[job.id] = job
        return job

    async def upsert_job(self, job: JobPosting) -> JobPosting:
        async with self._lock:
            self.jobs[job.id] = job
        return job

    async def fetch_profile(self, seeker_id: str) -> Optional[CandidateProfile]:
        return self.profiles.get(seeker_id)

    async def fetch_job(self, job_id: str) -> Optional[JobPosting]:
        return self.jobs.get(job_id)

    async def fetch_active_jobs(self, filters: Sequence[JobFilter] = ()) -> List[JobPosting]:
        return [
            job
            for job in self.jobs.values()
            if job.status == JobStatus.ACTIVE and matches_all(job, filters)
        ]

    async def fetch_employer_jobs(self, employer_id: str) -> List[JobPosting]:
        return [job for job in self.jobs.values() if job.employer_id == employer_id]

    async def fetch_decided(self, seeker_id: str) -> Set[str]:
        return {job_id for (swiper, job_id) in self.swipes if swiper == seeker_id}

    async def fetch_saved_set(self, seeker_id: str) -> Set[str]:
        return set(self.saved.get(seeker_id, ()))

    async def fetch_application(self, application_id: str) -> Optional[Application]:
        return self.applications.get(application_id)

    async def fetch_applications(
        self, job_id: Optional[str] = None, applicant_id: Optional[str] = None
    ) -> List[Application]:
        results = [
            app
            for app in self.applications.values()
            if (job_id is None or app.job_id == job_id)
            and (applicant_id is None or app.applicant_id == applicant_id)
        ]
        results.sort(key=lambda app: app.applied_at, reverse=True)
        return results

    async def update_application(self, application: Application) -> Application:
        async with self._lock:
            if application.id not in self.applications:
                raise PersistError(f"Application {application.id} does not exist")
            self.applications[application.id] = application
        return application

    async def persist(self, intents: Sequence[Intent]) -> None:
        """
        Execute intents in order, stopping at the first failure.

        Raises:
            DuplicateDecisionError: If a swipe for the pair already exists
            DuplicateApplicationError: If an application for the pair already exists
            PersistError: For any other invalid intent
        """
        async with self._lock:
            for intent in intents:
                self._apply(intent)

    def _apply(self, intent: Intent) -> None:
        if isinstance(intent, RecordSwipe):
            key = (intent.swipe.seeker_id, intent.swipe.job_id)
            if key in self.swipes:
                raise DuplicateDecisionError(*key)
            self.swipes[key] = intent.swipe

        elif isinstance(intent, CreateApplication):
            app = intent.application
            if any(
                existing.applicant_id == app.applicant_id and existing.job_id == app.job_id
                for existing in self.applications.values()
            ):
                raise DuplicateApplicationError(app.applicant_id, app.job_id)
            self.applications[app.id] = app

        elif isinstance(intent, BootstrapConversation):
            self.messages.append(intent.message)

        elif isinstance(intent, ToggleSave):
            saved = self.saved.setdefault(intent.seeker_id, set())
            if intent.saved:
                saved.add(intent.job_id)
            else:
                saved.discard(intent.job_id)

        elif isinstance(intent, ExcludeFromFeed):
            # Exclusion is derived from the swipe log
            pass

        else:
            raise PersistError(f"Unsupported intent: {type(intent).__name__}")
