"""
Matching service wrapper.

This module provides a service wrapper around the matching workflow and
the in-memory store for use in the API layer.
"""

import logging
import os
import time
from typing import Any, Dict, List, Optional, Sequence, Union

from dotenv import load_dotenv

from matching import lifecycle
from matching.errors import Conflict, NotFoundError
from matching.feed import Feed, FeedBuilder
from matching.filters import JobFilter, employer_visibility
from matching.memory_store import InMemoryDataPort
from matching.models import (
    Application,
    ApplicationStatus,
    CandidateProfile,
    DecisionAction,
    JobPosting,
    JobStatus,
)
from matching.saved import SaveToggle
from matching.workflow import DecisionOutcome, MatchingWorkflow

load_dotenv()

logger = logging.getLogger(__name__)

JOB_MODERATION = {
    "approve": lifecycle.approve_job,
    "pause": lifecycle.pause_job,
    "resume": lifecycle.resume_job,
    "close": lifecycle.close_job,
    "expire": lifecycle.expire_if_due,
}


class MatchingService:
    """
    Service wrapper for matching functionality.

    Provides an interface between the API routes and the matching workflow,
    adding timing, logging and the employer and moderation operations.
    """

    def __init__(self):
        """Initialize the matching service with an empty store."""
        self.feed_limit = int(os.getenv("FEED_LIMIT", "50"))
        self.reset()

    def reset(self) -> None:
        """Replace the store with an empty one."""
        self.store = InMemoryDataPort()
        self.workflow = MatchingWorkflow(self.store)

    async def initialize(self) -> None:
        logger.info(f"Matching service ready (feed limit {self.feed_limit})")

    async def ingest_data(
        self, jobs: List[JobPosting], profiles: List[CandidateProfile]
    ) -> Dict[str, int]:
        """
        Load postings and profiles into the store.

        Args:
            jobs: Job postings
            profiles: Seeker profiles

        Returns:
            Dictionary with ingestion statistics
        """
        start_time = time.time()
        logger.info(f"Ingesting {len(jobs)} jobs and {len(profiles)} profiles")

        jobs_loaded = await self.store.upsert_jobs(jobs)
        profiles_loaded = await self.store.upsert_profiles(profiles)

        logger.info(f"Data ingestion completed in {time.time() - start_time:.2f}s")

        return {
            "jobs_loaded": jobs_loaded,
            "profiles_loaded": profiles_loaded,
            "jobs_store_size": len(self.store.jobs),
            "profiles_store_size": len(self.store.profiles),
        }

    async def build_feed(
        self,
        seeker_id: str,
        filters: Sequence[JobFilter] = (),
        limit: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        Build a seeker's ranked feed.

        Args:
            seeker_id: Seeker to build the feed for
            filters: Search filters
            limit: Maximum number of entries, defaults to FEED_LIMIT

        Returns:
            Dictionary with the feed and query time
        """
        start_time = time.time()

        feed = await self.workflow.build_feed(
            seeker_id, filters, limit if limit is not None else self.feed_limit
        )

        query_time = (time.time() - start_time) * 1000
        logger.info(
            f"Feed for {seeker_id} built in {query_time:.2f}ms, "
            f"{len(feed.items)} of {feed.eligible_count} eligible jobs"
        )

        return {"feed": feed, "query_time_ms": query_time}

    async def employer_jobs(self, employer_id: str) -> Dict[str, Any]:
        """List an employer's own active, pending and draft postings, newest first."""
        start_time = time.time()

        jobs = await self.store.fetch_employer_jobs(employer_id)
        feed: Feed = FeedBuilder().build_feed(
            None, jobs, visibility=employer_visibility(employer_id)
        )

        return {"feed": feed, "query_time_ms": (time.time() - start_time) * 1000}

    async def decide(
        self, seeker_id: str, job_id: str, action: DecisionAction
    ) -> Union[DecisionOutcome, Conflict, SaveToggle]:
        logger.info(f"Decision from {seeker_id} on job {job_id}: {action.value}")
        return await self.workflow.decide(seeker_id, job_id, action)

    async def toggle_save(self, seeker_id: str, job_id: str) -> SaveToggle:
        return await self.workflow.toggle_save(seeker_id, job_id)

    async def saved_jobs(self, seeker_id: str) -> List[str]:
        return sorted(await self.store.fetch_saved_set(seeker_id))

    async def create_job(self, job: JobPosting) -> JobPosting:
        """
        Store a new posting; anything but a draft waits for approval.

        Raises:
            DuplicateJobError: If the id is already taken
        """
        if job.status != JobStatus.DRAFT:
            job = job.model_copy(update={"status": JobStatus.PENDING_APPROVAL})
        logger.info(f"Creating job {job.id} for employer {job.employer_id}")
        return await self.store.insert_job(job)

    async def moderate_job(
        self, job_id: str, operation: str, reason: Optional[str] = None
    ) -> JobPosting:
        """
        Apply a moderation operation to a posting.

        Args:
            job_id: Posting to moderate
            operation: approve, reject, pause, resume, close or expire
            reason: Rejection reason, required for reject

        Returns:
            Updated posting

        Raises:
            NotFoundError: If the job does not exist
            ValidationError: If a rejection has no reason
            InvalidTransitionError: If the job's status does not allow it
        """
        job = await self.store.fetch_job(job_id)
        if job is None:
            raise NotFoundError(f"Job {job_id} does not exist")

        if operation == "reject":
            updated = lifecycle.reject_job(job, reason or "")
        else:
            updated = JOB_MODERATION[operation](job)

        return await self.store.upsert_job(updated)

    async def update_application_status(
        self, application_id: str, status: ApplicationStatus, notes: Optional[str] = None
    ) -> Application:
        application = await self.store.fetch_application(application_id)
        if application is None:
            raise NotFoundError(f"Application {application_id} does not exist")

        updated = lifecycle.update_application_status(application, status, notes)
        return await self.store.update_application(updated)

    async def list_applications(
        self, job_id: Optional[str] = None, applicant_id: Optional[str] = None
    ) -> List[Application]:
        return await self.store.fetch_applications(job_id=job_id, applicant_id=applicant_id)


# Global matching service instance
matching_service = MatchingService()
