"""
Request and response models for the job matching service.

Domain records (postings, profiles, applications) come from the matching
engine; this module wraps them in the payloads the HTTP endpoints accept
and return.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from matching.models import (
    Application,
    ApplicationStatus,
    CandidateProfile,
    DecisionAction,
    JobPosting,
)


class IngestRequest(BaseModel):
    """Request model for data ingestion endpoint."""

    jobs: List[JobPosting] = Field(
        default_factory=list, description="List of job postings to ingest"
    )
    profiles: List[CandidateProfile] = Field(
        default_factory=list, description="List of seeker profiles to ingest"
    )

    model_config = {"extra": "forbid"}


class IngestResponse(BaseModel):
    """Response model for data ingestion endpoint."""

    jobs_loaded: int = Field(..., description="Number of jobs successfully loaded")
    profiles_loaded: int = Field(
        ..., description="Number of profiles successfully loaded"
    )
    jobs_store_size: int = Field(..., description="Total jobs in the store")
    profiles_store_size: int = Field(..., description="Total profiles in the store")


class FeedItem(BaseModel):
    """Single feed entry with its match score."""

    job: JobPosting = Field(..., description="Job posting data")
    match_score: Optional[int] = Field(
        None, description="Match score between 0 and 100"
    )
    is_saved: bool = Field(False, description="Whether the seeker saved this job")


class FeedResponse(BaseModel):
    """Response model for the feed endpoints."""

    results: List[FeedItem] = Field(..., description="Ordered feed entries")
    total_results: int = Field(..., description="Number of entries returned")
    total_count: int = Field(..., description="Postings considered before filtering")
    eligible_count: int = Field(
        ..., description="Postings matching filters, before decided jobs are removed"
    )
    is_exhausted: bool = Field(
        ..., description="True when matching jobs exist but all were decided"
    )
    query_time_ms: float = Field(
        ..., description="Query execution time in milliseconds"
    )


class DecisionRequest(BaseModel):
    """Request model for a seeker decision."""

    seeker_id: str = Field(..., min_length=1, description="Deciding seeker")
    job_id: str = Field(..., min_length=1, description="Job decided on")
    action: DecisionAction = Field(..., description="apply, pass, save or unsave")


class DecisionResponse(BaseModel):
    """Response model for an accepted decision."""

    job_id: str = Field(..., description="Job decided on")
    action: DecisionAction = Field(..., description="Action taken")
    application: Optional[Application] = Field(
        None, description="Application created by an apply decision"
    )
    intents: List[str] = Field(
        default_factory=list, description="Kinds of the persisted intents, in order"
    )
    already_applied: bool = Field(
        False, description="The store already held an application for this job"
    )
    saved: Optional[bool] = Field(None, description="Saved state after the decision")


class SaveToggleRequest(BaseModel):
    seeker_id: str = Field(..., min_length=1, description="Seeker")
    job_id: str = Field(..., min_length=1, description="Job to save or unsave")


class SaveToggleResponse(BaseModel):
    job_id: str = Field(..., description="Toggled job")
    saved: bool = Field(..., description="Saved state after the toggle")


class SavedJobsResponse(BaseModel):
    seeker_id: str = Field(..., description="Seeker")
    job_ids: List[str] = Field(..., description="Saved job ids")


class RejectJobRequest(BaseModel):
    reason: str = Field(..., description="Reason shown to the employer")


class ApplicationStatusUpdate(BaseModel):
    status: ApplicationStatus = Field(..., description="Target application status")
    notes: Optional[str] = Field(None, description="Reviewer notes")


class ApplicationListResponse(BaseModel):
    results: List[Application] = Field(..., description="Applications, newest first")
    total_results: int = Field(..., description="Number of applications")
