"""
Domain records for the job matching engine.

This module contains the pydantic models and enums shared by the scoring,
feed, decision and lifecycle modules. Records the engine only reads are
frozen so a feed pass always works on an immutable snapshot.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class EmploymentType(str, Enum):
    FULL_TIME = "full-time"
    PART_TIME = "part-time"
    CONTRACT = "contract"
    INTERNSHIP = "internship"
    REMOTE = "remote"
    HYBRID = "hybrid"


class JobStatus(str, Enum):
    DRAFT = "draft"
    PENDING_APPROVAL = "pending_approval"
    ACTIVE = "active"
    PAUSED = "paused"
    CLOSED = "closed"
    EXPIRED = "expired"
    REJECTED = "rejected"


class ApplicationStatus(str, Enum):
    APPLIED = "applied"
    VIEWED = "viewed"
    SHORTLISTED = "shortlisted"
    INTERVIEW = "interview"
    HIRED = "hired"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"


class EducationLevel(str, Enum):
    HIGH_SCHOOL = "high_school"
    ASSOCIATE = "associate"
    BACHELOR = "bachelor"
    MASTER = "master"
    DOCTORATE = "doctorate"
    PROFESSIONAL_CERTIFICATION = "professional_certification"
    TRADE_SCHOOL = "trade_school"
    SOME_COLLEGE = "some_college"
    VOCATIONAL_TRAINING = "vocational_training"
    PROFESSIONAL_LICENSE = "professional_license"
    OTHER = "other"


class DecisionAction(str, Enum):
    APPLY = "apply"
    PASS = "pass"
    SAVE = "save"
    UNSAVE = "unsave"


SWIPE_ACTIONS = frozenset({DecisionAction.APPLY, DecisionAction.PASS})


class CandidateProfile(BaseModel):
    """Job seeker profile snapshot used for scoring."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Seeker identifier")
    skills: FrozenSet[str] = Field(default_factory=frozenset)
    experience_years: float = Field(0.0, ge=0, description="Years of experience")
    education_level: Optional[EducationLevel] = None
    preferred_locations: FrozenSet[str] = Field(default_factory=frozenset)
    preferred_job_types: FrozenSet[EmploymentType] = Field(default_factory=frozenset)
    expected_salary_min: Optional[int] = None
    expected_salary_max: Optional[int] = None


class JobPosting(BaseModel):
    """Job posting as published by an employer."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Job identifier")
    employer_id: str = Field(..., min_length=1, description="Owning employer")
    title: str = Field(..., description="Job title")
    company_name: Optional[str] = Field(None, description="Employer display name")
    description: str = ""
    category: str = ""
    employment_type: EmploymentType = EmploymentType.FULL_TIME
    location: str = ""
    is_remote: bool = False
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    experience_required_min: Optional[float] = None
    experience_required_max: Optional[float] = None
    skills_required: FrozenSet[str] = Field(default_factory=frozenset)
    status: JobStatus = JobStatus.PENDING_APPROVAL
    created_at: datetime = Field(default_factory=utcnow)
    expires_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None


class SwipeRecord(BaseModel):
    """Append-only log entry for an apply or pass decision."""

    model_config = ConfigDict(frozen=True)

    seeker_id: str
    job_id: str
    action: DecisionAction
    swiped_at: datetime


class Application(BaseModel):
    """A seeker's application to a job."""

    model_config = ConfigDict(frozen=True)

    id: str
    job_id: str
    applicant_id: str
    employer_id: str
    status: ApplicationStatus = ApplicationStatus.APPLIED
    applied_at: datetime
    updated_at: Optional[datetime] = None
    viewed_at: Optional[datetime] = None
    shortlisted_at: Optional[datetime] = None
    hired_at: Optional[datetime] = None
    rejected_at: Optional[datetime] = None
    notes: Optional[str] = None
    rejection_reason: Optional[str] = None


class ConversationMessage(BaseModel):
    """Opening message stored when a conversation is bootstrapped."""

    model_config = ConfigDict(frozen=True)

    conversation_id: str
    sender_id: str
    recipient_id: str
    job_id: str
    application_id: Optional[str] = None
    content: str
    sent_at: datetime
