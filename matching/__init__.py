"""Job matching and application workflow engine."""

from .decisions import DecisionProcessor, DecisionResult
from .errors import (
    Conflict,
    DuplicateApplicationError,
    DuplicateDecisionError,
    DuplicateJobError,
    InvalidTransitionError,
    MatchingError,
    NotFoundError,
    PersistError,
    ValidationError,
)
from .feed import Feed, FeedBuilder, OrderedJob
from .memory_store import InMemoryDataPort
from .models import (
    Application,
    ApplicationStatus,
    CandidateProfile,
    DecisionAction,
    EmploymentType,
    JobPosting,
    JobStatus,
)
from .saved import SavedSetManager, SaveToggle
from .scoring import MatchBreakdown, MatchScoreCalculator
from .workflow import DecisionOutcome, MatchingWorkflow

__all__ = [
    "Application",
    "ApplicationStatus",
    "CandidateProfile",
    "Conflict",
    "DecisionAction",
    "DecisionOutcome",
    "DecisionProcessor",
    "DecisionResult",
    "DuplicateApplicationError",
    "DuplicateDecisionError",
    "DuplicateJobError",
    "EmploymentType",
    "Feed",
    "FeedBuilder",
    "InMemoryDataPort",
    "InvalidTransitionError",
    "JobPosting",
    "JobStatus",
    "MatchBreakdown",
    "MatchScoreCalculator",
    "MatchingError",
    "MatchingWorkflow",
    "NotFoundError",
    "OrderedJob",
    "PersistError",
    "SavedSetManager",
    "SaveToggle",
    "ValidationError",
]
