"""API models for the job matching service."""

from .schemas import (
    ApplicationListResponse,
    ApplicationStatusUpdate,
    DecisionRequest,
    DecisionResponse,
    FeedItem,
    FeedResponse,
    IngestRequest,
    IngestResponse,
    RejectJobRequest,
    SavedJobsResponse,
    SaveToggleRequest,
    SaveToggleResponse,
)

__all__ = [
    "IngestRequest",
    "IngestResponse",
    "FeedItem",
    "FeedResponse",
    "DecisionRequest",
    "DecisionResponse",
    "SaveToggleRequest",
    "SaveToggleResponse",
    "SavedJobsResponse",
    "RejectJobRequest",
    "ApplicationStatusUpdate",
    "ApplicationListResponse",
]
