"""API route modules."""

from .decisions import router as decisions_router
from .feed import router as feed_router
from .ingest import router as ingest_router
from .jobs import applications_router
from .jobs import router as jobs_router

__all__ = [
    "applications_router",
    "decisions_router",
    "feed_router",
    "ingest_router",
    "jobs_router",
]
