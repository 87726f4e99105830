"""
Feed and saved-job endpoints.

This module serves the ranked job feed for seekers, the employer's own
postings list, and the saved-job toggle.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from api.models import (
    FeedItem,
    FeedResponse,
    SavedJobsResponse,
    SaveToggleRequest,
    SaveToggleResponse,
)
from api.services.matching import matching_service
from matching.errors import NotFoundError, PersistError, ValidationError
from matching.feed import Feed
from matching.filters import JobFilter, filters_from_query
from matching.models import EmploymentType

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Feed"])


def get_feed_filters(
    location: Optional[str] = Query(None, description="Filter by location substring"),
    employment_type: Optional[EmploymentType] = Query(
        None, description="Filter by employment type"
    ),
    salary_min: Optional[int] = Query(
        None, ge=0, description="Minimum posted salary"
    ),
    remote_only: bool = Query(False, description="Only remote jobs"),
    category: Optional[str] = Query(None, description="Filter by job category"),
    experience_min: Optional[float] = Query(
        None, ge=0, description="Minimum required experience at least this"
    ),
    experience_max: Optional[float] = Query(
        None, ge=0, description="Maximum required experience at most this"
    ),
) -> List[JobFilter]:
    """
    Create feed filters from query parameters.

    Returns:
        List of filter predicates for the store and feed builder
    """
    return filters_from_query(
        location=location,
        employment_type=employment_type,
        salary_min=salary_min,
        remote_only=remote_only,
        category=category,
        experience_min=experience_min,
        experience_max=experience_max,
    )


def _feed_response(feed: Feed, query_time_ms: float) -> FeedResponse:
    return FeedResponse(
        results=[
            FeedItem(job=item.job, match_score=item.match_score, is_saved=item.is_saved)
            for item in feed.items
        ],
        total_results=len(feed.items),
        total_count=feed.total_count,
        eligible_count=feed.eligible_count,
        is_exhausted=feed.is_exhausted,
        query_time_ms=query_time_ms,
    )


@router.get("/feed", response_model=FeedResponse)
async def get_feed(
    seeker_id: str = Query(..., min_length=1, description="Seeker to rank jobs for"),
    k: Optional[int] = Query(None, ge=1, le=100, description="Number of results"),
    filters: List[JobFilter] = Depends(get_feed_filters),
):
    """
    Return the seeker's ranked feed of undecided active jobs.

    Raises:
        HTTPException: 404 if the seeker has no profile, 500 if the store fails
    """
    try:
        logger.info(f"Building feed for {seeker_id}, k={k}, filters={filters}")

        results = await matching_service.build_feed(seeker_id, filters, k)

        return _feed_response(results["feed"], results["query_time_ms"])

    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Feed build failed: {e}")
        raise HTTPException(status_code=500, detail=f"Feed build failed: {str(e)}")


@router.get("/jobs/employer/{employer_id}", response_model=FeedResponse)
async def get_employer_jobs(employer_id: str):
    """Return an employer's active, pending and draft postings, newest first."""
    results = await matching_service.employer_jobs(employer_id)
    return _feed_response(results["feed"], results["query_time_ms"])


@router.post("/saved/toggle", response_model=SaveToggleResponse)
async def toggle_saved(request: SaveToggleRequest):
    """Save the job if it is not saved, unsave it otherwise."""
    try:
        toggle = await matching_service.toggle_save(request.seeker_id, request.job_id)
        return SaveToggleResponse(job_id=request.job_id, saved=toggle.saved)

    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PersistError as e:
        logger.error(f"Saving job {request.job_id} failed: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to save job: {str(e)}")


@router.get("/saved", response_model=SavedJobsResponse)
async def get_saved(
    seeker_id: str = Query(..., min_length=1, description="Seeker"),
):
    job_ids = await matching_service.saved_jobs(seeker_id)
    return SavedJobsResponse(seeker_id=seeker_id, job_ids=job_ids)
