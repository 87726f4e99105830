"""
Job posting and moderation endpoints.

Employers create postings, which wait for administrator approval before
they reach seekers' feeds.
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from api.models import (
    ApplicationListResponse,
    ApplicationStatusUpdate,
    RejectJobRequest,
)
from api.services.matching import matching_service
from matching.errors import (
    DuplicateJobError,
    InvalidTransitionError,
    NotFoundError,
    PersistError,
    ValidationError,
)
from matching.models import Application, JobPosting

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/jobs", tags=["Jobs"])


@router.post("", response_model=JobPosting, status_code=201)
async def create_job(job: JobPosting):
    """Create a posting; non-draft postings are queued for approval."""
    try:
        return await matching_service.create_job(job)
    except DuplicateJobError as e:
        raise HTTPException(status_code=409, detail=str(e))


async def _moderate(job_id: str, operation: str, reason: Optional[str] = None):
    try:
        return await matching_service.moderate_job(job_id, operation, reason)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except InvalidTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.post("/{job_id}/approve", response_model=JobPosting)
async def approve_job(job_id: str):
    return await _moderate(job_id, "approve")


@router.post("/{job_id}/reject", response_model=JobPosting)
async def reject_job(job_id: str, request: RejectJobRequest):
    return await _moderate(job_id, "reject", request.reason)


@router.post("/{job_id}/pause", response_model=JobPosting)
async def pause_job(job_id: str):
    return await _moderate(job_id, "pause")


@router.post("/{job_id}/resume", response_model=JobPosting)
async def resume_job(job_id: str):
    return await _moderate(job_id, "resume")


@router.post("/{job_id}/close", response_model=JobPosting)
async def close_job(job_id: str):
    return await _moderate(job_id, "close")


@router.post("/{job_id}/expire", response_model=JobPosting)
async def expire_job(job_id: str):
    """Expire the posting if its expiry date has passed."""
    return await _moderate(job_id, "expire")


applications_router = APIRouter(prefix="/applications", tags=["Applications"])


@applications_router.get("", response_model=ApplicationListResponse)
async def list_applications(
    job_id: Optional[str] = Query(None, description="Filter by job"),
    applicant_id: Optional[str] = Query(None, description="Filter by applicant"),
):
    results = await matching_service.list_applications(job_id, applicant_id)
    return ApplicationListResponse(results=results, total_results=len(results))


@applications_router.patch("/{application_id}/status", response_model=Application)
async def update_application_status(
    application_id: str, request: ApplicationStatusUpdate
):
    """
    Move an application through the employer's review pipeline.

    Raises:
        HTTPException: 404 for an unknown application, 409 if it is already
            in a terminal status
    """
    try:
        return await matching_service.update_application_status(
            application_id, request.status, request.notes
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except PersistError as e:
        logger.error(f"Updating application {application_id} failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))
