"""
Decision endpoint for job seekers.

Apply and pass are recorded at most once per job and only on active jobs;
anything else is answered with 409 Conflict. Save and unsave are idempotent.
"""

import logging

from fastapi import APIRouter, HTTPException

from api.models import DecisionRequest, DecisionResponse
from api.services.matching import matching_service
from matching.errors import Conflict, NotFoundError, PersistError, ValidationError
from matching.models import DecisionAction
from matching.saved import SaveToggle

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/decisions", tags=["Decisions"])


@router.post("", response_model=DecisionResponse)
async def decide(request: DecisionRequest):
    """
    Record a seeker's decision on a job.

    Args:
        request: DecisionRequest with seeker, job and action

    Returns:
        DecisionResponse describing what was persisted

    Raises:
        HTTPException: 404 for an unknown seeker or job, 409 if the job was
            already decided or is not active, 422 for invalid input, 500 if
            the store fails
    """
    try:
        outcome = await matching_service.decide(
            request.seeker_id, request.job_id, request.action
        )

    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PersistError as e:
        logger.error(f"Decision on job {request.job_id} failed: {e}")
        raise HTTPException(
            status_code=500, detail=f"Failed to process decision: {str(e)}"
        )

    if isinstance(outcome, Conflict):
        raise HTTPException(
            status_code=409,
            detail=f"Cannot {outcome.action.value} job {outcome.job_id}: {outcome.reason}",
        )

    if isinstance(outcome, SaveToggle):
        return DecisionResponse(
            job_id=request.job_id,
            action=request.action,
            intents=[outcome.intent.kind] if outcome.intent else [],
            saved=outcome.saved,
        )

    saved = None
    if outcome.result.action == DecisionAction.APPLY:
        saved = not outcome.auto_save_failed

    return DecisionResponse(
        job_id=outcome.result.job_id,
        action=outcome.result.action,
        application=None if outcome.already_applied else outcome.result.application,
        intents=[intent.kind for intent in outcome.persisted],
        already_applied=outcome.already_applied,
        saved=saved,
    )
