"""
Data ingestion endpoints.

This module provides endpoints for loading job postings and seeker
profiles into the store.
"""

import json
import logging

from fastapi import APIRouter, HTTPException, Query

from api.models import IngestRequest, IngestResponse
from api.services.matching import matching_service
from matching.models import CandidateProfile, JobPosting

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ingest", tags=["Data Ingestion"])


@router.post("/", response_model=IngestResponse)
async def ingest_data(request: IngestRequest):
    """
    Ingest job postings and seeker profiles into the store.

    Args:
        request: IngestRequest containing jobs and profiles

    Returns:
        IngestResponse with ingestion statistics

    Raises:
        HTTPException: If ingestion fails
    """
    try:
        logger.info(
            f"Ingesting {len(request.jobs)} jobs and {len(request.profiles)} profiles"
        )

        stats = await matching_service.ingest_data(request.jobs, request.profiles)

        return IngestResponse(**stats)

    except Exception as e:
        logger.error(f"Ingestion failed: {e}")
        raise HTTPException(status_code=500, detail=f"Data ingestion failed: {str(e)}")


@router.post("/from-json", response_model=IngestResponse)
async def ingest_from_files(
    jobs_file: str = Query("data/jobs.json", description="Path to jobs JSON file"),
    profiles_file: str = Query(
        "data/profiles.json", description="Path to profiles JSON file"
    ),
):
    """
    Load data from JSON files (utility endpoint for local runs).

    Args:
        jobs_file: Path to jobs JSON file
        profiles_file: Path to profiles JSON file

    Returns:
        IngestResponse with ingestion statistics

    Raises:
        HTTPException: If file loading or ingestion fails
    """
    try:
        logger.info(f"Loading data from files: {jobs_file}, {profiles_file}")

        jobs_data = []
        try:
            with open(jobs_file, "r", encoding="utf-8") as f:
                jobs_data = [JobPosting(**job) for job in json.load(f)]
        except FileNotFoundError:
            logger.warning(f"Jobs file {jobs_file} not found, using empty list")
        except Exception as e:
            raise HTTPException(
                status_code=400, detail=f"Error loading jobs file: {str(e)}"
            )

        profiles_data = []
        try:
            with open(profiles_file, "r", encoding="utf-8") as f:
                profiles_data = [CandidateProfile(**profile) for profile in json.load(f)]
        except FileNotFoundError:
            logger.warning(f"Profiles file {profiles_file} not found, using empty list")
        except Exception as e:
            raise HTTPException(
                status_code=400, detail=f"Error loading profiles file: {str(e)}"
            )

        request = IngestRequest(jobs=jobs_data, profiles=profiles_data)
        return await ingest_data(request)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"File ingestion failed: {e}")
        raise HTTPException(status_code=500, detail=f"File ingestion failed: {str(e)}")
