"""
FastAPI application factory.

This module creates and configures the FastAPI application with all
routes, middleware, and lifecycle management.
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .routes import (
    applications_router,
    decisions_router,
    feed_router,
    ingest_router,
    jobs_router,
)
from .services.matching import matching_service

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan context manager for startup and shutdown tasks.

    Initializes the matching service on startup.
    """
    try:
        logger.info("Starting up application...")
        await matching_service.initialize()
        logger.info("Application startup complete")

        yield

    except Exception as e:
        logger.error(f"Startup failed: {e}")
        raise
    finally:
        logger.info("Shutting down application...")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="Job Matching Service",
        description="Ranked job feeds and apply/pass/save decisions for job seekers",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/", response_model=dict)
    async def root():
        return {
            "name": "Job Matching Service",
            "description": (
                "Ranked job feeds and apply/pass/save decisions for job seekers"
            ),
            "endpoints": {
                "POST /ingest": "Load job postings and seeker profiles",
                "GET /feed": "Ranked feed of undecided jobs for a seeker",
                "POST /decisions": "Apply, pass, save or unsave a job",
                "POST /saved/toggle": "Toggle a job in the seeker's saved set",
                "GET /saved": "List a seeker's saved jobs",
                "POST /jobs": "Create a job posting",
                "POST /jobs/{job_id}/approve": "Approve a pending posting",
                "POST /jobs/{job_id}/reject": "Reject a pending posting",
                "GET /jobs/employer/{employer_id}": "List an employer's postings",
                "GET /applications": "List applications",
                "PATCH /applications/{application_id}/status": "Update an application",
            },
        }

    app.include_router(ingest_router)
    app.include_router(feed_router)
    app.include_router(decisions_router)
    app.include_router(jobs_router)
    app.include_router(applications_router)

    return app
