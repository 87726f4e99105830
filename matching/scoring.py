"""
Match scoring between a candidate profile and a job posting.

The score is a weighted sum of four components:
- Skills overlap (40 points)
- Experience fit (25 points)
- Location fit (20 points)
- Employment-type fit (15 points)

The result is an integer in [0, 100]. Scoring is pure: identical inputs
always give identical output, which the feed relies on for a stable order.
"""

import math
import os
from typing import Iterable, Optional, Set

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

from .models import CandidateProfile, JobPosting

load_dotenv()

DEFAULT_EXPERIENCE_GAP_YEARS = 5.0


class MatchBreakdown(BaseModel):
    """Per-component points behind a match score."""

    model_config = ConfigDict(frozen=True)

    skills: float
    experience: float
    location: float
    employment_type: float
    total: int


def _normalize_skills(skills: Iterable[str]) -> Set[str]:
    return {s.strip().lower() for s in skills if s and s.strip()}


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class MatchScoreCalculator:
    """Computes the 0-100 match score for a (profile, job) pair."""

    WEIGHTS = {
        "skills": 40,
        "experience": 25,
        "location": 20,
        "employment_type": 15,
    }

    def __init__(self, experience_gap_years: Optional[float] = None):
        """
        Initialize the calculator.

        Args:
            experience_gap_years: Years of under- or over-qualification at
                which experience credit reaches zero. Defaults to the
                MATCH_EXPERIENCE_GAP_YEARS environment variable, else 5.
        """
        if experience_gap_years is None:
            experience_gap_years = float(
                os.getenv("MATCH_EXPERIENCE_GAP_YEARS", DEFAULT_EXPERIENCE_GAP_YEARS)
            )
        if experience_gap_years < 0:
            raise ValueError("experience_gap_years must be non-negative")
        self.experience_gap_years = experience_gap_years

    def score(self, profile: CandidateProfile, job: JobPosting) -> int:
        """
        Calculate the match score.

        Args:
            profile: Candidate profile snapshot
            job: Job posting to score

        Returns:
            Integer score between 0 and 100
        """
        return self.breakdown(profile, job).total

    def breakdown(self, profile: CandidateProfile, job: JobPosting) -> MatchBreakdown:
        """Calculate the score together with its component points."""
        skills = self._skills_points(profile, job)
        experience = self._experience_points(profile, job)
        location = self._location_points(profile, job)
        employment_type = self._employment_type_points(profile, job)

        total = _round_half_up(skills + experience + location + employment_type)

        return MatchBreakdown(
            skills=skills,
            experience=experience,
            location=location,
            employment_type=employment_type,
            total=max(0, min(100, total)),
        )

    def _skills_points(self, profile: CandidateProfile, job: JobPosting) -> float:
        weight = self.WEIGHTS["skills"]
        required = _normalize_skills(job.skills_required)
        if not required:
            return float(weight)

        matched = required & _normalize_skills(profile.skills)
        return weight * len(matched) / max(1, len(required))

    def _experience_points(self, profile: CandidateProfile, job: JobPosting) -> float:
        weight = self.WEIGHTS["experience"]
        years = profile.experience_years

        # Distance outside the accepted [min, max] band
        shortfall = 0.0
        if job.experience_required_min is not None:
            shortfall = max(0.0, job.experience_required_min - years)
        excess = 0.0
        if job.experience_required_max is not None:
            excess = max(0.0, years - job.experience_required_max)

        distance = max(shortfall, excess)
        if distance == 0:
            return float(weight)
        if self.experience_gap_years == 0 or distance >= self.experience_gap_years:
            return 0.0
        return weight * (1 - distance / self.experience_gap_years)

    def _location_points(self, profile: CandidateProfile, job: JobPosting) -> float:
        weight = self.WEIGHTS["location"]
        if job.is_remote:
            return float(weight)

        job_location = job.location.strip().lower()
        if not job_location:
            return 0.0

        for preferred in profile.preferred_locations:
            pref = preferred.strip().lower()
            if pref and (pref in job_location or job_location in pref):
                return float(weight)
        return 0.0

    def _employment_type_points(
        self, profile: CandidateProfile, job: JobPosting
    ) -> float:
        if job.employment_type in profile.preferred_job_types:
            return float(self.WEIGHTS["employment_type"])
        return 0.0
