"""
Feed assembly for job seekers and employers.

The feed builder filters postings by role visibility and search filters,
drops jobs the seeker already decided on, scores what remains and returns
a deterministically ordered feed annotated with saved state.
"""

import logging
from typing import AbstractSet, Iterable, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict

from .filters import JobFilter, JobPredicate, matches_all, seeker_visibility
from .models import CandidateProfile, JobPosting
from .scoring import MatchScoreCalculator

logger = logging.getLogger(__name__)


class OrderedJob(BaseModel):
    """A posting as it appears in a feed."""

    model_config = ConfigDict(frozen=True)

    job: JobPosting
    match_score: Optional[int] = None
    is_saved: bool = False


class Feed(BaseModel):
    """
    Ranked feed plus the counts needed to pick the right empty state.

    `total_count` is the number of postings supplied, `eligible_count` the
    number left after visibility and filters but before decided jobs are
    removed.
    """

    model_config = ConfigDict(frozen=True)

    items: List[OrderedJob]
    total_count: int
    eligible_count: int

    @property
    def is_empty(self) -> bool:
        """No postings match at all."""
        return self.eligible_count == 0

    @property
    def is_exhausted(self) -> bool:
        """Postings exist but every one has been decided."""
        return self.eligible_count > 0 and not self.items


class FeedBuilder:
    """Builds ranked job feeds."""

    def __init__(self, calculator: Optional[MatchScoreCalculator] = None):
        self.calculator = calculator or MatchScoreCalculator()

    def build_feed(
        self,
        profile: Optional[CandidateProfile],
        jobs: Iterable[JobPosting],
        decided: AbstractSet[str] = frozenset(),
        saved_set: AbstractSet[str] = frozenset(),
        visibility: Optional[JobPredicate] = None,
        filters: Sequence[JobFilter] = (),
        limit: Optional[int] = None,
    ) -> Feed:
        """
        Build an ordered feed.

        Args:
            profile: Seeker profile; None yields an unscored feed ordered
                newest first
            jobs: Candidate postings
            decided: Job ids the seeker already applied to or passed on
            saved_set: Job ids the seeker saved
            visibility: Role visibility predicate, defaults to active only
            filters: Search filters every job must satisfy
            limit: Maximum number of items to return

        Returns:
            Feed with ordered items and pre/post exclusion counts
        """
        visible = visibility or seeker_visibility
        jobs = list(jobs)

        eligible = [job for job in jobs if visible(job) and matches_all(job, filters)]
        remaining = [job for job in eligible if job.id not in decided]

        items = [
            OrderedJob(
                job=job,
                match_score=(
                    self.calculator.score(profile, job) if profile is not None else None
                ),
                is_saved=job.id in saved_set,
            )
            for job in remaining
        ]

        # Stable sorts, least significant key first
        items.sort(key=lambda item: item.job.id)
        items.sort(key=lambda item: item.job.created_at, reverse=True)
        items.sort(key=lambda item: item.match_score or 0, reverse=True)

        if limit is not None:
            items = items[: max(0, limit)]

        logger.debug(
            f"Built feed: {len(jobs)} jobs, {len(eligible)} eligible, "
            f"{len(remaining)} undecided, {len(items)} returned"
        )

        return Feed(items=items, total_count=len(jobs), eligible_count=len(eligible))
