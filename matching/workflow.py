"""
Async orchestration of the matching engine over a DataPort.

The engine itself is synchronous and pure. This module fetches fresh
per-seeker state from the store on every call, runs the engine and persists
the resulting intents. The only suspension points are DataPort calls.
"""

import asyncio
import logging
from typing import List, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict

from .decisions import DecisionProcessor, DecisionResult
from .errors import (
    Conflict,
    DuplicateApplicationError,
    DuplicateDecisionError,
    NotFoundError,
    PersistError,
    ValidationError,
)
from .feed import Feed, FeedBuilder
from .filters import JobFilter
from .intents import BootstrapConversation, Intent, RecordSwipe, ToggleSave
from .models import DecisionAction, JobStatus
from .ports import DataPort
from .saved import SavedSetManager, SaveToggle

logger = logging.getLogger(__name__)


class DecisionOutcome(BaseModel):
    """
    Result of a persisted apply/pass decision.

    `already_applied` is set when the store reported a duplicate application;
    the seeker's goal is met and the remaining intents were still persisted.
    """

    model_config = ConfigDict(frozen=True)

    result: DecisionResult
    persisted: List[Intent]
    already_applied: bool = False
    conversation_failed: bool = False
    auto_save_failed: bool = False


class MatchingWorkflow:
    """Runs feed, decision and save operations against a DataPort."""

    def __init__(
        self,
        port: DataPort,
        feed_builder: Optional[FeedBuilder] = None,
        processor: Optional[DecisionProcessor] = None,
    ):
        self.port = port
        self.feed_builder = feed_builder or FeedBuilder()
        self.processor = processor or DecisionProcessor()

    async def build_feed(
        self,
        seeker_id: str,
        filters: Sequence[JobFilter] = (),
        limit: Optional[int] = None,
    ) -> Feed:
        """
        Build a seeker's feed from freshly fetched state.

        Args:
            seeker_id: Seeker to build the feed for
            filters: Search filters applied by the store and the builder
            limit: Maximum number of feed items

        Returns:
            Ranked feed

        Raises:
            NotFoundError: If the seeker has no profile
        """
        profile = await self.port.fetch_profile(seeker_id)
        if profile is None:
            raise NotFoundError(f"No profile for seeker {seeker_id}")

        jobs, decided, saved = await asyncio.gather(
            self.port.fetch_active_jobs(filters),
            self.port.fetch_decided(seeker_id),
            self.port.fetch_saved_set(seeker_id),
        )

        return self.feed_builder.build_feed(
            profile, jobs, decided, saved, filters=filters, limit=limit
        )

    async def decide(
        self, seeker_id: str, job_id: str, action: Union[DecisionAction, str]
    ) -> Union[DecisionOutcome, Conflict, SaveToggle]:
        """
        Process any seeker decision.

        Save and unsave are routed to the saved set; apply and pass go through
        the decision processor and are persisted intent by intent. Only active
        jobs can be applied to or passed on; any other status yields a Conflict.

        Raises:
            ValidationError: If the action is unknown
            NotFoundError: If the seeker has no profile or the job does not exist
            PersistError: If the store fails for a reason other than a duplicate
        """
        try:
            action = DecisionAction(action)
        except ValueError:
            raise ValidationError(f"Unknown decision action: {action}")

        if action == DecisionAction.SAVE:
            return await self.set_saved(seeker_id, job_id, True)
        if action == DecisionAction.UNSAVE:
            return await self.set_saved(seeker_id, job_id, False)

        await self._require_profile(seeker_id)

        job = await self.port.fetch_job(job_id)
        if job is None:
            raise NotFoundError(f"Job {job_id} does not exist")
        if job.status != JobStatus.ACTIVE:
            logger.info(
                f"Seeker {seeker_id} cannot {action.value} job {job_id}: "
                f"status is {job.status.value}"
            )
            return Conflict(
                seeker_id=seeker_id,
                job_id=job_id,
                action=action,
                reason=f"job is {job.status.value}",
            )

        decided, saved = await asyncio.gather(
            self.port.fetch_decided(seeker_id),
            self.port.fetch_saved_set(seeker_id),
        )

        result = self.processor.decide(seeker_id, job, action, decided, saved)
        if isinstance(result, Conflict):
            return result

        return await self._persist_decision(result)

    async def _persist_decision(
        self, result: DecisionResult
    ) -> Union[DecisionOutcome, Conflict]:
        persisted: List[Intent] = []
        already_applied = False
        conversation_failed = False
        auto_save_failed = False

        for intent in result.intents:
            if already_applied and isinstance(intent, BootstrapConversation):
                # The greeting references an application that was not created
                continue

            try:
                await self.port.persist([intent])
            except DuplicateDecisionError:
                if isinstance(intent, RecordSwipe):
                    logger.info(
                        f"Store already holds a decision for seeker "
                        f"{result.seeker_id} on job {result.job_id}"
                    )
                    return Conflict(
                        seeker_id=result.seeker_id,
                        job_id=result.job_id,
                        action=result.action,
                    )
                raise
            except DuplicateApplicationError:
                logger.info(
                    f"Seeker {result.seeker_id} already applied to job {result.job_id}"
                )
                already_applied = True
                continue
            except PersistError as e:
                if isinstance(intent, BootstrapConversation):
                    logger.warning(f"Could not create initial message: {e}")
                    conversation_failed = True
                    continue
                if isinstance(intent, ToggleSave) and intent.automatic:
                    logger.warning(f"Could not auto-save job {intent.job_id}: {e}")
                    auto_save_failed = True
                    continue
                logger.error(f"Persisting {intent.kind} failed: {e}")
                raise

            persisted.append(intent)

        return DecisionOutcome(
            result=result,
            persisted=persisted,
            already_applied=already_applied,
            conversation_failed=conversation_failed,
            auto_save_failed=auto_save_failed,
        )

    async def toggle_save(self, seeker_id: str, job_id: str) -> SaveToggle:
        """Flip a job's saved state for a seeker and persist the change."""
        manager = await self._saved_manager(seeker_id, job_id)
        toggle = manager.toggle(seeker_id, job_id)
        return await self._persist_toggle(toggle)

    async def set_saved(self, seeker_id: str, job_id: str, saved: bool) -> SaveToggle:
        manager = await self._saved_manager(seeker_id, job_id)
        if saved:
            toggle = manager.save(seeker_id, job_id)
        else:
            toggle = manager.unsave(seeker_id, job_id)
        return await self._persist_toggle(toggle)

    async def _saved_manager(self, seeker_id: str, job_id: str) -> SavedSetManager:
        if not seeker_id or not job_id:
            raise ValidationError("seeker_id and job_id are required")
        await self._require_profile(seeker_id)
        saved = await self.port.fetch_saved_set(seeker_id)
        return SavedSetManager({seeker_id: saved})

    async def _require_profile(self, seeker_id: str) -> None:
        if not seeker_id or not seeker_id.strip():
            raise ValidationError("seeker_id is required")
        if await self.port.fetch_profile(seeker_id) is None:
            raise NotFoundError(f"No profile for seeker {seeker_id}")

    async def _persist_toggle(self, toggle: SaveToggle) -> SaveToggle:
        if toggle.intent is not None:
            await self.port.persist([toggle.intent])
        return toggle
