"""
Apply and pass decisions for job seekers.

Each (seeker, job) pair moves at most once from undecided to applied or
passed. Saving is an independent overlay handled by SavedSetManager. The
processor validates the decision and returns the ordered intents a storage
adapter must execute; it never mutates the caller's state.
"""

import logging
import uuid
from datetime import datetime
from typing import AbstractSet, FrozenSet, List, Optional, Union

from pydantic import BaseModel, ConfigDict

from .errors import Conflict, ValidationError
from .intents import (
    BootstrapConversation,
    CreateApplication,
    ExcludeFromFeed,
    Intent,
    RecordSwipe,
    ToggleSave,
)
from .models import (
    SWIPE_ACTIONS,
    Application,
    ApplicationStatus,
    ConversationMessage,
    DecisionAction,
    JobPosting,
    SwipeRecord,
    utcnow,
)

logger = logging.getLogger(__name__)


class DecisionResult(BaseModel):
    """
    Outcome of an accepted decision.

    `next_decided` and `next_saved` are the seeker's state once every intent
    is persisted; callers should only adopt them after persistence succeeds.
    """

    model_config = ConfigDict(frozen=True)

    seeker_id: str
    job_id: str
    action: DecisionAction
    swipe: SwipeRecord
    application: Optional[Application] = None
    intents: List[Intent]
    next_decided: FrozenSet[str]
    next_saved: FrozenSet[str]


def greeting_message(job: JobPosting) -> str:
    company = job.company_name or "your company"
    return (
        f"Hi! I just applied for the {job.title} position at {company}. "
        "I'm very interested in this opportunity and would love to learn more "
        "about the role. Thank you for considering my application!"
    )


class DecisionProcessor:
    """Validates apply/pass decisions and emits their intents."""

    def decide(
        self,
        seeker_id: str,
        job: JobPosting,
        action: Union[DecisionAction, str],
        decided: AbstractSet[str] = frozenset(),
        saved_set: AbstractSet[str] = frozenset(),
        now: Optional[datetime] = None,
    ) -> Union[DecisionResult, Conflict]:
        """
        Apply a seeker's decision to a job.

        Args:
            seeker_id: Deciding seeker
            job: Job being decided on
            action: "apply" or "pass"
            decided: Job ids the seeker already decided on
            saved_set: Job ids the seeker has saved
            now: Decision timestamp, defaults to the current UTC time

        Returns:
            DecisionResult with ordered intents, or Conflict when the job
            was already decided

        Raises:
            ValidationError: If the seeker, job or action is malformed
        """
        action = self._validate(seeker_id, job, action)

        if job.id in decided:
            logger.info(f"Conflict: seeker {seeker_id} already decided on job {job.id}")
            return Conflict(seeker_id=seeker_id, job_id=job.id, action=action)

        now = now or utcnow()
        swipe = SwipeRecord(seeker_id=seeker_id, job_id=job.id, action=action, swiped_at=now)
        intents: List[Intent] = [RecordSwipe(swipe=swipe)]
        application = None
        next_saved = frozenset(saved_set)

        if action == DecisionAction.APPLY:
            application = Application(
                id=str(uuid.uuid4()),
                job_id=job.id,
                applicant_id=seeker_id,
                employer_id=job.employer_id,
                status=ApplicationStatus.APPLIED,
                applied_at=now,
            )
            intents.append(CreateApplication(application=application))
            intents.append(
                BootstrapConversation(
                    message=ConversationMessage(
                        conversation_id=f"conv_{uuid.uuid4().hex}",
                        sender_id=seeker_id,
                        recipient_id=job.employer_id,
                        job_id=job.id,
                        application_id=application.id,
                        content=greeting_message(job),
                        sent_at=now,
                    )
                )
            )
            if job.id not in saved_set:
                intents.append(
                    ToggleSave(seeker_id=seeker_id, job_id=job.id, saved=True, automatic=True)
                )
                next_saved = next_saved | {job.id}

        intents.append(ExcludeFromFeed(seeker_id=seeker_id, job_id=job.id, reason=action.value))

        logger.info(f"Seeker {seeker_id} {action.value} job {job.id}: {len(intents)} intents")

        return DecisionResult(
            seeker_id=seeker_id,
            job_id=job.id,
            action=action,
            swipe=swipe,
            application=application,
            intents=intents,
            next_decided=frozenset(decided) | {job.id},
            next_saved=next_saved,
        )

    def _validate(
        self, seeker_id: str, job: JobPosting, action: Union[DecisionAction, str]
    ) -> DecisionAction:
        if not seeker_id or not str(seeker_id).strip():
            raise ValidationError("seeker_id is required")
        if job is None or not job.id or not job.id.strip():
            raise ValidationError("job id is required")
        try:
            action = DecisionAction(action)
        except ValueError:
            raise ValidationError(f"Unknown decision action: {action}")
        if action not in SWIPE_ACTIONS:
            raise ValidationError(
                f"'{action.value}' is not an apply/pass decision; use SavedSetManager"
            )
        return action
