"""
Side-effect intents emitted by the decision engine.

Each intent is a plain record describing work for a storage adapter. The
engine never performs I/O itself.
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .models import Application, ConversationMessage, SwipeRecord


class _Intent(BaseModel):
    model_config = ConfigDict(frozen=True)


class RecordSwipe(_Intent):
    kind: Literal["record_swipe"] = "record_swipe"
    swipe: SwipeRecord


class CreateApplication(_Intent):
    kind: Literal["create_application"] = "create_application"
    application: Application


class BootstrapConversation(_Intent):
    """Opens a conversation with the employer using a greeting message."""

    kind: Literal["bootstrap_conversation"] = "bootstrap_conversation"
    message: ConversationMessage


class ToggleSave(_Intent):
    """
    Adds or removes a job from the seeker's saved set.

    `automatic` marks the save that accompanies an application; it may be
    persisted on a best-effort basis.
    """

    kind: Literal["toggle_save"] = "toggle_save"
    seeker_id: str
    job_id: str
    saved: bool
    automatic: bool = False


class ExcludeFromFeed(_Intent):
    kind: Literal["exclude_from_feed"] = "exclude_from_feed"
    seeker_id: str
    job_id: str
    reason: Optional[str] = None


Intent = Annotated[
    Union[RecordSwipe, CreateApplication, BootstrapConversation, ToggleSave, ExcludeFromFeed],
    Field(discriminator="kind"),
]
