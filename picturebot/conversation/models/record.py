"""Persisted conversation record."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

from picturebot.conversation.models.stack import DialogStack
from picturebot.conversation.models.state import ConversationState


def utc_now() -> datetime:
    """Return current UTC time."""
    return datetime.now(UTC)


class ConversationRecord(BaseModel):
    """Everything a state store keeps for one conversation.

    Checked out at the start of a turn and written back whenever the
    dialog stack changes or a step commits.
    """

    model_config = ConfigDict(frozen=False, validate_assignment=True)

    conversation_id: str = Field(..., min_length=1, description="Conversation identity")
    state: ConversationState = Field(default_factory=ConversationState)
    stack: DialogStack = Field(default_factory=DialogStack)
    turn_count: int = Field(default=0, ge=0, description="Message turns handled")
    created_at: datetime = Field(default_factory=utc_now, description="Creation time")
    last_activity_at: datetime = Field(
        default_factory=utc_now, description="Last save time"
    )
