"""Conversation domain models.

- ConversationState for what the bot remembers between turns
- DialogStack / DialogStackFrame for dialog progress
- ConversationRecord as the persisted unit
- Inbound/outbound activity shapes
"""

from picturebot.conversation.models.activity import (
    InboundMessage,
    OutboundMessage,
    SearchHit,
)
from picturebot.conversation.models.enums import ActivityType
from picturebot.conversation.models.record import ConversationRecord
from picturebot.conversation.models.stack import DialogStack, DialogStackFrame
from picturebot.conversation.models.state import ConversationState

__all__ = [
    # Enums
    "ActivityType",
    # State
    "ConversationState",
    "DialogStack",
    "DialogStackFrame",
    "ConversationRecord",
    # Activities
    "InboundMessage",
    "OutboundMessage",
    "SearchHit",
]
