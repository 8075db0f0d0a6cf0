"""Enums for conversation domain."""

from enum import Enum


class ActivityType(str, Enum):
    """Kinds of inbound activity a channel can deliver.

    Only MESSAGE drives dialog progress; the others are acknowledged
    and ignored by the turn router.
    """

    MESSAGE = "message"
    CONVERSATION_UPDATE = "conversationUpdate"
    TYPING = "typing"
    EVENT = "event"
    END_OF_CONVERSATION = "endOfConversation"
