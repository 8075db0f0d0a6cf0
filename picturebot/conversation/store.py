"""StateStore abstract interface."""

from abc import ABC, abstractmethod

from picturebot.conversation.models import ConversationRecord


class StateStore(ABC):
    """Abstract interface for conversation state storage.

    Keyed by conversation identity. A record is created lazily on first
    load and never deleted by the bot itself.
    """

    @abstractmethod
    async def get(self, conversation_id: str) -> ConversationRecord | None:
        """Get a stored record, None if the conversation is new."""
        pass

    @abstractmethod
    async def save(self, record: ConversationRecord) -> None:
        """Persist a record.

        Raises:
            StateStoreError: If the write did not commit
        """
        pass

    @abstractmethod
    async def delete(self, conversation_id: str) -> bool:
        """Delete a stored record."""
        pass

    async def load(self, conversation_id: str) -> ConversationRecord:
        """Get the stored record or a default one for a new conversation."""
        record = await self.get(conversation_id)
        if record is None:
            record = ConversationRecord(conversation_id=conversation_id)
        return record
