"""In-memory implementation of StateStore."""

from datetime import UTC, datetime

from picturebot.conversation.models import ConversationRecord
from picturebot.conversation.store import StateStore


class InMemoryStateStore(StateStore):
    """In-memory StateStore for testing and development.

    Records are copied on the way in and out so that a turn mutating its
    checked-out record never changes stored state without a save.
    Not suitable for production use.
    """

    def __init__(self) -> None:
        self._records: dict[str, ConversationRecord] = {}

    async def get(self, conversation_id: str) -> ConversationRecord | None:
        record = self._records.get(conversation_id)
        return record.model_copy(deep=True) if record is not None else None

    async def save(self, record: ConversationRecord) -> None:
        record.last_activity_at = datetime.now(UTC)
        self._records[record.conversation_id] = record.model_copy(deep=True)

    async def delete(self, conversation_id: str) -> bool:
        if conversation_id in self._records:
            del self._records[conversation_id]
            return True
        return False

    def __len__(self) -> int:
        return len(self._records)
