"""Redis implementation of StateStore.

Each conversation is one JSON document under {key_prefix}:{conversation_id}.
"""

from datetime import UTC, datetime

import redis.asyncio as redis
from pydantic import ValidationError

from picturebot.config.models.storage import RedisStateConfig
from picturebot.conversation.models import ConversationRecord
from picturebot.conversation.store import StateStore
from picturebot.errors import StateStoreError, StoreConnectionError
from picturebot.observability.logging import get_logger

logger = get_logger(__name__)


class RedisStateStore(StateStore):
    """Redis-backed StateStore.

    Writes are a single SET, so a record is either fully committed or not
    at all. Any Redis failure surfaces as StoreConnectionError.
    """

    def __init__(
        self,
        client: redis.Redis,
        config: RedisStateConfig | None = None,
    ) -> None:
        """Initialize Redis state store.

        Args:
            client: Redis client instance
            config: Key prefix and TTL (uses defaults if not provided)
        """
        self._client = client
        self._config = config or RedisStateConfig()
        self._prefix = self._config.key_prefix

    def _key(self, conversation_id: str) -> str:
        return f"{self._prefix}:{conversation_id}"

    async def get(self, conversation_id: str) -> ConversationRecord | None:
        try:
            data = await self._client.get(self._key(conversation_id))
        except redis.RedisError as e:
            logger.error(
                "redis_get_error",
                conversation_id=conversation_id,
                error=str(e),
            )
            raise StoreConnectionError(f"Failed to load conversation: {e}", cause=e) from e

        if data is None:
            logger.debug("conversation_not_found", conversation_id=conversation_id)
            return None

        try:
            return ConversationRecord.model_validate_json(data)
        except ValidationError as e:
            raise StateStoreError(
                f"Corrupt conversation record for {conversation_id!r}", cause=e
            ) from e

    async def save(self, record: ConversationRecord) -> None:
        record.last_activity_at = datetime.now(UTC)
        try:
            await self._client.set(
                self._key(record.conversation_id),
                record.model_dump_json(),
                ex=self._config.ttl_seconds,
            )
        except redis.RedisError as e:
            logger.error(
                "redis_save_error",
                conversation_id=record.conversation_id,
                error=str(e),
            )
            raise StoreConnectionError(f"Failed to save conversation: {e}", cause=e) from e

        logger.debug(
            "conversation_saved",
            conversation_id=record.conversation_id,
            stack_depth=record.stack.depth,
        )

    async def delete(self, conversation_id: str) -> bool:
        try:
            return await self._client.delete(self._key(conversation_id)) > 0
        except redis.RedisError as e:
            raise StoreConnectionError(f"Failed to delete conversation: {e}", cause=e) from e

    async def close(self) -> None:
        """Close the Redis connection pool."""
        await self._client.aclose()
