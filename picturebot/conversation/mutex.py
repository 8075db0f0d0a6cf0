"""Per-conversation turn serialization.

Two turns for the same conversation both read-modify-write the same
record, so turn n+1 must not load state until turn n has saved. Different
conversations never share a lock.
"""

import asyncio
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from redis.asyncio import Redis
from redis.exceptions import LockError, RedisError

from picturebot.errors import LockTimeoutError, StoreConnectionError
from picturebot.observability.logging import get_logger

logger = get_logger(__name__)


class ConversationMutex(ABC):
    """Single-writer guard keyed by conversation identity."""

    @abstractmethod
    def acquire(self, conversation_id: str) -> AsyncIterator[None]:
        """Async context manager holding the conversation's lock.

        Raises:
            LockTimeoutError: If the lock was not acquired in time
        """


class LocalConversationMutex(ConversationMutex):
    """In-process asyncio locks, one per active conversation.

    Locks are dropped once nobody holds or waits on them. With no
    blocking_timeout a turn waits for however long the running turn takes.
    """

    def __init__(self, blocking_timeout: float | None = None) -> None:
        self._blocking_timeout = blocking_timeout
        self._locks: dict[str, asyncio.Lock] = {}
        self._users: dict[str, int] = {}

    @asynccontextmanager
    async def acquire(self, conversation_id: str) -> AsyncIterator[None]:
        lock = self._locks.setdefault(conversation_id, asyncio.Lock())
        self._users[conversation_id] = self._users.get(conversation_id, 0) + 1
        try:
            try:
                async with asyncio.timeout(self._blocking_timeout):
                    await lock.acquire()
            except TimeoutError as e:
                raise LockTimeoutError(
                    f"Timed out waiting for conversation {conversation_id!r}"
                ) from e
            try:
                yield
            finally:
                lock.release()
        finally:
            self._users[conversation_id] -= 1
            if not self._users[conversation_id]:
                del self._users[conversation_id]
                del self._locks[conversation_id]


class RedisConversationMutex(ConversationMutex):
    """Redis-backed distributed lock for multi-process deployments.

    Lock key format: {key_prefix}:{conversation_id}
    """

    def __init__(
        self,
        redis: Redis,
        lock_timeout: int = 30,
        blocking_timeout: float | None = None,
        key_prefix: str = "picturebot:lock",
    ) -> None:
        """Initialize conversation mutex.

        Args:
            redis: Redis client instance
            lock_timeout: How long a lock is held before auto-release (seconds)
            blocking_timeout: How long to wait when trying to acquire (seconds,
                None waits until the lock is free)
            key_prefix: Redis key prefix for lock keys
        """
        self._redis = redis
        self._lock_timeout = lock_timeout
        self._blocking_timeout = blocking_timeout
        self._key_prefix = key_prefix

    def _key(self, conversation_id: str) -> str:
        return f"{self._key_prefix}:{conversation_id}"

    @asynccontextmanager
    async def acquire(self, conversation_id: str) -> AsyncIterator[None]:
        lock = self._redis.lock(
            self._key(conversation_id),
            timeout=self._lock_timeout,
            blocking_timeout=self._blocking_timeout,
        )
        try:
            acquired = await lock.acquire()
        except RedisError as e:
            raise StoreConnectionError(f"Failed to acquire conversation lock: {e}", cause=e) from e
        if not acquired:
            raise LockTimeoutError(f"Timed out waiting for conversation {conversation_id!r}")

        try:
            yield
        finally:
            try:
                await lock.release()
            except LockError:
                # Expired mid-turn; another writer may already hold it
                logger.warning("conversation_lock_expired", conversation_id=conversation_id)
