"""Tests for per-conversation turn serialization."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import LockError

from picturebot.conversation.mutex import LocalConversationMutex, RedisConversationMutex
from picturebot.errors import LockTimeoutError, StoreConnectionError


class TestLocalConversationMutex:
    """Tests for in-process locks."""

    @pytest.mark.asyncio
    async def test_same_conversation_serialized(self):
        mutex = LocalConversationMutex()
        order: list[str] = []

        async def turn(name: str) -> None:
            async with mutex.acquire("conv-1"):
                order.append(f"{name}-start")
                await asyncio.sleep(0.01)
                order.append(f"{name}-end")

        await asyncio.gather(turn("a"), turn("b"))

        assert order == ["a-start", "a-end", "b-start", "b-end"]

    @pytest.mark.asyncio
    async def test_different_conversations_do_not_block(self):
        mutex = LocalConversationMutex(blocking_timeout=0.05)

        async with mutex.acquire("conv-1"):
            async with mutex.acquire("conv-2"):
                assert mutex._locks["conv-1"].locked()
                assert mutex._locks["conv-2"].locked()

    @pytest.mark.asyncio
    async def test_timeout(self):
        mutex = LocalConversationMutex(blocking_timeout=0.01)

        async with mutex.acquire("conv-1"):
            with pytest.raises(LockTimeoutError):
                async with mutex.acquire("conv-1"):
                    pass

    @pytest.mark.asyncio
    async def test_waiter_outlasts_slow_holder_by_default(self):
        mutex = LocalConversationMutex()
        holder_entered = asyncio.Event()
        order: list[str] = []

        async def slow_turn() -> None:
            async with mutex.acquire("conv-1"):
                holder_entered.set()
                await asyncio.sleep(0.2)
                order.append("slow")

        async def queued_turn() -> None:
            await holder_entered.wait()
            async with mutex.acquire("conv-1"):
                order.append("queued")

        await asyncio.gather(slow_turn(), queued_turn())

        assert order == ["slow", "queued"]

    @pytest.mark.asyncio
    async def test_lock_dropped_when_unused(self):
        mutex = LocalConversationMutex()

        async with mutex.acquire("conv-1"):
            pass

        assert mutex._locks == {}
        assert mutex._users == {}

    @pytest.mark.asyncio
    async def test_released_on_error(self):
        mutex = LocalConversationMutex()

        with pytest.raises(RuntimeError):
            async with mutex.acquire("conv-1"):
                raise RuntimeError("boom")

        assert mutex._locks == {}


@pytest.fixture
def mock_redis():
    """Create mock Redis client."""
    redis = AsyncMock()

    mock_lock = AsyncMock()
    mock_lock.acquire = AsyncMock(return_value=True)
    mock_lock.release = AsyncMock()

    redis.lock = MagicMock(return_value=mock_lock)
    return redis


class TestRedisConversationMutex:
    """Tests for the Redis-backed lock."""

    @pytest.mark.asyncio
    async def test_acquire_and_release(self, mock_redis):
        mutex = RedisConversationMutex(mock_redis, lock_timeout=10, blocking_timeout=2.0)

        async with mutex.acquire("conv-1"):
            mock_redis.lock.return_value.release.assert_not_called()

        mock_redis.lock.assert_called_once_with(
            "picturebot:lock:conv-1", timeout=10, blocking_timeout=2.0
        )
        mock_redis.lock.return_value.release.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_not_acquired_raises_timeout(self, mock_redis):
        mock_redis.lock.return_value.acquire = AsyncMock(return_value=False)
        mutex = RedisConversationMutex(mock_redis)

        with pytest.raises(LockTimeoutError):
            async with mutex.acquire("conv-1"):
                pass

    @pytest.mark.asyncio
    async def test_connection_error(self, mock_redis):
        mock_redis.lock.return_value.acquire = AsyncMock(
            side_effect=RedisConnectionError("refused")
        )
        mutex = RedisConversationMutex(mock_redis)

        with pytest.raises(StoreConnectionError):
            async with mutex.acquire("conv-1"):
                pass

    @pytest.mark.asyncio
    async def test_expired_lock_on_release_is_tolerated(self, mock_redis):
        mock_redis.lock.return_value.release = AsyncMock(side_effect=LockError("expired"))
        mutex = RedisConversationMutex(mock_redis)

        async with mutex.acquire("conv-1"):
            pass
