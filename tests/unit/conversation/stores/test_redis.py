"""Tests for RedisStateStore over a mocked client."""

from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from picturebot.config.models import RedisStateConfig
from picturebot.conversation.models import DialogStackFrame
from picturebot.conversation.stores import RedisStateStore
from picturebot.errors import StateStoreError, StoreConnectionError
from tests.factories import ConversationRecordFactory


@pytest.fixture
def mock_redis():
    """Dict-backed mock Redis client."""
    data: dict[str, str] = {}
    redis = AsyncMock()

    async def _get(key):
        return data.get(key)

    async def _set(key, value, ex=None):
        data[key] = value
        return True

    async def _delete(key):
        return 1 if data.pop(key, None) is not None else 0

    redis.get = AsyncMock(side_effect=_get)
    redis.set = AsyncMock(side_effect=_set)
    redis.delete = AsyncMock(side_effect=_delete)
    redis.data = data
    return redis


@pytest.fixture
def store(mock_redis) -> RedisStateStore:
    return RedisStateStore(mock_redis, RedisStateConfig(key_prefix="test:conv", ttl_seconds=60))


class TestRedisStateStore:
    """Tests for Redis persistence."""

    @pytest.mark.asyncio
    async def test_roundtrip_with_suspended_frame(self, store, mock_redis):
        record = ConversationRecordFactory.create(
            greeted=True,
            frames=[
                DialogStackFrame(dialog_id="mainDialog", step_index=1),
                DialogStackFrame(dialog_id="searchDialog", step_index=1, suspended_on_prompt=True),
            ],
        )

        await store.save(record)
        loaded = await store.get("conv-1")

        assert "test:conv:conv-1" in mock_redis.data
        assert loaded == record

    @pytest.mark.asyncio
    async def test_save_sets_ttl(self, store, mock_redis):
        await store.save(ConversationRecordFactory.create())

        assert mock_redis.set.call_args.kwargs["ex"] == 60

    @pytest.mark.asyncio
    async def test_missing_returns_none(self, store):
        assert await store.get("nobody") is None

    @pytest.mark.asyncio
    async def test_corrupt_document(self, store, mock_redis):
        mock_redis.data["test:conv:conv-1"] = '{"conversation_id": ""}'

        with pytest.raises(StateStoreError):
            await store.get("conv-1")

    @pytest.mark.asyncio
    async def test_connection_errors_wrapped(self, store, mock_redis):
        mock_redis.get.side_effect = RedisConnectionError("refused")
        mock_redis.set.side_effect = RedisConnectionError("refused")

        with pytest.raises(StoreConnectionError):
            await store.get("conv-1")
        with pytest.raises(StoreConnectionError):
            await store.save(ConversationRecordFactory.create())

    @pytest.mark.asyncio
    async def test_delete(self, store):
        await store.save(ConversationRecordFactory.create())

        assert await store.delete("conv-1") is True
        assert await store.delete("conv-1") is False
