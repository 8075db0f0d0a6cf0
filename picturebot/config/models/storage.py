"""Storage backend configuration models."""

from typing import Literal

from pydantic import BaseModel, Field

BackendType = Literal["inmemory", "redis"]
LockBackendType = Literal["local", "redis"]


class RedisStateConfig(BaseModel):
    """Redis state store configuration."""

    connection_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL (prefer env var)",
    )
    key_prefix: str = Field(
        default="picturebot:conversation",
        description="Redis key prefix for conversation records",
    )
    ttl_seconds: int | None = Field(
        default=None,
        gt=0,
        description="Expire idle conversations after this many seconds (None keeps them)",
    )


class LockConfig(BaseModel):
    """Per-conversation turn serialization."""

    backend: LockBackendType = Field(
        default="local",
        description="local = in-process asyncio locks, redis = distributed mutex",
    )
    lock_timeout: int = Field(
        default=30,
        gt=0,
        description="How long a redis lock is held before auto-release (seconds)",
    )
    blocking_timeout: float | None = Field(
        default=None,
        gt=0,
        description=(
            "How long a turn waits for the lock (seconds). None queues behind the "
            "running turn however long it takes"
        ),
    )


class StorageConfig(BaseModel):
    """Configuration for conversation state storage."""

    backend: BackendType = Field(
        default="inmemory",
        description="State store backend",
    )
    redis: RedisStateConfig = Field(
        default_factory=RedisStateConfig,
        description="Redis backend settings",
    )
    lock: LockConfig = Field(
        default_factory=LockConfig,
        description="Turn serialization settings",
    )
