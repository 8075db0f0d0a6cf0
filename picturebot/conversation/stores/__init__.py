"""State stores for conversation records."""

from picturebot.conversation.store import StateStore
from picturebot.conversation.stores.inmemory import InMemoryStateStore
from picturebot.conversation.stores.redis import RedisStateStore

__all__ = [
    "StateStore",
    "InMemoryStateStore",
    "RedisStateStore",
]
