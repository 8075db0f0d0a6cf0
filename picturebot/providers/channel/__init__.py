"""Output channels."""

from picturebot.providers.channel.base import OutputChannel
from picturebot.providers.channel.inmemory import InMemoryChannel

__all__ = ["OutputChannel", "InMemoryChannel"]
