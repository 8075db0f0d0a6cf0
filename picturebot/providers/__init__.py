"""External collaborators: intent classification, image search, output channel.

Abstract interfaces with a production HTTP implementation and a mock for
each.
"""

from picturebot.providers.channel import InMemoryChannel, OutputChannel
from picturebot.providers.intent import IntentClassifier, MockIntentClassifier
from picturebot.providers.search import MockSearchProvider, SearchProvider

__all__ = [
    "IntentClassifier",
    "MockIntentClassifier",
    "SearchProvider",
    "MockSearchProvider",
    "OutputChannel",
    "InMemoryChannel",
]
