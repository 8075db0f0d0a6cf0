"""Image search providers."""

from picturebot.providers.search.azure import AzureSearchProvider
from picturebot.providers.search.base import SearchProvider
from picturebot.providers.search.mock import MockSearchProvider

__all__ = [
    "SearchProvider",
    "AzureSearchProvider",
    "MockSearchProvider",
]
