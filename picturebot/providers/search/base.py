"""Image search interface."""

from abc import ABC, abstractmethod

from picturebot.conversation.models import SearchHit


class SearchProvider(ABC):
    """Abstract interface for the image search index.

    An empty result list is a normal outcome, not an error.
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name."""
        pass

    @abstractmethod
    async def search(self, query: str) -> list[SearchHit]:
        """Return hits for a query, best first.

        Raises:
            SearchError: If the index is unreachable or errors
        """
        pass
