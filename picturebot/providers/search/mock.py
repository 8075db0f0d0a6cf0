"""Mock search provider for testing."""

from picturebot.conversation.models import SearchHit
from picturebot.providers.search.base import SearchProvider


class MockSearchProvider(SearchProvider):
    """Serves canned hits keyed by exact query.

    Unknown queries return no hits. Set `error` to make every call fail.
    """

    def __init__(
        self,
        results: dict[str, list[SearchHit]] | None = None,
        error: Exception | None = None,
    ):
        self._results = results or {}
        self.error = error
        self.queries: list[str] = []

    @property
    def provider_name(self) -> str:
        return "mock"

    def add_results(self, query: str, hits: list[SearchHit]) -> None:
        self._results[query] = list(hits)

    async def search(self, query: str) -> list[SearchHit]:
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return list(self._results.get(query, []))
