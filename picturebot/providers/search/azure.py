"""Azure Cognitive Search provider for the images index."""

from typing import Any

import httpx
from pydantic import ValidationError

from picturebot.conversation.models import SearchHit
from picturebot.errors import SearchError
from picturebot.observability.logging import get_logger
from picturebot.providers.search.base import SearchProvider

logger = get_logger(__name__)


class AzureSearchProvider(SearchProvider):
    """Query an Azure Cognitive Search index over its REST API.

    Documents are mapped to SearchHit by field name; anything not mapped
    ends up in SearchHit.metadata.
    """

    URL = "https://{service}.search.windows.net/indexes/{index}/docs/search"

    def __init__(
        self,
        service_name: str,
        api_key: str,
        index_name: str = "images",
        api_version: str = "2023-11-01",
        top: int = 5,
        timeout: float = 10.0,
        key_field: str = "id",
        title_field: str = "FileName",
        image_field: str = "BlobUri",
    ):
        """Initialize Azure search provider.

        Args:
            service_name: Search service name
            api_key: Query key for the service
            index_name: Index to query
            api_version: REST API version
            top: Maximum hits per query
            timeout: Request timeout in seconds
            key_field: Document field holding the key
            title_field: Document field shown as the title
            image_field: Document field holding the image URL
        """
        if not (service_name and api_key):
            raise ValueError("Azure search service_name and api_key are required")

        self._url = self.URL.format(service=service_name, index=index_name)
        self._api_key = api_key
        self._api_version = api_version
        self._top = top
        self._key_field = key_field
        self._title_field = title_field
        self._image_field = image_field
        self._client = httpx.AsyncClient(timeout=timeout)

    @property
    def provider_name(self) -> str:
        return "azure"

    async def search(self, query: str) -> list[SearchHit]:
        headers = {
            "Content-Type": "application/json",
            "api-key": self._api_key,
        }
        payload = {"search": query, "top": self._top}

        try:
            response = await self._client.post(
                self._url,
                headers=headers,
                params={"api-version": self._api_version},
                json=payload,
            )
        except httpx.HTTPError as e:
            logger.error("azure_search_request_failed", error=str(e))
            raise SearchError(f"Search request failed: {e}", cause=e) from e

        if response.status_code != 200:
            logger.error(
                "azure_search_error",
                status_code=response.status_code,
                error=response.text,
            )
            raise SearchError(f"Search API error ({response.status_code}): {response.text}")

        try:
            hits = [self._to_hit(doc) for doc in response.json().get("value", [])]
        except (ValueError, KeyError, TypeError, AttributeError, ValidationError) as e:
            logger.error("azure_search_response_invalid", error=str(e))
            raise SearchError(f"Invalid search response: {e}", cause=e) from e

        logger.debug("azure_search_success", num_results=len(hits))
        return hits

    def _to_hit(self, document: dict[str, Any]) -> SearchHit:
        doc = dict(document)
        score = doc.pop("@search.score", None)
        return SearchHit(
            key=str(doc.pop(self._key_field, "")),
            title=str(doc.pop(self._title_field, "") or ""),
            image_url=str(doc.pop(self._image_field, "") or ""),
            score=score,
            metadata={k: v for k, v in doc.items() if not k.startswith("@")},
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "AzureSearchProvider":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()
