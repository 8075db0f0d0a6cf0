"""External collaborator configuration models.

Credentials are read once at startup and passed into the adapter
constructors. Keys should come from environment variables
(PICTUREBOT_PROVIDERS__INTENT__API_KEY, PICTUREBOT_PROVIDERS__SEARCH__API_KEY),
never from committed config files.
"""

from typing import Literal

from pydantic import BaseModel, Field, SecretStr

IntentProviderType = Literal["luis", "mock"]
SearchProviderType = Literal["azure", "mock"]


class IntentProviderConfig(BaseModel):
    """Configuration for the intent classifier."""

    provider: IntentProviderType = Field(
        default="mock",
        description="Provider type",
    )
    endpoint: str | None = Field(
        default=None,
        description="Prediction endpoint base URL, e.g. https://westus.api.cognitive.microsoft.com",
    )
    app_id: str | None = Field(
        default=None,
        description="LUIS application id",
    )
    api_key: SecretStr | None = Field(
        default=None,
        description="Prediction key (prefer env var)",
    )
    slot: Literal["production", "staging"] = Field(
        default="production",
        description="Published slot to query",
    )
    timeout: float = Field(
        default=10.0,
        gt=0,
        description="Request timeout in seconds",
    )


class SearchProviderConfig(BaseModel):
    """Configuration for the image search index."""

    provider: SearchProviderType = Field(
        default="mock",
        description="Provider type",
    )
    service_name: str | None = Field(
        default=None,
        description="Search service name ({service_name}.search.windows.net)",
    )
    index_name: str = Field(
        default="images",
        description="Index to query",
    )
    api_key: SecretStr | None = Field(
        default=None,
        description="Query API key (prefer env var)",
    )
    api_version: str = Field(
        default="2023-11-01",
        description="REST API version",
    )
    top: int = Field(
        default=5,
        gt=0,
        le=50,
        description="Maximum hits returned per query",
    )
    timeout: float = Field(
        default=10.0,
        gt=0,
        description="Request timeout in seconds",
    )


class ProvidersConfig(BaseModel):
    """Configuration for all external collaborators."""

    intent: IntentProviderConfig = Field(
        default_factory=IntentProviderConfig,
        description="Intent classifier",
    )
    search: SearchProviderConfig = Field(
        default_factory=SearchProviderConfig,
        description="Image search index",
    )
