"""LUIS intent classifier (v3 prediction API)."""

from typing import Any

import httpx
from pydantic import ValidationError

from picturebot.errors import ClassifierError
from picturebot.observability.logging import get_logger
from picturebot.providers.intent.base import IntentClassifier, IntentResult, ScoredIntent

logger = get_logger(__name__)


def _entity_values(raw: Any) -> list[str]:
    """Flatten a LUIS entity value into strings.

    List entities arrive as nested lists (e.g. [["cats"]]); other
    structured values are kept in their string form.
    """
    if isinstance(raw, list):
        values: list[str] = []
        for item in raw:
            values.extend(_entity_values(item))
        return values
    if raw is None:
        return []
    return [raw if isinstance(raw, str) else str(raw)]


class LuisIntentClassifier(IntentClassifier):
    """Intent classifier backed by a published LUIS application."""

    PATH = "/luis/prediction/v3.0/apps/{app_id}/slots/{slot}/predict"

    def __init__(
        self,
        endpoint: str,
        app_id: str,
        api_key: str,
        slot: str = "production",
        timeout: float = 10.0,
    ):
        """Initialize LUIS classifier.

        Args:
            endpoint: Prediction endpoint base URL
            app_id: LUIS application id
            api_key: Prediction key
            slot: Published slot (production or staging)
            timeout: Request timeout in seconds
        """
        if not (endpoint and app_id and api_key):
            raise ValueError("LUIS endpoint, app_id and api_key are required")

        self._url = endpoint.rstrip("/") + self.PATH.format(app_id=app_id, slot=slot)
        self._api_key = api_key
        self._client = httpx.AsyncClient(timeout=timeout)

    @property
    def provider_name(self) -> str:
        return "luis"

    async def classify(self, utterance: str, conversation_id: str | None = None) -> IntentResult:
        headers = {"Ocp-Apim-Subscription-Key": self._api_key}
        params = {"query": utterance, "show-all-intents": "false"}

        logger.debug(
            "luis_predict_request",
            conversation_id=conversation_id,
            query_len=len(utterance),
        )

        try:
            response = await self._client.get(self._url, headers=headers, params=params)
        except httpx.HTTPError as e:
            logger.error("luis_request_failed", error=str(e))
            raise ClassifierError(f"LUIS request failed: {e}", cause=e) from e

        if response.status_code != 200:
            logger.error(
                "luis_predict_error",
                status_code=response.status_code,
                error=response.text,
            )
            raise ClassifierError(f"LUIS API error ({response.status_code}): {response.text}")

        try:
            return self._parse(response.json())
        except (ValueError, KeyError, TypeError, AttributeError, ValidationError) as e:
            logger.error("luis_response_invalid", error=str(e))
            raise ClassifierError(f"Invalid LUIS response: {e}", cause=e) from e

    def _parse(self, data: dict[str, Any]) -> IntentResult:
        prediction = data.get("prediction") or {}

        top_intent = None
        name = prediction.get("topIntent")
        if name:
            score = (prediction.get("intents") or {}).get(name, {}).get("score", 0.0)
            top_intent = ScoredIntent.from_prediction(name, float(score))

        entities = {
            role: _entity_values(value)
            for role, value in (prediction.get("entities") or {}).items()
            if not role.startswith("$")
        }

        logger.debug(
            "luis_predict_success",
            top_intent=name,
            entity_roles=sorted(entities),
        )
        return IntentResult(top_intent=top_intent, entities=entities)

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "LuisIntentClassifier":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()
