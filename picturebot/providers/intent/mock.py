"""Mock intent classifier for testing."""

from typing import Any

from picturebot.providers.intent.base import IntentClassifier, IntentResult, ScoredIntent


class MockIntentClassifier(IntentClassifier):
    """Returns scripted results without calling a remote service.

    Results are looked up by exact utterance, falling back to the default
    (no top intent unless configured). Set `error` to make every call fail.
    """

    def __init__(
        self,
        default: IntentResult | None = None,
        responses: dict[str, IntentResult] | None = None,
        error: Exception | None = None,
    ):
        self._default = default or IntentResult()
        self._responses = responses or {}
        self.error = error
        self._call_history: list[dict[str, Any]] = []

    @property
    def provider_name(self) -> str:
        return "mock"

    @property
    def call_history(self) -> list[dict[str, Any]]:
        """History of calls for testing assertions."""
        return self._call_history

    def set_response(
        self,
        utterance: str,
        intent: str | None,
        score: float = 1.0,
        entities: dict[str, list[str]] | None = None,
    ) -> None:
        """Script the result for an utterance from a raw intent name."""
        top = ScoredIntent.from_prediction(intent, score) if intent is not None else None
        self._responses[utterance] = IntentResult(top_intent=top, entities=entities or {})

    async def classify(self, utterance: str, conversation_id: str | None = None) -> IntentResult:
        self._call_history.append({
            "utterance": utterance,
            "conversation_id": conversation_id,
        })
        if self.error is not None:
            raise self.error
        return self._responses.get(utterance, self._default)
