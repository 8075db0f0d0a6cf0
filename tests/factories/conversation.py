"""Test factories for conversation and provider models."""

from picturebot.conversation.models import (
    ConversationRecord,
    ConversationState,
    DialogStack,
    DialogStackFrame,
    SearchHit,
)
from picturebot.providers.intent import IntentResult, ScoredIntent


class ConversationRecordFactory:
    """Factory for creating ConversationRecord instances for testing."""

    @staticmethod
    def create(
        *,
        conversation_id: str = "conv-1",
        greeted: bool = False,
        search_term: str = "",
        awaiting_search_input: bool = False,
        frames: list[DialogStackFrame] | None = None,
        turn_count: int = 0,
    ) -> ConversationRecord:
        return ConversationRecord(
            conversation_id=conversation_id,
            state=ConversationState(
                greeted=greeted,
                search_term=search_term,
                awaiting_search_input=awaiting_search_input,
            ),
            stack=DialogStack(frames=frames or []),
            turn_count=turn_count,
        )


class SearchHitFactory:
    """Factory for creating SearchHit instances for testing."""

    @staticmethod
    def create(key: str = "img-1", title: str = "cat.jpg", **kwargs) -> SearchHit:
        kwargs.setdefault("image_url", f"https://images.example.com/{title}")
        return SearchHit(key=key, title=title, **kwargs)

    @staticmethod
    def create_batch(count: int, prefix: str = "img") -> list[SearchHit]:
        return [
            SearchHitFactory.create(key=f"{prefix}-{i}", title=f"{prefix}-{i}.jpg")
            for i in range(count)
        ]


class IntentResultFactory:
    """Factory for creating IntentResult instances for testing."""

    @staticmethod
    def create(
        intent: str | None = None,
        score: float = 0.9,
        entities: dict[str, list[str]] | None = None,
    ) -> IntentResult:
        top = ScoredIntent.from_prediction(intent, score) if intent is not None else None
        return IntentResult(top_intent=top, entities=entities or {})
