"""Test factories for creating test data."""

from tests.factories.conversation import (
    ConversationRecordFactory,
    IntentResultFactory,
    SearchHitFactory,
)

__all__ = [
    "ConversationRecordFactory",
    "IntentResultFactory",
    "SearchHitFactory",
]
