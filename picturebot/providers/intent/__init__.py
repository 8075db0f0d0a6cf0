"""Intent classification: remote classifier and keyword pre-classifier."""

from picturebot.providers.intent.base import (
    Intent,
    IntentClassifier,
    IntentResult,
    QuickIntent,
    ScoredIntent,
)
from picturebot.providers.intent.luis import LuisIntentClassifier
from picturebot.providers.intent.mock import MockIntentClassifier
from picturebot.providers.intent.regex import RegexRecognizer

__all__ = [
    "Intent",
    "IntentClassifier",
    "IntentResult",
    "QuickIntent",
    "ScoredIntent",
    "LuisIntentClassifier",
    "MockIntentClassifier",
    "RegexRecognizer",
]
