"""Keyword pre-classifier consulted before the remote classifier."""

import re

from picturebot.providers.intent.base import QuickIntent


class RegexRecognizer:
    """Match an utterance against one case-insensitive pattern per intent.

    Patterns are tried in insertion order and the first match wins.
    """

    def __init__(self, patterns: dict[str, str]) -> None:
        self._patterns: list[tuple[QuickIntent, re.Pattern[str]]] = [
            (QuickIntent(name), re.compile(pattern, re.IGNORECASE))
            for name, pattern in patterns.items()
        ]

    def recognize(self, utterance: str) -> QuickIntent | None:
        text = utterance.strip()
        for intent, pattern in self._patterns:
            if pattern.search(text):
                return intent
        return None
