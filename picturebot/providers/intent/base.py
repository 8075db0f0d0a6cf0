"""Intent classification models and interface.

Raw intent names from the classifier are mapped to the closed Intent enum
here, at the adapter boundary; dialog steps only ever see enum members.
"""

from abc import ABC, abstractmethod
from enum import Enum

from pydantic import BaseModel, Field


class Intent(str, Enum):
    """Intents the main menu knows how to route."""

    NONE = "None"
    GREETING = "Greeting"
    ORDER_PIC = "OrderPic"
    SHARE_PIC = "SharePic"
    SEARCH_PICS = "SearchPics"
    UNRECOGNIZED = "__unrecognized__"

    @classmethod
    def from_name(cls, name: str) -> "Intent":
        """Map a classifier intent name; unknown names are UNRECOGNIZED."""
        try:
            intent = cls(name)
        except ValueError:
            return cls.UNRECOGNIZED
        return intent


class QuickIntent(str, Enum):
    """Intents a cheap keyword pre-classifier can name with confidence."""

    SEARCH = "search"
    SHARE = "share"
    ORDER = "order"
    HELP = "help"


class ScoredIntent(BaseModel):
    """Top-ranked intent with its confidence."""

    intent: Intent = Field(..., description="Mapped intent")
    name: str = Field(..., description="Intent name as the classifier reported it")
    score: float = Field(default=0.0, ge=0.0, le=1.0, description="Confidence")

    @classmethod
    def from_prediction(cls, name: str, score: float) -> "ScoredIntent":
        return cls(intent=Intent.from_name(name), name=name, score=score)


class IntentResult(BaseModel):
    """Classifier output, read-only for dialog steps."""

    top_intent: ScoredIntent | None = Field(default=None)
    entities: dict[str, list[str]] = Field(
        default_factory=dict, description="Entity role -> extracted values"
    )

    def entity(self, role: str) -> list[str] | None:
        """Values extracted for a role, None when the role is absent."""
        return self.entities.get(role)


class IntentClassifier(ABC):
    """Abstract interface for natural-language intent classification."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name."""
        pass

    @abstractmethod
    async def classify(self, utterance: str, conversation_id: str | None = None) -> IntentResult:
        """Classify an utterance.

        Raises:
            ClassifierError: If the classifier is unreachable or errors
        """
        pass
