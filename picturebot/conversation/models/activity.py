"""Inbound and outbound activity models."""

from typing import Any, Literal

from pydantic import BaseModel, Field

from picturebot.conversation.models.enums import ActivityType


class InboundMessage(BaseModel):
    """An activity delivered to the turn router."""

    kind: str = Field(default=ActivityType.MESSAGE.value, description="Activity type")
    utterance: str = Field(default="", description="Raw user text")
    conversation_id: str = Field(..., min_length=1, description="Conversation identity")

    @property
    def is_message(self) -> bool:
        return self.kind == ActivityType.MESSAGE.value


class SearchHit(BaseModel):
    """One ranked result from the image search index."""

    key: str = Field(..., description="Document key in the index")
    title: str = Field(default="", description="Display title")
    image_url: str = Field(default="", description="Image location")
    score: float | None = Field(default=None, description="Relevance score")
    metadata: dict[str, Any] = Field(
        default_factory=dict, description="Remaining document fields"
    )


class OutboundMessage(BaseModel):
    """A reply sent through the output channel."""

    kind: Literal["text", "results"] = Field(default="text")
    text: str | None = Field(default=None, description="Message text")
    attachments: list[SearchHit] = Field(
        default_factory=list, description="Search hits for a results message"
    )

    @classmethod
    def from_text(cls, text: str) -> "OutboundMessage":
        return cls(kind="text", text=text)

    @classmethod
    def from_hits(cls, title: str, hits: list[SearchHit]) -> "OutboundMessage":
        return cls(kind="results", text=title, attachments=list(hits))
