"""Per-conversation bot state."""

from pydantic import BaseModel, ConfigDict, Field


class ConversationState(BaseModel):
    """What the bot remembers about a conversation between turns.

    A non-empty search_term means a search dialog is in progress or
    about to begin.
    """

    model_config = ConfigDict(frozen=False, validate_assignment=True)

    greeted: bool = Field(default=False, description="Welcome message already sent")
    search_term: str = Field(default="", description="Pending search query")
    awaiting_search_input: bool = Field(
        default=False,
        description="Search dialog has prompted, or the term was pre-filled",
    )

    def reset_search(self) -> None:
        """Clear any pending search."""
        self.search_term = ""
        self.awaiting_search_input = False
