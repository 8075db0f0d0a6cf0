"""Dialog engine configuration."""

from pydantic import BaseModel, Field


def _default_patterns() -> dict[str, str]:
    return {
        "search": r"search picture(?:s)*(.*)|search pic(?:s)*(.*)",
        "share": r"share picture(?:s)*(.*)|share pic(?:s)*(.*)",
        "order": r"order picture(?:s)*(.*)|order print(?:s)*(.*)|order pic(?:s)*(.*)",
        "help": r"help(.*)",
    }


class DialogsConfig(BaseModel):
    """Dialog engine and quick-intent settings."""

    main_dialog: str = Field(
        default="mainDialog",
        description="Dialog begun when nothing on the stack handled the turn",
    )
    max_transitions: int = Field(
        default=100,
        gt=0,
        description="Maximum step transitions per turn before aborting",
    )
    quick_intents: dict[str, str] = Field(
        default_factory=_default_patterns,
        description="Quick intent name -> case-insensitive regex",
    )
