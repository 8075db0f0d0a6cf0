"""Dialog orchestration: waterfall dialogs over a persisted dialog stack."""

from picturebot.dialogs.context import DialogContext
from picturebot.dialogs.dialog_set import DialogSet
from picturebot.dialogs.results import (
    BeginDialog,
    EndDialog,
    Next,
    PromptAndSuspend,
    StepResult,
)
from picturebot.dialogs.turn import TurnContext
from picturebot.dialogs.waterfall import (
    WaterfallDialog,
    WaterfallStep,
    WaterfallStepContext,
)

__all__ = [
    "DialogContext",
    "DialogSet",
    "TurnContext",
    "WaterfallDialog",
    "WaterfallStep",
    "WaterfallStepContext",
    # Step results
    "StepResult",
    "Next",
    "EndDialog",
    "BeginDialog",
    "PromptAndSuspend",
]
