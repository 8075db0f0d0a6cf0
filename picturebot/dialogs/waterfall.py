"""Waterfall dialogs: a named, ordered sequence of async steps."""

from collections.abc import Awaitable, Callable, Sequence
from typing import TYPE_CHECKING, Any

from picturebot.conversation.models import ConversationState, DialogStackFrame
from picturebot.conversation.models.activity import OutboundMessage
from picturebot.dialogs.results import (
    BeginDialog,
    EndDialog,
    Next,
    PromptAndSuspend,
    StepResult,
)
from picturebot.dialogs.turn import TurnContext
from picturebot.errors import ConfigurationError

if TYPE_CHECKING:
    from picturebot.dialogs.context import DialogContext


class WaterfallStepContext:
    """What a step sees: the turn, the conversation state and its frame.

    `result` holds the prompt answer when the frame resumes from a prompt,
    or whatever the previous step or a finished child dialog handed over.
    """

    def __init__(self, dc: "DialogContext", frame: DialogStackFrame, step_name: str) -> None:
        self._dc = dc
        self._frame = frame
        self.step_name = step_name

    @property
    def turn(self) -> TurnContext:
        return self._dc.turn

    @property
    def state(self) -> ConversationState:
        return self._dc.record.state

    @property
    def dialog_id(self) -> str:
        return self._frame.dialog_id

    @property
    def index(self) -> int:
        return self._frame.step_index

    @property
    def options(self) -> dict[str, Any]:
        return self._frame.options

    @property
    def result(self) -> Any | None:
        return self._frame.result

    async def send(self, message: OutboundMessage | str) -> None:
        await self._dc.turn.send(message)

    async def commit(self) -> None:
        """Persist conversation state now rather than at the next transition."""
        await self._dc.commit()

    def next(self, result: Any | None = None) -> Next:
        return Next(result)

    def end_dialog(self, result: Any | None = None) -> EndDialog:
        return EndDialog(result)

    def begin_dialog(self, dialog_id: str, options: dict[str, Any] | None = None) -> BeginDialog:
        return BeginDialog(dialog_id, options)

    def prompt(self, text: str) -> PromptAndSuspend:
        return PromptAndSuspend(text)


WaterfallStep = Callable[[WaterfallStepContext], Awaitable[StepResult]]


class WaterfallDialog:
    """A dialog that advances through its steps one invocation at a time.

    Running past the last step behaves as EndDialog with the frame's
    current result.
    """

    def __init__(self, dialog_id: str, steps: Sequence[WaterfallStep]) -> None:
        if not dialog_id:
            raise ConfigurationError("Dialog id must not be empty")
        if not steps:
            raise ConfigurationError(f"Dialog {dialog_id!r} has no steps")
        self.dialog_id = dialog_id
        self._steps = list(steps)

    def step_name(self, index: int) -> str:
        if index >= len(self._steps):
            return "<end>"
        step = self._steps[index]
        return getattr(step, "__name__", f"step{index}")

    async def run_step(self, dc: "DialogContext", frame: DialogStackFrame) -> StepResult:
        """Invoke the step at the frame's index."""
        if frame.step_index >= len(self._steps):
            return EndDialog(frame.result)

        step_context = WaterfallStepContext(dc, frame, self.step_name(frame.step_index))
        result = await self._steps[frame.step_index](step_context)
        if not isinstance(result, StepResult):
            raise ConfigurationError(
                f"Step {step_context.step_name!r} of {self.dialog_id!r} "
                f"returned {type(result).__name__}, expected a StepResult"
            )
        return result
