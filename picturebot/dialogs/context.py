"""Dialog context: the interpreter that drives the dialog stack.

One DialogContext exists per turn. It resolves the active frame to its
waterfall dialog, runs the step at the frame's index and applies the
returned StepResult:

- Next: advance the frame and keep going
- EndDialog: pop the frame, advance the parent past the step that began it
  and keep going with the parent
- BeginDialog: push a child frame at step 0 and keep going with the child
- PromptAndSuspend: send the prompt, advance the frame, mark it as waiting
  for an answer and stop

The loop stops when a prompt suspends the turn or the stack empties. The
record is committed after every change to the stack so that a failure
mid-turn keeps the progress already made.
"""

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from picturebot.conversation.models import (
    ConversationRecord,
    DialogStack,
    DialogStackFrame,
)
from picturebot.dialogs.results import (
    BeginDialog,
    EndDialog,
    Next,
    PromptAndSuspend,
    StepResult,
)
from picturebot.dialogs.turn import TurnContext
from picturebot.errors import ConfigurationError, DialogLoopError
from picturebot.observability.logging import get_logger
from picturebot.observability.metrics import DIALOG_TRANSITIONS

if TYPE_CHECKING:
    from picturebot.dialogs.dialog_set import DialogSet

logger = get_logger(__name__)


class DialogContext:
    """Runs the conversation's dialog stack for one turn."""

    def __init__(
        self,
        dialogs: "DialogSet",
        turn: TurnContext,
        record: ConversationRecord,
        commit: Callable[[], Awaitable[None]],
        max_transitions: int = 100,
    ) -> None:
        """Initialize the dialog context.

        Args:
            dialogs: Registered dialogs
            turn: The current turn
            record: Checked-out conversation record (state and stack)
            commit: Persists the record; failures propagate
            max_transitions: Step runs allowed per turn before DialogLoopError
        """
        self._dialogs = dialogs
        self.turn = turn
        self.record = record
        self._commit = commit
        self._max_transitions = max_transitions

    @property
    def stack(self) -> DialogStack:
        return self.record.stack

    async def commit(self) -> None:
        await self._commit()

    async def continue_dialog(self) -> bool:
        """Resume the active dialog with this turn's input.

        Returns:
            Whether anything was sent this turn. False straight away when
            no dialog is active.
        """
        frame = self.stack.active
        if frame is None:
            return False

        if frame.suspended_on_prompt:
            frame.result = self.turn.utterance
            frame.suspended_on_prompt = False
            logger.debug(
                "prompt_answered",
                dialog_id=frame.dialog_id,
                step_index=frame.step_index,
            )

        await self._run()
        return self.turn.responded

    async def begin_dialog(self, dialog_id: str, options: dict[str, Any] | None = None) -> bool:
        """Push a new frame for dialog_id and run it.

        Always pushes a fresh frame, even when the same dialog is already
        on the stack.

        Returns:
            Whether anything was sent this turn
        """
        await self._push(dialog_id, options)
        await self._run()
        return self.turn.responded

    async def cancel_all_dialogs(self) -> bool:
        """Drop every frame without resuming anything.

        Returns:
            Whether there was anything to cancel
        """
        if self.stack.is_empty():
            return False
        dialog_ids = [frame.dialog_id for frame in self.stack.frames]
        self.stack.clear()
        await self.commit()
        logger.info("dialogs_cancelled", dialog_ids=dialog_ids)
        return True

    async def _run(self) -> None:
        transitions = 0
        while (frame := self.stack.active) is not None:
            transitions += 1
            if transitions > self._max_transitions:
                raise DialogLoopError(
                    f"Turn exceeded {self._max_transitions} step transitions "
                    f"(active dialog {frame.dialog_id!r})"
                )

            dialog = self._dialogs.find(frame.dialog_id)
            step_name = dialog.step_name(frame.step_index)
            result = await dialog.run_step(self, frame)

            DIALOG_TRANSITIONS.labels(dialog_id=frame.dialog_id, transition=result.kind).inc()
            logger.debug(
                "step_completed",
                dialog_id=frame.dialog_id,
                step=step_name,
                step_index=frame.step_index,
                transition=result.kind,
            )

            if await self._apply(frame, result):
                return

    async def _apply(self, frame: DialogStackFrame, result: StepResult) -> bool:
        """Apply a step result. Returns True when the turn is suspended."""
        if isinstance(result, Next):
            frame.step_index += 1
            frame.result = result.result
            await self.commit()
            return False

        if isinstance(result, EndDialog):
            await self._pop(result.result)
            return False

        if isinstance(result, BeginDialog):
            await self._push(result.dialog_id, result.options)
            return False

        if isinstance(result, PromptAndSuspend):
            await self.turn.send(result.prompt)
            frame.step_index += 1
            frame.result = None
            frame.suspended_on_prompt = True
            await self.commit()
            logger.info(
                "prompt_suspended",
                dialog_id=frame.dialog_id,
                resume_index=frame.step_index,
            )
            return True

        raise ConfigurationError(f"Unknown step result: {type(result).__name__}")

    async def _push(self, dialog_id: str, options: dict[str, Any] | None) -> None:
        # Raises DialogNotFoundError before anything is pushed
        self._dialogs.find(dialog_id)
        self.stack.push(DialogStackFrame(dialog_id=dialog_id, options=dict(options or {})))
        await self.commit()
        logger.info("dialog_begun", dialog_id=dialog_id, stack_depth=self.stack.depth)

    async def _pop(self, result: Any | None) -> None:
        ended = self.stack.pop()
        parent = self.stack.active
        if parent is not None:
            # The parent's current step began the child; resume after it
            parent.step_index += 1
            parent.result = result
        await self.commit()
        logger.info(
            "dialog_ended",
            dialog_id=ended.dialog_id,
            resumed=parent.dialog_id if parent is not None else None,
            stack_depth=self.stack.depth,
        )
