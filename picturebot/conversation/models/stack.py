"""Dialog stack models.

The stack is persisted with the conversation so that a dialog suspended on
a prompt resumes at the right step on the next inbound message, possibly
in a different process.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class DialogStackFrame(BaseModel):
    """One active invocation of a waterfall dialog.

    step_index is a valid index into the dialog's steps, or equal to the
    number of steps meaning the dialog is about to end.
    """

    model_config = ConfigDict(frozen=False, validate_assignment=True)

    dialog_id: str = Field(..., description="Registered dialog name")
    step_index: int = Field(default=0, ge=0, description="Next step to run")
    options: dict[str, Any] = Field(
        default_factory=dict, description="Arguments the dialog was begun with"
    )
    result: Any | None = Field(
        default=None, description="Value handed to the next step"
    )
    suspended_on_prompt: bool = Field(
        default=False,
        description="Next inbound utterance is the answer to a prompt",
    )


class DialogStack(BaseModel):
    """LIFO stack of dialog frames, last element is the active frame."""

    model_config = ConfigDict(frozen=False)

    frames: list[DialogStackFrame] = Field(default_factory=list)

    @property
    def active(self) -> DialogStackFrame | None:
        return self.frames[-1] if self.frames else None

    @property
    def depth(self) -> int:
        return len(self.frames)

    def is_empty(self) -> bool:
        return not self.frames

    def push(self, frame: DialogStackFrame) -> DialogStackFrame:
        self.frames.append(frame)
        return frame

    def pop(self) -> DialogStackFrame:
        if not self.frames:
            raise IndexError("pop from empty dialog stack")
        return self.frames.pop()

    def clear(self) -> None:
        self.frames.clear()
