"""Step results: the control-flow directive a waterfall step returns.

The dialog context interprets these in a loop; steps never manipulate the
stack directly.
"""

from dataclasses import dataclass
from typing import Any, ClassVar


class StepResult:
    """Base class for step directives."""

    kind: ClassVar[str] = "step"


@dataclass
class Next(StepResult):
    """Run the following step of the same dialog on this turn."""

    result: Any | None = None
    kind: ClassVar[str] = "next"


@dataclass
class EndDialog(StepResult):
    """Pop the current frame and resume the parent at its next step."""

    result: Any | None = None
    kind: ClassVar[str] = "end"


@dataclass
class BeginDialog(StepResult):
    """Push a child dialog; the current frame stays where it is."""

    dialog_id: str
    options: dict[str, Any] | None = None
    kind: ClassVar[str] = "begin"


@dataclass
class PromptAndSuspend(StepResult):
    """Send a prompt and suspend the turn until the next inbound message."""

    prompt: str
    kind: ClassVar[str] = "prompt"
