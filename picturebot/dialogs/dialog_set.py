"""Registry of dialogs addressable by id from the persisted stack."""

from collections.abc import Awaitable, Callable

from picturebot.conversation.models import ConversationRecord
from picturebot.dialogs.context import DialogContext
from picturebot.dialogs.turn import TurnContext
from picturebot.dialogs.waterfall import WaterfallDialog
from picturebot.errors import DialogNotFoundError, DuplicateDialogError


class DialogSet:
    """Named waterfall dialogs. Ids are what the stack stores."""

    def __init__(self, dialogs: list[WaterfallDialog] | None = None) -> None:
        self._dialogs: dict[str, WaterfallDialog] = {}
        for dialog in dialogs or []:
            self.add(dialog)

    def add(self, dialog: WaterfallDialog) -> "DialogSet":
        if dialog.dialog_id in self._dialogs:
            raise DuplicateDialogError(dialog.dialog_id)
        self._dialogs[dialog.dialog_id] = dialog
        return self

    def find(self, dialog_id: str) -> WaterfallDialog:
        try:
            return self._dialogs[dialog_id]
        except KeyError:
            raise DialogNotFoundError(dialog_id) from None

    def __contains__(self, dialog_id: object) -> bool:
        return dialog_id in self._dialogs

    def create_context(
        self,
        turn: TurnContext,
        record: ConversationRecord,
        commit: Callable[[], Awaitable[None]],
        max_transitions: int = 100,
    ) -> DialogContext:
        """Bind this set to one turn of one conversation."""
        return DialogContext(self, turn, record, commit, max_transitions=max_transitions)
