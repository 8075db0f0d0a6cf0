"""Turn router: the entry point for every inbound activity.

Handles the complete turn lifecycle:
- Serializing turns per conversation (via ConversationMutex)
- Loading and saving the conversation record (via StateStore)
- Continuing the active dialog, or beginning the main dialog when
  nothing on the stack replied
"""

import time

import structlog
from pydantic import BaseModel, Field

from picturebot.bot.main_dialog import MAIN_DIALOG
from picturebot.conversation.models import ConversationRecord, InboundMessage, OutboundMessage
from picturebot.conversation.mutex import ConversationMutex, LocalConversationMutex
from picturebot.conversation.store import StateStore
from picturebot.dialogs import DialogSet, TurnContext
from picturebot.errors import DialogNotFoundError, PictureBotError
from picturebot.observability.logging import get_logger
from picturebot.observability.metrics import TURN_COUNT, TURN_LATENCY
from picturebot.providers.channel import OutputChannel
from picturebot.providers.intent import RegexRecognizer

logger = get_logger(__name__)


class TurnResult(BaseModel):
    """Outcome of one inbound activity."""

    conversation_id: str
    handled: bool = Field(..., description="False for ignored non-message activities")
    replies: list[OutboundMessage] = Field(default_factory=list)
    active_dialog: str | None = Field(
        default=None, description="Dialog waiting for the next message, if any"
    )
    stack_depth: int = Field(default=0, ge=0)


class TurnRouter:
    """Route inbound messages through the conversation's dialog stack.

    Only "message" activities drive dialogs. If continuing the active
    dialog sends nothing (including when no dialog is active), the main
    dialog is begun fresh. That fallback is the only "was anything
    handled" signal; unrecognized input is handled inside the main dialog.

    Store and configuration errors propagate and the turn is not
    reported as successful.
    """

    def __init__(
        self,
        dialogs: DialogSet,
        store: StateStore,
        channel: OutputChannel,
        *,
        mutex: ConversationMutex | None = None,
        recognizer: RegexRecognizer | None = None,
        main_dialog: str = MAIN_DIALOG,
        max_transitions: int = 100,
    ) -> None:
        """Initialize the router.

        Args:
            dialogs: Registered dialogs, must include main_dialog
            store: Conversation state storage
            channel: Where replies go
            mutex: Per-conversation serialization (in-process locks by default)
            recognizer: Keyword pre-classifier run on every message
            main_dialog: Dialog begun when nothing else replied
            max_transitions: Step runs allowed per turn
        """
        # Fail at startup rather than on the first unhandled message
        dialogs.find(main_dialog)

        self._dialogs = dialogs
        self._store = store
        self._channel = channel
        self._mutex = mutex or LocalConversationMutex()
        self._recognizer = recognizer
        self._main_dialog = main_dialog
        self._max_transitions = max_transitions

    async def handle_message(self, activity: InboundMessage) -> TurnResult:
        """Process one inbound activity."""
        if not activity.is_message:
            TURN_COUNT.labels(kind=activity.kind, outcome="ignored").inc()
            logger.debug(
                "activity_ignored",
                kind=activity.kind,
                conversation_id=activity.conversation_id,
            )
            return TurnResult(conversation_id=activity.conversation_id, handled=False)

        start_time = time.perf_counter()
        with structlog.contextvars.bound_contextvars(conversation_id=activity.conversation_id):
            try:
                async with self._mutex.acquire(activity.conversation_id):
                    result = await self._run_turn(activity)
            except PictureBotError as e:
                TURN_COUNT.labels(kind=activity.kind, outcome="failed").inc()
                logger.error("turn_failed", error_type=type(e).__name__, error=str(e))
                raise
            finally:
                TURN_LATENCY.observe(time.perf_counter() - start_time)

            TURN_COUNT.labels(kind=activity.kind, outcome="completed").inc()
            logger.info(
                "turn_completed",
                replies=len(result.replies),
                active_dialog=result.active_dialog,
                elapsed_ms=round((time.perf_counter() - start_time) * 1000, 2),
            )
            return result

    async def _run_turn(self, activity: InboundMessage) -> TurnResult:
        record = await self._store.load(activity.conversation_id)
        logger.debug(
            "turn_started",
            turn_number=record.turn_count + 1,
            stack_depth=record.stack.depth,
        )

        quick_intent = self._recognizer.recognize(activity.utterance) if self._recognizer else None
        turn = TurnContext(activity, self._channel, quick_intent=quick_intent)

        async def commit() -> None:
            await self._save(record)

        dc = self._dialogs.create_context(
            turn, record, commit, max_transitions=self._max_transitions
        )

        try:
            await dc.continue_dialog()
        except DialogNotFoundError as e:
            # Next turn starts from the main dialog
            await dc.cancel_all_dialogs()
            logger.error("stale_dialog_stack_cleared", dialog_id=e.dialog_id)
            raise
        if not turn.responded:
            await dc.begin_dialog(self._main_dialog)

        record.turn_count += 1
        await self._save(record)

        active = record.stack.active
        return TurnResult(
            conversation_id=activity.conversation_id,
            handled=True,
            replies=list(turn.sent),
            active_dialog=active.dialog_id if active is not None else None,
            stack_depth=record.stack.depth,
        )

    async def _save(self, record: ConversationRecord) -> None:
        await self._store.save(record)
        logger.debug(
            "state_saved",
            stack_depth=record.stack.depth,
            greeted=record.state.greeted,
        )
