"""Per-turn context: the inbound activity plus the reply channel."""

from picturebot.conversation.models import InboundMessage, OutboundMessage
from picturebot.errors import ChannelError
from picturebot.observability.logging import get_logger
from picturebot.observability.metrics import PROVIDER_ERRORS
from picturebot.providers.channel import OutputChannel
from picturebot.providers.intent import QuickIntent

logger = get_logger(__name__)


class TurnContext:
    """Ephemeral data for one inbound message. Never persisted.

    `responded` flips on the first send and is how the router decides
    whether any dialog handled the turn.
    """

    def __init__(
        self,
        activity: InboundMessage,
        channel: OutputChannel,
        quick_intent: QuickIntent | None = None,
    ) -> None:
        self.activity = activity
        self.quick_intent = quick_intent
        self.responded = False
        self.sent: list[OutboundMessage] = []
        self._channel = channel

    @property
    def conversation_id(self) -> str:
        return self.activity.conversation_id

    @property
    def utterance(self) -> str:
        return self.activity.utterance

    async def send(self, message: OutboundMessage | str) -> None:
        """Send a reply.

        Delivery failures are logged and counted but do not abort the turn;
        the reply still counts as this turn's response.
        """
        if isinstance(message, str):
            message = OutboundMessage.from_text(message)

        self.responded = True
        self.sent.append(message)
        try:
            await self._channel.send(self.conversation_id, message)
        except ChannelError as e:
            PROVIDER_ERRORS.labels(provider="channel", error_type=type(e).__name__).inc()
            logger.error("reply_delivery_failed", kind=message.kind, error=str(e))
