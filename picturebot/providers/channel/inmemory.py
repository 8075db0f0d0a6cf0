"""In-memory output channel."""

from collections import defaultdict

from picturebot.conversation.models import OutboundMessage
from picturebot.providers.channel.base import OutputChannel


class InMemoryChannel(OutputChannel):
    """Records sent messages per conversation for tests and local runs."""

    def __init__(self) -> None:
        self._sent: dict[str, list[OutboundMessage]] = defaultdict(list)

    async def send(self, conversation_id: str, message: OutboundMessage) -> None:
        self._sent[conversation_id].append(message)

    def messages(self, conversation_id: str) -> list[OutboundMessage]:
        return list(self._sent.get(conversation_id, []))

    def texts(self, conversation_id: str) -> list[str | None]:
        return [m.text for m in self._sent.get(conversation_id, [])]

    def clear(self, conversation_id: str | None = None) -> None:
        if conversation_id is None:
            self._sent.clear()
        else:
            self._sent.pop(conversation_id, None)
