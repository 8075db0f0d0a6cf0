"""Output channel interface."""

from abc import ABC, abstractmethod

from picturebot.conversation.models import OutboundMessage


class OutputChannel(ABC):
    """Delivers replies to the user; fire-and-forget from the bot's side."""

    @abstractmethod
    async def send(self, conversation_id: str, message: OutboundMessage) -> None:
        """Send one message.

        Raises:
            ChannelError: If the message could not be delivered
        """
        pass
