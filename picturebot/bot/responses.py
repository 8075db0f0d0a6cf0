"""Reply texts for the picture bot."""

from picturebot.conversation.models import OutboundMessage, SearchHit
from picturebot.dialogs.turn import TurnContext

GREETING = "Welcome to this little picture bot..."
HELP = "I can search for pictures for you, share them, or order prints."
CONFUSED = "I'm sorry, I didn't understand that. Can you try again?"
SHARE_CONFIRMATION = "Posting your picture(s) on Twitter..."
ORDER_CONFIRMATION = "Ordering standard prints of your picture(s)..."

SEARCH_PROMPT = "What would you like to search for?"
RESULTS_TITLE = "Here are the results that I found"


async def reply_with_greeting(turn: TurnContext) -> None:
    await turn.send(GREETING)


async def reply_with_help(turn: TurnContext) -> None:
    await turn.send(HELP)


async def reply_with_confused(turn: TurnContext) -> None:
    await turn.send(CONFUSED)


async def reply_with_score(turn: TurnContext, intent: str, score: float) -> None:
    """Report which intent the classifier picked, for diagnostics."""
    await turn.send(f"Intent: {intent} ({score}).")


async def reply_with_share_confirmation(turn: TurnContext) -> None:
    await turn.send(SHARE_CONFIRMATION)


async def reply_with_order_confirmation(turn: TurnContext) -> None:
    await turn.send(ORDER_CONFIRMATION)


async def reply_with_search_confirmation(turn: TurnContext, term: str) -> None:
    await turn.send(f"OK, searching for images of {term}")


async def reply_with_no_results(turn: TurnContext, term: str) -> None:
    await turn.send(f'No results found for "{term}".')


async def reply_with_results(turn: TurnContext, hits: list[SearchHit]) -> None:
    """Send every hit, best first, as a single results message."""
    await turn.send(OutboundMessage.from_hits(RESULTS_TITLE, hits))
