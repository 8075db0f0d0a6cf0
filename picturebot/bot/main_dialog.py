"""Main dialog: greet once, then route each message by intent."""

from picturebot.bot import responses
from picturebot.bot.search_dialog import SEARCH_DIALOG
from picturebot.dialogs import StepResult, WaterfallDialog, WaterfallStepContext
from picturebot.errors import ClassifierError
from picturebot.observability.logging import get_logger
from picturebot.observability.metrics import INTENTS_CLASSIFIED, PROVIDER_ERRORS
from picturebot.providers.intent import (
    Intent,
    IntentClassifier,
    IntentResult,
    QuickIntent,
)

logger = get_logger(__name__)

MAIN_DIALOG = "mainDialog"
FACET_ENTITY = "facet"


def extract_search_term(result: IntentResult) -> str | None:
    """Search term from the facet entity, None when absent or unusable.

    Values are unquoted and stripped of list brackets before joining.
    """
    values = result.entity(FACET_ENTITY)
    if not values:
        return None
    parts = [value.replace('"', "").strip().strip("[]").strip() for value in values]
    term = " ".join(part for part in parts if part)
    return term or None


class MainDialog(WaterfallDialog):
    """Two steps: greeting then main_menu.

    A first-time conversation gets the welcome and help messages and the
    dialog ends; from then on every new message falls through greeting
    straight into main_menu.
    """

    def __init__(self, classifier: IntentClassifier) -> None:
        self._classifier = classifier
        super().__init__(MAIN_DIALOG, [self.greeting, self.main_menu])

    async def greeting(self, step: WaterfallStepContext) -> StepResult:
        state = step.state
        if state.greeted:
            return step.next()

        await responses.reply_with_greeting(step.turn)
        state.greeted = True
        await step.commit()
        await responses.reply_with_help(step.turn)
        return step.end_dialog()

    async def main_menu(self, step: WaterfallStepContext) -> StepResult:
        quick_intent = step.turn.quick_intent
        if quick_intent is not None:
            INTENTS_CLASSIFIED.labels(source="regex", intent=quick_intent.value).inc()
            logger.info("quick_intent_matched", intent=quick_intent.value)
            return await self._dispatch_quick_intent(step, quick_intent)

        return await self._route_classified(step)

    async def _dispatch_quick_intent(
        self, step: WaterfallStepContext, intent: QuickIntent
    ) -> StepResult:
        if intent is QuickIntent.SEARCH:
            return step.begin_dialog(SEARCH_DIALOG)
        if intent is QuickIntent.SHARE:
            await responses.reply_with_share_confirmation(step.turn)
        elif intent is QuickIntent.ORDER:
            await responses.reply_with_order_confirmation(step.turn)
        else:
            await responses.reply_with_help(step.turn)
        return step.end_dialog()

    async def _route_classified(self, step: WaterfallStepContext) -> StepResult:
        turn = step.turn
        try:
            result = await self._classifier.classify(turn.utterance, turn.conversation_id)
        except ClassifierError as e:
            PROVIDER_ERRORS.labels(
                provider=self._classifier.provider_name, error_type=type(e).__name__
            ).inc()
            logger.warning("intent_classification_failed", error=str(e))
            await responses.reply_with_confused(turn)
            return step.end_dialog()

        top = result.top_intent
        if top is None:
            INTENTS_CLASSIFIED.labels(source="classifier", intent="<none>").inc()
            logger.info("intent_classified", intent=None)
            await responses.reply_with_confused(turn)
            return step.end_dialog()

        INTENTS_CLASSIFIED.labels(source="classifier", intent=top.intent.name).inc()
        logger.info("intent_classified", intent=top.name, score=top.score)

        intent = top.intent
        if intent is Intent.NONE:
            await responses.reply_with_confused(turn)
            await responses.reply_with_score(turn, top.name, top.score)
        elif intent is Intent.GREETING:
            await responses.reply_with_greeting(turn)
            await responses.reply_with_help(turn)
            await responses.reply_with_score(turn, top.name, top.score)
        elif intent is Intent.ORDER_PIC:
            await responses.reply_with_order_confirmation(turn)
            await responses.reply_with_score(turn, top.name, top.score)
        elif intent is Intent.SHARE_PIC:
            await responses.reply_with_share_confirmation(turn)
            await responses.reply_with_score(turn, top.name, top.score)
        elif intent is Intent.SEARCH_PICS:
            term = extract_search_term(result)
            if term is not None:
                step.state.search_term = term
                step.state.awaiting_search_input = True
                await step.commit()
            else:
                logger.debug("search_term_not_extracted", entities=sorted(result.entities))
            await responses.reply_with_score(turn, top.name, top.score)
            return step.begin_dialog(SEARCH_DIALOG)
        else:
            await responses.reply_with_confused(turn)

        return step.end_dialog()
