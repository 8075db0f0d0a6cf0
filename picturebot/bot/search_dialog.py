"""Search dialog: ask for a term unless one is pre-filled, then search."""

from picturebot.bot import responses
from picturebot.dialogs import StepResult, WaterfallDialog, WaterfallStepContext
from picturebot.errors import SearchError
from picturebot.observability.logging import get_logger
from picturebot.observability.metrics import PROVIDER_ERRORS, SEARCH_RESULTS
from picturebot.providers.search import SearchProvider

logger = get_logger(__name__)

SEARCH_DIALOG = "searchDialog"


class SearchDialog(WaterfallDialog):
    """Two steps: request_term then execute.

    When the main menu already extracted a term from the classifier it
    sets awaiting_search_input, and request_term falls straight through.
    """

    def __init__(self, search_provider: SearchProvider) -> None:
        self._search = search_provider
        super().__init__(SEARCH_DIALOG, [self.request_term, self.execute])

    async def request_term(self, step: WaterfallStepContext) -> StepResult:
        state = step.state
        if state.awaiting_search_input:
            return step.next()

        state.awaiting_search_input = True
        await step.commit()
        return step.prompt(responses.SEARCH_PROMPT)

    async def execute(self, step: WaterfallStepContext) -> StepResult:
        state = step.state
        if not state.search_term:
            state.search_term = str(step.result or "").strip()
            await step.commit()

        term = state.search_term
        if term:
            await self._run_search(step, term)
        else:
            await responses.reply_with_confused(step.turn)

        state.reset_search()
        await step.commit()

        return step.end_dialog()

    async def _run_search(self, step: WaterfallStepContext, term: str) -> None:
        await responses.reply_with_search_confirmation(step.turn, term)

        try:
            hits = await self._search.search(term)
        except SearchError as e:
            PROVIDER_ERRORS.labels(
                provider=self._search.provider_name, error_type=type(e).__name__
            ).inc()
            logger.warning("search_failed", error=str(e))
            await responses.reply_with_confused(step.turn)
            return

        SEARCH_RESULTS.observe(len(hits))
        logger.info("search_completed", num_results=len(hits))

        if not hits:
            await responses.reply_with_no_results(step.turn, term)
        else:
            await responses.reply_with_results(step.turn, hits)
