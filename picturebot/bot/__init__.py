"""The picture bot: its dialogs, replies and turn router."""

from picturebot.bot.main_dialog import MAIN_DIALOG, MainDialog
from picturebot.bot.router import TurnResult, TurnRouter
from picturebot.bot.search_dialog import SEARCH_DIALOG, SearchDialog

__all__ = [
    "MAIN_DIALOG",
    "SEARCH_DIALOG",
    "MainDialog",
    "SearchDialog",
    "TurnRouter",
    "TurnResult",
]
