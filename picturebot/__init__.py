"""PictureBot: a stack-based dialog turn router for an image search bot.

Each inbound message is routed to the active waterfall dialog on the
conversation's persisted dialog stack, falling back to the main dialog
when nothing on the stack handled the turn.
"""

__version__ = "0.1.0"
