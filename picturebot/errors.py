"""Error hierarchy for PictureBot.

Store and configuration errors are fatal to a turn and propagate out of
the turn router. Provider errors are caught by dialog steps and degrade
to a generic "I didn't understand" reply.
"""


class PictureBotError(Exception):
    """Base exception for all PictureBot errors."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


# ============================================================================
# Configuration errors
# ============================================================================


class ConfigurationError(PictureBotError):
    """Raised on programmer or deployment misconfiguration."""

    pass


class DialogNotFoundError(ConfigurationError):
    """Raised when a stack frame or step names an unregistered dialog."""

    def __init__(self, dialog_id: str) -> None:
        super().__init__(f"Dialog not registered: {dialog_id!r}")
        self.dialog_id = dialog_id


class DuplicateDialogError(ConfigurationError):
    """Raised when two dialogs are registered under the same id."""

    def __init__(self, dialog_id: str) -> None:
        super().__init__(f"Dialog already registered: {dialog_id!r}")
        self.dialog_id = dialog_id


class DialogLoopError(ConfigurationError):
    """Raised when a turn keeps transitioning without suspending or ending."""

    pass


# ============================================================================
# Store errors
# ============================================================================


class StateStoreError(PictureBotError):
    """Raised when conversation state cannot be loaded or saved.

    A turn that hits this error must not report success.
    """

    pass


class StoreConnectionError(StateStoreError):
    """Raised when the store backend is unreachable.

    Examples:
        - Redis server unavailable
        - Network errors
    """

    pass


class LockTimeoutError(StateStoreError):
    """Raised when the per-conversation lock cannot be acquired in time."""

    pass


# ============================================================================
# Provider errors
# ============================================================================


class ProviderError(PictureBotError):
    """Base exception for external collaborator failures."""

    pass


class ClassifierError(ProviderError):
    """Intent classifier unreachable or returned an error."""

    pass


class SearchError(ProviderError):
    """Search index unreachable or returned an error."""

    pass


class ChannelError(ProviderError):
    """Outbound message could not be delivered."""

    pass
