"""Build a fully wired TurnRouter from configuration.

Credentials and connection settings are read once here and passed into
the adapter constructors.

Example usage:

    from picturebot.bootstrap import bootstrap

    router, channel = bootstrap()

    await router.handle_message(
        InboundMessage(utterance="search for cats", conversation_id="c1")
    )
    print(channel.texts("c1"))
"""

import redis.asyncio as redis

from picturebot.bot import MainDialog, SearchDialog, TurnRouter
from picturebot.config import Settings, get_settings
from picturebot.config.models import IntentProviderConfig, SearchProviderConfig
from picturebot.conversation.mutex import (
    ConversationMutex,
    LocalConversationMutex,
    RedisConversationMutex,
)
from picturebot.conversation.store import StateStore
from picturebot.conversation.stores import InMemoryStateStore, RedisStateStore
from picturebot.dialogs import DialogSet
from picturebot.errors import ConfigurationError
from picturebot.observability.logging import get_logger, setup_logging
from picturebot.observability.metrics import setup_metrics
from picturebot.providers.channel import InMemoryChannel, OutputChannel
from picturebot.providers.intent import (
    IntentClassifier,
    LuisIntentClassifier,
    MockIntentClassifier,
    RegexRecognizer,
)
from picturebot.providers.search import (
    AzureSearchProvider,
    MockSearchProvider,
    SearchProvider,
)

logger = get_logger(__name__)


def create_dialog_set(classifier: IntentClassifier, search_provider: SearchProvider) -> DialogSet:
    """Register the main and search dialogs."""
    return DialogSet([MainDialog(classifier), SearchDialog(search_provider)])


def create_intent_classifier(config: IntentProviderConfig) -> IntentClassifier:
    if config.provider == "mock":
        return MockIntentClassifier()
    if config.api_key is None or not (config.endpoint and config.app_id):
        raise ConfigurationError("LUIS classifier needs endpoint, app_id and api_key")
    return LuisIntentClassifier(
        endpoint=config.endpoint,
        app_id=config.app_id,
        api_key=config.api_key.get_secret_value(),
        slot=config.slot,
        timeout=config.timeout,
    )


def create_search_provider(config: SearchProviderConfig) -> SearchProvider:
    if config.provider == "mock":
        return MockSearchProvider()
    if config.api_key is None or not config.service_name:
        raise ConfigurationError("Azure search needs service_name and api_key")
    return AzureSearchProvider(
        service_name=config.service_name,
        api_key=config.api_key.get_secret_value(),
        index_name=config.index_name,
        api_version=config.api_version,
        top=config.top,
        timeout=config.timeout,
    )


def create_state_store(settings: Settings, client: redis.Redis | None = None) -> StateStore:
    storage = settings.storage
    if storage.backend == "inmemory":
        return InMemoryStateStore()
    client = client or redis.from_url(storage.redis.connection_url, decode_responses=True)
    return RedisStateStore(client, storage.redis)


def max_turn_seconds(settings: Settings) -> float:
    """Longest a turn can spend in adapter calls: one classify plus one search."""
    providers = settings.providers
    return providers.intent.timeout + providers.search.timeout


def create_mutex(settings: Settings, client: redis.Redis | None = None) -> ConversationMutex:
    """Build the turn lock.

    A queued turn must be able to outwait the running one, and a Redis lock
    must outlive it.

    Raises:
        ConfigurationError: If the lock timeouts are shorter than a turn
    """
    lock = settings.storage.lock
    turn_seconds = max_turn_seconds(settings)
    if lock.blocking_timeout is not None and lock.blocking_timeout < turn_seconds:
        raise ConfigurationError(
            f"storage.lock.blocking_timeout ({lock.blocking_timeout}s) is shorter than "
            f"the adapter timeouts of one turn ({turn_seconds}s)"
        )
    if lock.backend == "redis" and lock.lock_timeout <= turn_seconds:
        raise ConfigurationError(
            f"storage.lock.lock_timeout ({lock.lock_timeout}s) would expire before "
            f"the adapter timeouts of one turn ({turn_seconds}s)"
        )

    if lock.backend == "local":
        return LocalConversationMutex(blocking_timeout=lock.blocking_timeout)
    client = client or redis.from_url(settings.storage.redis.connection_url)
    return RedisConversationMutex(
        client,
        lock_timeout=lock.lock_timeout,
        blocking_timeout=lock.blocking_timeout,
        key_prefix=f"{settings.app_name}:lock",
    )


def create_router(
    settings: Settings,
    channel: OutputChannel,
    *,
    classifier: IntentClassifier | None = None,
    search_provider: SearchProvider | None = None,
    store: StateStore | None = None,
    mutex: ConversationMutex | None = None,
) -> TurnRouter:
    """Wire a TurnRouter; explicit collaborators override the configured ones."""
    classifier = classifier or create_intent_classifier(settings.providers.intent)
    search_provider = search_provider or create_search_provider(settings.providers.search)

    router = TurnRouter(
        create_dialog_set(classifier, search_provider),
        store or create_state_store(settings),
        channel,
        mutex=mutex or create_mutex(settings),
        recognizer=RegexRecognizer(settings.dialogs.quick_intents),
        main_dialog=settings.dialogs.main_dialog,
        max_transitions=settings.dialogs.max_transitions,
    )
    logger.info(
        "router_created",
        storage=settings.storage.backend,
        lock=settings.storage.lock.backend,
        intent_provider=classifier.provider_name,
        search_provider=search_provider.provider_name,
    )
    return router


def bootstrap(
    settings: Settings | None = None, *, metrics: bool = False
) -> tuple[TurnRouter, InMemoryChannel]:
    """Configure logging and return a router that replies into memory.

    Args:
        settings: Settings to use (loaded from config files when omitted)
        metrics: Start the Prometheus HTTP exporter if enabled in settings
    """
    settings = settings or get_settings()
    observability = settings.observability
    setup_logging(
        level=observability.logging.level,
        format=observability.logging.format,
        redact_pii=observability.logging.redact_pii,
    )
    if metrics:
        setup_metrics(enabled=observability.metrics.enabled, port=observability.metrics.port)

    channel = InMemoryChannel()
    return create_router(settings, channel), channel
