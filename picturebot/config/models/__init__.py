"""Configuration model exports.

    from picturebot.config.models import StorageConfig, ProvidersConfig
"""

from picturebot.config.models.dialogs import DialogsConfig
from picturebot.config.models.observability import (
    LoggingConfig,
    MetricsConfig,
    ObservabilityConfig,
)
from picturebot.config.models.providers import (
    IntentProviderConfig,
    ProvidersConfig,
    SearchProviderConfig,
)
from picturebot.config.models.storage import (
    LockConfig,
    RedisStateConfig,
    StorageConfig,
)

__all__ = [
    "DialogsConfig",
    "LoggingConfig",
    "MetricsConfig",
    "ObservabilityConfig",
    "IntentProviderConfig",
    "ProvidersConfig",
    "SearchProviderConfig",
    "LockConfig",
    "RedisStateConfig",
    "StorageConfig",
]
