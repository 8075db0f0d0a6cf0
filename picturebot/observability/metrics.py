"""Prometheus metrics for PictureBot."""

from prometheus_client import Counter, Histogram, start_http_server

TURN_COUNT = Counter(
    "picturebot_turns_total",
    "Total number of inbound activities handled",
    labelnames=["kind", "outcome"],
)

TURN_LATENCY = Histogram(
    "picturebot_turn_latency_seconds",
    "Turn latency in seconds, lock wait included",
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

DIALOG_TRANSITIONS = Counter(
    "picturebot_dialog_transitions_total",
    "Step results interpreted by the dialog context",
    labelnames=["dialog_id", "transition"],
)

INTENTS_CLASSIFIED = Counter(
    "picturebot_intents_classified_total",
    "Intents routed by the main menu",
    labelnames=["source", "intent"],
)

PROVIDER_ERRORS = Counter(
    "picturebot_provider_errors_total",
    "External collaborator failures",
    labelnames=["provider", "error_type"],
)

SEARCH_RESULTS = Histogram(
    "picturebot_search_results",
    "Number of hits returned per search",
    buckets=(0, 1, 2, 3, 5, 10, 20, 50),
)


def setup_metrics(enabled: bool = True, port: int = 9090) -> None:
    """Expose the default registry over HTTP when enabled."""
    if enabled:
        start_http_server(port)
