"""Prometheus metrics for observability."""

from prometheus_client import Counter, Histogram, Info, REGISTRY, generate_latest


class MetricsCollector:
    """Centralized metrics collection for Prompt History."""

    def __init__(self):
        # Application info
        self.app_info = Info(
            "prompt_history_app",
            "Application information",
        )

        # Operation counters
        self.operations = Counter(
            "prompt_history_operations_total",
            "Prompt operations by outcome",
            ["operation", "outcome"],
        )

        # Store latency and failures
        self.store_duration = Histogram(
            "prompt_history_store_duration_seconds",
            "Time spent in backing store calls",
            ["store", "operation"],
            buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5],
        )
        self.store_errors = Counter(
            "prompt_history_store_errors_total",
            "Backing store failures",
            ["store", "operation"],
        )

        # Two-step delete left media removed but the record in place
        self.partial_deletes = Counter(
            "prompt_history_partial_deletes_total",
            "Deletes where media was removed but the record survived",
        )

    def set_app_info(self, version: str, record_backend: str):
        """Set application info labels."""
        self.app_info.info({
            "version": version,
            "record_backend": record_backend,
        })

    def record_operation(self, operation: str, outcome: str):
        """Record a completed prompt operation."""
        self.operations.labels(operation=operation, outcome=outcome).inc()

    def record_store_call(self, store: str, operation: str, duration_seconds: float):
        """Record a backing store call latency."""
        self.store_duration.labels(store=store, operation=operation).observe(duration_seconds)

    def record_store_error(self, store: str, operation: str):
        """Record a backing store failure."""
        self.store_errors.labels(store=store, operation=operation).inc()

    def record_partial_delete(self):
        """Record a partially applied delete."""
        self.partial_deletes.inc()

    def get_metrics(self) -> bytes:
        """Get all metrics in Prometheus format."""
        return generate_latest(REGISTRY)


# Global metrics instance
metrics = MetricsCollector()
