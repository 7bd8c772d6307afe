"""Observability module - metrics and structured logging."""

from prompt_history.observability.metrics import metrics, MetricsCollector
from prompt_history.observability.logging import setup_logging, get_logger, log_event

__all__ = ["metrics", "MetricsCollector", "setup_logging", "get_logger", "log_event"]
