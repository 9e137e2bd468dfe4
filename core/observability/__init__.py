"""
Observability Module for the Back-Office Services

Provides:
- Structured logging with correlation IDs (entity / operation / record)
- Metrics collection (operation counts, failures, durations)
"""

from core.observability.metrics import (
    MetricsCollector,
    get_metrics,
    record_operation_started,
    record_operation_completed,
    record_operation_failed,
)

from core.observability.logging import (
    get_logger,
    configure_logging,
    CorrelationContext,
    with_correlation,
)

__all__ = [
    # Metrics
    "MetricsCollector",
    "get_metrics",
    "record_operation_started",
    "record_operation_completed",
    "record_operation_failed",
    # Logging
    "get_logger",
    "configure_logging",
    "CorrelationContext",
    "with_correlation",
]
