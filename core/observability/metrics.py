"""
Metrics Collection for the Back-Office Services

Collects and exposes metrics for:
- Service operations (started, completed, failed), keyed "<entity>.<operation>"
- Failures by error type
- Operation durations (average, p95)

Metrics live in memory for the lifetime of the process.
"""

import statistics
from collections import defaultdict
from dataclasses import dataclass, field
from threading import Lock
from typing import Dict, List, Optional, Any


# =============================================================================
# Metric Data Classes
# =============================================================================

def _operation_counts() -> Dict[str, int]:
    return {"started": 0, "completed": 0, "failed": 0}


@dataclass
class OperationMetrics:
    """Metrics for service operation execution."""
    started: int = 0
    completed: int = 0
    failed: int = 0

    # By operation name
    by_name: Dict[str, Dict[str, int]] = field(default_factory=lambda: defaultdict(_operation_counts))

    # By error type name
    errors: Dict[str, int] = field(default_factory=lambda: defaultdict(int))


@dataclass
class TimingMetrics:
    """Operation duration metrics."""
    # Raw timing samples (keep last N for percentile calculations)
    samples: List[float] = field(default_factory=list)
    max_samples: int = 1000

    by_operation: Dict[str, List[float]] = field(default_factory=lambda: defaultdict(list))

    def add_sample(self, duration_ms: float, operation: Optional[str] = None):
        """Add a timing sample."""
        self.samples.append(duration_ms)
        if len(self.samples) > self.max_samples:
            self.samples = self.samples[-self.max_samples:]

        if operation:
            self.by_operation[operation].append(duration_ms)
            if len(self.by_operation[operation]) > self.max_samples:
                self.by_operation[operation] = self.by_operation[operation][-self.max_samples:]

    def get_average(self, operation: Optional[str] = None) -> float:
        """Get average duration."""
        samples = self.by_operation.get(operation, []) if operation else self.samples
        return statistics.mean(samples) if samples else 0.0

    def get_p95(self, operation: Optional[str] = None) -> float:
        """Get 95th percentile duration."""
        samples = self.by_operation.get(operation, []) if operation else self.samples
        if not samples:
            return 0.0
        sorted_samples = sorted(samples)
        idx = int(len(sorted_samples) * 0.95)
        return sorted_samples[min(idx, len(sorted_samples) - 1)]


# =============================================================================
# Metrics Collector (Singleton)
# =============================================================================

class MetricsCollector:
    """
    Thread-safe metrics collector for the back-office services.

    Usage:
        metrics = MetricsCollector.instance()
        metrics.record_operation_started("product.create")
        metrics.record_operation_completed("product.create", duration_ms=501.2)
    """

    _instance: Optional["MetricsCollector"] = None
    _lock = Lock()

    def __init__(self):
        self.operations = OperationMetrics()
        self.timings = TimingMetrics()
        self._lock = Lock()

    @classmethod
    def instance(cls) -> "MetricsCollector":
        """Get singleton instance."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    def reset(self):
        """Drop all collected metrics."""
        with self._lock:
            self.operations = OperationMetrics()
            self.timings = TimingMetrics()

    # =========================================================================
    # Operation Metrics
    # =========================================================================

    def record_operation_started(self, name: str):
        """Record an operation start."""
        with self._lock:
            self.operations.started += 1
            self.operations.by_name[name]["started"] += 1

    def record_operation_completed(self, name: str, duration_ms: Optional[float] = None):
        """Record an operation completion."""
        with self._lock:
            self.operations.completed += 1
            self.operations.by_name[name]["completed"] += 1

            if duration_ms is not None:
                self.timings.add_sample(duration_ms, name)

    def record_operation_failed(self, name: str, error_type: Optional[str] = None, duration_ms: Optional[float] = None):
        """Record an operation failure."""
        with self._lock:
            self.operations.failed += 1
            self.operations.by_name[name]["failed"] += 1
            if error_type:
                self.operations.errors[error_type] += 1

            if duration_ms is not None:
                self.timings.add_sample(duration_ms, name)

    # =========================================================================
    # Timing Metrics
    # =========================================================================

    def get_timing_stats(self, operation: Optional[str] = None) -> Dict[str, float]:
        """Get timing statistics for an operation name (or overall)."""
        with self._lock:
            return {
                "average_ms": self.timings.get_average(operation),
                "p95_ms": self.timings.get_p95(operation),
                "sample_count": len(self.timings.by_operation.get(operation, []) if operation else self.timings.samples),
            }

    # =========================================================================
    # Summary
    # =========================================================================

    def get_summary(self) -> Dict[str, Any]:
        """Get a summary of all metrics."""
        with self._lock:
            return {
                "operations": {
                    "started": self.operations.started,
                    "completed": self.operations.completed,
                    "failed": self.operations.failed,
                    "by_name": {name: dict(counts) for name, counts in self.operations.by_name.items()},
                    "errors": dict(self.operations.errors),
                },
                "timings": {
                    "overall": {
                        "average_ms": self.timings.get_average(),
                        "p95_ms": self.timings.get_p95(),
                    },
                    "by_operation": {
                        operation: {
                            "average_ms": self.timings.get_average(operation),
                            "p95_ms": self.timings.get_p95(operation),
                        }
                        for operation in self.timings.by_operation.keys()
                    },
                },
            }


# =============================================================================
# Module-level convenience functions
# =============================================================================

def get_metrics() -> MetricsCollector:
    """Get the global metrics collector."""
    return MetricsCollector.instance()


def record_operation_started(name: str):
    """Record an operation start."""
    get_metrics().record_operation_started(name)


def record_operation_completed(name: str, duration_ms: Optional[float] = None):
    """Record an operation completion."""
    get_metrics().record_operation_completed(name, duration_ms)


def record_operation_failed(name: str, error_type: Optional[str] = None, duration_ms: Optional[float] = None):
    """Record an operation failure."""
    get_metrics().record_operation_failed(name, error_type, duration_ms)
