"""Metrics service for tracking categorization traffic.

Singleton service to count categorizations per source and track latency.
"""

import threading
from typing import Dict


class MetricsService:
    """Singleton service for tracking API metrics.

    Thread-safe counters for categorizations, remote classifier failures
    and end-to-end categorization latency.
    """

    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        """Create singleton instance."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super(MetricsService, cls).__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        """Initialize metrics counters."""
        if self._initialized:
            return

        self._lock = threading.Lock()
        self._reset_counters()
        self._initialized = True

    def _reset_counters(self) -> None:
        self._categorization_count = 0
        self._by_source: Dict[str, int] = {}
        self._remote_failures = 0
        self._total_latency_ms = 0.0
        self._min_latency_ms = float("inf")
        self._max_latency_ms = 0.0

    def record_categorization(
        self,
        source: str,
        latency_ms: float,
        remote_failed: bool = False,
    ) -> None:
        """Record a categorization with its latency.

        Args:
            source: Path that produced the result (remote, fallback, skipped)
            latency_ms: Latency in milliseconds
            remote_failed: Whether the remote classifier failed on the way
        """
        with self._lock:
            self._categorization_count += 1
            self._by_source[source] = self._by_source.get(source, 0) + 1
            if remote_failed:
                self._remote_failures += 1

            self._total_latency_ms += latency_ms
            self._min_latency_ms = min(self._min_latency_ms, latency_ms)
            self._max_latency_ms = max(self._max_latency_ms, latency_ms)

    def get_metrics(self) -> Dict:
        """Get current metrics.

        Returns:
            Dictionary with metrics including:
            - categorization_count: Total number of categorizations
            - by_source: Count of categorizations per source
            - remote_failures: Remote classifier calls that failed
            - average_latency_ms: Average latency in milliseconds
            - min_latency_ms: Minimum latency observed
            - max_latency_ms: Maximum latency observed
        """
        with self._lock:
            avg_latency = (
                self._total_latency_ms / self._categorization_count
                if self._categorization_count > 0
                else 0.0
            )

            return {
                "categorization_count": self._categorization_count,
                "by_source": dict(self._by_source),
                "remote_failures": self._remote_failures,
                "average_latency_ms": round(avg_latency, 2),
                "min_latency_ms": round(self._min_latency_ms, 2) if self._min_latency_ms != float("inf") else 0.0,
                "max_latency_ms": round(self._max_latency_ms, 2),
            }

    def reset(self) -> None:
        """Reset all metrics (useful for testing)."""
        with self._lock:
            self._reset_counters()


# Global singleton instance
metrics_service = MetricsService()
