# src/gemini_kit/observability/base.py

"""Metrics hooks for the transformation pipeline.

``ToolAdapter`` reports one latency sample and one transform count per tool,
plus the number of downgrade warnings. ``TransformCache`` reports hits,
misses and its entry count. Names are in ``gemini_kit.observability.names``.
"""

from collections import defaultdict
from typing import Protocol

Labels = dict[str, str] | None


class MetricsHook(Protocol):
    def record_latency(self, name: str, value_ms: float, labels: Labels = None) -> None:
        """Record a duration in milliseconds."""
        ...

    def increment(self, name: str, value: int = 1, labels: Labels = None) -> None:
        """Add ``value`` to a counter."""
        ...

    def record_gauge(self, name: str, value: float, labels: Labels = None) -> None:
        """Set the current value of a gauge."""
        ...


class NoOpMetricsHook:
    """Default hook; discards everything."""

    def record_latency(self, name: str, value_ms: float, labels: Labels = None) -> None:
        pass

    def increment(self, name: str, value: int = 1, labels: Labels = None) -> None:
        pass

    def record_gauge(self, name: str, value: float, labels: Labels = None) -> None:
        pass


class RecordingMetricsHook:
    """Keeps metrics in memory, keyed by name. Labels are not aggregated.

    Useful in tests and for one-off inspection of a batch::

        metrics = RecordingMetricsHook()
        TransformCache(metrics_hook=metrics).get_or_compute(tools)
        metrics.counters[names.SCHEMA_WARNINGS_TOTAL]
    """

    def __init__(self) -> None:
        self.counters: dict[str, int] = defaultdict(int)
        self.gauges: dict[str, float] = {}
        self.latencies: dict[str, list[float]] = defaultdict(list)

    def record_latency(self, name: str, value_ms: float, labels: Labels = None) -> None:
        self.latencies[name].append(value_ms)

    def increment(self, name: str, value: int = 1, labels: Labels = None) -> None:
        self.counters[name] += value

    def record_gauge(self, name: str, value: float, labels: Labels = None) -> None:
        self.gauges[name] = value
