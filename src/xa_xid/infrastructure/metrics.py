"""Prometheus metrics for transaction id recovery."""

from __future__ import annotations

from prometheus_client import (
    REGISTRY,
    CollectorRegistry,
    Counter,
    Histogram,
    Info,
    start_http_server,
)

from xa_xid.infrastructure.config import ObservabilityConfig


class XidMetrics:
    """Registry of recovery metrics."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize metrics registry."""
        self._registry = registry or REGISTRY

        self.recoveries_total = Counter(
            "xid_recoveries_total",
            "Total recovery round trips",
            ["status"],  # success, error
            registry=self._registry,
        )

        self.recovered_total = Counter(
            "xid_recovered_total",
            "Total identifiers returned by recovery",
            ["form"],  # structured, unparsed
            registry=self._registry,
        )

        self.recovery_duration_seconds = Histogram(
            "xid_recovery_duration_seconds",
            "Recovery round trip duration in seconds",
            buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
            registry=self._registry,
        )

        self.info = Info(
            "xa_xid",
            "Transaction id codec information",
            registry=self._registry,
        )

    @property
    def registry(self) -> CollectorRegistry:
        return self._registry


_metrics: XidMetrics | None = None


def setup_metrics(
    config: ObservabilityConfig | None = None,
    registry: CollectorRegistry | None = None,
) -> XidMetrics:
    """
    Set up Prometheus metrics and start the scrape server.

    Args:
        config: Observability settings; ``metrics_port`` is served
        registry: Optional custom registry

    Returns:
        The metrics registry
    """
    global _metrics
    _metrics = XidMetrics(registry)

    from xa_xid import __version__
    _metrics.info.info({
        "version": __version__,
    })

    config = config or ObservabilityConfig()
    start_http_server(config.metrics_port, registry=registry or REGISTRY)

    return _metrics


def get_metrics() -> XidMetrics:
    """Get the global metrics registry."""
    global _metrics
    if _metrics is None:
        _metrics = XidMetrics()
    return _metrics
