"""Process-level Prometheus metrics for topograph."""

from __future__ import annotations

from prometheus_client import REGISTRY, CollectorRegistry, start_http_server

from topograph.adapters.outbound.metrics import PrometheusMetrics

_metrics: PrometheusMetrics | None = None


def setup_metrics(port: int = 9090, registry: CollectorRegistry | None = None) -> PrometheusMetrics:
    """Register topograph metrics once per process and serve them over HTTP.

    Port 0 registers the metrics without starting the HTTP exporter.
    """
    global _metrics
    if _metrics is None:
        _metrics = PrometheusMetrics(registry or REGISTRY)
        if port:
            start_http_server(port, registry=_metrics.registry)
    return _metrics
