"""Outbound adapters - provider collectors and metrics export."""

from topograph.adapters.outbound.gcp_collector import CollectResult, GCPTopologyCollector
from topograph.adapters.outbound.metrics import PrometheusMetrics

__all__ = [
    "CollectResult",
    "GCPTopologyCollector",
    "PrometheusMetrics",
]
