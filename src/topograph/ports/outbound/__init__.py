"""Outbound ports - interfaces for collectors and metrics sinks."""

from topograph.ports.outbound.collector import (
    CollectorError,
    PhysicalHostNotFoundError,
    ResourceStatusNotFoundError,
    TopologyCollector,
)
from topograph.ports.outbound.metrics import MetricsSink, NoopMetrics

__all__ = [
    "CollectorError",
    "MetricsSink",
    "NoopMetrics",
    "PhysicalHostNotFoundError",
    "ResourceStatusNotFoundError",
    "TopologyCollector",
]
