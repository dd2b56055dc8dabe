"""Prometheus metrics export for topology generation.

Implements the MetricsSink port on a dedicated CollectorRegistry so several
instances (e.g. one per test) never clash on metric names.
"""

from __future__ import annotations

from typing import Optional

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram, generate_latest


class PrometheusMetrics:
    """Topograph metrics backed by prometheus_client."""

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        """Initialize metric families.

        Args:
            registry: Prometheus collector registry. Creates a new one if None.
        """
        self.registry = registry or CollectorRegistry()

        self.requests_total = Counter(
            'requests',
            'Total number of topology generation requests.',
            ['provider', 'engine', 'status'],
            subsystem='topograph',
            registry=self.registry,
        )

        self.request_duration = Histogram(
            'request_duration_seconds',
            'Topology generator request duration in seconds.',
            ['provider', 'engine', 'status'],
            subsystem='topograph',
            registry=self.registry,
        )

        self.missing_topology = Gauge(
            'missing_topology',
            'Total number of nodes with missing topology information.',
            ['provider'],
            subsystem='topograph',
            registry=self.registry,
        )

        self.block_size_errors = Counter(
            'blocksize_error',
            'Total number of blocksize validation errors.',
            ['type'],
            subsystem='topograph',
            registry=self.registry,
        )

        self.resource_status_not_found = Gauge(
            'resource_status_not_found',
            'Inventory entry reported no resource status (1) or did (0).',
            ['instance'],
            subsystem='topograph',
            registry=self.registry,
        )

        self.physical_host_not_found = Gauge(
            'physical_host_not_found',
            'Resource status without physical host (1) or with one (0).',
            ['instance'],
            subsystem='topograph',
            registry=self.registry,
        )

    def observe_request(self, provider: str, engine: str, status: int, duration_seconds: float) -> None:
        labels = (provider, engine, str(status))
        self.requests_total.labels(*labels).inc()
        self.request_duration.labels(*labels).observe(duration_seconds)

    def set_missing_topology(self, provider: str, count: int) -> None:
        self.missing_topology.labels(provider).set(count)

    def add_block_size_validation_error(self, error_type: str) -> None:
        self.block_size_errors.labels(error_type).inc()

    def set_resource_status_not_found(self, instance: str, missing: bool) -> None:
        self.resource_status_not_found.labels(instance).set(1 if missing else 0)

    def set_physical_host_not_found(self, instance: str, missing: bool) -> None:
        self.physical_host_not_found.labels(instance).set(1 if missing else 0)

    def export(self) -> bytes:
        """Render the registry in Prometheus text format."""
        return generate_latest(self.registry)
