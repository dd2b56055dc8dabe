"""Outbound observability port.

Domain services report counters through an injected sink instead of
process-wide metric globals. NoopMetrics is the default.
"""

from __future__ import annotations

from typing import Protocol


class MetricsSink(Protocol):
    """Protocol for topology metrics."""

    def observe_request(self, provider: str, engine: str, status: int, duration_seconds: float) -> None:
        """Record one topology generation request."""
        ...

    def set_missing_topology(self, provider: str, count: int) -> None:
        """Set the number of mapped instances without placement information."""
        ...

    def add_block_size_validation_error(self, error_type: str) -> None:
        """Count an invalid or missing block size."""
        ...

    def set_resource_status_not_found(self, instance: str, missing: bool) -> None:
        """Flag an inventory entry that reported no resource status."""
        ...

    def set_physical_host_not_found(self, instance: str, missing: bool) -> None:
        """Flag an inventory entry whose resource status has no physical host."""
        ...


class NoopMetrics:
    """Metrics sink that drops everything."""

    def observe_request(self, provider: str, engine: str, status: int, duration_seconds: float) -> None:
        pass

    def set_missing_topology(self, provider: str, count: int) -> None:
        pass

    def add_block_size_validation_error(self, error_type: str) -> None:
        pass

    def set_resource_status_not_found(self, instance: str, missing: bool) -> None:
        pass

    def set_physical_host_not_found(self, instance: str, missing: bool) -> None:
        pass
