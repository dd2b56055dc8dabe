"""Outbound collector port.

A collector turns one provider's inventory into a flat ClusterTopology. The
core never branches on provider identity; each provider ships its own
collector implementing this protocol.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Protocol

from topograph.domain.entities.instance_topology import ClusterTopology


class TopologyCollector(Protocol):
    """Protocol for provider-specific topology collectors.

    Implementations receive inventory entries that were already listed by
    the caller, so collecting is pure and never blocks on I/O.
    """

    provider: str

    def collect(
        self,
        inventory: Iterable[Mapping[str, Any]],
        instance_to_node: Mapping[str, str],
    ) -> ClusterTopology:
        """Extract placement records for the instances in instance_to_node.

        Args:
            inventory: Raw provider inventory entries.
            instance_to_node: Instances belonging to the cluster.

        Returns:
            One record per cluster instance the provider placed.
        """
        ...


class CollectorError(Exception):
    """Raised when an inventory entry cannot be turned into a placement."""

    def __init__(self, instance: str, message: str) -> None:
        super().__init__(f"{instance}: {message}")
        self.instance = instance


class ResourceStatusNotFoundError(CollectorError):
    """Inventory entry reported no resource status."""

    def __init__(self, instance: str) -> None:
        super().__init__(instance, "resource status not found")


class PhysicalHostNotFoundError(CollectorError):
    """Resource status is present but carries no physical host."""

    def __init__(self, instance: str) -> None:
        super().__init__(instance, "physical host not found in resource status")
