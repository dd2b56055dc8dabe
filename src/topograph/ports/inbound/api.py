"""Inbound port interfaces for topograph.

Inbound ports define what the system offers to external clients.
Adapters implement these with gRPC, HTTP, CLI, etc.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional, Protocol

from topograph.domain.entities.instance_topology import ComputeInstances
from topograph.domain.entities.vertex import Vertex


class TopologyAPI(Protocol):
    """Main API offered by topograph."""

    def build_graph(
        self,
        compute_instances: Iterable[ComputeInstances],
        inventory: Iterable[Mapping[str, Any]],
        params: Optional[Mapping[str, Any]] = None,
    ) -> Vertex:
        """Collect placements and build the topology graph.

        Args:
            compute_instances: Cluster instances and their node names.
            inventory: Provider inventory entries.
            params: Per-request overrides (plugin, block_sizes, max_block_size).

        Returns:
            Root vertex with tree and block forests.
        """
        ...

    def generate(
        self,
        compute_instances: Iterable[ComputeInstances],
        inventory: Iterable[Mapping[str, Any]],
        params: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """Collect placements and render the scheduler topology config.

        Returns:
            Topology config text.
        """
        ...
