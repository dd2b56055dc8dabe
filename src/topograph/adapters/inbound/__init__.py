"""Inbound adapters for topograph.

- topology_response: request/response payload models and graph conversion
"""

from topograph.adapters.inbound.topology_response import (
    Instance,
    TopologyRequest,
    TopologyResponse,
    from_cluster_topology,
    get_topology_format,
    to_graph,
)

__all__ = [
    "Instance",
    "TopologyRequest",
    "TopologyResponse",
    "from_cluster_topology",
    "get_topology_format",
    "to_graph",
]
