"""Domain entities for topograph.

- Vertex: node of the hierarchical placement graph
- InstanceTopology: placement record of one compute instance
- ClusterTopology: flat list of placement records
- ComputeInstances: instance -> scheduler node name map
"""

from topograph.domain.entities.instance_topology import (
    ClusterTopology,
    ComputeInstances,
    InstanceTopology,
    TopologyValidationError,
    merge_instance_maps,
)
from topograph.domain.entities.vertex import Vertex

__all__ = [
    # Graph
    "Vertex",
    # Records
    "ClusterTopology",
    "ComputeInstances",
    "InstanceTopology",
    "TopologyValidationError",
    "merge_instance_maps",
]
