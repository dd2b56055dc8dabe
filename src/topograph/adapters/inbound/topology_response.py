"""Provider-agnostic topology request/response payload.

A topology service answers a TopologyRequest with one Instance per compute
instance, carrying its network layer path (innermost switch first) and its
NVLink domain. This module converts such a response into a placement graph
and a ClusterTopology back into a response.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional

from pydantic import BaseModel, Field

from topograph.domain.entities.instance_topology import (
    ClusterTopology,
    ComputeInstances,
    merge_instance_maps,
)
from topograph.domain.entities.vertex import Vertex
from topograph.domain.services.graph_builder import DomainMap
from topograph.domain.value_objects.identifiers import (
    KEY_PLUGIN,
    NO_TOPOLOGY,
    TOPOLOGY_BLOCK,
    TOPOLOGY_TREE,
)

logger = logging.getLogger(__name__)

NVLINK_PREFIX = "nvlink-"


class TopologyRequest(BaseModel):
    """Request for the topology of a set of instances."""

    provider: str = Field(default="")
    region: str = Field(default="")
    instance_ids: list[str] = Field(default_factory=list)


class Instance(BaseModel):
    """Placement of one instance as reported by a topology service."""

    id: str = Field(..., min_length=1)
    instance_type: str = Field(default="")
    provider: str = Field(default="")
    region: str = Field(default="")
    data_center: str = Field(default="")
    network_layers: list[str] = Field(default_factory=list, description="Switch path, innermost first")
    nvlink_domain: str = Field(default="")


class TopologyResponse(BaseModel):
    """Topology service response."""

    instances: list[Instance] = Field(default_factory=list)


def get_topology_format(params: Optional[Mapping[str, Any]]) -> str:
    """Requested topology plugin, tree unless params name another one."""
    if params:
        plugin = params.get(KEY_PLUGIN)
        if isinstance(plugin, str) and plugin:
            return plugin
    return TOPOLOGY_TREE


def to_graph(
    response: TopologyResponse,
    compute_instances: Iterable[ComputeInstances],
    topology_format: str,
) -> Vertex:
    """Build a placement graph from a topology response.

    Instances without a node mapping are ignored. Mapped instances without
    network layers only appear in their NVLink block. Instances that the
    response does not mention go to the NO_TOPOLOGY switch.
    """
    i2n = merge_instance_maps(compute_instances)
    forest: dict[str, Vertex] = {}
    switches: dict[str, Vertex] = {}
    domains = DomainMap()

    for inst in response.instances:
        node_name = i2n.pop(inst.id, None)
        if node_name is None:
            continue

        if topology_format == TOPOLOGY_BLOCK and inst.nvlink_domain:
            domains.add_host(NVLINK_PREFIX + inst.nvlink_domain, inst.id, node_name)

        vertex = Vertex(id=inst.id, name=node_name)
        for layer in inst.network_layers:
            sw = switches.get(layer)
            if sw is None:
                sw = switches[layer] = Vertex(id=layer)
            sw.add(vertex)
            vertex = sw
        if inst.network_layers:
            forest[vertex.id] = vertex

    if i2n:
        logger.info(f"Adding {len(i2n)} nodes without topology")
        bucket = Vertex(id=NO_TOPOLOGY)
        for instance_id, node_name in i2n.items():
            bucket.add(Vertex(id=instance_id, name=node_name))
        forest[NO_TOPOLOGY] = bucket

    root = Vertex()
    root.add(Vertex(vertices=forest), key=TOPOLOGY_TREE)
    if domains:
        root.add(domains.to_blocks(), key=TOPOLOGY_BLOCK)
    return root


def from_cluster_topology(cluster: ClusterTopology, provider: str = "", region: str = "") -> TopologyResponse:
    """Describe a cluster as a topology response."""
    return TopologyResponse(
        instances=[
            Instance(
                id=inst.instance_id,
                provider=provider,
                region=region,
                data_center=inst.datacenter_id,
                network_layers=inst.switch_ids,
                nvlink_domain=inst.accelerator_id,
            )
            for inst in cluster
        ]
    )
