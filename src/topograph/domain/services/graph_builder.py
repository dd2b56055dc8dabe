"""Fold flat placement records into the tree and block views.

Tree view: every mapped instance hangs below the chain of switches given by
its block, spine and datacenter ids. Chains that share a switch share the
vertex, so the result is a forest with one tree per top-level switch.

Block view: instances are grouped by accelerator domain into flat blocks,
independently of the network tiers.

Instances known to the scheduler but missing from the records end up under
a synthetic NO_TOPOLOGY switch so that no node is silently dropped.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Mapping, Optional, Sequence

from topograph.domain.entities.instance_topology import InstanceTopology
from topograph.domain.entities.vertex import Vertex
from topograph.domain.value_objects.identifiers import (
    NO_TOPOLOGY,
    TOPOLOGY_BLOCK,
    TOPOLOGY_TREE,
    Band,
)
from topograph.ports.outbound.metrics import MetricsSink, NoopMetrics

logger = logging.getLogger(__name__)


class DomainMap:
    """Accelerator domain -> {instance id: node name}."""

    def __init__(self) -> None:
        self._domains: dict[str, dict[str, str]] = {}

    def add_host(self, domain: str, instance_id: str, node_name: str) -> None:
        self._domains.setdefault(domain, {})[instance_id] = node_name

    def __bool__(self) -> bool:
        return bool(self._domains)

    def to_blocks(self) -> Vertex:
        """Build the block forest, one flat vertex per domain."""
        root = Vertex()
        for domain, hosts in self._domains.items():
            block = root.add(Vertex(id=domain))
            for instance_id, node_name in hosts.items():
                block.add(Vertex(id=instance_id, name=node_name))
        return root


def build_three_tier_graph(
    instances: Sequence[InstanceTopology],
    instance_to_node: Mapping[str, str],
    provider: str = "",
    metadata: Optional[dict[str, str]] = None,
    metrics: Optional[MetricsSink] = None,
) -> Vertex:
    """Build the topology graph for a cluster.

    Args:
        instances: Placement records, normalized or not.
        instance_to_node: Instance id -> scheduler node name. Records of
            instances missing here are skipped.
        provider: Provider name reported with the missing-topology count.
        metadata: Options attached to the returned root.
        metrics: Sink for the missing-topology count.

    Returns:
        Root vertex whose children are the non-empty forests.
    """
    metrics = metrics or NoopMetrics()
    unmapped = dict(instance_to_node)
    unplaced: dict[str, str] = {}

    tops: dict[tuple[Band, str], Vertex] = {}
    switches: dict[tuple[Band, str], Vertex] = {}
    domains = DomainMap()

    for inst in instances:
        inst.validate()
        node_name = unmapped.pop(inst.instance_id, None)
        if node_name is None:
            continue

        logger.debug(f"Found node {node_name!r} instance {inst.instance_id!r}")

        if inst.accelerator_id:
            domains.add_host(inst.accelerator_id, inst.instance_id, node_name)

        if not inst.block_id:
            # accelerator domain only, no network placement
            unplaced[inst.instance_id] = node_name
            continue

        vertex = Vertex(id=inst.instance_id, name=node_name)
        top_band = Band.BLOCK
        for band, switch_id, switch_name in zip(Band, inst.switch_ids, inst.switch_names):
            switch = switches.get((band, switch_id))
            if switch is None:
                switch = Vertex(id=switch_id, name=switch_name)
                switches[(band, switch_id)] = switch
            switch.add(vertex)
            vertex = switch
            top_band = band
        tops[(top_band, vertex.id)] = vertex

    forest: dict[str, Vertex] = {}
    counts = Counter(switch_id for _, switch_id in tops)
    for (band, switch_id), switch in tops.items():
        # the same id may top chains of different tiers
        key = switch_id if counts[switch_id] == 1 else f"{switch_id}.{int(band)}"
        forest[key] = switch

    unplaced.update(unmapped)
    if unplaced:
        logger.debug(f"Adding nodes w/o topology: {sorted(unplaced.values())}")
        bucket = Vertex(id=NO_TOPOLOGY)
        for instance_id, node_name in unplaced.items():
            bucket.add(Vertex(id=instance_id, name=node_name))
        forest[NO_TOPOLOGY] = bucket
    metrics.set_missing_topology(provider, len(unplaced))

    root = Vertex(metadata=dict(metadata or {}))
    if forest:
        root.add(Vertex(vertices=forest), key=TOPOLOGY_TREE)
    if domains:
        root.add(domains.to_blocks(), key=TOPOLOGY_BLOCK)
    return root
