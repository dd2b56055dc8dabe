"""GCP placement collector.

GCP reports the placement of a VM in `resourceStatus.physicalHost` as
`/<cluster>/<rack>/<host>`. The rack is the innermost network tier (block)
and the cluster the next one (spine).

Inventory is listed by the caller (Compute Engine `instances.list` across
zones) and handed over as JSON-like mappings; this module only parses it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional

from topograph.domain.entities.instance_topology import ClusterTopology, InstanceTopology
from topograph.ports.outbound.collector import (
    CollectorError,
    PhysicalHostNotFoundError,
    ResourceStatusNotFoundError,
)
from topograph.ports.outbound.metrics import MetricsSink, NoopMetrics

logger = logging.getLogger(__name__)


def _field(entry: Mapping[str, Any], *names: str) -> Any:
    # REST payloads are camelCase, client library dicts snake_case
    for name in names:
        if entry.get(name) is not None:
            return entry[name]
    return None


def parse_physical_host(instance: str, physical_host: str) -> tuple[str, str]:
    """Return (cluster id, rack id) of a physical host path.

    Raises:
        CollectorError: If the path has fewer than two segments.
    """
    tokens = [token for token in physical_host.split("/") if token]
    if len(tokens) < 2:
        raise CollectorError(instance, f"malformed physical host {physical_host!r}")
    return tokens[0], tokens[1]


@dataclass
class CollectResult:
    """Records extracted from the inventory and the entries skipped."""
    topology: ClusterTopology = field(default_factory=ClusterTopology)
    skipped: list[CollectorError] = field(default_factory=list)


class GCPTopologyCollector:
    """Extract block/spine placement from GCP inventory entries."""

    provider = "gcp"

    def __init__(self, metrics: Optional[MetricsSink] = None) -> None:
        self._metrics = metrics or NoopMetrics()

    def parse_entry(self, entry: Mapping[str, Any]) -> InstanceTopology:
        """Turn one inventory entry into a placement record.

        Raises:
            ResourceStatusNotFoundError: If the entry has no resource status.
            PhysicalHostNotFoundError: If the resource status has no physical host.
            CollectorError: If the entry has no name or a malformed host path.
        """
        name = _field(entry, "name")
        if not name:
            raise CollectorError("<unnamed>", "inventory entry has no name")

        status = _field(entry, "resourceStatus", "resource_status")
        self._metrics.set_resource_status_not_found(name, status is None)
        if status is None:
            raise ResourceStatusNotFoundError(name)

        physical_host = _field(status, "physicalHost", "physical_host")
        self._metrics.set_physical_host_not_found(name, not physical_host)
        if not physical_host:
            raise PhysicalHostNotFoundError(name)

        cluster_id, rack_id = parse_physical_host(name, physical_host)
        return InstanceTopology(instance_id=name, block_id=rack_id, spine_id=cluster_id)

    def collect_all(
        self,
        inventory: Iterable[Mapping[str, Any]],
        instance_to_node: Mapping[str, str],
    ) -> CollectResult:
        """Parse every entry, keeping cluster instances and the skip reasons."""
        result = CollectResult()
        for entry in inventory:
            try:
                inst = self.parse_entry(entry)
            except CollectorError as e:
                logger.warning(f"Skipping instance: {e}")
                result.skipped.append(e)
                continue
            if inst.instance_id in instance_to_node:
                result.topology.append(inst)

        logger.info(
            f"Collected {len(result.topology)} GCP instances, skipped {len(result.skipped)}"
        )
        return result

    def collect(
        self,
        inventory: Iterable[Mapping[str, Any]],
        instance_to_node: Mapping[str, str],
    ) -> ClusterTopology:
        return self.collect_all(inventory, instance_to_node).topology
