"""Deterministic ordering and canonical switch naming.

Provider switch ids are long and opaque. Normalization sorts the records by
network hierarchy and replaces every switch id with a short name
`switch.<band>.<ordinal>`, numbered in first-seen order after sorting, so two
runs over the same cluster produce byte-identical scheduler files whatever
order the collector returned.
"""

from __future__ import annotations

import logging

from topograph.domain.entities.instance_topology import InstanceTopology
from topograph.domain.value_objects.identifiers import Band, create_switch_name

logger = logging.getLogger(__name__)


def hierarchy_key(inst: InstanceTopology) -> tuple[str, str, str, str]:
    """Sort key grouping records by datacenter, then spine, then block."""
    return (inst.datacenter_id, inst.spine_id, inst.block_id, inst.instance_id)


def normalize_instances(instances: list[InstanceTopology]) -> None:
    """Sort records in place and assign canonical tier names."""
    instances.sort(key=hierarchy_key)

    names: dict[Band, dict[str, str]] = {band: {} for band in Band}

    def canonical(band: Band, switch_id: str) -> str:
        if not switch_id:
            return ""
        seen = names[band]
        if switch_id not in seen:
            seen[switch_id] = create_switch_name(band, len(seen) + 1)
        return seen[switch_id]

    for inst in instances:
        inst.block_name = canonical(Band.BLOCK, inst.block_id)
        inst.spine_name = canonical(Band.SPINE, inst.spine_id)
        inst.datacenter_name = canonical(Band.DATACENTER, inst.datacenter_id)

    logger.debug(
        "Normalized %d instances: %d blocks, %d spines, %d datacenters",
        len(instances),
        len(names[Band.BLOCK]),
        len(names[Band.SPINE]),
        len(names[Band.DATACENTER]),
    )
