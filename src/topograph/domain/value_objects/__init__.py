"""Domain value objects for topograph.

Identifiers, tier bands and the well-known keys used inside a topology graph.
"""

from topograph.domain.value_objects.identifiers import (
    KEY_BLOCK_SIZES,
    KEY_MAX_BLOCK_SIZE,
    KEY_PLUGIN,
    NO_TOPOLOGY,
    TOPOLOGY_BLOCK,
    TOPOLOGY_TREE,
    Band,
    InstanceId,
    NodeName,
    SwitchId,
    create_switch_name,
)

__all__ = [
    "Band",
    "InstanceId",
    "NodeName",
    "SwitchId",
    "create_switch_name",
    "KEY_BLOCK_SIZES",
    "KEY_MAX_BLOCK_SIZE",
    "KEY_PLUGIN",
    "NO_TOPOLOGY",
    "TOPOLOGY_BLOCK",
    "TOPOLOGY_TREE",
]
