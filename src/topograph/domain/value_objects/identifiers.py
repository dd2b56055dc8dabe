"""Topology identifiers and well-known graph keys.

Instance, node and switch identifiers are plain strings at runtime; NewType
keeps them apart for the type checker.
"""

from __future__ import annotations

from enum import IntEnum
from typing import NewType

# Provider instance identifier (e.g. GCP instance name)
InstanceId = NewType("InstanceId", str)

# Scheduler-visible node name
NodeName = NewType("NodeName", str)

# Switch, block or accelerator domain identifier
SwitchId = NewType("SwitchId", str)

# Forest root keys
TOPOLOGY_TREE = "topology/tree"
TOPOLOGY_BLOCK = "topology/block"

# Synthetic switch holding instances without placement information
NO_TOPOLOGY = "no-topology"

# Root metadata keys
KEY_PLUGIN = "plugin"
KEY_BLOCK_SIZES = "block_sizes"
KEY_MAX_BLOCK_SIZE = "max_block_size"


class Band(IntEnum):
    """Network tier, innermost first."""
    BLOCK = 1
    SPINE = 2
    DATACENTER = 3


def create_switch_name(band: Band, ordinal: int) -> str:
    """Create a canonical switch name for a tier ordinal."""
    return f"switch.{int(band)}.{ordinal}"
