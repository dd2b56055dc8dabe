"""Domain services for topology graph construction.

Services implement the core pipeline:
- normalize_instances: deterministic ordering and canonical switch names
- build_three_tier_graph: tree, block and no-topology views
- compress / split / expand: hostlist range folding
- write / to_slurm_config: SLURM topology config rendering
"""

from topograph.domain.services.graph_builder import DomainMap, build_three_tier_graph
from topograph.domain.services.normalizer import hierarchy_key, normalize_instances
from topograph.domain.services.range_folding import compress, expand, split
from topograph.domain.services.slurm_writer import (
    order_blocks,
    split_block,
    to_slurm_config,
    write,
    write_blocks,
    write_tree,
)

__all__ = [
    "DomainMap",
    "build_three_tier_graph",
    "hierarchy_key",
    "normalize_instances",
    "compress",
    "expand",
    "split",
    "order_blocks",
    "split_block",
    "to_slurm_config",
    "write",
    "write_blocks",
    "write_tree",
]
