"""Render a topology graph as a SLURM topology config.

Two sections exist, selected by the root's `plugin` metadata:

topology/tree:
    SwitchName=switch.2.1 Switches=switch.1.[1-2]
    SwitchName=switch.1.1 Nodes=node[101-104]

topology/block:
    BlockName=nvl1 Nodes=node[101-118]
    BlockSizes=18

Switches are emitted breadth-first with siblings in key order. Node and
switch lists are folded with range_folding.compress.
"""

from __future__ import annotations

import io
import logging
from collections import deque
from typing import Optional, TextIO

from topograph.domain.entities.instance_topology import TopologyValidationError
from topograph.domain.entities.vertex import Vertex
from topograph.domain.services.range_folding import compress
from topograph.domain.value_objects.identifiers import (
    KEY_BLOCK_SIZES,
    KEY_MAX_BLOCK_SIZE,
    KEY_PLUGIN,
    TOPOLOGY_BLOCK,
    TOPOLOGY_TREE,
)
from topograph.ports.outbound.metrics import MetricsSink, NoopMetrics

logger = logging.getLogger(__name__)


def to_slurm_config(root: Vertex, metrics: Optional[MetricsSink] = None) -> str:
    """Render root into a string."""
    buf = io.StringIO()
    write(buf, root, metrics)
    return buf.getvalue()


def write(stream: TextIO, root: Vertex, metrics: Optional[MetricsSink] = None) -> None:
    """Write the section requested by the root metadata.

    Raises:
        TopologyValidationError: If the plugin is unknown, block sizes are
            missing or invalid, or a switch mixes nodes and switches.
    """
    metrics = metrics or NoopMetrics()
    plugin = root.metadata.get(KEY_PLUGIN) or TOPOLOGY_TREE

    if plugin == TOPOLOGY_BLOCK:
        blocks = root.get(TOPOLOGY_BLOCK)
        if blocks is not None:
            write_blocks(stream, blocks, root.get(TOPOLOGY_TREE), root.metadata, metrics)
            return
        logger.warning("Block topology requested but no accelerator domains found, writing tree topology")
    elif plugin != TOPOLOGY_TREE:
        raise TopologyValidationError(f"unsupported topology plugin {plugin!r}")

    tree = root.get(TOPOLOGY_TREE)
    if tree is not None:
        write_tree(stream, tree)


def write_tree(stream: TextIO, tree: Vertex) -> None:
    """Write one SwitchName line per switch of the tree forest."""
    queue = deque(tree.sorted_children())
    while queue:
        sw = queue.popleft()
        if sw.is_leaf:
            logger.warning(f"Skipping node {sw.label!r} attached to no switch")
            continue

        children = sw.sorted_children()
        switches = [child for child in children if not child.is_leaf]
        if switches and len(switches) != len(children):
            raise TopologyValidationError(f"switch {sw.id!r} has both nodes and switches attached")

        if sw.name and sw.name != sw.id:
            stream.write(f"# {sw.name}={sw.id}\n")
        if switches:
            stream.write(f"SwitchName={sw.label} Switches={','.join(compress(s.label for s in switches))}\n")
            queue.extend(switches)
        else:
            stream.write(f"SwitchName={sw.label} Nodes={','.join(compress(n.label for n in children))}\n")


def write_blocks(
    stream: TextIO,
    blocks: Vertex,
    tree: Optional[Vertex],
    options: dict[str, str],
    metrics: MetricsSink,
) -> None:
    """Write one BlockName line per block followed by BlockSizes."""
    block_sizes = parse_block_sizes(options.get(KEY_BLOCK_SIZES), metrics)
    cap = parse_max_block_size(options.get(KEY_MAX_BLOCK_SIZE), metrics)

    leaf_order = _leaf_order(tree)
    for block in order_blocks(blocks, leaf_order):
        parts = [block] if cap is None else split_block(block, cap, leaf_order)
        for part in parts:
            nodes = ",".join(compress(n.label for n in part.vertices.values()))
            stream.write(f"BlockName={part.id} Nodes={nodes}\n")

    stream.write(f"BlockSizes={block_sizes}\n")


def parse_block_sizes(value: Optional[str], metrics: MetricsSink) -> str:
    """Validate a BlockSizes value: comma separated positive integers.

    There is no default; a block topology without block sizes is rejected.
    """
    if value is None or not str(value).strip():
        metrics.add_block_size_validation_error("missing")
        raise TopologyValidationError(f"{KEY_BLOCK_SIZES} must be set for block topology")

    sizes = []
    for token in str(value).split(","):
        token = token.strip()
        if not token.isdecimal() or int(token) < 1:
            metrics.add_block_size_validation_error("invalid")
            raise TopologyValidationError(f"invalid {KEY_BLOCK_SIZES} value {value!r}")
        sizes.append(str(int(token)))
    return ",".join(sizes)


def parse_max_block_size(value: Optional[str], metrics: MetricsSink) -> Optional[int]:
    if value is None or not str(value).strip():
        return None
    token = str(value).strip()
    if not token.isdecimal() or int(token) < 1:
        metrics.add_block_size_validation_error("invalid_max")
        raise TopologyValidationError(f"invalid {KEY_MAX_BLOCK_SIZE} value {value!r}")
    return int(token)


def _leaf_order(tree: Optional[Vertex]) -> dict[str, int]:
    """Instance id -> position in a depth-first walk of the tree forest."""
    if tree is None:
        return {}
    order: dict[str, int] = {}
    for leaf in tree.leaves():
        order.setdefault(leaf.id, len(order))
    return order


def order_blocks(blocks: Vertex, leaf_order: dict[str, int]) -> list[Vertex]:
    """Order blocks by their first member met in the tree walk, then by id."""
    first_seen: dict[str, int] = {}
    for block_id, block in blocks.vertices.items():
        positions = [leaf_order[key] for key in block.vertices if key in leaf_order]
        if positions:
            first_seen[block_id] = min(positions)

    unplaced = len(leaf_order)
    keys = sorted(blocks.vertices, key=lambda key: (first_seen.get(key, unplaced), key))
    return [blocks.vertices[key] for key in keys]


def split_block(block: Vertex, cap: int, leaf_order: dict[str, int]) -> list[Vertex]:
    """Split a block into parts of at most cap members.

    Members are taken in tree order, so instances under a shared switch stay
    in the same part whenever the cap allows. Members the tree does not
    know come last, by name.
    """
    if len(block.vertices) <= cap:
        return [block]

    unplaced = len(leaf_order)
    members = sorted(
        block.vertices.items(),
        key=lambda item: (leaf_order.get(item[0], unplaced), item[1].label, item[0]),
    )

    parts = []
    for start in range(0, len(members), cap):
        part = Vertex(id=f"{block.id}.{len(parts) + 1}", name=block.name)
        for key, member in members[start : start + cap]:
            part.add(member, key=key)
        parts.append(part)

    logger.info(f"Split block {block.id!r} of {len(members)} nodes into {len(parts)} blocks of at most {cap}")
    return parts
