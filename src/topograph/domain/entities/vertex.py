"""Hierarchical placement graph.

A single recursive Vertex type represents every level of a topology graph:
compute instances (leaves), switches, accelerator blocks, and the forest
roots that group them. A parent owns its children; there are no back
references, so a graph is always a tree.

The top-level root holds up to two forests keyed by TOPOLOGY_TREE and
TOPOLOGY_BLOCK, and carries the request options in its metadata.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional


@dataclass
class Vertex:
    """A node of the placement graph.

    Equality is structural: two vertices are equal when their ids, names,
    metadata and child mappings are equal, regardless of the order in which
    children were inserted.
    """
    id: str = ""
    name: str = ""
    vertices: dict[str, Vertex] = field(default_factory=dict)
    metadata: dict[str, str] = field(default_factory=dict)

    @property
    def is_leaf(self) -> bool:
        """True for compute instances."""
        return not self.vertices

    @property
    def label(self) -> str:
        """Name when set, id otherwise."""
        return self.name or self.id

    def add(self, child: Vertex, key: Optional[str] = None) -> Vertex:
        """Insert a child under key (its id by default), replacing any previous one."""
        self.vertices[child.id if key is None else key] = child
        return child

    def get(self, key: str) -> Optional[Vertex]:
        return self.vertices.get(key)

    def sorted_children(self) -> list[Vertex]:
        """Children ordered by key."""
        return [self.vertices[key] for key in sorted(self.vertices)]

    def walk(self) -> Iterator[Vertex]:
        """Depth-first pre-order traversal with children in key order."""
        yield self
        for child in self.sorted_children():
            yield from child.walk()

    def leaves(self) -> Iterator[Vertex]:
        """Leaves below this vertex in depth-first order."""
        for vertex in self.walk():
            if vertex.is_leaf and vertex is not self:
                yield vertex
