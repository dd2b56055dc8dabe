"""Per-instance placement records reported by a provider collector.

Each record places one compute instance in a three-tier network hierarchy
(block, spine, datacenter) and optionally in an accelerator interconnect
domain such as an NVLink domain. Tiers are filled innermost first: a spine
without a block, or a datacenter without a spine, is rejected.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, Iterator, Optional

if TYPE_CHECKING:
    from topograph.domain.entities.vertex import Vertex
    from topograph.ports.outbound.metrics import MetricsSink


class TopologyValidationError(Exception):
    """Input violates the topology contract."""
    pass


@dataclass
class InstanceTopology:
    """Placement of a single compute instance.

    Name fields are filled in by normalization; collectors only set ids.
    """
    instance_id: str
    accelerator_id: str = ""
    block_id: str = ""
    block_name: str = ""
    spine_id: str = ""
    spine_name: str = ""
    datacenter_id: str = ""
    datacenter_name: str = ""

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Check the record against the tier prefix contract.

        Raises:
            TopologyValidationError: If the instance id is empty or a tier is
                set while a more specific tier below it is empty.
        """
        if not self.instance_id:
            raise TopologyValidationError("instance topology record has an empty instance ID")
        if self.spine_id and not self.block_id:
            raise TopologyValidationError(
                f"instance {self.instance_id!r} has spine {self.spine_id!r} but no block"
            )
        if self.datacenter_id and not self.spine_id:
            raise TopologyValidationError(
                f"instance {self.instance_id!r} has datacenter {self.datacenter_id!r} but no spine"
            )

    @property
    def switch_ids(self) -> list[str]:
        """Populated tier ids, innermost first."""
        ids = []
        for switch_id in (self.block_id, self.spine_id, self.datacenter_id):
            if not switch_id:
                break
            ids.append(switch_id)
        return ids

    @property
    def switch_names(self) -> list[str]:
        """Tier names aligned with switch_ids."""
        return [self.block_name, self.spine_name, self.datacenter_name][: len(self.switch_ids)]


@dataclass
class ComputeInstances:
    """Instances of one region mapped to their scheduler node names."""
    region: str = ""
    instances: dict[str, str] = field(default_factory=dict)


def merge_instance_maps(compute_instances: Iterable[ComputeInstances]) -> dict[str, str]:
    """Flatten several ComputeInstances into one instance -> node map."""
    i2n: dict[str, str] = {}
    for ci in compute_instances:
        i2n.update(ci.instances)
    return i2n


@dataclass
class ClusterTopology:
    """Flat list of instance placements for a whole cluster."""
    instances: list[InstanceTopology] = field(default_factory=list)

    def append(self, instance: InstanceTopology) -> None:
        instance.validate()
        self.instances.append(instance)

    def __len__(self) -> int:
        return len(self.instances)

    def __iter__(self) -> Iterator[InstanceTopology]:
        return iter(self.instances)

    def normalize(self) -> None:
        """Sort records by hierarchy and assign canonical switch names."""
        from topograph.domain.services.normalizer import normalize_instances

        normalize_instances(self.instances)

    def to_three_tier_graph(
        self,
        provider: str,
        compute_instances: Iterable[ComputeInstances],
        normalize: bool = False,
        metadata: Optional[dict[str, str]] = None,
        metrics: Optional[MetricsSink] = None,
    ) -> Vertex:
        """Build the tree and block views of this cluster.

        Args:
            provider: Provider name, used for missing-topology reporting.
            compute_instances: Instance -> node name maps; only mapped
                instances appear in the graph.
            normalize: Run normalization before building.
            metadata: Options attached to the returned root.
            metrics: Sink for the missing-topology count.

        Returns:
            Root vertex holding the tree forest and, when any instance has an
            accelerator domain, the block forest.
        """
        from topograph.domain.services.graph_builder import build_three_tier_graph

        if normalize:
            self.normalize()
        return build_three_tier_graph(
            self.instances,
            merge_instance_maps(compute_instances),
            provider=provider,
            metadata=metadata,
            metrics=metrics,
        )
