"""Unit tests for topology normalization."""

import copy
import itertools

import pytest

from topograph.domain.entities.instance_topology import ClusterTopology, InstanceTopology
from topograph.domain.services.normalizer import normalize_instances


def _names(instances):
    return [
        (inst.instance_id, inst.block_name, inst.spine_name, inst.datacenter_name)
        for inst in instances
    ]


@pytest.mark.unit
class TestNormalize:
    """Test sorting and canonical switch naming."""

    def test_sorted_by_hierarchy(self, cluster):
        cluster.normalize()
        assert [inst.instance_id for inst in cluster] == ["i1", "i2", "i3", "i4", "i5"]

    def test_canonical_names(self, cluster):
        cluster.normalize()
        assert _names(cluster) == [
            ("i1", "switch.1.1", "switch.2.1", "switch.3.1"),
            ("i2", "switch.1.1", "switch.2.1", "switch.3.1"),
            ("i3", "switch.1.2", "switch.2.1", "switch.3.1"),
            ("i4", "switch.1.3", "switch.2.2", "switch.3.1"),
            ("i5", "switch.1.4", "switch.2.3", "switch.3.2"),
        ]

    def test_instance_id_breaks_ties(self):
        instances = [
            InstanceTopology("b", block_id="blk"),
            InstanceTopology("a", block_id="blk"),
        ]
        normalize_instances(instances)
        assert [inst.instance_id for inst in instances] == ["a", "b"]
        assert [inst.block_name for inst in instances] == ["switch.1.1", "switch.1.1"]

    def test_tiers_are_numbered_independently(self):
        # the same id in two tiers gets one name per tier
        instances = [InstanceTopology("i1", block_id="x", spine_id="x", datacenter_id="x")]
        normalize_instances(instances)
        assert _names(instances) == [("i1", "switch.1.1", "switch.2.1", "switch.3.1")]

    def test_empty_tiers_get_no_name(self):
        instances = [
            InstanceTopology("i1", block_id="b1"),
            InstanceTopology("i2", accelerator_id="nvl"),
        ]
        normalize_instances(instances)
        assert _names(instances) == [
            ("i2", "", "", ""),
            ("i1", "switch.1.1", "", ""),
        ]

    def test_order_insensitive(self, cluster):
        expected = copy.deepcopy(cluster)
        expected.normalize()

        for perm in itertools.permutations(cluster.instances):
            shuffled = ClusterTopology(instances=copy.deepcopy(list(perm)))
            shuffled.normalize()
            assert shuffled == expected

    def test_idempotent(self, cluster):
        cluster.normalize()
        once = copy.deepcopy(cluster)
        cluster.normalize()
        assert cluster == once
