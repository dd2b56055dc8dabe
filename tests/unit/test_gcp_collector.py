"""Unit tests for the GCP placement collector."""

import pytest

from topograph.adapters.outbound.gcp_collector import GCPTopologyCollector, parse_physical_host
from topograph.domain.entities.instance_topology import InstanceTopology
from topograph.ports.outbound.collector import (
    CollectorError,
    PhysicalHostNotFoundError,
    ResourceStatusNotFoundError,
)


def entry(name, physical_host=None, status=True):
    data = {"name": name}
    if status:
        data["resourceStatus"] = {} if physical_host is None else {"physicalHost": physical_host}
    return data


@pytest.mark.unit
class TestParseEntry:
    """Test parsing of single inventory entries."""

    def test_physical_host(self):
        inst = GCPTopologyCollector().parse_entry(entry("vm-1", "/cl1/rack7/host3"))
        assert inst == InstanceTopology("vm-1", block_id="rack7", spine_id="cl1")

    def test_snake_case_entry(self):
        data = {"name": "vm-1", "resource_status": {"physical_host": "/cl1/rack7/host3"}}
        assert GCPTopologyCollector().parse_entry(data).block_id == "rack7"

    def test_resource_status_not_found(self, recording_metrics):
        with pytest.raises(ResourceStatusNotFoundError):
            GCPTopologyCollector(recording_metrics).parse_entry(entry("vm-1", status=False))
        assert recording_metrics.resource_status_not_found == {"vm-1": True}

    def test_physical_host_not_found(self, recording_metrics):
        with pytest.raises(PhysicalHostNotFoundError):
            GCPTopologyCollector(recording_metrics).parse_entry(entry("vm-1"))
        assert recording_metrics.resource_status_not_found == {"vm-1": False}
        assert recording_metrics.physical_host_not_found == {"vm-1": True}

    def test_malformed_physical_host(self):
        with pytest.raises(CollectorError, match="malformed"):
            parse_physical_host("vm-1", "/cl1")


@pytest.mark.unit
class TestCollect:
    """Test collecting a whole inventory."""

    def test_skips_and_filters(self, recording_metrics):
        inventory = [
            entry("vm-1", "/cl1/rack1/h1"),
            entry("vm-2", "/cl1/rack2/h2"),
            entry("vm-3", status=False),
            entry("vm-4"),
            entry("other", "/cl2/rack9/h9"),
        ]
        collector = GCPTopologyCollector(recording_metrics)
        result = collector.collect_all(inventory, {"vm-1": "n1", "vm-2": "n2", "vm-3": "n3", "vm-4": "n4"})

        assert [inst.instance_id for inst in result.topology] == ["vm-1", "vm-2"]
        assert [type(e) for e in result.skipped] == [ResourceStatusNotFoundError, PhysicalHostNotFoundError]
        assert [e.instance for e in result.skipped] == ["vm-3", "vm-4"]

    def test_collect_returns_topology(self):
        cluster = GCPTopologyCollector().collect([entry("vm-1", "/cl1/rack1/h1")], {"vm-1": "n1"})
        assert len(cluster) == 1
