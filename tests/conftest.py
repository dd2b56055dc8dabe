"""Pytest configuration and shared fixtures for topograph tests."""

import pytest
from prometheus_client import CollectorRegistry

from topograph.adapters.outbound.metrics import PrometheusMetrics
from topograph.domain.entities.instance_topology import (
    ClusterTopology,
    ComputeInstances,
    InstanceTopology,
)
from topograph.infrastructure.config import get_config
from topograph.infrastructure.container import Container


class RecordingMetrics:
    """MetricsSink that remembers every call."""

    def __init__(self):
        self.requests = []
        self.missing_topology = {}
        self.block_size_errors = []
        self.resource_status_not_found = {}
        self.physical_host_not_found = {}

    def observe_request(self, provider, engine, status, duration_seconds):
        self.requests.append((provider, engine, status))

    def set_missing_topology(self, provider, count):
        self.missing_topology[provider] = count

    def add_block_size_validation_error(self, error_type):
        self.block_size_errors.append(error_type)

    def set_resource_status_not_found(self, instance, missing):
        self.resource_status_not_found[instance] = missing

    def set_physical_host_not_found(self, instance, missing):
        self.physical_host_not_found[instance] = missing


@pytest.fixture(autouse=True)
def reset_container():
    """Reset the DI container and cached config before each test."""
    Container.reset()
    get_config.cache_clear()
    yield
    Container.reset()
    get_config.cache_clear()


@pytest.fixture
def recording_metrics() -> RecordingMetrics:
    return RecordingMetrics()


@pytest.fixture
def prometheus_metrics() -> PrometheusMetrics:
    """Metrics on a private registry."""
    return PrometheusMetrics(CollectorRegistry())


@pytest.fixture
def cluster() -> ClusterTopology:
    """Two datacenters, three spines, four blocks, one NVLink domain.

    dc1
    ├── sp1: blk1 (i1, i2), blk2 (i3)
    └── sp2: blk3 (i4)
    dc2
    └── sp3: blk4 (i5)
    """
    return ClusterTopology(
        instances=[
            InstanceTopology("i5", block_id="blk4", spine_id="sp3", datacenter_id="dc2"),
            InstanceTopology("i3", accelerator_id="nvl1", block_id="blk2", spine_id="sp1", datacenter_id="dc1"),
            InstanceTopology("i1", accelerator_id="nvl1", block_id="blk1", spine_id="sp1", datacenter_id="dc1"),
            InstanceTopology("i4", block_id="blk3", spine_id="sp2", datacenter_id="dc1"),
            InstanceTopology("i2", accelerator_id="nvl1", block_id="blk1", spine_id="sp1", datacenter_id="dc1"),
        ]
    )


@pytest.fixture
def compute_instances() -> list[ComputeInstances]:
    return [
        ComputeInstances(region="us-east1", instances={"i1": "node1", "i2": "node2", "i3": "node3"}),
        ComputeInstances(region="us-west1", instances={"i4": "node4", "i5": "node5", "cpu1": "cpu1"}),
    ]


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: mark test as unit test")
    config.addinivalue_line("markers", "integration: mark test as integration test")
