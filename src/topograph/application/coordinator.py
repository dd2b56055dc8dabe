"""Topograph application coordinator.

Runs one topology request end to end: a provider collector extracts
placement records from the inventory, the graph builder folds them into the
tree and block views, and the SLURM writer renders the result. Each request
is traced and counted.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Iterable, Mapping, Optional

from opentelemetry import trace

from topograph.adapters.inbound.topology_response import get_topology_format
from topograph.domain.entities.instance_topology import (
    ComputeInstances,
    TopologyValidationError,
    merge_instance_maps,
)
from topograph.domain.entities.vertex import Vertex
from topograph.domain.services.slurm_writer import to_slurm_config
from topograph.domain.value_objects.identifiers import (
    KEY_BLOCK_SIZES,
    KEY_MAX_BLOCK_SIZE,
    KEY_PLUGIN,
)
from topograph.infrastructure.config import TopologyConfig
from topograph.ports.outbound.collector import TopologyCollector
from topograph.ports.outbound.metrics import MetricsSink, NoopMetrics

logger = logging.getLogger(__name__)

ENGINE_SLURM = "slurm"


class TopologyCoordinator:
    """Coordinates collection, graph building and rendering."""

    def __init__(
        self,
        collector: TopologyCollector,
        config: Optional[TopologyConfig] = None,
        metrics: Optional[MetricsSink] = None,
        tracer: Optional[trace.Tracer] = None,
    ) -> None:
        """Initialize the coordinator.

        Args:
            collector: Provider collector.
            config: Topology defaults; per-request params override them.
            metrics: Metrics sink, no-op when omitted.
            tracer: OpenTelemetry tracer, the global one when omitted.
        """
        self._collector = collector
        self._config = config or TopologyConfig()
        self._metrics = metrics or NoopMetrics()
        self._tracer = tracer or trace.get_tracer(__name__)

    @property
    def provider(self) -> str:
        return self._collector.provider

    def request_options(self, params: Optional[Mapping[str, Any]] = None) -> dict[str, str]:
        """Merge request params over the configured defaults."""
        options = self._config.to_metadata()
        if params:
            if params.get(KEY_PLUGIN):
                options[KEY_PLUGIN] = get_topology_format(params)
            for key in (KEY_BLOCK_SIZES, KEY_MAX_BLOCK_SIZE):
                if params.get(key) is not None:
                    options[key] = str(params[key])
        return options

    def build_graph(
        self,
        compute_instances: Iterable[ComputeInstances],
        inventory: Iterable[Mapping[str, Any]],
        params: Optional[Mapping[str, Any]] = None,
    ) -> Vertex:
        compute_instances = list(compute_instances)
        i2n = merge_instance_maps(compute_instances)

        cluster = self._collector.collect(inventory, i2n)
        logger.info(f"Collected {len(cluster)} of {len(i2n)} instances from {self.provider}")

        return cluster.to_three_tier_graph(
            self.provider,
            compute_instances,
            normalize=self._config.normalize,
            metadata=self.request_options(params),
            metrics=self._metrics,
        )

    def generate(
        self,
        compute_instances: Iterable[ComputeInstances],
        inventory: Iterable[Mapping[str, Any]],
        params: Optional[Mapping[str, Any]] = None,
    ) -> str:
        start = time.monotonic()
        status = 500
        with self._tracer.start_as_current_span("topograph.generate") as span:
            span.set_attribute("topograph.provider", self.provider)
            span.set_attribute("topograph.engine", ENGINE_SLURM)
            try:
                root = self.build_graph(compute_instances, inventory, params)
                span.set_attribute("topograph.plugin", root.metadata.get(KEY_PLUGIN, ""))
                output = to_slurm_config(root, self._metrics)
                status = 200
                return output
            except TopologyValidationError as e:
                status = 400
                logger.error(f"Invalid topology request: {e}")
                span.record_exception(e)
                raise
            finally:
                span.set_attribute("topograph.status", status)
                self._metrics.observe_request(self.provider, ENGINE_SLURM, status, time.monotonic() - start)
