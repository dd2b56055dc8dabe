"""Dependency injection container for topograph."""

from dataclasses import dataclass

import structlog
from opentelemetry import trace

from topograph.adapters.outbound.gcp_collector import GCPTopologyCollector
from topograph.adapters.outbound.metrics import PrometheusMetrics
from topograph.application.coordinator import TopologyCoordinator
from topograph.infrastructure.config import Config, get_config
from topograph.infrastructure.logging import setup_logging
from topograph.infrastructure.metrics import setup_metrics
from topograph.infrastructure.tracing import setup_tracing


@dataclass
class Container:
    """Dependency injection container for topograph components."""

    config: Config
    logger: structlog.stdlib.BoundLogger
    tracer: trace.Tracer
    metrics: PrometheusMetrics
    coordinator: TopologyCoordinator

    _instance: "Container | None" = None

    @classmethod
    def create(cls) -> "Container":
        """Create and initialize the container with all dependencies."""
        if cls._instance is not None:
            return cls._instance

        config = get_config()
        logger = setup_logging()
        tracer = setup_tracing(config.observability)
        metrics = setup_metrics(config.observability.metrics_port)
        coordinator = TopologyCoordinator(
            GCPTopologyCollector(metrics),
            config=config.topology,
            metrics=metrics,
            tracer=tracer,
        )

        cls._instance = cls(
            config=config,
            logger=logger,
            tracer=tracer,
            metrics=metrics,
            coordinator=coordinator,
        )

        logger.info(
            "topograph_container_initialized",
            environment=config.observability.environment,
            plugin=config.topology.plugin,
        )

        return cls._instance

    @classmethod
    def get(cls) -> "Container":
        """Get the singleton container instance."""
        if cls._instance is None:
            return cls.create()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the container (useful for testing)."""
        cls._instance = None


def get_container() -> Container:
    """Get the dependency injection container."""
    return Container.get()
