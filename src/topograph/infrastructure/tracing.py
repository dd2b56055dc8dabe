"""OpenTelemetry tracing for topograph.

Spans are shipped to an OTLP collector when an endpoint is configured and
printed to stderr otherwise; stdout carries the generated topology config.
"""

import sys

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter, SpanExporter

from topograph import __version__
from topograph.infrastructure.config import ObservabilityConfig


def build_span_exporter(observability: ObservabilityConfig) -> SpanExporter:
    if observability.otlp_endpoint:
        return OTLPSpanExporter(endpoint=observability.otlp_endpoint, insecure=True)
    return ConsoleSpanExporter(out=sys.stderr)


def setup_tracing(observability: ObservabilityConfig) -> trace.Tracer:
    """Install a tracer provider for the process and return its tracer."""
    provider = TracerProvider(
        resource=Resource.create(
            {
                "service.name": "topograph",
                "service.version": __version__,
                "deployment.environment": observability.environment,
            }
        )
    )
    provider.add_span_processor(BatchSpanProcessor(build_span_exporter(observability)))
    trace.set_tracer_provider(provider)

    # the global provider can only be set once per process
    return provider.get_tracer("topograph", __version__)
