"""\
OpenTelemetry
=============

Author: Akshay Mestry <xa@mes3.dev>
Created on: Sunday, October 18 2026
Last updated on: Sunday, October 18 2026

This module provides `OpenTelemetry` integration for the fshelpers
package. Every filesystem operation runs inside a span, which is a
no-op until a tracer provider is installed, either by the host
application or by `get_tracer` below.
"""

from __future__ import annotations

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (
    OTLPSpanExporter,
)
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import SpanProcessor
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.trace.export import ConsoleSpanExporter
from opentelemetry.sdk.trace.export import SimpleSpanProcessor

from fshelpers.core.config import Config

__all__: list[str] = ["get_tracer", "make_provider"]


def make_provider(config: Config, service: str) -> TracerProvider:
    """Build a tracer provider for the configured exporter.

    :param config: Configuration deciding the exporter.
    :param service: Service name recorded on the resource.
    :return: A tracer provider, without any span processor when
        telemetry is disabled.
    """
    resource = Resource.create(
        {
            "service.name": service,
            "service.version": config.version,
            "deployment.environment": (
                "development" if config.debug else "production"
            ),
            "telemetry.sdk.name": "fshelpers",
        }
    )
    provider = TracerProvider(resource=resource)
    if not config.telemetry.enable:
        return provider
    processor: SpanProcessor
    if config.debug or config.telemetry.exporter == "console":
        processor = SimpleSpanProcessor(ConsoleSpanExporter())
    else:
        processor = BatchSpanProcessor(OTLPSpanExporter())
    provider.add_span_processor(processor)
    return provider


def get_tracer(
    config: Config | None = None,
    name: str | None = None,
) -> trace.Tracer:
    """Configure and return a tracer with proper integration.

    This function installs the provider built by `make_provider` as the
    global tracer provider, which the filesystem operations pick up.
    `OpenTelemetry` only allows the global provider to be set once per
    process, later calls keep the first provider.

    :param config: An optional configuration object to initialise the
        tracer. If not provided, a default `Config` instance is created.
    :param name: Override for the service name, defaults to `None`. If
        not provided, uses the name from the configuration.
    :return: A configured `OpenTelemetry Tracer` instance.
    """
    if config is None:
        config = Config()
    service = name or config.telemetry.name or config.name
    trace.set_tracer_provider(make_provider(config, service))
    return trace.get_tracer(service)
