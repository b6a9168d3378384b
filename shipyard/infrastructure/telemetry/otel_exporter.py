"""
OpenTelemetry Exporter for Shipyard

Architectural Intent:
- Implements TelemetryPort on top of the OpenTelemetry SDK
- One span per lifecycle operation, one duration metric per completion
- Exports to any OTLP-compatible backend

Security:
- Endpoint defaults to empty string (must be explicitly configured)
- Non-localhost http:// endpoints rejected unless insecure=True
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Any
from urllib.parse import urlparse
import logging
from shipyard.domain.ports.telemetry_port import TelemetryPort

logger = logging.getLogger(__name__)

OPERATION_DURATION = "shipyard.operation.duration_ms"


@dataclass
class OTELConfig:
    endpoint: str = ""
    service_name: str = "shipyard"
    environment: str = "development"
    enable_traces: bool = True
    enable_metrics: bool = True
    insecure: bool = False

    def __post_init__(self) -> None:
        if self.endpoint:
            parsed = urlparse(self.endpoint)
            is_localhost = parsed.hostname in ("localhost", "127.0.0.1", "::1")
            if parsed.scheme == "http" and not is_localhost and not self.insecure:
                raise ValueError(
                    f"Non-localhost HTTP endpoint '{self.endpoint}' requires "
                    "insecure=True or use https://."
                )


class OTELExporter(TelemetryPort):
    """
    OpenTelemetry exporter for container lifecycle operations.

    Without an endpoint every method is a no-op; with one, durations go to an
    OTLP histogram and spans to an OTLP span exporter.
    """

    def __init__(self, config: OTELConfig):
        self.config = config
        self._initialized = False
        self._histogram: Any = None

    def initialize(self) -> None:
        """Initialize OpenTelemetry SDK and exporters."""
        if not self.config.endpoint:
            logger.info("OTEL endpoint not configured, telemetry disabled")
            return

        from opentelemetry import metrics, trace
        from opentelemetry.sdk.metrics import MeterProvider
        from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
        from opentelemetry.sdk.resources import Resource, SERVICE_NAME
        from opentelemetry.sdk.trace import TracerProvider
        from opentelemetry.sdk.trace.export import BatchSpanProcessor
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (
            OTLPSpanExporter,
        )
        from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import (
            OTLPMetricExporter,
        )

        resource = Resource(
            attributes={
                SERVICE_NAME: self.config.service_name,
                "environment": self.config.environment,
            }
        )

        if self.config.enable_traces:
            provider = TracerProvider(resource=resource)
            provider.add_span_processor(
                BatchSpanProcessor(
                    OTLPSpanExporter(
                        endpoint=self.config.endpoint, insecure=self.config.insecure
                    )
                )
            )
            trace.set_tracer_provider(provider)

        if self.config.enable_metrics:
            reader = PeriodicExportingMetricReader(
                OTLPMetricExporter(
                    endpoint=self.config.endpoint, insecure=self.config.insecure
                )
            )
            metrics.set_meter_provider(
                MeterProvider(resource=resource, metric_readers=[reader])
            )
            self._histogram = metrics.get_meter(__name__).create_histogram(
                OPERATION_DURATION, unit="ms"
            )

        self._initialized = True

    def record_operation(
        self, operation: str, address: str, success: bool, duration_ms: float
    ) -> None:
        attributes = {
            "operation": operation,
            "address": address,
            "success": str(success),
        }
        if self._histogram is not None:
            self._histogram.record(duration_ms, attributes=attributes)

    def start_span(
        self,
        name: str,
        attributes: Optional[dict[str, str]] = None,
    ) -> Optional[Any]:
        """Start a tracing span."""
        if not self._initialized:
            return None

        from opentelemetry import trace

        tracer = trace.get_tracer(__name__)
        return tracer.start_span(name, attributes=attributes or {})

    def end_span(self, span: Any) -> None:
        if span is not None:
            span.end()


def create_exporter(
    endpoint: Optional[str] = None,
    service_name: str = "shipyard",
    insecure: bool = False,
) -> OTELExporter:
    """Factory function to create and initialize an OTEL exporter."""
    config = OTELConfig(
        endpoint=endpoint or "",
        service_name=service_name,
        insecure=insecure,
    )
    exporter = OTELExporter(config)
    exporter.initialize()
    return exporter
