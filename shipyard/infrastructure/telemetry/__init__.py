"""
Shipyard Telemetry Infrastructure

Architectural Intent:
- OpenTelemetry integration for lifecycle operation traces and timings
"""

from shipyard.infrastructure.telemetry.otel_exporter import (
    OTELExporter,
    OTELConfig,
    create_exporter,
)

__all__ = [
    "OTELExporter",
    "OTELConfig",
    "create_exporter",
]
