"""
Domain Ports Package

Architectural Intent:
- Contains port interfaces (abstract contracts) for external collaborators
- Ports define what the lifecycle core needs, adapters implement how
- Follows Hexagonal Architecture principles
"""

from shipyard.domain.ports.output_sink_port import OutputSink
from shipyard.domain.ports.secure_shell_port import SecureShellPort
from shipyard.domain.ports.local_shell_port import LocalShellPort
from shipyard.domain.ports.port_probe_port import PortProbePort
from shipyard.domain.ports.builder_port import BuilderPort
from shipyard.domain.ports.container_executor_port import ContainerExecutorPort
from shipyard.domain.ports.telemetry_port import TelemetryPort

__all__ = [
    "OutputSink",
    "SecureShellPort",
    "LocalShellPort",
    "PortProbePort",
    "BuilderPort",
    "ContainerExecutorPort",
    "TelemetryPort",
]
