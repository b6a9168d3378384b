"""
Composition Root

Architectural Intent:
- Dependency injection composition root for shipyard
- Single place where all adapters and use cases are wired together
- No adapter instantiation should occur outside this module

Design Decisions:
- Uses a simple dataclass container instead of a DI framework
- Factory function creates and wires all dependencies from ShipyardConfig
"""

from dataclasses import dataclass
from typing import Optional
from shipyard.application.executors.executor_selector import ExecutorSelector
from shipyard.application.use_cases.container_orchestrator import (
    ContainerOrchestrator,
)
from shipyard.domain.services.connectivity_poller import ConnectivityPoller
from shipyard.infrastructure.adapters.docker_builder_adapter import (
    DockerBuilderAdapter,
)
from shipyard.infrastructure.adapters.fabric_adapter import FabricAdapter
from shipyard.infrastructure.adapters.port_probe_adapter import TcpPortProbeAdapter
from shipyard.infrastructure.adapters.subprocess_adapter import SubprocessAdapter
from shipyard.infrastructure.config import ShipyardConfig
from shipyard.infrastructure.telemetry.otel_exporter import create_exporter, OTELExporter


@dataclass
class ShipyardContainer:
    """DI container holding all wired dependencies."""

    config: ShipyardConfig
    fabric_adapter: FabricAdapter
    subprocess_adapter: SubprocessAdapter
    port_probe: TcpPortProbeAdapter
    poller: ConnectivityPoller
    selector: ExecutorSelector
    builder: DockerBuilderAdapter
    telemetry: OTELExporter
    orchestrator: ContainerOrchestrator


def create_container(config: Optional[ShipyardConfig] = None) -> ShipyardContainer:
    """Create and wire all dependencies."""
    config = config or ShipyardConfig()

    fabric_adapter = FabricAdapter(
        connect_timeout=config.ssh.connect_timeout, port=config.connectivity.port
    )
    subprocess_adapter = SubprocessAdapter()
    port_probe = TcpPortProbeAdapter(timeout=config.connectivity.probe_timeout)
    poller = ConnectivityPoller(
        port_probe,
        interval=config.connectivity.poll_interval,
        max_polls=config.connectivity.max_polls,
        port=config.connectivity.port,
    )
    selector = ExecutorSelector(
        fabric_adapter,
        subprocess_adapter,
        poller,
        key_path=config.ssh.key_path,
        containers_dir=config.deploy.containers_dir,
    )
    builder = DockerBuilderAdapter(subprocess_adapter, config.deploy.build_path)
    telemetry = create_exporter(
        endpoint=config.telemetry.endpoint, insecure=config.telemetry.insecure
    )
    orchestrator = ContainerOrchestrator(
        builder,
        selector,
        telemetry=telemetry,
        operation_timeout=config.deploy.operation_timeout,
    )

    return ShipyardContainer(
        config=config,
        fabric_adapter=fabric_adapter,
        subprocess_adapter=subprocess_adapter,
        port_probe=port_probe,
        poller=poller,
        selector=selector,
        builder=builder,
        telemetry=telemetry,
        orchestrator=orchestrator,
    )
