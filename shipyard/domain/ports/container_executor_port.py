"""
Container Executor Port

Architectural Intent:
- Lifecycle capability for one (target, container) pair
- Implemented by the local and the remote executor
- Every operation returns normally on success or raises a ShipyardError
"""

from abc import ABC, abstractmethod
from shipyard.domain.entities.container import (
    ContainerDefinition,
    ContainerInstance,
    System,
)
from shipyard.domain.ports.output_sink_port import OutputSink
from shipyard.domain.value_objects.mode import Mode
from shipyard.domain.value_objects.target import Target


class ContainerExecutorPort(ABC):
    @abstractmethod
    async def deploy(
        self,
        mode: Mode,
        target: Target,
        system: System,
        container_def: ContainerDefinition,
        container: ContainerInstance,
        out: OutputSink,
    ) -> None:
        """
        Gets the container binary onto the target and imports it.
        Safe to repeat: transfer and import are skipped when already done.
        """
        pass

    @abstractmethod
    async def undeploy(
        self,
        mode: Mode,
        target: Target,
        system: System,
        container_def: ContainerDefinition,
        container: ContainerInstance,
        out: OutputSink,
    ) -> None:
        pass

    @abstractmethod
    async def start(
        self,
        mode: Mode,
        target: Target,
        system: System,
        container_def: ContainerDefinition,
        container: ContainerInstance,
        out: OutputSink,
    ) -> None:
        pass

    @abstractmethod
    async def stop(
        self,
        mode: Mode,
        target: Target,
        system: System,
        container_def: ContainerDefinition,
        container: ContainerInstance,
        out: OutputSink,
    ) -> None:
        pass

    @abstractmethod
    async def link(
        self,
        mode: Mode,
        target: Target,
        system: System,
        container_def: ContainerDefinition,
        container: ContainerInstance,
        out: OutputSink,
    ) -> None:
        pass

    @abstractmethod
    async def unlink(
        self,
        mode: Mode,
        target: Target,
        system: System,
        container_def: ContainerDefinition,
        container: ContainerInstance,
        out: OutputSink,
    ) -> None:
        pass
