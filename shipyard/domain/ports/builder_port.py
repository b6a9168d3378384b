"""
Builder Port

Architectural Intent:
- Port interface for turning a container definition into a binary artifact
- Returns the artifact path and the image identifier
"""

from abc import ABC, abstractmethod
from shipyard.domain.entities.container import (
    BuildResult,
    ContainerDefinition,
    System,
)
from shipyard.domain.ports.output_sink_port import OutputSink
from shipyard.domain.value_objects.mode import Mode


class BuilderPort(ABC):
    @abstractmethod
    async def build(
        self,
        mode: Mode,
        system: System,
        container_def: ContainerDefinition,
        out: OutputSink,
    ) -> BuildResult:
        """
        Builds the container image and exports it to a binary artifact.
        """
        pass
