"""
Docker Builder Adapter

Architectural Intent:
- Implements BuilderPort with the platform build and export templates
- Builds <namespace>/<name>-<buildNumber> from the definition's context
  directory and saves it to <build_path>/<name>-<buildNumber>
- The saved file is the binary artifact the executors ship and import
"""

import logging
from datetime import datetime, UTC
from pathlib import Path
from typing import Callable, Optional
from shipyard.domain.entities.container import (
    BuildResult,
    ContainerDefinition,
    System,
)
from shipyard.domain.errors import BuildError, TransportError
from shipyard.domain.ports.builder_port import BuilderPort
from shipyard.domain.ports.local_shell_port import LocalShellPort
from shipyard.domain.ports.output_sink_port import OutputSink
from shipyard.domain.value_objects.mode import Mode
from shipyard.domain.value_objects.platform_commands import (
    CommandSet,
    resolve_commands,
)

logger = logging.getLogger(__name__)


def timestamp_build_number() -> str:
    return datetime.now(UTC).strftime("%Y%m%d%H%M%S")


class DockerBuilderAdapter(BuilderPort):
    def __init__(
        self,
        shell: LocalShellPort,
        build_path: str,
        commands: Optional[CommandSet] = None,
        build_number: Callable[[], str] = timestamp_build_number,
    ):
        self.shell = shell
        self.build_path = build_path.rstrip("/")
        self.commands = commands or resolve_commands()
        self._build_number = build_number

    async def build(
        self,
        mode: Mode,
        system: System,
        container_def: ContainerDefinition,
        out: OutputSink,
    ) -> BuildResult:
        number = self._build_number()
        name = container_def.name
        build_cmd = self.commands.render_build(system.namespace, name, number)
        export_cmd = self.commands.render_export(
            system.namespace, name, number, self.build_path
        )
        binary = f"{self.build_path}/{name}-{number}"

        if mode.is_preview:
            out.preview(build_cmd)
            out.preview(export_cmd)
            return BuildResult(container_binary=binary)

        Path(self.build_path).mkdir(parents=True, exist_ok=True)
        image = f"{system.namespace}/{name}-{number}"
        logger.info("building %s from %s", image, container_def.path)
        try:
            result = await self.shell.run(build_cmd, cwd=container_def.path)
            out.preview(result.output)
            result = await self.shell.run(export_cmd, cwd=container_def.path)
            out.preview(result.output)
            listing = await self.shell.run(f"docker images -q {image}")
        except TransportError as e:
            if e.output:
                out.preview(e.output)
            raise BuildError(f"build of {image} failed: {e}") from e

        lines = listing.response.splitlines()
        image_id = lines[0].strip() if lines else None
        out.stdout(f"built {image}")
        return BuildResult(container_binary=binary, docker_image_id=image_id)
