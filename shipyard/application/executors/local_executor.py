"""
Local Executor

Architectural Intent:
- Same lifecycle contract as the remote executor, run on this machine
- The binary is already resident, so deploy only imports it
- No connectivity gating and no file transfer
"""

import logging
import shlex
from shipyard.application.executors.start_command import (
    build_start_command,
    parse_container_id,
)
from shipyard.domain.entities.container import (
    ContainerDefinition,
    ContainerInstance,
    System,
)
from shipyard.domain.errors import ShipyardError, TransportError
from shipyard.domain.ports.container_executor_port import ContainerExecutorPort
from shipyard.domain.ports.local_shell_port import LocalShellPort
from shipyard.domain.ports.output_sink_port import OutputSink
from shipyard.domain.value_objects.command_result import CommandResult
from shipyard.domain.value_objects.mode import Mode
from shipyard.domain.value_objects.platform_commands import CommandSet
from shipyard.domain.value_objects.target import Target

logger = logging.getLogger(__name__)


class LocalExecutor(ContainerExecutorPort):
    def __init__(self, commands: CommandSet, shell: LocalShellPort):
        self.commands = commands
        self.shell = shell

    async def _run(self, command: str, out: OutputSink) -> CommandResult:
        try:
            result = await self.shell.run(command)
        except TransportError as e:
            if e.output:
                out.preview(e.output)
            raise
        out.preview(result.output)
        return result

    async def deploy(
        self,
        mode: Mode,
        target: Target,
        system: System,
        container_def: ContainerDefinition,
        container: ContainerInstance,
        out: OutputSink,
    ) -> None:
        name = container.derived_name
        binary = container.specific.container_binary
        if mode.is_preview:
            if name:
                out.preview(self.commands.render_import(shlex.quote(binary), name))
            return
        if name is None:
            raise ShipyardError(f"container {container.id!r} has no binary to deploy")

        images = await self._run(self.commands.list_images, out)
        if name in images.response:
            logger.info("%s already imported", name)
            return
        await self._run(self.commands.render_import(shlex.quote(binary), name), out)

    async def start(
        self,
        mode: Mode,
        target: Target,
        system: System,
        container_def: ContainerDefinition,
        container: ContainerInstance,
        out: OutputSink,
    ) -> None:
        if mode.is_preview:
            try:
                out.preview(
                    build_start_command(self.commands, system, container_def, container)
                )
            except ShipyardError as e:
                out.stdout(str(e))
            return
        command = build_start_command(self.commands, system, container_def, container)
        result = await self._run(command, out)
        container_id = parse_container_id(result.response)
        if container_id:
            container.specific.docker_container_id = container_id

    async def stop(
        self,
        mode: Mode,
        target: Target,
        system: System,
        container_def: ContainerDefinition,
        container: ContainerInstance,
        out: OutputSink,
    ) -> None:
        container_id = container.specific.docker_container_id
        if not container_id:
            return
        command = self.commands.render_kill(shlex.quote(container_id))
        if mode.is_preview:
            out.preview(command)
            return
        await self._run(command, out)

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

    async def undeploy(
        self,
        mode: Mode,
        target: Target,
        system: System,
        container_def: ContainerDefinition,
        container: ContainerInstance,
        out: OutputSink,
    ) -> None:
        for command in (
            self.commands.delete_untagged_containers,
            self.commands.delete_untagged_images,
        ):
            if mode.is_preview:
                out.preview(command)
                continue
            try:
                await self._run(command, out)
            except TransportError as e:
                logger.warning("local cleanup failed: %s", e)
