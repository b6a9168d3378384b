"""
Remote Executor

Architectural Intent:
- Implements the container lifecycle against a remote host over secure shell
- Every operation gates on connectivity first (port probe, then login check)
- Lifecycle state is implicit: the remote artifact file, the image listing
  and the runtime container id say how far a container has got

Idempotency:
- deploy copies the artifact only when the remote file is missing and
  imports it only when the image listing lacks the derived name, so calling
  it again converges without duplicate transfer or import

Preview:
- In preview mode the commands that would run are written to out.preview and
  no transport method is called
"""

import logging
import shlex
from typing import Optional
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
from shipyard.domain.ports.output_sink_port import OutputSink
from shipyard.domain.ports.secure_shell_port import SecureShellPort
from shipyard.domain.services.connectivity_poller import ConnectivityPoller
from shipyard.domain.value_objects.command_result import CommandResult
from shipyard.domain.value_objects.mode import Mode
from shipyard.domain.value_objects.platform_commands import CommandSet
from shipyard.domain.value_objects.target import Target

logger = logging.getLogger(__name__)

CONTAINERS_DIR = "/home/ubuntu/containers"
NOT_FOUND = "notfound"


class RemoteExecutor(ContainerExecutorPort):
    def __init__(
        self,
        commands: CommandSet,
        shell: SecureShellPort,
        poller: ConnectivityPoller,
        key_path: str = "",
        containers_dir: str = CONTAINERS_DIR,
    ):
        self.commands = commands
        self.shell = shell
        self.poller = poller
        self.key_path = key_path
        self.containers_dir = containers_dir.rstrip("/")

    @property
    def user(self) -> str:
        return self.commands.default_user

    async def _wait_for_connectivity(self, mode: Mode, address: str) -> None:
        await self.poller.wait_for_reachable(mode, address)
        await self.shell.check(address, self.user, self.key_path)

    async def _exec(self, address: str, command: str, out: OutputSink) -> CommandResult:
        try:
            result = await self.shell.exec(address, self.user, self.key_path, command)
        except TransportError as e:
            if e.output:
                out.preview(e.output)
            raise
        out.preview(result.output)
        return result

    @staticmethod
    def _preview(out: OutputSink, *commands: str) -> None:
        for command in commands:
            out.preview(command)

    def _remote_path(self, name: str) -> str:
        return f"{self.containers_dir}/{name}"

    def _mkdir_command(self) -> str:
        return f"mkdir -p {shlex.quote(self.containers_dir)}"

    def _import_command(self, name: str) -> str:
        return self.commands.render_import(shlex.quote(self._remote_path(name)), name)

    async def _import(self, address: str, name: str, out: OutputSink) -> None:
        logger.info(
            "importing %s on %s", name, address,
            extra={"address": address, "operation": "deploy"},
        )
        await self._exec(address, self._import_command(name), out)

    async def deploy(
        self,
        mode: Mode,
        target: Target,
        system: System,
        container_def: ContainerDefinition,
        container: ContainerInstance,
        out: OutputSink,
    ) -> None:
        address = target.private_ip_address
        name = container.derived_name
        binary = container.specific.container_binary

        if mode.is_preview:
            if name:
                self._preview(
                    out,
                    self._mkdir_command(),
                    f"scp {shlex.quote(binary)} "
                    f"{address}:{shlex.quote(self._remote_path(name))}",
                    self._import_command(name),
                )
            return

        if name is None:
            raise ShipyardError(f"container {container.id!r} has no binary to deploy")

        await self._wait_for_connectivity(mode, address)
        await self._exec(address, self._mkdir_command(), out)

        # SFTP takes the raw path; only shell commands get the quoted form
        remote_path = self._remote_path(name)
        check = await self._exec(
            address,
            f'[ ! -f {shlex.quote(remote_path)} ] && echo "{NOT_FOUND}" || true',
            out,
        )
        if check.response == NOT_FOUND:
            logger.info(
                "copying %s to %s:%s", binary, address, remote_path,
                extra={"address": address, "operation": "deploy"},
            )
            try:
                result = await self.shell.copy(
                    address, self.user, self.key_path, binary, remote_path
                )
            except TransportError as e:
                if e.output:
                    out.preview(e.output)
                raise
            out.preview(result.output)
            await self._import(address, name, out)
            return

        # The file being present does not mean the load finished
        images = await self._exec(address, self.commands.list_images, out)
        if name not in images.response:
            await self._import(address, name, out)
        else:
            logger.info("%s already imported on %s", name, address)

    async def start(
        self,
        mode: Mode,
        target: Target,
        system: System,
        container_def: ContainerDefinition,
        container: ContainerInstance,
        out: OutputSink,
    ) -> None:
        address = target.private_ip_address
        if mode.is_preview:
            try:
                self._preview(
                    out, build_start_command(self.commands, system, container_def, container)
                )
            except ShipyardError as e:
                out.stdout(str(e))
            return

        command = build_start_command(self.commands, system, container_def, container)
        await self._wait_for_connectivity(mode, address)
        result = await self._exec(address, command, out)
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
        container_id: Optional[str] = container.specific.docker_container_id
        if not container_id:
            logger.debug("nothing to stop for %s", container.id)
            return

        command = self.commands.render_kill(shlex.quote(container_id))
        if mode.is_preview:
            self._preview(out, command)
            return

        address = target.private_ip_address
        await self._wait_for_connectivity(mode, address)
        await self._exec(address, command, out)

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
        cleanup = (
            self.commands.delete_untagged_containers,
            self.commands.delete_untagged_images,
        )
        if mode.is_preview:
            self._preview(out, *cleanup)
            return

        address = target.private_ip_address
        await self._wait_for_connectivity(mode, address)
        for command in cleanup:
            try:
                await self._exec(address, command, out)
            except TransportError as e:
                # Garbage collection must not block teardown
                logger.warning(
                    "cleanup failed on %s: %s", address, e,
                    extra={"address": address, "operation": "undeploy"},
                )
