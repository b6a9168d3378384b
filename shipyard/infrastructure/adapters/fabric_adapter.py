"""
Fabric Adapter

Architectural Intent:
- Infrastructure adapter implementing SecureShellPort via Fabric/SSH
- One Connection per call; closed when the call returns
- Blocking Fabric calls run in the default executor so the event loop keeps
  serving other operations

Security:
- SSH connections use connect_timeout
- An explicit key path disables agent and key discovery
"""

import asyncio
import logging
from typing import Callable, TypeVar
from fabric import Connection
from invoke.exceptions import UnexpectedExit
from paramiko.ssh_exception import SSHException
from shipyard.domain.errors import TransportError
from shipyard.domain.ports.secure_shell_port import SecureShellPort
from shipyard.domain.value_objects.command_result import CommandResult

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FabricAdapter(SecureShellPort):
    """Adapter implementing SecureShellPort via Fabric/SSH."""

    def __init__(self, connect_timeout: int = 30, port: int = 22):
        self.connect_timeout = connect_timeout
        self.port = port

    def _get_connection(self, address: str, user: str, key_path: str) -> Connection:
        if key_path:
            connect_kwargs = {
                "key_filename": key_path,
                "allow_agent": False,
                "look_for_keys": False,
            }
        else:
            connect_kwargs = {"allow_agent": True, "look_for_keys": True}
        return Connection(
            host=address,
            user=user or None,
            port=self.port,
            connect_timeout=self.connect_timeout,
            connect_kwargs=connect_kwargs,
        )

    async def _in_executor(self, fn: Callable[[], T]) -> T:
        return await asyncio.get_event_loop().run_in_executor(None, fn)

    async def exec(
        self, address: str, user: str, key_path: str, command: str
    ) -> CommandResult:
        def _exec() -> CommandResult:
            conn = self._get_connection(address, user, key_path)
            try:
                result = conn.run(command, hide=True, warn=True)
            except (SSHException, OSError, UnexpectedExit) as e:
                raise TransportError(
                    f"ssh to {address} failed: {e}", address=address, command=command
                ) from e
            finally:
                conn.close()

            output = CommandResult.from_stdout(result.stdout, result.stderr)
            if result.failed:
                logger.error(
                    "Command failed on %s (exit %s): %s",
                    address, result.exited, result.stderr,
                )
                raise TransportError(
                    f"command exited {result.exited} on {address}: {command}",
                    address=address,
                    command=command,
                    output=output.output,
                )
            return output

        logger.debug("exec on %s: %s", address, command)
        return await self._in_executor(_exec)

    async def copy(
        self,
        address: str,
        user: str,
        key_path: str,
        local_path: str,
        remote_path: str,
    ) -> CommandResult:
        def _copy() -> CommandResult:
            conn = self._get_connection(address, user, key_path)
            try:
                conn.put(local_path, remote=remote_path)
            except (SSHException, OSError) as e:
                raise TransportError(
                    f"copy of {local_path} to {address}:{remote_path} failed: {e}",
                    address=address,
                ) from e
            finally:
                conn.close()
            return CommandResult(output=f"{local_path} -> {address}:{remote_path}\n")

        return await self._in_executor(_copy)

    async def check(self, address: str, user: str, key_path: str) -> None:
        def _check() -> None:
            conn = self._get_connection(address, user, key_path)
            try:
                conn.open()
            except (SSHException, OSError) as e:
                raise TransportError(
                    f"ssh login to {address} failed: {e}", address=address
                ) from e
            finally:
                conn.close()

        await self._in_executor(_check)
