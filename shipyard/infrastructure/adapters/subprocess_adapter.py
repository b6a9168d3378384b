"""
Subprocess Adapter

Architectural Intent:
- Implements LocalShellPort with subprocess, wrapped in async
- Non-zero exits raise TransportError carrying the captured output
"""

import asyncio
import logging
import subprocess
from typing import Optional
from shipyard.domain.errors import TransportError
from shipyard.domain.ports.local_shell_port import LocalShellPort
from shipyard.domain.value_objects.command_result import CommandResult

logger = logging.getLogger(__name__)


class SubprocessAdapter(LocalShellPort):
    def __init__(self, timeout: int = 600):
        self.timeout = timeout

    async def run(self, command: str, cwd: Optional[str] = None) -> CommandResult:
        def _run() -> CommandResult:
            try:
                result = subprocess.run(
                    command,
                    shell=True,
                    cwd=cwd,
                    capture_output=True,
                    text=True,
                    timeout=self.timeout,
                )
            except (OSError, subprocess.TimeoutExpired) as e:
                raise TransportError(f"{command} failed: {e}", command=command) from e

            output = CommandResult.from_stdout(result.stdout, result.stderr)
            if result.returncode != 0:
                logger.error("%s exited %d: %s", command, result.returncode, result.stderr)
                raise TransportError(
                    f"command exited {result.returncode}: {command}",
                    command=command,
                    output=output.output,
                )
            return output

        logger.debug("running: %s", command)
        return await asyncio.get_event_loop().run_in_executor(None, _run)
