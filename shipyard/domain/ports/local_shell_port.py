"""
Local Shell Port

Architectural Intent:
- Port interface for running container runtime commands on this machine
- Used by the local executor and the docker builder
"""

from abc import ABC, abstractmethod
from typing import Optional
from shipyard.domain.value_objects.command_result import CommandResult


class LocalShellPort(ABC):
    @abstractmethod
    async def run(self, command: str, cwd: Optional[str] = None) -> CommandResult:
        """
        Runs a shell command locally. Raises TransportError on non-zero exit.
        """
        pass
