"""
Secure Shell Port

Architectural Intent:
- Port interface for running commands on and copying files to a remote host
- One session per call; connection reuse is an adapter concern
- Failures (auth, network, non-zero exit) raise TransportError
"""

from abc import ABC, abstractmethod
from shipyard.domain.value_objects.command_result import CommandResult


class SecureShellPort(ABC):
    @abstractmethod
    async def exec(
        self, address: str, user: str, key_path: str, command: str
    ) -> CommandResult:
        """
        Runs a shell command on the remote host.
        """
        pass

    @abstractmethod
    async def copy(
        self,
        address: str,
        user: str,
        key_path: str,
        local_path: str,
        remote_path: str,
    ) -> CommandResult:
        """
        Copies a local file to the remote host.
        """
        pass

    @abstractmethod
    async def check(self, address: str, user: str, key_path: str) -> None:
        """
        Verifies a login succeeds. Raises TransportError otherwise.
        """
        pass
