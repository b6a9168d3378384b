"""
Executor Selector

Architectural Intent:
- Decides per target whether operations run on this machine or remotely
- Pure decision: builds an executor, performs no I/O
- Remote targets are assumed to be cloud Linux hosts, so they always get the
  linux command set whatever platform hint the target carries
"""

from typing import Optional
from shipyard.application.executors.local_executor import LocalExecutor
from shipyard.application.executors.remote_executor import (
    CONTAINERS_DIR,
    RemoteExecutor,
)
from shipyard.domain.ports.container_executor_port import ContainerExecutorPort
from shipyard.domain.ports.local_shell_port import LocalShellPort
from shipyard.domain.ports.secure_shell_port import SecureShellPort
from shipyard.domain.services.connectivity_poller import ConnectivityPoller
from shipyard.domain.value_objects.platform_commands import (
    REMOTE_PLATFORM,
    resolve_commands,
)
from shipyard.domain.value_objects.target import is_local_address


class ExecutorSelector:
    def __init__(
        self,
        secure_shell: SecureShellPort,
        local_shell: LocalShellPort,
        poller: ConnectivityPoller,
        key_path: str = "",
        containers_dir: str = CONTAINERS_DIR,
    ):
        self.secure_shell = secure_shell
        self.local_shell = local_shell
        self.poller = poller
        self.key_path = key_path
        self.containers_dir = containers_dir

    def select(
        self, address: Optional[str], platform: Optional[str] = None
    ) -> ContainerExecutorPort:
        if is_local_address(address):
            return LocalExecutor(resolve_commands(platform), self.local_shell)
        return RemoteExecutor(
            resolve_commands(REMOTE_PLATFORM),
            self.secure_shell,
            self.poller,
            key_path=self.key_path,
            containers_dir=self.containers_dir,
        )
