"""
Port Probe Port

Architectural Intent:
- Port interface for TCP reachability checks
- Unreachable hosts report CLOSED rather than raising
"""

from abc import ABC, abstractmethod
from shipyard.domain.value_objects.command_result import PortStatus


class PortProbePort(ABC):
    @abstractmethod
    async def check_port_status(self, port: int, address: str) -> PortStatus:
        pass
