"""
TCP Port Probe Adapter

Architectural Intent:
- Implements PortProbePort with a plain asyncio connection attempt
- Refused, unreachable and timed out connections all report CLOSED
"""

import asyncio
import logging
from shipyard.domain.ports.port_probe_port import PortProbePort
from shipyard.domain.value_objects.command_result import PortStatus

logger = logging.getLogger(__name__)


class TcpPortProbeAdapter(PortProbePort):
    def __init__(self, timeout: float = 3.0):
        self.timeout = timeout

    async def check_port_status(self, port: int, address: str) -> PortStatus:
        try:
            _, writer = await asyncio.wait_for(
                asyncio.open_connection(address, port), self.timeout
            )
        except (OSError, asyncio.TimeoutError) as e:
            logger.debug("port %d on %s closed: %s", port, address, e)
            return PortStatus.CLOSED

        writer.close()
        try:
            await writer.wait_closed()
        except OSError:
            pass
        return PortStatus.OPEN
