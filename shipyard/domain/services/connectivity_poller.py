"""
Connectivity Poller

Architectural Intent:
- Waits until a target's control port accepts TCP connections
- Freshly booted cloud hosts take a while before sshd listens, so every
  remote operation gates on this first
- Bounded: gives up after max_polls retries with ConnectivityTimeoutError

Concurrency:
- The retry counter is local to each wait_for_reachable call, so concurrent
  operations against the same poller never share accounting
- Waiting is asyncio.sleep, other operations keep running meanwhile
"""

import asyncio
import logging
from typing import Awaitable, Callable
from shipyard.domain.errors import ConnectivityTimeoutError
from shipyard.domain.ports.port_probe_port import PortProbePort
from shipyard.domain.value_objects.command_result import PortStatus
from shipyard.domain.value_objects.mode import Mode
from shipyard.domain.value_objects.target import is_local_address

logger = logging.getLogger(__name__)

CONTROL_PORT = 22
POLL_INTERVAL = 5.0
MAX_POLLS = 14


class ConnectivityPoller:
    def __init__(
        self,
        probe: PortProbePort,
        interval: float = POLL_INTERVAL,
        max_polls: int = MAX_POLLS,
        port: int = CONTROL_PORT,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.probe = probe
        self.interval = interval
        self.max_polls = max_polls
        self.port = port
        self._sleep = sleep

    async def wait_for_reachable(self, mode: Mode, address: str) -> int:
        """
        Returns the number of probes made (0 when no probe was needed).
        Raises ConnectivityTimeoutError once more than max_polls retries failed.
        """
        if mode.is_preview or is_local_address(address):
            return 0

        logger.info("waiting for connectivity: %s", address)
        retries = 0
        probes = 0
        while True:
            status = await self.probe.check_port_status(self.port, address)
            probes += 1
            if status is PortStatus.OPEN:
                return probes
            if retries > self.max_polls:
                logger.error("giving up on %s after %d probes", address, probes)
                raise ConnectivityTimeoutError(address)
            retries += 1
            logger.debug("port %d closed on %s, retry %d", self.port, address, retries)
            await self._sleep(self.interval)
