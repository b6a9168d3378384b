"""Global test configuration.

Shared fakes for the lifecycle ports so tests never touch SSH, sockets or
subprocesses.
"""

import pytest
from unittest.mock import AsyncMock

from shipyard.domain.ports.output_sink_port import OutputSink
from shipyard.domain.value_objects.command_result import CommandResult, PortStatus


class RecordingOutputSink(OutputSink):
    def __init__(self):
        self.lines = []
        self.previews = []

    def stdout(self, line):
        self.lines.append(line)

    def preview(self, output):
        self.previews.append(output)


@pytest.fixture
def out():
    return RecordingOutputSink()


@pytest.fixture
def open_probe():
    probe = AsyncMock()
    probe.check_port_status = AsyncMock(return_value=PortStatus.OPEN)
    return probe


@pytest.fixture
def closed_probe():
    probe = AsyncMock()
    probe.check_port_status = AsyncMock(return_value=PortStatus.CLOSED)
    return probe


@pytest.fixture
def shell():
    shell = AsyncMock()
    shell.exec = AsyncMock(return_value=CommandResult())
    shell.copy = AsyncMock(return_value=CommandResult())
    shell.check = AsyncMock(return_value=None)
    return shell
