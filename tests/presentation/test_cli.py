"""Tests for CLI module."""

import logging
import pytest
from unittest.mock import patch, AsyncMock, MagicMock

from shipyard.domain.entities.container import BuildResult
from shipyard.domain.errors import ConnectivityTimeoutError
from shipyard.domain.value_objects.mode import Mode
from shipyard.domain.value_objects.target import Target
from shipyard.infrastructure.config import DeployConfig, ShipyardConfig
from shipyard.infrastructure.logging import JSONFormatter
from shipyard.presentation.cli.cli import async_main

CREATE_CONTAINER = "shipyard.presentation.cli.cli.create_container"
LOAD_CONFIG = "shipyard.presentation.cli.cli.load_config"


def _make_container():
    container = MagicMock()
    orchestrator = MagicMock()
    for name in ("deploy", "undeploy", "start", "stop"):
        setattr(orchestrator, name, AsyncMock(return_value=None))
    orchestrator.build = AsyncMock(
        return_value=BuildResult("/tmp/shipyard/build/app-7", "3f2a9c1b7d4e")
    )
    container.orchestrator = orchestrator
    return container


def _config():
    return ShipyardConfig(deploy=DeployConfig(namespace="acme"))


async def _run(argv, container):
    with patch("sys.argv", ["shipyard"] + argv), \
         patch(LOAD_CONFIG, return_value=_config()), \
         patch(CREATE_CONTAINER, return_value=container):
        await async_main()


class TestCLIHelp:
    @pytest.mark.asyncio
    async def test_no_command_prints_help(self, capsys):
        with patch("sys.argv", ["shipyard"]):
            await async_main()
        assert "container deployment" in capsys.readouterr().out

    @pytest.mark.asyncio
    @pytest.mark.parametrize("command", ["build", "deploy", "undeploy", "start", "stop"])
    async def test_subcommand_help(self, command):
        with patch("sys.argv", ["shipyard", command, "--help"]), \
             pytest.raises(SystemExit, match="0"):
            await async_main()


class TestLifecycleCommands:
    @pytest.mark.asyncio
    async def test_deploy(self, capsys):
        container = _make_container()
        await _run(["deploy", "-t", "10.0.0.5", "-b", "/tmp/build/app-7"], container)

        container.orchestrator.deploy.assert_awaited_once()
        mode, target, system, definition, instance, _ = (
            container.orchestrator.deploy.call_args.args
        )
        assert mode is Mode.NORMAL
        assert target == Target(private_ip_address="10.0.0.5")
        assert system.namespace == "acme"
        assert definition.specific.binary == "/tmp/build/app-7"
        assert instance.derived_name == "app-7"

        captured = capsys.readouterr().out
        assert "[*] deploy on 10.0.0.5..." in captured
        assert "[+] Deploy Successful." in captured

    @pytest.mark.asyncio
    async def test_start_passes_arguments(self, capsys):
        container = _make_container()

        async def start(mode, target, system, definition, instance, out):
            instance.specific.docker_container_id = "a1b2c3d4e5f6"

        container.orchestrator.start = AsyncMock(side_effect=start)
        await _run(
            ["start", "-b", "/tmp/build/app-7", "--arguments=-d __TARGETNAME__", "-n", "web"],
            container,
        )

        _, target, system, definition, _, _ = container.orchestrator.start.call_args.args
        assert target.is_local
        assert system.namespace == "web"
        assert definition.specific.arguments == "-d __TARGETNAME__"
        assert "[+] Container id: a1b2c3d4e5f6" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_stop_with_container_id(self):
        container = _make_container()
        await _run(["stop", "-t", "10.0.0.5", "--container-id", "a1b2c3d4e5f6"], container)

        instance = container.orchestrator.stop.call_args.args[4]
        assert instance.specific.docker_container_id == "a1b2c3d4e5f6"

    @pytest.mark.asyncio
    async def test_preview_flag(self):
        container = _make_container()
        await _run(["undeploy", "-t", "10.0.0.5", "--preview"], container)
        assert container.orchestrator.undeploy.call_args.args[0] is Mode.PREVIEW

    @pytest.mark.asyncio
    async def test_failure_exits_nonzero(self, capsys):
        container = _make_container()
        container.orchestrator.deploy = AsyncMock(
            side_effect=ConnectivityTimeoutError("10.0.0.5")
        )
        with pytest.raises(SystemExit, match="1"):
            await _run(["deploy", "-t", "10.0.0.5", "-b", "/tmp/build/app-7"], container)
        assert "[-] Deploy Failed: timeout exceeded" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_invalid_target_exits_nonzero(self, capsys):
        container = _make_container()
        with pytest.raises(SystemExit, match="1"):
            await _run(["deploy", "-t", "bad host!", "-b", "/tmp/app-7"], container)
        container.orchestrator.deploy.assert_not_called()


class TestBuildCommand:
    @pytest.mark.asyncio
    async def test_build(self, capsys):
        container = _make_container()
        await _run(["build", "--name", "app", "--path", "/src/app"], container)

        _, system, definition, _ = container.orchestrator.build.call_args.args
        assert system.namespace == "acme"
        assert definition.name == "app"
        assert definition.path == "/src/app"
        captured = capsys.readouterr().out
        assert "[+] Built /tmp/shipyard/build/app-7" in captured
        assert "[+] Image id: 3f2a9c1b7d4e" in captured


class TestLogLevel:
    @pytest.mark.asyncio
    async def test_config_log_level(self):
        with patch("sys.argv", ["shipyard", "stop"]), \
             patch(LOAD_CONFIG, return_value=ShipyardConfig(log_level="debug")), \
             patch(CREATE_CONTAINER, return_value=_make_container()):
            await async_main()
        assert logging.getLogger("shipyard").level == logging.DEBUG

    @pytest.mark.asyncio
    async def test_verbose_flag_wins(self):
        with patch("sys.argv", ["shipyard", "-v", "stop"]), \
             patch(LOAD_CONFIG, return_value=ShipyardConfig(log_level="ERROR")), \
             patch(CREATE_CONTAINER, return_value=_make_container()):
            await async_main()
        assert logging.getLogger("shipyard").level == logging.INFO

    @pytest.mark.asyncio
    async def test_config_log_format(self):
        with patch("sys.argv", ["shipyard", "stop"]), \
             patch(LOAD_CONFIG, return_value=ShipyardConfig(log_format="json")), \
             patch(CREATE_CONTAINER, return_value=_make_container()):
            await async_main()
        handler = logging.getLogger("shipyard").handlers[0]
        assert isinstance(handler.formatter, JSONFormatter)

    @pytest.mark.asyncio
    async def test_log_format_flag_wins(self):
        with patch("sys.argv", ["shipyard", "--log-format", "text", "stop"]), \
             patch(LOAD_CONFIG, return_value=ShipyardConfig(log_format="json")), \
             patch(CREATE_CONTAINER, return_value=_make_container()):
            await async_main()
        handler = logging.getLogger("shipyard").handlers[0]
        assert not isinstance(handler.formatter, JSONFormatter)
