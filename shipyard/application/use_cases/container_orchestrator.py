"""
Container Orchestrator Use Case

Architectural Intent:
- Uniform lifecycle surface (build, deploy, undeploy, start, stop, link,
  unlink) for the scheduling layer above
- build delegates to the builder port and records the artifact on the
  container definition
- Every other operation resolves an executor for the target through the
  ExecutorSelector and forwards the call unchanged

Deadline:
- When operation_timeout is set, the whole executor chain (connectivity,
  transfer, import, commands) runs under one asyncio deadline
"""

import asyncio
import logging
import time
from typing import Optional, Union
from shipyard.application.executors.executor_selector import ExecutorSelector
from shipyard.domain.entities.container import (
    BuildResult,
    ContainerDefinition,
    ContainerInstance,
    System,
)
from shipyard.domain.errors import OperationTimeoutError
from shipyard.domain.ports.builder_port import BuilderPort
from shipyard.domain.ports.output_sink_port import OutputSink
from shipyard.domain.ports.telemetry_port import TelemetryPort
from shipyard.domain.value_objects.mode import Mode
from shipyard.domain.value_objects.platform_commands import native_platform
from shipyard.domain.value_objects.target import Target

logger = logging.getLogger(__name__)


class ContainerOrchestrator:
    def __init__(
        self,
        builder: BuilderPort,
        selector: ExecutorSelector,
        telemetry: Optional[TelemetryPort] = None,
        operation_timeout: float = 0.0,
    ):
        self.builder = builder
        self.selector = selector
        self.telemetry = telemetry
        self.operation_timeout = operation_timeout

    async def build(
        self,
        mode: Union[Mode, str],
        system: System,
        container_def: ContainerDefinition,
        out: OutputSink,
    ) -> BuildResult:
        logger.info("building", extra={"operation": "build"})
        out.stdout("building")
        try:
            result = await self.builder.build(Mode.parse(mode), system, container_def, out)
        except Exception as e:
            logger.error(
                "build of %s failed: %s", container_def.name, e,
                extra={"operation": "build"},
            )
            raise
        container_def.specific.binary = result.container_binary
        container_def.specific.docker_image_id = result.docker_image_id
        return result

    async def _dispatch(
        self,
        operation: str,
        progress: str,
        mode: Union[Mode, str],
        target: Target,
        system: System,
        container_def: ContainerDefinition,
        container: ContainerInstance,
        out: OutputSink,
    ) -> None:
        mode = Mode.parse(mode)
        address = str(target)
        context = {"address": address, "operation": operation}
        logger.info(progress, extra=context)
        out.stdout(progress)

        span = None
        if self.telemetry:
            span = self.telemetry.start_span(
                f"shipyard.{operation}",
                attributes={"address": address, "mode": str(mode)},
            )
        started = time.monotonic()
        success = False
        try:
            executor = self.selector.select(target.private_ip_address, native_platform())
            call = getattr(executor, operation)(
                mode, target, system, container_def, container, out
            )
            if self.operation_timeout > 0:
                try:
                    await asyncio.wait_for(call, self.operation_timeout)
                except asyncio.TimeoutError:
                    raise OperationTimeoutError(
                        operation, address, self.operation_timeout
                    ) from None
            else:
                await call
            success = True
        except Exception as e:
            logger.error("%s failed on %s: %s", operation, address, e, extra=context)
            raise
        finally:
            if self.telemetry:
                duration_ms = (time.monotonic() - started) * 1000
                self.telemetry.record_operation(operation, address, success, duration_ms)
                self.telemetry.end_span(span)

    async def deploy(
        self,
        mode: Union[Mode, str],
        target: Target,
        system: System,
        container_def: ContainerDefinition,
        container: ContainerInstance,
        out: OutputSink,
    ) -> None:
        if not container.specific.container_binary and container_def.specific.binary:
            container.specific.container_binary = container_def.specific.binary
        await self._dispatch(
            "deploy", "deploying", mode, target, system, container_def, container, out
        )

    async def undeploy(
        self,
        mode: Union[Mode, str],
        target: Target,
        system: System,
        container_def: ContainerDefinition,
        container: ContainerInstance,
        out: OutputSink,
    ) -> None:
        await self._dispatch(
            "undeploy", "undeploying", mode, target, system, container_def, container, out
        )

    async def start(
        self,
        mode: Union[Mode, str],
        target: Target,
        system: System,
        container_def: ContainerDefinition,
        container: ContainerInstance,
        out: OutputSink,
    ) -> None:
        await self._dispatch(
            "start", "starting", mode, target, system, container_def, container, out
        )

    async def stop(
        self,
        mode: Union[Mode, str],
        target: Target,
        system: System,
        container_def: ContainerDefinition,
        container: ContainerInstance,
        out: OutputSink,
    ) -> None:
        await self._dispatch(
            "stop", "stopping", mode, target, system, container_def, container, out
        )

    async def link(
        self,
        mode: Union[Mode, str],
        target: Target,
        system: System,
        container_def: ContainerDefinition,
        container: ContainerInstance,
        out: OutputSink,
    ) -> None:
        await self._dispatch(
            "link", "linking", mode, target, system, container_def, container, out
        )

    async def unlink(
        self,
        mode: Union[Mode, str],
        target: Target,
        system: System,
        container_def: ContainerDefinition,
        container: ContainerInstance,
        out: OutputSink,
    ) -> None:
        await self._dispatch(
            "unlink", "unlinking", mode, target, system, container_def, container, out
        )

    add = deploy
    remove = undeploy
