import re
from typing import Optional
from shipyard.domain.entities.container import (
    ContainerDefinition,
    ContainerInstance,
    System,
)
from shipyard.domain.errors import ShipyardError
from shipyard.domain.value_objects.platform_commands import CommandSet


def build_start_command(
    commands: CommandSet,
    system: System,
    container_def: ContainerDefinition,
    container: ContainerInstance,
) -> str:
    """
    Renders the run invocation for a container.
    An execute block takes precedence over plain run arguments; an explicit
    execute name stands in for a missing binary.
    """
    derived_name = container.derived_name
    name = f"{system.namespace}/{derived_name}" if derived_name else None
    execute = container_def.specific.execute
    arguments = container_def.specific.arguments
    if execute is None and not arguments:
        raise ShipyardError(
            f"container {container_def.name!r} has neither run arguments nor an execute block"
        )
    image = (execute.name if execute is not None else None) or name
    if image is None:
        raise ShipyardError(f"container {container.id!r} has no binary to start")
    if execute is not None:
        return commands.render_execute(execute.args, image, execute.exec)
    return commands.render_run(arguments, image)


_CONTAINER_ID_RE = re.compile(r"^[0-9a-f]{12,64}$")


def parse_container_id(response: str) -> Optional[str]:
    """A detached run prints the new container id as its last line."""
    lines = response.strip().splitlines()
    if lines and _CONTAINER_ID_RE.match(lines[-1].strip()):
        return lines[-1].strip()
    return None
