"""
Platform Command Table

Architectural Intent:
- Pure data: per-OS shell templates for the container runtime
- Adding a platform family is a table entry, never a code change
- Rendering is literal placeholder replacement

Placeholders:
    __BINARY__, __TARGETID__, __ARGUMENTS__, __NAMESPACE__,
    __TARGETNAME__, __BUILDNUMBER__, __BUILDPATH__
"""

import sys
from dataclasses import dataclass
from typing import Optional
from shipyard.domain.errors import UnsupportedPlatformError

PLACEHOLDERS = (
    "__BINARY__",
    "__TARGETID__",
    "__ARGUMENTS__",
    "__NAMESPACE__",
    "__TARGETNAME__",
    "__BUILDNUMBER__",
    "__BUILDPATH__",
)

# Remote targets are cloud Linux instances
REMOTE_PLATFORM = "linux"

_COMMANDS: dict[str, dict[str, str]] = {
    "darwin": {
        "default_user": "",
        "import_": "sudo docker load < __BINARY__",
        "kill": "docker kill __TARGETID__",
        "run": "docker run __ARGUMENTS__",
        "execute": "docker run",
        "list_images": "docker images",
        "delete_untagged_containers": (
            "docker ps -a --no-trunc | grep Exit | awk '{print $1}' "
            "| xargs -I {} docker rm {}"
        ),
        "delete_untagged_images": (
            "docker images --no-trunc| grep none | awk '{print $3}' "
            "| xargs -I {} docker rmi {}"
        ),
        "build": "docker build -t __NAMESPACE__/__TARGETNAME__-__BUILDNUMBER__ .",
        "export": (
            "docker save __NAMESPACE__/__TARGETNAME__-__BUILDNUMBER__ "
            "> __BUILDPATH__/__TARGETNAME__-__BUILDNUMBER__"
        ),
    },
    "linux": {
        "default_user": "ubuntu",
        "import_": "sudo docker load < __BINARY__",
        "kill": "sudo docker kill __TARGETID__",
        "run": "sudo docker run __ARGUMENTS__",
        "execute": "sudo docker run",
        "list_images": "sudo docker images",
        "delete_untagged_containers": (
            "sudo docker ps -a -notrunc | grep 'Exit' | awk '{print $1}' "
            "| xargs -r sudo docker rm"
        ),
        "delete_untagged_images": (
            "sudo docker images -notrunc| grep none | awk '{print $3}' "
            "| xargs -r sudo docker rmi"
        ),
        "build": "docker build -t __NAMESPACE__/__TARGETNAME__-__BUILDNUMBER__ .",
        "export": (
            "docker save __NAMESPACE__/__TARGETNAME__-__BUILDNUMBER__ "
            "> __BUILDPATH__/__TARGETNAME__-__BUILDNUMBER__"
        ),
    },
}


@dataclass(frozen=True)
class CommandSet:
    """
    Value Object holding the resolved command templates for one platform.
    """
    platform: str
    default_user: str
    import_: str
    kill: str
    run: str
    execute: str
    list_images: str
    delete_untagged_containers: str
    delete_untagged_images: str
    build: str
    export: str

    def render_import(self, binary: str, name: str) -> str:
        return self.import_.replace("__BINARY__", binary, 1).replace(
            "__TARGETNAME__", name, 1
        )

    def render_kill(self, container_id: str) -> str:
        return self.kill.replace("__TARGETID__", container_id, 1)

    def render_run(self, arguments: str, image_name: str) -> str:
        # The qualified image name can appear several times in the arguments
        command = self.run.replace("__ARGUMENTS__", arguments, 1)
        return command.replace("__TARGETNAME__", image_name)

    def render_execute(self, args: str, name: str, exec_: str) -> str:
        return " ".join(part for part in (self.execute, args, name, exec_) if part)

    def render_build(self, namespace: str, name: str, build_number: str) -> str:
        return (
            self.build.replace("__NAMESPACE__", namespace)
            .replace("__TARGETNAME__", name)
            .replace("__BUILDNUMBER__", build_number)
        )

    def render_export(
        self, namespace: str, name: str, build_number: str, build_path: str
    ) -> str:
        return (
            self.export.replace("__NAMESPACE__", namespace)
            .replace("__TARGETNAME__", name)
            .replace("__BUILDNUMBER__", build_number)
            .replace("__BUILDPATH__", build_path)
        )


def native_platform() -> str:
    """Platform family of the machine this process runs on."""
    return "linux" if sys.platform.startswith("linux") else sys.platform


def supported_platforms() -> tuple[str, ...]:
    return tuple(sorted(_COMMANDS))


def resolve_commands(platform: Optional[str] = None) -> CommandSet:
    """
    Looks up the command set for a platform family.
    Defaults to the native platform; unknown names raise UnsupportedPlatformError.
    """
    name = platform or native_platform()
    try:
        templates = _COMMANDS[name]
    except KeyError:
        raise UnsupportedPlatformError(name) from None
    return CommandSet(platform=name, **templates)
