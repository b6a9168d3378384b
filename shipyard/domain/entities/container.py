"""
Container Entities

Architectural Intent:
- ContainerDefinition describes one container in a system; enriched by build
- ContainerInstance is its topology-attached counterpart; enriched by deploy/start
- Storage is owned by the orchestration layer above; these entities only carry
  the fields the lifecycle operations read and mutate
- from_dict/to_dict keep the persisted camelCase field names
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class System:
    """Deployment namespace and topology context."""
    namespace: str
    name: str = ""

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "System":
        return System(namespace=data.get("namespace", ""), name=data.get("name", ""))


@dataclass(frozen=True)
class ExecuteSpec:
    """Structured run override: `<execute> <args> <name> <exec>`."""
    args: str = ""
    exec: str = ""
    name: Optional[str] = None

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "ExecuteSpec":
        return ExecuteSpec(
            args=data.get("args", ""),
            exec=data.get("exec", ""),
            name=data.get("name") or None,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"args": self.args, "exec": self.exec}
        if self.name:
            data["name"] = self.name
        return data


@dataclass
class DefinitionSpecific:
    binary: Optional[str] = None
    docker_image_id: Optional[str] = None
    arguments: Optional[str] = None
    execute: Optional[ExecuteSpec] = None


@dataclass
class ContainerDefinition:
    name: str
    path: str = "."
    specific: DefinitionSpecific = field(default_factory=DefinitionSpecific)

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "ContainerDefinition":
        specific = data.get("specific") or {}
        execute = specific.get("execute")
        return ContainerDefinition(
            name=data.get("name", ""),
            path=data.get("path", "."),
            specific=DefinitionSpecific(
                binary=specific.get("binary"),
                docker_image_id=specific.get("dockerImageId"),
                arguments=specific.get("arguments"),
                execute=ExecuteSpec.from_dict(execute) if execute else None,
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        specific: dict[str, Any] = {}
        if self.specific.binary is not None:
            specific["binary"] = self.specific.binary
        if self.specific.docker_image_id is not None:
            specific["dockerImageId"] = self.specific.docker_image_id
        if self.specific.arguments is not None:
            specific["arguments"] = self.specific.arguments
        if self.specific.execute is not None:
            specific["execute"] = self.specific.execute.to_dict()
        return {"name": self.name, "path": self.path, "specific": specific}


@dataclass
class InstanceSpecific:
    container_binary: Optional[str] = None
    docker_container_id: Optional[str] = None


@dataclass
class ContainerInstance:
    id: str = ""
    specific: InstanceSpecific = field(default_factory=InstanceSpecific)

    @property
    def derived_name(self) -> Optional[str]:
        """Last path segment of the deployed binary, names the remote file and image."""
        if not self.specific.container_binary:
            return None
        return self.specific.container_binary.split("/")[-1]

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "ContainerInstance":
        specific = data.get("specific") or {}
        return ContainerInstance(
            id=data.get("id", ""),
            specific=InstanceSpecific(
                container_binary=specific.get("containerBinary"),
                docker_container_id=specific.get("dockerContainerId"),
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        specific: dict[str, Any] = {}
        if self.specific.container_binary is not None:
            specific["containerBinary"] = self.specific.container_binary
        if self.specific.docker_container_id is not None:
            specific["dockerContainerId"] = self.specific.docker_container_id
        return {"id": self.id, "specific": specific}


@dataclass(frozen=True)
class BuildResult:
    container_binary: str
    docker_image_id: Optional[str] = None
