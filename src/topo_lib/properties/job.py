# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Decoded representation of a job definition.

This module defines `JobDescriptor`, the read-only record describing the job
being submitted: its identifier, display name, job-level configuration and the
graph of components. The submission protocol treats the component graph as
opaque; only launchers and dry-run renderers look inside it.

Job definitions are stored as YAML (or JSON) documents of this shape:

    id: wordcount-7f3a
    name: wordcount
    config:
      topology.stmgrs: 2
    components:
      - name: sentences
        kind: spout
        parallelism: 2
      - name: counter
        kind: bolt
        parallelism: 4
        inputs: [sentences]
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Self

from topo_lib.core.common import load_yaml_mapping
from topo_lib.core.error import TopoError
from topo_lib.core.logger import get_logger

logger = get_logger(__name__)

# job config key holding the number of stream managers (one per container)
STMGRS_KEY = "topology.stmgrs"

# characters that cannot appear in job names, which are used as file and directory names
_FORBIDDEN_NAME_CHARACTERS = ("/", "\\", "\0")


@dataclass(frozen=True)
class Component:
    """
    Single component (source or operator) of the job graph.
    """

    # Name of the component, unique within the job
    name: str

    # Kind of the component as declared in the definition (e.g., spout, bolt)
    kind: str = "component"

    # Number of instances of the component
    parallelism: int = 1

    # Names of the components this component consumes from
    inputs: tuple[str, ...] = ()

    # Component-level configuration
    config: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def fromDict(cls, data: Mapping[str, Any]) -> Self:
        """
        Construct a Component from its mapping representation.

        Raises:
            TopoError: If the mapping is missing a name or has an invalid parallelism.
        """
        if not isinstance(data, Mapping) or not data.get("name"):
            raise TopoError(f"Invalid component definition '{data}': missing name.")

        name = str(data["name"])
        try:
            parallelism = int(data.get("parallelism", 1))
        except (TypeError, ValueError) as e:
            raise TopoError(
                f"Invalid parallelism '{data.get('parallelism')}' of component '{name}'."
            ) from e

        if parallelism < 0:
            raise TopoError(
                f"Parallelism of component '{name}' must not be negative, got {parallelism}."
            )

        return cls(
            name=name,
            kind=str(data.get("kind", "component")),
            parallelism=parallelism,
            inputs=tuple(str(i) for i in data.get("inputs") or ()),
            config=MappingProxyType(dict(data.get("config") or {})),
        )


@dataclass(frozen=True)
class JobDescriptor:
    """
    Read-only record decoded from a job definition file.
    """

    # Unique identifier of the job
    id: str

    # Display name of the job; used to detect duplicate submissions
    name: str

    # Components of the job graph
    components: tuple[Component, ...] = ()

    # Job-level configuration
    config: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def fromDict(cls, data: Mapping[str, Any]) -> Self:
        """
        Construct a JobDescriptor from its mapping representation.

        Raises:
            TopoError: If the identifier or the name is missing
                or any component is invalid.
        """
        for required in ("id", "name"):
            if not data.get(required):
                raise TopoError(f"Job definition is missing the '{required}' field.")

        components = data.get("components") or []
        if not isinstance(components, list):
            raise TopoError("Components of the job definition must form a list.")

        config = data.get("config") or {}
        if not isinstance(config, Mapping):
            raise TopoError("Configuration of the job definition must be a mapping.")

        return cls(
            id=str(data["id"]),
            name=_check_name(str(data["name"])),
            components=tuple(Component.fromDict(c) for c in components),
            config=MappingProxyType(dict(config)),
        )

    @classmethod
    def fromFile(cls, file: Path) -> Self:
        """
        Load a JobDescriptor from a YAML or JSON job definition file.

        Raises:
            TopoError: If the file cannot be read or does not describe a valid job.
        """
        logger.debug(f"Loading job definition from '{file}'.")
        return cls.fromDict(load_yaml_mapping(file))

    def getNumInstances(self) -> int:
        """Get the total number of component instances of the job."""
        return sum(c.parallelism for c in self.components)

    def getNumStmgrs(self) -> int:
        """
        Get the number of stream managers requested by the job configuration.

        Defaults to 1 if the job does not specify it.

        Raises:
            TopoError: If the configured value is not a positive integer.
        """
        value = self.config.get(STMGRS_KEY, 1)
        try:
            stmgrs = int(value)
        except (TypeError, ValueError) as e:
            raise TopoError(f"Invalid value '{value}' of '{STMGRS_KEY}'.") from e

        if stmgrs < 1:
            raise TopoError(f"'{STMGRS_KEY}' must be a positive integer, got {stmgrs}.")

        return stmgrs

    def toDict(self) -> dict[str, Any]:
        """Return the mapping representation of the job."""
        return {
            "id": self.id,
            "name": self.name,
            "config": dict(self.config),
            "components": [
                {
                    "name": c.name,
                    "kind": c.kind,
                    "parallelism": c.parallelism,
                    "inputs": list(c.inputs),
                    "config": dict(c.config),
                }
                for c in self.components
            ],
        }


def _check_name(name: str) -> str:
    """
    Check that the job name can be safely used as a file or directory name.

    Raises:
        TopoError: If the name contains a path separator or is a relative path component.
    """
    if name in (".", "..") or any(c in name for c in _FORBIDDEN_NAME_CHARACTERS):
        raise TopoError(
            f"Invalid job name '{name}'. Job names must not contain path separators."
        )
    return name
