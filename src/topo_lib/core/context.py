# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Immutable, layered configuration used during job submission.

`ConfigContext` is a read-only mapping assembled by overlaying layers of
settings: defaults, cluster configuration files, command-line values, job-derived
values and, during a submission, facts discovered at runtime. Later layers
override earlier ones key by key. A context is never modified in place;
every overlay produces a new context.

`Key` names the entries understood by topo itself. Since `Key` is a `StrEnum`,
plain strings address the same entries, which allows cluster configuration
files and plugins to use arbitrary additional keys.
"""

from collections.abc import Iterator, Mapping
from enum import StrEnum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Self

from .common import expand_variables
from .error import TopoError


class Key(StrEnum):
    """Keys of the configuration entries used by topo."""

    # installation and configuration
    INSTALL_DIR = "topo.install.dir"
    CONFIG_PATH = "topo.config.path"
    RELEASE_FILE = "topo.release.file"
    OVERRIDE_FILE = "topo.override.file"
    BUILD_VERSION = "topo.build.version"

    # command line
    CLUSTER = "topo.cluster"
    ROLE = "topo.role"
    ENVIRON = "topo.environ"
    DRY_RUN = "topo.dry.run"
    DRY_RUN_FORMAT = "topo.dry.run.format"
    VERBOSE = "topo.verbose"

    # job
    JOB_ID = "topo.job.id"
    JOB_NAME = "topo.job.name"
    JOB_DEFINITION_FILE = "topo.job.definition.file"
    JOB_PACKAGE_FILE = "topo.job.package.file"
    JOB_BINARY_FILE = "topo.job.binary.file"
    JOB_PACKAGE_TYPE = "topo.job.package.type"

    # capability plugins
    STATE_STORE_CLASS = "topo.class.state.store"
    UPLOADER_CLASS = "topo.class.uploader"
    LAUNCHER_CLASS = "topo.class.launcher"

    # reference plugins
    STATE_STORE_ROOT = "topo.state.store.root"
    UPLOADER_LOCALFS_DIR = "topo.uploader.localfs.dir"

    # runtime
    RUNTIME_JOB_ID = "runtime.job.id"
    RUNTIME_JOB_NAME = "runtime.job.name"
    RUNTIME_JOB_DEFINITION = "runtime.job.definition"
    RUNTIME_NUM_CONTAINERS = "runtime.num.containers"
    RUNTIME_PACKAGE_TYPE = "runtime.package.type"
    RUNTIME_STATE_ADAPTOR = "runtime.state.adaptor"
    RUNTIME_PACKAGE_URI = "runtime.package.uri"
    RUNTIME_LAUNCHER_INSTANCE = "runtime.launcher.instance"


# variables available for ${NAME} expansion and the keys they are read from
_EXPANSION_VARIABLES = {
    "INSTALL_DIR": Key.INSTALL_DIR,
    "CONFIG_PATH": Key.CONFIG_PATH,
    "CLUSTER": Key.CLUSTER,
    "ROLE": Key.ROLE,
    "ENVIRON": Key.ENVIRON,
    "JOB": Key.JOB_NAME,
}

# suffixes of keys whose values are treated as filesystem paths during expansion
_PATH_SUFFIXES = (".dir", ".path", ".file", ".root")

_TRUE_STRINGS = {"true", "yes", "1", "on"}
_FALSE_STRINGS = {"false", "no", "0", "off"}


class ConfigContext(Mapping[str, Any]):
    """
    Read-only mapping of configuration values built from ordered layers.
    """

    def __init__(self, values: Mapping[str, Any] | None = None):
        """
        Initialize the context with a copy of the provided values.

        Use `ConfigContext.merge` to build a context from multiple layers.
        """
        self._values = MappingProxyType(
            {str(key): value for key, value in (values or {}).items()}
        )

    @classmethod
    def merge(cls, *layers: Mapping[str, Any] | None) -> Self:
        """
        Build a context by overlaying the provided layers in order.

        For every key, the value from the last layer defining it wins.
        Layers set to None are skipped.

        Returns:
            ConfigContext: A new context containing the merged values.
        """
        merged: dict[str, Any] = {}
        for layer in layers:
            if layer is None:
                continue
            for key, value in layer.items():
                merged[str(key)] = value

        return cls(merged)

    def overlay(self, *layers: Mapping[str, Any] | None) -> Self:
        """
        Return a new context with the provided layers placed on top of this one.

        This context is left unchanged.
        """
        return type(self).merge(self, *layers)

    def require(self, key: str) -> Any:
        """
        Get the value of a key that must be present.

        Raises:
            TopoError: If the key is not present in the context.
        """
        try:
            return self._values[str(key)]
        except KeyError as e:
            raise TopoError(f"Required configuration key '{key}' is not set.") from e

    def getBool(self, key: str, default: bool = False) -> bool:
        """
        Get a boolean value.

        Both booleans and their usual string spellings (true/false, yes/no, 1/0, on/off)
        are accepted.

        Raises:
            TopoError: If the value cannot be interpreted as a boolean.
        """
        value = self.get(key)
        if value is None:
            return default
        if isinstance(value, bool):
            return value
        if isinstance(value, int):
            return value != 0

        normalized = str(value).strip().lower()
        if normalized in _TRUE_STRINGS:
            return True
        if normalized in _FALSE_STRINGS:
            return False

        raise TopoError(f"Value '{value}' of key '{key}' is not a boolean.")

    def getInt(self, key: str, default: int = 0) -> int:
        """
        Get an integer value.

        Raises:
            TopoError: If the value cannot be interpreted as an integer.
        """
        value = self.get(key)
        if value is None:
            return default
        if isinstance(value, bool):
            raise TopoError(f"Value '{value}' of key '{key}' is not an integer.")

        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise TopoError(f"Value '{value}' of key '{key}' is not an integer.") from e

    def expand(self) -> Self:
        """
        Return a new context with `${NAME}` references in string values expanded.

        Available variables are INSTALL_DIR, CONFIG_PATH, CLUSTER, ROLE, ENVIRON and JOB
        (taken from this context) followed by the process environment.
        For path-like keys, a leading `~` is also expanded to the home directory.
        """
        variables = {
            name: str(self._values[key])
            for name, key in _EXPANSION_VARIABLES.items()
            if self._values.get(key) is not None
        }

        expanded = {}
        for key, value in self._values.items():
            if isinstance(value, str):
                value = expand_variables(value, variables)
                if key.endswith(_PATH_SUFFIXES) and value.startswith("~"):
                    value = str(Path(value).expanduser())
            expanded[key] = value

        return type(self)(expanded)

    def toDict(self) -> dict[str, Any]:
        """Return a plain dictionary copy of the context."""
        return dict(self._values)

    def __getitem__(self, key: str) -> Any:
        return self._values[str(key)]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ConfigContext({dict(self._values)!r})"
