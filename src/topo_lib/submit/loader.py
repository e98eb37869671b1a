# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Assembly of the layered submission configuration.

The configuration of a submission is built from these layers, each overriding
the previous ones:

1. built-in defaults,
2. YAML files of the cluster configuration directory,
3. the release file,
4. the override file,
5. `KEY=VALUE` properties from the command line,
6. values derived from the command-line options,
7. values derived from the job.

The result is expanded, resolving `${NAME}` references.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from topo_lib.core.common import load_yaml_mapping
from topo_lib.core.config import CFG
from topo_lib.core.context import ConfigContext, Key
from topo_lib.core.error import TopoError
from topo_lib.core.logger import get_logger
from topo_lib.properties.job import JobDescriptor
from topo_lib.properties.package_type import PackageType

logger = get_logger(__name__)


def default_config(install_dir: Path, config_path: Path) -> dict[str, Any]:
    """
    Create the built-in default layer.
    """
    return {
        Key.INSTALL_DIR: str(install_dir),
        Key.CONFIG_PATH: str(config_path),
        Key.STATE_STORE_CLASS: CFG.default_plugins.state_store,
        Key.UPLOADER_CLASS: CFG.default_plugins.uploader,
        Key.LAUNCHER_CLASS: CFG.default_plugins.launcher,
        Key.STATE_STORE_ROOT: "~/.topo/state/${CLUSTER}",
        Key.UPLOADER_LOCALFS_DIR: "~/.topo/packages/${CLUSTER}/${ROLE}/${ENVIRON}",
        Key.DRY_RUN: False,
        Key.DRY_RUN_FORMAT: CFG.dry_run_presenter.default_format,
        Key.VERBOSE: False,
    }


def load_config_dir(config_path: Path) -> dict[str, Any]:
    """
    Load and merge the cluster configuration files from a directory.

    Files listed in `CFG.cluster_config.files` are read in order; missing files are skipped.

    Raises:
        TopoError: If the directory does not exist or any of the files is invalid.
    """
    if not config_path.is_dir():
        raise TopoError(
            f"Configuration path '{config_path}' does not exist or is not a directory."
        )

    merged: dict[str, Any] = {}
    for name in CFG.cluster_config.files:
        file = config_path / name
        if not file.is_file():
            logger.debug(f"Configuration file '{file}' not found, skipping.")
            continue

        logger.debug(f"Loading configuration file '{file}'.")
        merged.update(load_yaml_mapping(file))

    return merged


def load_optional_file(file: Path | None) -> dict[str, Any] | None:
    """
    Load a YAML configuration file if a path is given.

    Raises:
        TopoError: If the file is given but cannot be loaded.
    """
    if file is None:
        return None

    logger.debug(f"Loading configuration file '{file}'.")
    return load_yaml_mapping(file)


def command_line_config(
    cluster: str,
    role: str,
    environ: str,
    dry_run: bool,
    dry_run_format: str | None,
    verbose: bool,
) -> dict[str, Any]:
    """
    Create the layer derived from the command-line options.

    The dry-run flag and format are only included when they were explicitly requested
    so that they can also be set in the configuration files or as properties.
    """
    config: dict[str, Any] = {
        Key.CLUSTER: cluster,
        Key.ROLE: role,
        Key.ENVIRON: environ,
        Key.VERBOSE: verbose,
    }
    if dry_run:
        config[Key.DRY_RUN] = True
    if dry_run_format:
        config[Key.DRY_RUN_FORMAT] = dry_run_format

    return config


def job_config(
    job: JobDescriptor, package: Path, definition: Path, binary: Path
) -> dict[str, Any]:
    """
    Create the layer derived from the job and its files.

    Raises:
        TopoError: If the type of the job binary is not supported.
    """
    return {
        Key.JOB_ID: job.id,
        Key.JOB_NAME: job.name,
        Key.JOB_DEFINITION_FILE: str(definition),
        Key.JOB_PACKAGE_FILE: str(package),
        Key.JOB_BINARY_FILE: str(binary),
        Key.JOB_PACKAGE_TYPE: PackageType.fromFile(binary),
    }


def assemble_config(*layers: Mapping[str, Any] | None) -> ConfigContext:
    """
    Merge the layers into a single context and expand variable references.
    """
    return ConfigContext.merge(*layers).expand()
