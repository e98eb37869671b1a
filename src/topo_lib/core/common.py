# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Utility helpers shared across topo.

This module groups small, self-contained helpers used throughout the codebase:
fast YAML loader/dumper selection, reading YAML configuration files,
`${VARIABLE}` expansion in configuration values and parsing of `KEY=VALUE`
properties supplied on the command line.
"""

import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .error import TopoError
from .logger import get_logger

logger = get_logger(__name__)

# matches ${NAME} references in configuration values
_VARIABLE_PATTERN = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


def load_yaml_dumper() -> type[yaml.Dumper]:
    """Return the fastest available YAML dumper (CDumper if possible)."""
    try:
        from yaml import CDumper as Dumper  # type: ignore[attr-defined]

        logger.debug("Loaded YAML CDumper.")
    except ImportError:
        from yaml import Dumper

        logger.debug("Loaded default YAML dumper.")
    return Dumper


def load_yaml_loader() -> type[yaml.SafeLoader]:
    """Return the fastest available safe YAML loader (CSafeLoader if possible)."""
    try:
        from yaml import (
            CSafeLoader as SafeLoader,  # ty: ignore[possibly-missing-import]
        )

        logger.debug("Loaded YAML CLoader.")
    except ImportError:
        from yaml import SafeLoader

        logger.debug("Loaded default YAML loader.")

    return SafeLoader


SafeLoader: type[yaml.SafeLoader] = load_yaml_loader()


def load_yaml_mapping(path: Path) -> dict[str, Any]:
    """
    Load a YAML (or JSON) file containing a single mapping.

    An empty file is read as an empty mapping.

    Args:
        path (Path): Path to the file to read.

    Returns:
        dict[str, Any]: The loaded mapping.

    Raises:
        TopoError: If the file cannot be read, is not valid YAML,
            or does not contain a mapping.
    """
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.load(f, Loader=SafeLoader)
    except FileNotFoundError as e:
        raise TopoError(f"File '{path}' does not exist.") from e
    except (OSError, yaml.YAMLError) as e:
        raise TopoError(f"Could not read file '{path}': {e}") from e

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise TopoError(f"File '{path}' does not contain a mapping.")

    return data


def expand_variables(value: str, variables: Mapping[str, str]) -> str:
    """
    Replace `${NAME}` references in a string.

    Variables are looked up in `variables` first and then in the process
    environment. References to unknown variables are left untouched.

    Args:
        value (str): The string to expand.
        variables (Mapping[str, str]): Variables available for expansion.

    Returns:
        str: The expanded string.
    """

    def replace(match: re.Match) -> str:
        name = match.group(1)
        if name in variables:
            return str(variables[name])
        return os.environ.get(name, match.group(0))

    return _VARIABLE_PATTERN.sub(replace, value)


def parse_properties(properties: tuple[str, ...] | list[str]) -> dict[str, str]:
    """
    Convert a list of `KEY=VALUE` strings to a dictionary.

    Later occurrences of the same key override earlier ones.

    Raises:
        TopoError: If any of the properties is not of the form `KEY=VALUE`.
    """
    result = {}
    for prop in properties:
        key, sep, value = prop.partition("=")
        if not sep or not key.strip():
            raise TopoError(
                f"Could not parse config property '{prop}'. Expected format is 'KEY=VALUE'."
            )
        result[key.strip()] = value.strip()

    return result
