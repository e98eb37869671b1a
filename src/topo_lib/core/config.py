# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Configuration system for topo.

This module defines dataclasses representing the configurable aspects of topo
itself: environment variables, timeouts, exit codes, cluster configuration file
names, default capability plugins and dry-run presentation settings.

These settings describe the behavior of the tool and are independent of the
per-submission configuration assembled into a `ConfigContext`.

The `Config` class loads user configuration from a TOML file (if available)
and provides a globally accessible `CFG` instance.
"""

import os
import tomllib
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any, Self


@dataclass
class EnvironmentVariables:
    """Environment variable names used by topo."""

    # Enables topo debug mode.
    debug_mode: str = "TOPO_DEBUG"
    # Explicit path to the topo configuration file.
    config_file: str = "TOPO_CONFIG"


@dataclass
class TimeoutSettings:
    """Timeout settings in seconds."""

    # Maximal time to wait for the state store to answer a query.
    state_store: float = 5.0


@dataclass
class ClusterConfigFiles:
    """Names of the YAML files read from the cluster configuration directory."""

    # Files are merged in this order; missing files are skipped.
    files: list[str] = field(
        default_factory=lambda: [
            "client.yaml",
            "packing.yaml",
            "scheduler.yaml",
            "statemgr.yaml",
            "uploader.yaml",
        ]
    )


@dataclass
class DefaultPlugins:
    """Names of the capability plugins used when the cluster configuration names none."""

    state_store: str = "localfs"
    uploader: str = "localfs"
    launcher: str = "local"


@dataclass
class DryRunPresenterSettings:
    """Settings for rendering dry-run responses."""

    # Default output format.
    default_format: str = "table"
    # Width of the rendered panel.
    width: int = 100
    # Style used for border lines.
    border_style: str = "white"
    # Style used for the title.
    title_style: str = "white bold"
    # Style used for table headers.
    headers_style: str = "default bold"
    # Style used for keys in the summary section.
    key_style: str = "default bold"
    # Style used for values in the summary section.
    value_style: str = "white"
    # Style used for component names.
    component_style: str = "bright_blue"
    # Style used for notes.
    notes_style: str = "grey50"


@dataclass
class ExitCodes:
    """Exit codes used for various outcomes."""

    # Returned when the job was submitted successfully.
    success: int = 0
    # Returned when topo fails before a submission attempt starts.
    bootstrap: int = 91
    # Returned on an unexpected or unhandled error before a submission attempt starts.
    unexpected_error: int = 99
    # Returned when a submission attempt fails.
    submission_failure: int = 100
    # Returned when a dry-run response has been printed.
    dry_run: int = 200


@dataclass
class DateFormats:
    """Date and time format strings."""

    # Standard date format used by topo.
    standard: str = "%Y-%m-%d %H:%M:%S"


@dataclass
class Config:
    """Main configuration for topo."""

    env_vars: EnvironmentVariables = field(default_factory=EnvironmentVariables)
    timeouts: TimeoutSettings = field(default_factory=TimeoutSettings)
    cluster_config: ClusterConfigFiles = field(default_factory=ClusterConfigFiles)
    default_plugins: DefaultPlugins = field(default_factory=DefaultPlugins)
    dry_run_presenter: DryRunPresenterSettings = field(
        default_factory=DryRunPresenterSettings
    )
    exit_codes: ExitCodes = field(default_factory=ExitCodes)
    date_formats: DateFormats = field(default_factory=DateFormats)

    @classmethod
    def load(cls, config_path: Path | None = None) -> Self:
        """
        Load configuration from TOML file or use defaults.

        Args:
            config_path: Explicit path to config file. If None, searches standard locations.

        Returns:
            Config instance with loaded or default values.
        """
        if config_path is None:
            config_path = Config._get_config_path()

        try:
            if config_path and config_path.exists():
                with config_path.open("rb") as f:
                    config_data = tomllib.load(f)
                return _dict_to_dataclass(cls, config_data)
        except Exception as e:
            raise ValueError(f"Could not read topo config '{config_path}': {e}.")

        # no config found - use defaults
        return cls()

    @staticmethod
    def _get_config_path() -> Path | None:
        """
        Search for config file in standard locations (XDG compliant).
        Returns the first existing config file, or None.
        """
        config_locations: list[Path | None] = [
            # 1. Explicit environment variable (highest priority)
            Path(env_path)
            if (env_path := os.getenv(EnvironmentVariables.config_file))
            else None,
            # 2. Current working directory
            Path.cwd() / "topo_config.toml",
            # 3. XDG config home
            Path(os.getenv("XDG_CONFIG_HOME", Path.home() / ".config"))
            / "topo"
            / "config.toml",
        ]

        for path in config_locations:
            if path and path.is_file():
                return path

        return None


def _dict_to_dataclass(cls, data: dict[str, Any]):
    """
    Recursively convert a dictionary to a dataclass instance.
    Keys that do not correspond to any field are ignored.
    """
    if not is_dataclass(cls):
        return data

    field_values = {}
    for field_info in fields(cls):
        field_name = field_info.name
        field_type = field_info.type

        if field_name in data:
            value = data[field_name]
            if is_dataclass(field_type) and isinstance(value, dict):
                field_values[field_name] = _dict_to_dataclass(field_type, value)
            else:
                field_values[field_name] = value

    return cls(**field_values)


# Global configuration for topo.
CFG = Config.load()
