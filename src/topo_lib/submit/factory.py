# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from pathlib import Path

from topo_lib.core.common import parse_properties
from topo_lib.core.context import ConfigContext
from topo_lib.core.logger import get_logger
from topo_lib.plugins.interface import REGISTRY, PluginRegistry
from topo_lib.properties.job import JobDescriptor

from . import loader
from .orchestrator import SubmissionOrchestrator

logger = get_logger(__name__)


class OrchestratorFactory:
    """
    Factory class to construct a SubmissionOrchestrator from command-line options.

    Loads the job definition and assembles the layered configuration of the submission.
    """

    def __init__(self, registry: PluginRegistry = REGISTRY, **kwargs):
        """
        Initialize the factory with the command-line options.

        Args:
            registry (PluginRegistry): Registry to resolve capability plugins from.
            **kwargs: Keyword arguments from the command line.
        """
        self._registry = registry
        self._kwargs = kwargs

    def makeOrchestrator(self) -> SubmissionOrchestrator:
        """
        Construct and return a SubmissionOrchestrator instance.

        Returns:
            SubmissionOrchestrator: An orchestrator ready to submit the job.

        Raises:
            TopoError: If the job definition or any configuration file cannot be loaded.
        """
        job = JobDescriptor.fromFile(self._getPath("job_defn"))
        config = self._loadConfig(job)

        logger.debug("Static config loaded successfully.")
        logger.debug(config)

        return SubmissionOrchestrator(config, job, self._registry)

    def _loadConfig(self, job: JobDescriptor) -> ConfigContext:
        """
        Assemble the configuration from all its layers.

        Priority (highest last):
            1. Defaults
            2. Cluster configuration directory
            3. Release file
            4. Override file
            5. Config properties from the command line
            6. Command-line options
            7. Job
        """
        install_dir = self._getPath("install_dir")
        config_path = self._getPath("config_path")

        return loader.assemble_config(
            loader.default_config(install_dir, config_path),
            loader.load_config_dir(config_path),
            loader.load_optional_file(self._getOptionalPath("release_file")),
            loader.load_optional_file(self._getOptionalPath("override_config_file")),
            parse_properties(self._kwargs.get("config_property") or ()),
            loader.command_line_config(
                self._kwargs["cluster"],
                self._kwargs["role"],
                self._kwargs["environment"],
                bool(self._kwargs.get("dry_run")),
                self._kwargs.get("dry_run_format"),
                bool(self._kwargs.get("verbose")),
            ),
            loader.job_config(
                job,
                self._getPath("job_package"),
                self._getPath("job_defn"),
                self._getPath("job_bin"),
            ),
        )

    def _getPath(self, option: str) -> Path:
        """Get an absolute path from a required command-line option."""
        return Path(self._kwargs[option]).expanduser().resolve()

    def _getOptionalPath(self, option: str) -> Path | None:
        """Get an absolute path from an optional command-line option."""
        if value := self._kwargs.get(option):
            return Path(value).expanduser().resolve()
        return None
