# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from topo_lib.core.common import load_yaml_dumper
from topo_lib.core.context import ConfigContext, Key
from topo_lib.core.error import LaunchError, StateStoreError
from topo_lib.core.logger import get_logger
from topo_lib.plugins.interface import Capability, StateStore, plugin

logger = get_logger(__name__)

Dumper: type[yaml.Dumper] = load_yaml_dumper()


@plugin(Capability.STATE_STORE, "localfs")
class LocalFileSystemStateStore(StateStore):
    """
    State store keeping one registration file per job in a local directory.

    Registration files are created exclusively, so two concurrent launches
    of the same job cannot both succeed.
    """

    # name of the subdirectory holding job registrations
    JOBS_DIR = "jobs"

    def __init__(self):
        self._jobs_dir: Path | None = None

    def initialize(self, config: ConfigContext) -> None:
        root = Path(config.require(Key.STATE_STORE_ROOT))
        self._jobs_dir = root / LocalFileSystemStateStore.JOBS_DIR
        try:
            self._jobs_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StateStoreError(
                f"Could not create state directory '{self._jobs_dir}': {e}"
            ) from e

        logger.debug(f"Using local state directory '{self._jobs_dir}'.")

    def isJobRunning(self, job_name: str) -> bool:
        return self._getJobFile(job_name).is_file()

    def registerJob(self, job_name: str, record: Mapping[str, Any]) -> None:
        job_file = self._getJobFile(job_name)
        try:
            with job_file.open("x", encoding="utf-8") as f:
                yaml.dump(dict(record), f, Dumper=Dumper, default_flow_style=False)
        except FileExistsError as e:
            raise LaunchError(f"Job '{job_name}' is already registered.") from e

        logger.debug(f"Registered job '{job_name}' in '{job_file}'.")

    def close(self) -> None:
        self._jobs_dir = None

    def _getJobFile(self, job_name: str) -> Path:
        """Get path to the registration file of the job."""
        if self._jobs_dir is None:
            raise StateStoreError("Local state store has not been initialized.")
        return self._jobs_dir / job_name
