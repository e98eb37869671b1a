# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import shutil
import uuid
from pathlib import Path

from topo_lib.core.context import ConfigContext, Key
from topo_lib.core.error import UploadError
from topo_lib.core.logger import get_logger
from topo_lib.plugins.interface import Capability, PackageUploader, plugin

logger = get_logger(__name__)


@plugin(Capability.UPLOADER, "localfs")
class LocalFileSystemUploader(PackageUploader):
    """
    Uploader copying the job package into a directory on the local filesystem.

    Every upload is stored in its own attempt directory,
    `<topo.uploader.localfs.dir>/<job name>/<job id>-<random suffix>/<package file name>`,
    so that uploads of concurrent submissions of the same job never overwrite
    each other and `undo` only deletes the package of its own attempt.
    """

    def __init__(self):
        self._package: Path | None = None
        self._job_dir: Path | None = None
        self._attempt_prefix: str | None = None
        self._destination: Path | None = None

    def initialize(self, config: ConfigContext) -> None:
        self._package = Path(config.require(Key.JOB_PACKAGE_FILE))
        self._job_dir = Path(config.require(Key.UPLOADER_LOCALFS_DIR)) / str(
            config.require(Key.JOB_NAME)
        )
        self._attempt_prefix = str(config.get(Key.JOB_ID) or "attempt")

    def uploadPackage(self) -> str:
        if self._package is None or self._job_dir is None:
            raise UploadError("Local uploader has not been initialized.")

        if not self._package.is_file():
            raise UploadError(
                f"Job package '{self._package}' does not exist or is not a file."
            )

        attempt_dir = self._job_dir / f"{self._attempt_prefix}-{uuid.uuid4().hex[:12]}"
        destination = attempt_dir / self._package.name

        logger.debug(f"Copying '{self._package}' to '{destination}'.")
        try:
            self._job_dir.mkdir(parents=True, exist_ok=True)
            # exclusive, never shared with another attempt
            attempt_dir.mkdir()
            shutil.copy2(self._package, destination)
        except OSError as e:
            raise UploadError(
                f"Could not copy job package to '{destination}': {e}"
            ) from e

        self._destination = destination
        return destination.resolve().as_uri()

    def undo(self) -> bool:
        if self._destination is None:
            return False

        try:
            self._destination.unlink()
        except FileNotFoundError:
            return False

        # the attempt directory only ever holds this package
        self._destination.parent.rmdir()
        logger.debug(f"Deleted uploaded package '{self._destination}'.")
        self._destination = None
        return True

    def close(self) -> None:
        self._package = None
        self._job_dir = None
        self._destination = None
