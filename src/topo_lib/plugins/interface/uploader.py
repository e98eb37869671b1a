# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from abc import ABC

from topo_lib.core.context import ConfigContext


class PackageUploader(ABC):
    """
    Abstract base class for job package uploaders.

    An uploader transfers the job package to storage reachable from the cluster
    and is able to delete the uploaded package again if the launch fails.

    Implementations must allow `close` to be called at any point,
    including after a failed upload.
    """

    def initialize(self, config: ConfigContext) -> None:
        """
        Prepare the uploader.

        Args:
            config (ConfigContext): Configuration of the submission.
                Contains the path to the job package to upload.
        """
        raise NotImplementedError(
            "initialize method is not implemented for this uploader implementation"
        )

    def uploadPackage(self) -> str:
        """
        Upload the job package.

        Returns:
            str: Location of the uploaded package (e.g., a URI).

        Raises:
            UploadError: If the package could not be uploaded.
        """
        raise NotImplementedError(
            "uploadPackage method is not implemented for this uploader implementation"
        )

    def undo(self) -> bool:
        """
        Delete the package uploaded by the last successful `uploadPackage` call.

        This is a best-effort compensating action.

        Returns:
            bool: True if the package was deleted, False otherwise.
        """
        raise NotImplementedError(
            "undo method is not implemented for this uploader implementation"
        )

    def close(self) -> None:
        """Release all resources held by the uploader."""
        raise NotImplementedError(
            "close method is not implemented for this uploader implementation"
        )
