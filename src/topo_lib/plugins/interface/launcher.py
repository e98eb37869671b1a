# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from abc import ABC

from topo_lib.core.context import ConfigContext


class ClusterLauncher(ABC):
    """
    Abstract base class for cluster launchers.

    A launcher places the job onto the cluster and starts it. It registers the job
    in the state store as part of a successful launch.

    Implementations must allow `close` to be called at any point,
    including after a failed launch.
    """

    def initialize(self, config: ConfigContext) -> None:
        """
        Prepare the launcher.

        Args:
            config (ConfigContext): Configuration of the submission.
        """
        raise NotImplementedError(
            "initialize method is not implemented for this launcher implementation"
        )

    def launch(self, runtime: ConfigContext) -> bool:
        """
        Place and start the job.

        Args:
            runtime (ConfigContext): Runtime context of the submission containing,
                among others, the location of the uploaded package and the state store adaptor.

        Returns:
            bool: True if the job was launched, False otherwise.

        Raises:
            PackingError: If the job cannot be placed onto the cluster.
            LaunchError: If the job cannot be started.
        """
        raise NotImplementedError(
            "launch method is not implemented for this launcher implementation"
        )

    def close(self) -> None:
        """Release all resources held by the launcher."""
        raise NotImplementedError(
            "close method is not implemented for this launcher implementation"
        )
