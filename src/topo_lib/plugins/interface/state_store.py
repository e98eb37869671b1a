# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from abc import ABC
from collections.abc import Mapping
from typing import Any

from topo_lib.core.context import ConfigContext


class StateStore(ABC):
    """
    Abstract base class for distributed state stores.

    A state store connects to the coordination storage of the cluster and knows
    which jobs are currently registered there.

    Implementations must allow `close` to be called at any point,
    including after a failed `initialize`.
    """

    def initialize(self, config: ConfigContext) -> None:
        """
        Connect to the coordination storage.

        Args:
            config (ConfigContext): Configuration of the submission.
        """
        raise NotImplementedError(
            "initialize method is not implemented for this state store implementation"
        )

    def isJobRunning(self, job_name: str) -> bool | None:
        """
        Check whether a job with the given name is registered in the cluster.

        Args:
            job_name (str): Name of the job.

        Returns:
            bool | None: True if the job is registered, False if it is not,
                None if the state store has no information about the job.
        """
        raise NotImplementedError(
            "isJobRunning method is not implemented for this state store implementation"
        )

    def registerJob(self, job_name: str, record: Mapping[str, Any]) -> None:
        """
        Atomically register a job in the cluster.

        Used by launchers once the job has been placed.

        Args:
            job_name (str): Name of the job.
            record (Mapping[str, Any]): Information about the job to store.

        Raises:
            LaunchError: If a job with the same name is already registered.
        """
        raise NotImplementedError(
            "registerJob method is not implemented for this state store implementation"
        )

    def close(self) -> None:
        """Release all resources held by the state store."""
        raise NotImplementedError(
            "close method is not implemented for this state store implementation"
        )
