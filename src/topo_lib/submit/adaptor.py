# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import threading
from collections.abc import Callable, Mapping
from typing import Any

from topo_lib.core.error import StateStoreError, SubmissionError
from topo_lib.core.logger import get_logger
from topo_lib.plugins.interface import StateStore

logger = get_logger(__name__)


class StateStoreAdaptor:
    """
    Wrapper around a StateStore bounding the time spent waiting for its answers.

    A coordination service that stops responding must not block the submission
    forever. Each call runs on a daemon worker thread which is abandoned once
    the timeout expires, so a call that never returns does not keep the process alive.
    """

    def __init__(self, state_store: StateStore, plugin_name: str, timeout: float):
        """
        Initialize the adaptor.

        Args:
            state_store (StateStore): Initialized state store to wrap.
            plugin_name (str): Name of the state store plugin, used in error messages.
            timeout (float): Maximal time in seconds to wait for a single call.
        """
        self._state_store = state_store
        self._plugin_name = plugin_name
        self._timeout = timeout

    def isJobRunning(self, job_name: str) -> bool:
        """
        Check whether a job with the given name is registered in the cluster.

        A state store without any information about the job is treated
        as not having the job registered.

        Raises:
            StateStoreError: If the state store fails or does not answer in time.
        """
        running = self._call(self._state_store.isJobRunning, job_name)
        logger.debug(f"State store reports job '{job_name}' running: {running}.")
        return running is True

    def registerJob(self, job_name: str, record: Mapping[str, Any]) -> None:
        """
        Atomically register a job in the cluster.

        Errors of the submission taxonomy raised by the state store
        (e.g., `LaunchError` on a registration conflict) are propagated unchanged.

        Raises:
            StateStoreError: If the state store fails unexpectedly or does not answer in time.
        """
        self._call(self._state_store.registerJob, job_name, record)

    def _call(self, func: Callable[..., Any], *args: Any) -> Any:
        """
        Run a state store method on a worker thread and wait at most `timeout` seconds for it.
        """
        outcome: dict[str, Any] = {}

        def worker() -> None:
            try:
                outcome["result"] = func(*args)
            except Exception as e:
                outcome["error"] = e

        thread = threading.Thread(
            target=worker, name=f"state-store-{self._plugin_name}", daemon=True
        )
        thread.start()
        thread.join(self._timeout)

        if thread.is_alive():
            raise StateStoreError(
                f"State store '{self._plugin_name}' did not respond within {self._timeout} seconds.",
                plugin=self._plugin_name,
            )

        if (error := outcome.get("error")) is not None:
            if isinstance(error, SubmissionError):
                raise error
            raise StateStoreError(
                f"State store '{self._plugin_name}' failed: {error}",
                plugin=self._plugin_name,
            ) from error

        return outcome.get("result")
