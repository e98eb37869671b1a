# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from collections.abc import Iterator
from contextlib import ExitStack, contextmanager

from topo_lib.core.config import CFG
from topo_lib.core.context import ConfigContext, Key
from topo_lib.core.error import (
    AlreadyRunningError,
    LaunchError,
    PackingError,
    PluginError,
    StateStoreError,
    SubmissionError,
    UploadError,
)
from topo_lib.core.logger import get_logger
from topo_lib.dryrun.response import DryRunResponse
from topo_lib.plugins.interface import (
    REGISTRY,
    Capability,
    ClusterLauncher,
    PackageUploader,
    Plugin,
    PluginRegistry,
    StateStore,
)
from topo_lib.properties.job import JobDescriptor
from topo_lib.properties.packing import pack_job

from .adaptor import StateStoreAdaptor
from .outcome import DryRun, Failure, SubmissionOutcome, Success
from .runtime import (
    create_adaptor_runtime,
    create_launch_runtime,
    create_primary_runtime,
)

logger = get_logger(__name__)


class SubmissionOrchestrator:
    """
    Class coordinating the submission of a job to a cluster.

    Responsibilities:
        - Resolve the state store, uploader and launcher plugins.
        - Short-circuit dry-run submissions before any side effect happens,
          reporting the placement the job would get.
        - Check that the job is not already running.
        - Upload the job package and launch the job.
        - Delete the uploaded package if the launcher fails to place or start the job.
        - Close every resolved plugin exactly once, whatever the outcome.

    Note that the check for an already running job is only a fast-fail guard.
    Two concurrent submissions of the same job are separated by the atomic
    registration performed by the launcher, not by this check.
    """

    def __init__(
        self,
        config: ConfigContext,
        job: JobDescriptor,
        registry: PluginRegistry = REGISTRY,
    ):
        """
        Initialize the orchestrator.

        Args:
            config (ConfigContext): Fully assembled configuration of the submission.
            job (JobDescriptor): The job to submit.
            registry (PluginRegistry): Registry used to resolve the capability plugins.
        """
        self._config = config
        self._job = job
        self._registry = registry
        self._plugin_names = {
            capability: config.get(capability.key) for capability in Capability
        }

    def submit(self) -> SubmissionOutcome:
        """
        Run the submission protocol.

        Never raises; every failure is reported as a `Failure` outcome.

        Returns:
            SubmissionOutcome: `Success` if the job was launched, `DryRun` if a dry-run
                was requested, `Failure` otherwise.
        """
        try:
            with ExitStack() as stack:
                # acquired in reverse so that the stack closes the state store first
                launcher = self._acquire(stack, Capability.LAUNCHER)
                uploader = self._acquire(stack, Capability.UPLOADER)
                state_store = self._acquire(stack, Capability.STATE_STORE)

                return self._run(state_store, uploader, launcher)
        except Exception as e:
            failure = Failure.fromException(e)
            logger.debug(
                f"Submission of job '{self._job.name}' failed ({failure.kind}).",
                exc_info=True,
            )
            return failure

    def getConfig(self) -> ConfigContext:
        """Get the configuration of the submission."""
        return self._config

    def getJob(self) -> JobDescriptor:
        """Get the submitted job."""
        return self._job

    def _run(
        self,
        state_store: StateStore,
        uploader: PackageUploader,
        launcher: ClusterLauncher,
    ) -> SubmissionOutcome:
        """
        Validate, upload and launch the job, or produce a dry-run response.
        """
        primary = ConfigContext.merge(create_primary_runtime(self._job, self._config))

        if self._config.getBool(Key.DRY_RUN):
            logger.debug(f"Dry-run of job '{self._job.name}', skipping submission.")
            plan = pack_job(self._job, primary.getInt(Key.RUNTIME_NUM_CONTAINERS))
            return DryRun(DryRunResponse(self._job, self._config, primary, plan))

        adaptor = self._validate(state_store)
        logger.debug(f"Job '{self._job.name}' to be submitted.")

        package_uri = self._upload(uploader)
        logger.debug(f"Job package uploaded to '{package_uri}'.")

        runtime = primary.overlay(
            create_adaptor_runtime(adaptor),
            create_launch_runtime(package_uri, launcher),
        )
        self._launch(launcher, uploader, runtime)

        logger.debug(f"Job '{self._job.name}' submitted successfully.")
        return Success()

    def _validate(self, state_store: StateStore) -> StateStoreAdaptor:
        """
        Connect to the state store and check that the job is not running yet.

        Raises:
            AlreadyRunningError: If the job is already registered.
            StateStoreError: If the state store cannot be queried.
        """
        name = self._plugin_names[Capability.STATE_STORE]
        with self._boundary(Capability.STATE_STORE, StateStoreError):
            state_store.initialize(self._config)

        adaptor = StateStoreAdaptor(state_store, name, CFG.timeouts.state_store)
        if adaptor.isJobRunning(self._job.name):
            raise AlreadyRunningError(
                f"Job '{self._job.name}' already exists.", plugin=name
            )

        return adaptor

    def _upload(self, uploader: PackageUploader) -> str:
        """
        Upload the job package.

        Nothing has been registered or launched at this point,
        so a failure requires no rollback.

        Raises:
            UploadError: If the package could not be uploaded.
        """
        with self._boundary(Capability.UPLOADER, UploadError):
            uploader.initialize(self._config)
            package_uri = uploader.uploadPackage()

        if not package_uri:
            raise UploadError(
                f"Uploader '{self._plugin_names[Capability.UPLOADER]}' returned no package location.",
                plugin=self._plugin_names[Capability.UPLOADER],
            )

        return str(package_uri)

    def _launch(
        self,
        launcher: ClusterLauncher,
        uploader: PackageUploader,
        runtime: ConfigContext,
    ) -> None:
        """
        Launch the job, deleting the uploaded package if the launcher cannot place or start it.

        Other failures are propagated without deleting the package, since a partially
        successful launch may still need it.

        Raises:
            LaunchError, PackingError: If the launcher failed (after the rollback).
            SubmissionError: On any other failure.
        """
        name = self._plugin_names[Capability.LAUNCHER]
        try:
            with self._boundary(Capability.LAUNCHER, PluginError):
                launcher.initialize(self._config)
                launched = launcher.launch(runtime)

            if not launched:
                raise LaunchError(f"Failed to launch job '{self._job.name}'.", plugin=name)
        except (LaunchError, PackingError) as e:
            self._rollback(uploader, e)
            raise

    def _rollback(self, uploader: PackageUploader, error: SubmissionError) -> None:
        """
        Delete the uploaded package after a failed launch.

        A failing deletion is logged and noted on the original error,
        which remains the reported failure.
        """
        logger.debug("Launch failed, deleting the uploaded job package.")
        try:
            undone = uploader.undo()
        except Exception as e:
            logger.error(f"Could not delete the uploaded job package: {e}")
            error.add_note(f"Deleting the uploaded job package failed: {e}")
            return

        if not undone:
            logger.warning("Uploaded job package could not be deleted.")

    def _acquire(self, stack: ExitStack, capability: Capability) -> Plugin:
        """
        Resolve a plugin and schedule its release on the exit stack.

        Raises:
            PluginResolutionError: If the plugin cannot be resolved.
        """
        name = self._plugin_names[capability]
        plugin = self._registry.resolve(capability, name)
        stack.callback(self._release, plugin, capability)
        return plugin

    def _release(self, plugin: Plugin, capability: Capability) -> None:
        """
        Close a plugin, logging and discarding any error so that it cannot mask the outcome.
        """
        name = self._plugin_names[capability]
        try:
            plugin.close()
            logger.debug(f"Closed {capability} '{name}'.")
        except Exception as e:
            logger.warning(f"Could not close {capability} '{name}': {e}")

    @contextmanager
    def _boundary(
        self, capability: Capability, error_type: type[SubmissionError]
    ) -> Iterator[None]:
        """
        Attach the identity of the plugin to errors raised by it.

        Errors of the submission taxonomy keep their type and get the plugin
        named in their message. Other exceptions are wrapped into `error_type`.
        """
        name = self._plugin_names[capability]
        try:
            yield
        except SubmissionError as e:
            if e.plugin is None:
                e.plugin = name
                e.args = (f"The {capability} '{name}' failed: {e}",)
            raise
        except Exception as e:
            raise error_type(f"The {capability} '{name}' failed: {e}", plugin=name) from e
