# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Exception types used throughout topo.

`TopoError` signals a recoverable failure that happens before a submission
attempt starts (invalid configuration, unreadable job definition, ...).
`SubmissionError` and its subclasses are raised during a submission attempt
and carry the `FailureKind` used to build the `Failure` outcome. Each exception
carries an associated exit code used by topo commands to report failures
consistently.
"""

from topo_lib.core.config import CFG
from topo_lib.properties.failure_kind import FailureKind


class TopoError(Exception):
    """Common exception type for all recoverable topo errors."""

    exit_code = CFG.exit_codes.bootstrap


class SubmissionError(TopoError):
    """
    Raised when a submission attempt fails.

    Attributes:
        plugin (str | None): Name of the capability plugin that caused the failure, if any.
    """

    exit_code = CFG.exit_codes.submission_failure
    kind = FailureKind.UNEXPECTED

    def __init__(self, message: str, plugin: str | None = None):
        super().__init__(message)
        self.plugin = plugin


class PluginResolutionError(SubmissionError):
    """Raised when a capability plugin cannot be found or constructed."""

    kind = FailureKind.PLUGIN_RESOLUTION


class AlreadyRunningError(SubmissionError):
    """Raised when a job of the same name is already registered in the state store."""

    kind = FailureKind.ALREADY_RUNNING


class StateStoreError(SubmissionError):
    """Raised when the state store cannot be queried in time."""

    kind = FailureKind.STATE_STORE


class UploadError(SubmissionError):
    """Raised when the job package could not be uploaded."""

    kind = FailureKind.UPLOAD


class LaunchError(SubmissionError):
    """Raised when the launcher could not start the job."""

    kind = FailureKind.LAUNCH


class PackingError(SubmissionError):
    """Raised when the job could not be placed onto containers of the cluster."""

    kind = FailureKind.LAUNCH


class PluginError(SubmissionError):
    """Raised when a capability plugin fails in an unexpected way."""

    pass


class UnsupportedFormatError(SubmissionError):
    """Raised when a dry-run response is requested in an unknown format."""

    kind = FailureKind.UNSUPPORTED_FORMAT
