# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Utilities for submitting topo jobs.

This module integrates the components that turn command-line options into a
submitted job.

`OrchestratorFactory` loads the job definition and assembles the layered
configuration from defaults, cluster configuration files, release and override
files, command-line options and the job itself.

`SubmissionOrchestrator` resolves the state store, uploader and launcher
plugins, short-circuits dry-runs, checks that the job is not already running,
uploads the package, launches the job, deletes the package again if the launch
fails, and closes every plugin it resolved. It reports the result as one of
the `Success`, `DryRun` or `Failure` outcomes.
"""

from .factory import OrchestratorFactory
from .orchestrator import SubmissionOrchestrator
from .outcome import DryRun, Failure, SubmissionOutcome, Success

__all__ = [
    "DryRun",
    "Failure",
    "OrchestratorFactory",
    "SubmissionOrchestrator",
    "SubmissionOutcome",
    "Success",
]
