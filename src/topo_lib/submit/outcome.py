# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Terminal outcomes of a submission attempt.

A submission produces exactly one of `Success`, `DryRun` or `Failure`.
Outcomes are returned, not raised, so that callers handle them by ordinary
branching. Each outcome knows the process exit code it maps to.
"""

from dataclasses import dataclass

from topo_lib.core.config import CFG
from topo_lib.core.error import SubmissionError, TopoError
from topo_lib.dryrun.response import DryRunResponse
from topo_lib.properties.failure_kind import FailureKind


@dataclass(frozen=True)
class Success:
    """The job was uploaded and launched."""

    @property
    def exit_code(self) -> int:
        return CFG.exit_codes.success


@dataclass(frozen=True)
class DryRun:
    """A dry-run response is ready to be rendered."""

    response: DryRunResponse

    @property
    def exit_code(self) -> int:
        return CFG.exit_codes.dry_run


@dataclass(frozen=True)
class Failure:
    """The submission attempt failed."""

    kind: FailureKind
    message: str
    cause: BaseException | None = None

    @property
    def exit_code(self) -> int:
        return CFG.exit_codes.submission_failure

    @classmethod
    def fromException(cls, exception: BaseException) -> "Failure":
        """
        Build a Failure from an exception raised during the attempt.

        Exceptions outside the submission taxonomy are classified as unexpected.
        """
        if isinstance(exception, SubmissionError):
            kind = exception.kind
        else:
            kind = FailureKind.UNEXPECTED

        if isinstance(exception, TopoError):
            message = str(exception)
        else:
            message = f"Unexpected error: {exception}"

        return cls(kind=kind, message=message, cause=exception)


SubmissionOutcome = Success | DryRun | Failure
