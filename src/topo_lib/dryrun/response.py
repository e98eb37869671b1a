# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from dataclasses import dataclass
from typing import Any

from topo_lib.core.context import ConfigContext, Key
from topo_lib.properties.job import JobDescriptor
from topo_lib.properties.packing import PackingPlan


@dataclass(frozen=True)
class DryRunResponse:
    """
    Description of what a submission would do, computed without contacting the cluster.
    """

    # The job that would be submitted
    job: JobDescriptor

    # Configuration of the submission
    config: ConfigContext

    # Runtime facts computable locally (the primary runtime layer)
    runtime: ConfigContext

    # Placement of the job's instances onto its containers
    plan: PackingPlan

    def getSummary(self) -> dict[str, Any]:
        """
        Get the most important facts about the submission as an ordered mapping.
        """
        return {
            "Job": self.job.name,
            "Job ID": self.job.id,
            "Cluster": self.config.get(Key.CLUSTER),
            "Role": self.config.get(Key.ROLE),
            "Environment": self.config.get(Key.ENVIRON),
            "Package": self.config.get(Key.JOB_PACKAGE_FILE),
            "Package type": _plain(self.runtime.get(Key.RUNTIME_PACKAGE_TYPE)),
            "Containers": self.plan.getNumContainers(),
            "Instances": self.plan.getNumInstances(),
            "State store": self.config.get(Key.STATE_STORE_CLASS),
            "Uploader": self.config.get(Key.UPLOADER_CLASS),
            "Launcher": self.config.get(Key.LAUNCHER_CLASS),
        }

    def toDict(self) -> dict[str, Any]:
        """
        Return a mapping representation containing only plain data types.
        """
        return {
            "summary": self.getSummary(),
            "job": self.job.toDict(),
            "config": {k: _plain(v) for k, v in sorted(self.config.items())},
            "runtime": {
                k: _plain(v)
                for k, v in sorted(self.runtime.items())
                if k != Key.RUNTIME_JOB_DEFINITION
            },
            "packing_plan": self.plan.toDict(),
        }


def _plain(value: Any) -> Any:
    """Convert a value to a type that can be safely serialized."""
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    if isinstance(value, dict):
        return {str(k): _plain(v) for k, v in value.items()}
    return str(value)
