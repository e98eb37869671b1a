# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Placement of component instances onto the containers of a job.

The first container hosts the job master only. Every other container runs one
stream manager and receives component instances in round-robin order, so the
number of instances per container differs by at most one.

The same plan is computed by the `local` launcher when launching and by the
orchestrator for dry-run responses, so a dry-run fails exactly when the launch
would fail to place the job.
"""

from dataclasses import dataclass
from typing import Any

from topo_lib.core.error import PackingError

from .job import JobDescriptor


@dataclass(frozen=True)
class ContainerPlan:
    """
    Instances assigned to a single container.
    """

    # Index of the container; container 0 hosts the job master
    id: int

    # Instances placed into the container, labeled as `<component>:<index>`
    instances: tuple[str, ...] = ()


@dataclass(frozen=True)
class PackingPlan:
    """
    Assignment of all component instances of a job to containers.
    """

    # Name of the packed job
    job_name: str

    # Containers of the job ordered by their index
    containers: tuple[ContainerPlan, ...]

    def getNumContainers(self) -> int:
        """Get the total number of containers including the job master's."""
        return len(self.containers)

    def getNumInstances(self) -> int:
        """Get the number of placed instances."""
        return sum(len(c.instances) for c in self.containers)

    def toDict(self) -> dict[str, Any]:
        """Return the mapping representation of the plan."""
        return {
            "job_name": self.job_name,
            "containers": [
                {"id": c.id, "instances": list(c.instances)} for c in self.containers
            ],
        }


def pack_job(job: JobDescriptor, containers: int) -> PackingPlan:
    """
    Place the instances of the job onto the given number of containers.

    Args:
        job (JobDescriptor): The job to place.
        containers (int): Total number of containers, including the job master's.

    Returns:
        PackingPlan: The placement of every instance of the job.

    Raises:
        PackingError: If the job has no instances, there is no container
            for a stream manager, or there are more stream managers than instances.
    """
    instances = [
        f"{component.name}:{i}"
        for component in job.components
        for i in range(component.parallelism)
    ]
    if not instances:
        raise PackingError(f"Job '{job.name}' has no component instances to place.")

    stmgrs = containers - 1
    if stmgrs < 1:
        raise PackingError(
            f"Job '{job.name}' needs at least one container besides the job master, got {containers}."
        )

    if stmgrs > len(instances):
        raise PackingError(
            f"Cannot place {len(instances)} instance(s) of job '{job.name}' onto {stmgrs} container(s)."
        )

    assigned: list[list[str]] = [[] for _ in range(stmgrs)]
    for i, instance in enumerate(instances):
        assigned[i % stmgrs].append(instance)

    return PackingPlan(
        job_name=job.name,
        containers=(ContainerPlan(0),)
        + tuple(
            ContainerPlan(i + 1, tuple(container))
            for i, container in enumerate(assigned)
        ),
    )
