# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Construction of the runtime layers of a submission.

Each function returns a plain mapping which the orchestrator overlays onto the
runtime context. Layers only add facts; they never remove earlier ones.
"""

from typing import Any

from topo_lib.core.context import ConfigContext, Key
from topo_lib.plugins.interface import ClusterLauncher
from topo_lib.properties.job import JobDescriptor
from topo_lib.properties.package_type import PackageType

from .adaptor import StateStoreAdaptor


def create_primary_runtime(
    job: JobDescriptor, config: ConfigContext
) -> dict[str, Any]:
    """
    Create the runtime facts derived from the job alone.

    The number of containers is one container for the job master plus one
    container per stream manager requested by the job.

    Raises:
        TopoError: If the job requests an invalid number of stream managers
            or the configured package type is invalid.
    """
    package_type = config.get(Key.JOB_PACKAGE_TYPE)
    if package_type is not None and not isinstance(package_type, PackageType):
        package_type = PackageType.fromStr(str(package_type))

    return {
        Key.RUNTIME_JOB_ID: job.id,
        Key.RUNTIME_JOB_NAME: job.name,
        Key.RUNTIME_JOB_DEFINITION: job,
        Key.RUNTIME_NUM_CONTAINERS: 1 + job.getNumStmgrs(),
        Key.RUNTIME_PACKAGE_TYPE: package_type,
    }


def create_adaptor_runtime(adaptor: StateStoreAdaptor) -> dict[str, Any]:
    """Create the runtime facts provided by the state store."""
    return {Key.RUNTIME_STATE_ADAPTOR: adaptor}


def create_launch_runtime(
    package_uri: str, launcher: ClusterLauncher
) -> dict[str, Any]:
    """Create the runtime facts required by the launcher."""
    return {
        Key.RUNTIME_PACKAGE_URI: package_uri,
        Key.RUNTIME_LAUNCHER_INSTANCE: launcher,
    }
