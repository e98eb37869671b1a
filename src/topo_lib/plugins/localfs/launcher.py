# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import getpass
import socket
from datetime import datetime

from topo_lib.core.config import CFG
from topo_lib.core.context import ConfigContext, Key
from topo_lib.core.error import LaunchError
from topo_lib.core.logger import get_logger
from topo_lib.plugins.interface import Capability, ClusterLauncher, plugin
from topo_lib.properties.job import JobDescriptor
from topo_lib.properties.packing import pack_job

logger = get_logger(__name__)


@plugin(Capability.LAUNCHER, "local")
class LocalLauncher(ClusterLauncher):
    """
    Launcher registering the job in the state store without starting any processes.

    The job is placed using `pack_job`, which fails with `PackingError` if the
    instances cannot be spread over the requested containers.
    """

    def __init__(self):
        self._config: ConfigContext | None = None

    def initialize(self, config: ConfigContext) -> None:
        self._config = config

    def launch(self, runtime: ConfigContext) -> bool:
        if self._config is None:
            raise LaunchError("Local launcher has not been initialized.")

        job: JobDescriptor = runtime.require(Key.RUNTIME_JOB_DEFINITION)
        plan = pack_job(job, runtime.getInt(Key.RUNTIME_NUM_CONTAINERS, 1))

        adaptor = runtime.require(Key.RUNTIME_STATE_ADAPTOR)
        adaptor.registerJob(
            job.name,
            {
                "job_id": job.id,
                "job_name": job.name,
                "cluster": self._config.get(Key.CLUSTER),
                "role": self._config.get(Key.ROLE),
                "environ": self._config.get(Key.ENVIRON),
                "package_uri": runtime.require(Key.RUNTIME_PACKAGE_URI),
                "package_type": str(runtime.get(Key.RUNTIME_PACKAGE_TYPE)),
                "containers": plan.getNumContainers(),
                "instances": plan.getNumInstances(),
                "packing_plan": plan.toDict()["containers"],
                "submitted_by": getpass.getuser(),
                "submitted_from": socket.gethostname(),
                "submission_time": datetime.now().strftime(CFG.date_formats.standard),
            },
        )

        logger.debug(f"Job '{job.name}' registered by the local launcher.")
        return True

    def close(self) -> None:
        self._config = None

