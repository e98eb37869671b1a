# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Abstractions for the pluggable capabilities used when submitting a job.

This module defines the interfaces that allow topo to work with different
clusters through a unified API. It provides:

- `StateStore`: connects to the cluster's coordination storage and reports
  whether a job is already registered.

- `PackageUploader`: uploads the job package and can delete it again
  when a launch fails.

- `ClusterLauncher`: places the job onto the cluster and starts it.

- `PluginRegistry` and `Capability`: a registry mapping plugin names found in
  the configuration to factories producing instances of the interfaces above.
  The `@plugin` decorator registers implementations in the global `REGISTRY`.
"""

from .launcher import ClusterLauncher
from .registry import REGISTRY, Capability, Plugin, PluginRegistry, plugin
from .state_store import StateStore
from .uploader import PackageUploader

__all__ = [
    "Capability",
    "ClusterLauncher",
    "PackageUploader",
    "Plugin",
    "PluginRegistry",
    "REGISTRY",
    "StateStore",
    "plugin",
]
