# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Capability plugins for topo.

This module groups the interfaces of the state store, package uploader and
cluster launcher capabilities, the registry resolving them by name, and the
built-in reference plugins working on the local filesystem.
"""

# import so that these plugins are registered but do not export them from here
from .localfs import LocalFileSystemStateStore as _LocalFileSystemStateStore
from .localfs import LocalFileSystemUploader as _LocalFileSystemUploader
from .localfs import LocalLauncher as _LocalLauncher

_LocalFileSystemStateStore, _LocalFileSystemUploader, _LocalLauncher
