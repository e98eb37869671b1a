# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Reference capability plugins working on the local filesystem.

`LocalFileSystemStateStore` keeps job registrations as files in a directory,
`LocalFileSystemUploader` copies the job package into a local directory and
`LocalLauncher` performs a trivial placement check and registers the job.
They make `topo submit` usable on a single machine and serve as examples
for writing cluster-specific plugins.
"""

from .launcher import LocalLauncher
from .state_store import LocalFileSystemStateStore
from .uploader import LocalFileSystemUploader

__all__ = ["LocalFileSystemStateStore", "LocalFileSystemUploader", "LocalLauncher"]
