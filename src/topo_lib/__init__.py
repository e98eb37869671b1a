# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Core implementation of the topo command-line tool.

This package submits packaged stream-processing jobs to a cluster. It defines
the layered submission configuration, the interfaces of the pluggable state
store, package uploader and cluster launcher together with reference
implementations working on the local filesystem, the submission protocol with
its rollback rules, and the rendering of dry-run responses. All topo CLI
commands ultimately delegate to the functionality implemented here.
"""

from .topo import __version__, cli

__all__ = [
    "__version__",
    "cli",
    "core",
    "dryrun",
    "plugins",
    "properties",
    "submit",
]
