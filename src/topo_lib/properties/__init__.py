# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Properties and structured metadata for topo jobs.

This module collects the data representations describing what a submitted job
*is* - its decoded definition, the type of its binary package, the requested
dry-run output format and the classes of submission failures.
"""
