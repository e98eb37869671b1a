# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Core infrastructure for topo.

This module collects the foundational classes and helpers used across the
topo codebase: tool configuration, the layered submission configuration,
error types, structured logging and CLI help formatting.
"""
