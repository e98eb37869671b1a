# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Dry-run responses and their rendering.

`DryRunResponse` describes what a submission would do using only information
available locally. Renderers convert it to text in one of the formats of
`DryRunFormat`; `get_renderer` selects the renderer for a format name.
"""

from .renderer import (
    ColoredTableDryRunRenderer,
    DryRunRenderer,
    RawDryRunRenderer,
    TableDryRunRenderer,
    get_renderer,
)
from .response import DryRunResponse

__all__ = [
    "ColoredTableDryRunRenderer",
    "DryRunRenderer",
    "DryRunResponse",
    "RawDryRunRenderer",
    "TableDryRunRenderer",
    "get_renderer",
]
