# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Enumeration of supported dry-run output formats.
"""

from enum import Enum
from typing import Self

from topo_lib.core.error import UnsupportedFormatError


class DryRunFormat(Enum):
    """
    Format in which a dry-run response is rendered.
    """

    RAW = 1
    TABLE = 2
    COLORED_TABLE = 3

    def __str__(self):
        return self.name.lower()

    @classmethod
    def fromStr(cls, s: str) -> Self:
        """
        Convert a string to the corresponding DryRunFormat enum variant.

        Both `colored_table` and `colored-table` are accepted.

        Raises:
            UnsupportedFormatError if the string corresponds to no DryRunFormat.
        """
        try:
            return cls[s.strip().upper().replace("-", "_")]
        except KeyError:
            raise UnsupportedFormatError(
                f"Unsupported dry-run format '{s}'. Supported formats: {', '.join(str(f) for f in cls)}."
            )
