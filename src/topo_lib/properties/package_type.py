# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Enumeration of supported job binary package types.

This module defines `PackageType`, which is derived from the name of the
job binary file and recorded in the configuration so that launchers know how
to start the job.
"""

from enum import Enum
from pathlib import Path
from typing import Self

from topo_lib.core.error import TopoError


class PackageType(Enum):
    """
    Type of the job binary package.
    """

    JAR = 1
    TAR = 2
    PEX = 3

    def __str__(self):
        return self.name.lower()

    @classmethod
    def fromStr(cls, s: str) -> Self:
        """
        Convert a string to the corresponding PackageType enum variant.

        Args:
            s (str): String representation of the package type (case-insensitive).

        Returns:
            PackageType variant.

        Raises:
            TopoError if the string corresponds to no PackageType.
        """
        try:
            return cls[s.upper()]
        except KeyError:
            raise TopoError(f"Could not recognize a package type '{s}'.")

    @classmethod
    def fromFile(cls, binary: Path | str) -> Self:
        """
        Determine the package type from the name of the job binary file.

        Raises:
            TopoError if the file has an unsupported extension.
        """
        name = Path(binary).name.lower()
        if name.endswith(".jar"):
            return cls.JAR
        if name.endswith(".pex"):
            return cls.PEX
        if name.endswith((".tar", ".tar.gz", ".tgz")):
            return cls.TAR

        raise TopoError(
            f"Unknown package type of job binary '{binary}'. Supported types: {', '.join(str(t) for t in cls)}."
        )
