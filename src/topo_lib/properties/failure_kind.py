# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Enumeration of the classes of submission failures.

`FailureKind` lets callers branch on the reason a submission attempt failed
without parsing error messages.
"""

from enum import Enum


class FailureKind(Enum):
    """
    Class of a failed submission attempt.
    """

    PLUGIN_RESOLUTION = 1
    ALREADY_RUNNING = 2
    STATE_STORE = 3
    UPLOAD = 4
    LAUNCH = 5
    UNSUPPORTED_FORMAT = 6
    UNEXPECTED = 7

    def __str__(self):
        return self.name.lower().replace("_", " ")
