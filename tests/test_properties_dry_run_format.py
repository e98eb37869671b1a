# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import pytest

from topo_lib.core.error import UnsupportedFormatError
from topo_lib.properties.dry_run_format import DryRunFormat
from topo_lib.properties.failure_kind import FailureKind


def test_str_method():
    assert str(DryRunFormat.RAW) == "raw"
    assert str(DryRunFormat.TABLE) == "table"
    assert str(DryRunFormat.COLORED_TABLE) == "colored_table"


@pytest.mark.parametrize(
    "value,expected",
    [
        ("raw", DryRunFormat.RAW),
        ("TABLE", DryRunFormat.TABLE),
        ("colored_table", DryRunFormat.COLORED_TABLE),
        ("colored-table", DryRunFormat.COLORED_TABLE),
        (" Raw ", DryRunFormat.RAW),
    ],
)
def test_from_str_valid(value, expected):
    assert DryRunFormat.fromStr(value) == expected


def test_from_str_invalid():
    with pytest.raises(UnsupportedFormatError, match="Unsupported dry-run format 'xml'") as e:
        DryRunFormat.fromStr("xml")

    assert e.value.kind == FailureKind.UNSUPPORTED_FORMAT


def test_failure_kind_str():
    assert str(FailureKind.ALREADY_RUNNING) == "already running"
    assert str(FailureKind.UPLOAD) == "upload"
