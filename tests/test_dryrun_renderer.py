# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import pytest

from topo_lib.core.context import ConfigContext, Key
from topo_lib.core.error import UnsupportedFormatError
from topo_lib.dryrun import (
    ColoredTableDryRunRenderer,
    DryRunResponse,
    RawDryRunRenderer,
    TableDryRunRenderer,
    get_renderer,
)
from topo_lib.properties.dry_run_format import DryRunFormat
from topo_lib.properties.job import JobDescriptor
from topo_lib.properties.packing import ContainerPlan, PackingPlan, pack_job
from topo_lib.submit.runtime import create_primary_runtime


@pytest.fixture
def response():
    job = JobDescriptor.fromDict(
        {
            "id": "wordcount-1",
            "name": "wordcount",
            "components": [
                {"name": "sentences", "kind": "spout", "parallelism": 2},
                {"name": "counter", "kind": "bolt", "parallelism": 3, "inputs": ["sentences"]},
            ],
        }
    )
    config = ConfigContext(
        {
            Key.CLUSTER: "local",
            Key.ROLE: "alice",
            Key.ENVIRON: "test",
            Key.LAUNCHER_CLASS: "local",
            "custom.key": "ünïcode",
        }
    )
    runtime = ConfigContext.merge(create_primary_runtime(job, config))
    plan = pack_job(job, runtime[Key.RUNTIME_NUM_CONTAINERS])
    return DryRunResponse(job, config, runtime, plan)


@pytest.mark.parametrize(
    "format,renderer_type",
    [
        ("raw", RawDryRunRenderer),
        ("table", TableDryRunRenderer),
        ("colored-table", ColoredTableDryRunRenderer),
        (DryRunFormat.COLORED_TABLE, ColoredTableDryRunRenderer),
    ],
)
def test_get_renderer(format, renderer_type):
    assert type(get_renderer(format)) is renderer_type


def test_get_renderer_unsupported():
    with pytest.raises(UnsupportedFormatError):
        get_renderer("json-lines")


def test_raw_renderer(response):
    text = RawDryRunRenderer().render(response)

    assert text.startswith(
        "Job 'wordcount' would be submitted with the following parameters.\n"
    )
    assert "Cluster:" in text
    assert "Package type:" in text
    assert "counter" in text
    assert "sentences" in text
    assert "Configuration:\n" in text
    assert "topo.cluster: local" in text
    assert "custom.key: ünïcode" in text
    assert text.endswith("\n")
    assert "\x1b[" not in text


def test_table_renderer_has_no_ansi_codes(response):
    text = TableDryRunRenderer().render(response)

    assert "DRY-RUN: wordcount" in text
    assert "Containers:" in text
    assert "counter" in text
    assert "\x1b[" not in text


def test_colored_table_renderer_uses_ansi_codes(response):
    text = ColoredTableDryRunRenderer().render(response)

    assert "wordcount" in text
    assert "\x1b[" in text


def test_table_renderer_without_components():
    job = JobDescriptor(id="a", name="empty")
    config = ConfigContext()
    response = DryRunResponse(
        job,
        config,
        ConfigContext.merge(create_primary_runtime(job, config)),
        PackingPlan("empty", (ContainerPlan(0),)),
    )

    assert "no components" in TableDryRunRenderer().render(response)


def test_raw_renderer_lists_packing_plan(response):
    text = RawDryRunRenderer().render(response)

    assert "Container" in text
    assert "job master" in text
    assert "sentences:0, counter:0, counter:2" in text
    assert "sentences:1, counter:1" in text


def test_table_renderer_lists_packing_plan(response):
    text = TableDryRunRenderer().render(response)

    assert "Placement" in text
    assert "job master" in text
    assert "counter:2" in text
