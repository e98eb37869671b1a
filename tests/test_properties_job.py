# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import pytest

from topo_lib.core.error import TopoError
from topo_lib.properties.job import Component, JobDescriptor


@pytest.fixture
def job_dict():
    return {
        "id": "wordcount-7f3a",
        "name": "wordcount",
        "config": {"topology.stmgrs": 2},
        "components": [
            {"name": "sentences", "kind": "spout", "parallelism": 2},
            {
                "name": "counter",
                "kind": "bolt",
                "parallelism": 4,
                "inputs": ["sentences"],
                "config": {"window": 10},
            },
        ],
    }


def test_component_from_dict_defaults():
    component = Component.fromDict({"name": "src"})

    assert component.name == "src"
    assert component.kind == "component"
    assert component.parallelism == 1
    assert component.inputs == ()
    assert dict(component.config) == {}


@pytest.mark.parametrize("data", [{}, {"name": ""}, "not-a-mapping"])
def test_component_from_dict_missing_name(data):
    with pytest.raises(TopoError, match="missing name"):
        Component.fromDict(data)


def test_component_from_dict_invalid_parallelism():
    with pytest.raises(TopoError, match="Invalid parallelism"):
        Component.fromDict({"name": "src", "parallelism": "many"})


def test_component_from_dict_negative_parallelism():
    with pytest.raises(TopoError, match="must not be negative"):
        Component.fromDict({"name": "src", "parallelism": -1})


def test_job_from_dict(job_dict):
    job = JobDescriptor.fromDict(job_dict)

    assert job.id == "wordcount-7f3a"
    assert job.name == "wordcount"
    assert [c.name for c in job.components] == ["sentences", "counter"]
    assert job.components[1].inputs == ("sentences",)
    assert job.components[1].config["window"] == 10
    assert job.config["topology.stmgrs"] == 2


@pytest.mark.parametrize("missing", ["id", "name"])
def test_job_from_dict_missing_required_field(job_dict, missing):
    del job_dict[missing]

    with pytest.raises(TopoError, match=f"missing the '{missing}' field"):
        JobDescriptor.fromDict(job_dict)


def test_job_from_dict_components_not_a_list(job_dict):
    job_dict["components"] = {"name": "src"}

    with pytest.raises(TopoError, match="must form a list"):
        JobDescriptor.fromDict(job_dict)


def test_job_from_dict_config_not_a_mapping(job_dict):
    job_dict["config"] = ["a"]

    with pytest.raises(TopoError, match="must be a mapping"):
        JobDescriptor.fromDict(job_dict)


def test_job_is_immutable(job_dict):
    job = JobDescriptor.fromDict(job_dict)

    with pytest.raises(AttributeError):
        job.name = "other"  # ty: ignore[invalid-assignment]

    with pytest.raises(TypeError):
        job.config["topology.stmgrs"] = 5  # ty: ignore[invalid-assignment]


def test_job_from_file(tmp_path, job_dict):
    file = tmp_path / "job.yaml"
    file.write_text(
        """
id: wordcount-7f3a
name: wordcount
components:
  - name: sentences
    parallelism: 3
"""
    )

    job = JobDescriptor.fromFile(file)

    assert job.name == "wordcount"
    assert job.getNumInstances() == 3


def test_job_from_file_missing(tmp_path):
    with pytest.raises(TopoError, match="does not exist"):
        JobDescriptor.fromFile(tmp_path / "missing.yaml")


def test_get_num_instances(job_dict):
    assert JobDescriptor.fromDict(job_dict).getNumInstances() == 6


def test_get_num_stmgrs(job_dict):
    assert JobDescriptor.fromDict(job_dict).getNumStmgrs() == 2


def test_get_num_stmgrs_default():
    assert JobDescriptor(id="a", name="b").getNumStmgrs() == 1


@pytest.mark.parametrize("value", [0, -3, "many"])
def test_get_num_stmgrs_invalid(value):
    job = JobDescriptor.fromDict({"id": "a", "name": "b", "config": {"topology.stmgrs": value}})

    with pytest.raises(TopoError):
        job.getNumStmgrs()


def test_to_dict(job_dict):
    job = JobDescriptor.fromDict(job_dict)

    assert job.toDict() == {
        "id": "wordcount-7f3a",
        "name": "wordcount",
        "config": {"topology.stmgrs": 2},
        "components": [
            {
                "name": "sentences",
                "kind": "spout",
                "parallelism": 2,
                "inputs": [],
                "config": {},
            },
            {
                "name": "counter",
                "kind": "bolt",
                "parallelism": 4,
                "inputs": ["sentences"],
                "config": {"window": 10},
            },
        ],
    }


@pytest.mark.parametrize(
    "name", ["../../escaped", "team/wordcount", "back\\slash", ".", "..", "nul\0byte"]
)
def test_job_from_dict_rejects_names_unusable_as_file_names(job_dict, name):
    job_dict["name"] = name

    with pytest.raises(TopoError, match="Invalid job name"):
        JobDescriptor.fromDict(job_dict)


@pytest.mark.parametrize("name", ["word-count", "word.count", "wc_v2..final"])
def test_job_from_dict_accepts_plain_names(job_dict, name):
    job_dict["name"] = name

    assert JobDescriptor.fromDict(job_dict).name == name
