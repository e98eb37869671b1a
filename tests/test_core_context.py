# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from pathlib import Path

import pytest

from topo_lib.core.context import ConfigContext, Key
from topo_lib.core.error import TopoError


def test_merge_later_layers_override_earlier_ones():
    defaults = {"a": 1, "b": 1, "c": 1}
    files = {"b": 2, "c": 2}
    command_line = {"c": 3}

    ctx = ConfigContext.merge(defaults, files, command_line)

    assert ctx["a"] == 1
    assert ctx["b"] == 2
    assert ctx["c"] == 3


@pytest.mark.parametrize("nlayers", [1, 2, 5])
def test_merge_returns_value_of_highest_layer_defining_key(nlayers):
    layers = [{"shared": i, f"only{i}": i} for i in range(nlayers)]

    ctx = ConfigContext.merge(*layers)

    assert ctx["shared"] == nlayers - 1
    for i in range(nlayers):
        assert ctx[f"only{i}"] == i


def test_merge_skips_none_layers():
    ctx = ConfigContext.merge({"a": 1}, None, {"b": 2})

    assert ctx.toDict() == {"a": 1, "b": 2}


def test_key_and_plain_string_address_the_same_entry():
    ctx = ConfigContext.merge({Key.CLUSTER: "local"}, {"topo.role": "alice"})

    assert ctx["topo.cluster"] == "local"
    assert ctx[Key.ROLE] == "alice"
    assert Key.CLUSTER in ctx
    assert ctx.get(Key.ENVIRON) is None


def test_overlay_does_not_modify_original():
    base = ConfigContext({"a": 1})

    overlaid = base.overlay({"a": 2, "b": 3})

    assert base.toDict() == {"a": 1}
    assert overlaid.toDict() == {"a": 2, "b": 3}
    assert overlaid is not base


def test_context_cannot_be_mutated():
    ctx = ConfigContext({"a": 1})

    with pytest.raises(TypeError):
        ctx["a"] = 2  # ty: ignore[invalid-assignment]


def test_context_is_independent_of_source_mapping():
    source = {"a": 1}
    ctx = ConfigContext(source)
    source["a"] = 2

    assert ctx["a"] == 1


def test_require_returns_present_value():
    assert ConfigContext({Key.JOB_NAME: "wordcount"}).require(Key.JOB_NAME) == "wordcount"


def test_require_raises_for_missing_key():
    with pytest.raises(TopoError, match="topo.job.name"):
        ConfigContext().require(Key.JOB_NAME)


@pytest.mark.parametrize(
    "value,expected",
    [(True, True), (False, False), ("true", True), ("No", False), ("1", True), (0, False)],
)
def test_get_bool(value, expected):
    assert ConfigContext({"flag": value}).getBool("flag") is expected


def test_get_bool_default_when_missing():
    assert ConfigContext().getBool("flag") is False
    assert ConfigContext().getBool("flag", True) is True


def test_get_bool_raises_on_invalid_value():
    with pytest.raises(TopoError, match="not a boolean"):
        ConfigContext({"flag": "maybe"}).getBool("flag")


def test_get_int():
    ctx = ConfigContext({"n": "4", "m": 7})

    assert ctx.getInt("n") == 4
    assert ctx.getInt("m") == 7
    assert ctx.getInt("missing", 3) == 3


def test_get_int_raises_on_invalid_value():
    with pytest.raises(TopoError, match="not an integer"):
        ConfigContext({"n": "four"}).getInt("n")


def test_expand_substitutes_context_variables():
    ctx = ConfigContext(
        {
            Key.INSTALL_DIR: "/opt/topo",
            Key.CLUSTER: "local",
            Key.ROLE: "alice",
            "topo.lib.dir": "${INSTALL_DIR}/lib",
            "topo.target": "${CLUSTER}/${ROLE}",
        }
    )

    expanded = ctx.expand()

    assert expanded["topo.lib.dir"] == "/opt/topo/lib"
    assert expanded["topo.target"] == "local/alice"
    # original context unchanged
    assert ctx["topo.lib.dir"] == "${INSTALL_DIR}/lib"


def test_expand_uses_environment_and_keeps_unknown_variables(monkeypatch):
    monkeypatch.setenv("TOPO_TEST_VAR", "from-env")
    monkeypatch.delenv("TOPO_UNKNOWN_VAR", raising=False)

    expanded = ConfigContext(
        {"a": "${TOPO_TEST_VAR}", "b": "${TOPO_UNKNOWN_VAR}", "c": 5}
    ).expand()

    assert expanded["a"] == "from-env"
    assert expanded["b"] == "${TOPO_UNKNOWN_VAR}"
    assert expanded["c"] == 5


def test_expand_expands_home_for_path_like_keys():
    expanded = ConfigContext(
        {Key.STATE_STORE_ROOT: "~/state", "topo.name": "~literal"}
    ).expand()

    assert expanded[Key.STATE_STORE_ROOT] == str(Path("~/state").expanduser())
    assert expanded["topo.name"] == "~literal"
