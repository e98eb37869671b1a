# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from unittest.mock import MagicMock

import pytest

from topo_lib.core.context import Key
from topo_lib.core.error import PluginResolutionError
from topo_lib.plugins.interface import (
    REGISTRY,
    Capability,
    ClusterLauncher,
    PackageUploader,
    PluginRegistry,
    StateStore,
)
from topo_lib.plugins.localfs import (
    LocalFileSystemStateStore,
    LocalFileSystemUploader,
    LocalLauncher,
)
from topo_lib.properties.failure_kind import FailureKind


class DummyStateStore(StateStore):
    pass


def test_capability_str():
    assert str(Capability.STATE_STORE) == "state store"
    assert str(Capability.UPLOADER) == "uploader"
    assert str(Capability.LAUNCHER) == "launcher"


def test_capability_interface_and_key():
    assert Capability.STATE_STORE.interface is StateStore
    assert Capability.UPLOADER.interface is PackageUploader
    assert Capability.LAUNCHER.interface is ClusterLauncher

    assert Capability.STATE_STORE.key == Key.STATE_STORE_CLASS
    assert Capability.UPLOADER.key == Key.UPLOADER_CLASS
    assert Capability.LAUNCHER.key == Key.LAUNCHER_CLASS


def test_resolve_constructs_new_instance_each_time():
    registry = PluginRegistry()
    registry.register(Capability.STATE_STORE, "dummy", DummyStateStore)

    first = registry.resolve(Capability.STATE_STORE, "dummy")
    second = registry.resolve(Capability.STATE_STORE, "dummy")

    assert isinstance(first, DummyStateStore)
    assert first is not second


def test_plugin_decorator_registers_and_returns_class():
    registry = PluginRegistry()

    @registry.plugin(Capability.UPLOADER, "decorated")
    class DecoratedUploader(PackageUploader):
        pass

    assert registry.names(Capability.UPLOADER) == ["decorated"]
    assert isinstance(
        registry.resolve(Capability.UPLOADER, "decorated"), DecoratedUploader
    )


def test_register_replaces_existing_name():
    registry = PluginRegistry()
    first = MagicMock(spec=StateStore)
    second = MagicMock(spec=StateStore)
    registry.register(Capability.STATE_STORE, "dummy", lambda: first)
    registry.register(Capability.STATE_STORE, "dummy", lambda: second)

    assert registry.resolve(Capability.STATE_STORE, "dummy") is second


def test_names_are_separated_per_capability():
    registry = PluginRegistry()
    registry.register(Capability.STATE_STORE, "b", DummyStateStore)
    registry.register(Capability.STATE_STORE, "a", DummyStateStore)

    assert registry.names(Capability.STATE_STORE) == ["a", "b"]
    assert registry.names(Capability.LAUNCHER) == []


@pytest.mark.parametrize("name", [None, ""])
def test_resolve_without_name(name):
    with pytest.raises(PluginResolutionError, match="No launcher plugin specified") as e:
        PluginRegistry().resolve(Capability.LAUNCHER, name)

    assert e.value.kind == FailureKind.PLUGIN_RESOLUTION


def test_resolve_unknown_name():
    registry = PluginRegistry()
    registry.register(Capability.STATE_STORE, "known", DummyStateStore)

    with pytest.raises(PluginResolutionError, match="Available: known") as e:
        registry.resolve(Capability.STATE_STORE, "unknown")

    assert e.value.plugin == "unknown"


def test_resolve_unknown_name_in_other_capability():
    registry = PluginRegistry()
    registry.register(Capability.STATE_STORE, "known", DummyStateStore)

    with pytest.raises(PluginResolutionError, match="Available: none"):
        registry.resolve(Capability.UPLOADER, "known")


def test_resolve_failing_factory():
    registry = PluginRegistry()
    registry.register(
        Capability.LAUNCHER, "broken", MagicMock(side_effect=RuntimeError("boom"))
    )

    with pytest.raises(PluginResolutionError, match="Failed to instantiate launcher plugin 'broken': boom") as e:
        registry.resolve(Capability.LAUNCHER, "broken")

    assert isinstance(e.value.__cause__, RuntimeError)


def test_resolve_wrong_interface():
    registry = PluginRegistry()
    registry.register(Capability.LAUNCHER, "wrong", DummyStateStore)

    with pytest.raises(PluginResolutionError, match="ClusterLauncher interface"):
        registry.resolve(Capability.LAUNCHER, "wrong")


def test_builtin_plugins_are_registered():
    assert "localfs" in REGISTRY.names(Capability.STATE_STORE)
    assert "localfs" in REGISTRY.names(Capability.UPLOADER)
    assert "local" in REGISTRY.names(Capability.LAUNCHER)

    assert isinstance(
        REGISTRY.resolve(Capability.STATE_STORE, "localfs"), LocalFileSystemStateStore
    )
    assert isinstance(
        REGISTRY.resolve(Capability.UPLOADER, "localfs"), LocalFileSystemUploader
    )
    assert isinstance(REGISTRY.resolve(Capability.LAUNCHER, "local"), LocalLauncher)


@pytest.mark.parametrize(
    "interface,method,args",
    [
        (StateStore, "initialize", (None,)),
        (StateStore, "isJobRunning", ("job",)),
        (StateStore, "registerJob", ("job", {})),
        (StateStore, "close", ()),
        (PackageUploader, "initialize", (None,)),
        (PackageUploader, "uploadPackage", ()),
        (PackageUploader, "undo", ()),
        (PackageUploader, "close", ()),
        (ClusterLauncher, "initialize", (None,)),
        (ClusterLauncher, "launch", (None,)),
        (ClusterLauncher, "close", ()),
    ],
)
def test_interface_methods_not_implemented(interface, method, args):
    instance = type("Incomplete", (interface,), {})()

    with pytest.raises(NotImplementedError, match=method):
        getattr(instance, method)(*args)
