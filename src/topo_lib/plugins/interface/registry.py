# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from collections.abc import Callable
from enum import Enum
from typing import TypeVar

from topo_lib.core.context import Key
from topo_lib.core.error import PluginResolutionError
from topo_lib.core.logger import get_logger

from .launcher import ClusterLauncher
from .state_store import StateStore
from .uploader import PackageUploader

logger = get_logger(__name__)

Plugin = StateStore | PackageUploader | ClusterLauncher
PluginFactory = Callable[[], Plugin]

T = TypeVar("T")


class Capability(Enum):
    """
    Role that a plugin plays in a submission.
    """

    STATE_STORE = 1
    UPLOADER = 2
    LAUNCHER = 3

    def __str__(self):
        return self.name.lower().replace("_", " ")

    @property
    def interface(self) -> type[Plugin]:
        """Interface that every plugin of this capability must implement."""
        return {
            Capability.STATE_STORE: StateStore,
            Capability.UPLOADER: PackageUploader,
            Capability.LAUNCHER: ClusterLauncher,
        }[self]

    @property
    def key(self) -> Key:
        """Configuration key naming the plugin to use for this capability."""
        return {
            Capability.STATE_STORE: Key.STATE_STORE_CLASS,
            Capability.UPLOADER: Key.UPLOADER_CLASS,
            Capability.LAUNCHER: Key.LAUNCHER_CLASS,
        }[self]


class PluginRegistry:
    """
    Registry mapping plugin names to factories producing capability instances.

    Plugins are registered explicitly (typically at import time using the
    `plugin` decorator) and resolved by the name found in the configuration.
    """

    def __init__(self):
        self._factories: dict[Capability, dict[str, PluginFactory]] = {
            capability: {} for capability in Capability
        }

    def register(
        self, capability: Capability, name: str, factory: PluginFactory
    ) -> None:
        """
        Register a factory for a plugin.

        Registering the same name twice replaces the previous factory.

        Args:
            capability (Capability): Capability provided by the plugin.
            name (str): Name under which the plugin is resolved.
            factory (PluginFactory): Callable without arguments returning a new plugin instance.
        """
        if name in self._factories[capability]:
            logger.debug(f"Replacing {capability} plugin '{name}'.")
        self._factories[capability][name] = factory

    def plugin(self, capability: Capability, name: str) -> Callable[[T], T]:
        """
        Decorator registering a plugin class (or factory function) under the given name.
        """

        def decorator(factory: T) -> T:
            self.register(capability, name, factory)  # ty: ignore[invalid-argument-type]
            return factory

        return decorator

    def names(self, capability: Capability) -> list[str]:
        """Get the names of all plugins registered for a capability."""
        return sorted(self._factories[capability])

    def resolve(self, capability: Capability, name: str | None) -> Plugin:
        """
        Construct a new instance of the plugin registered under the given name.

        Args:
            capability (Capability): Capability the plugin must provide.
            name (str | None): Name of the plugin.

        Returns:
            Plugin: A fully constructed plugin instance.

        Raises:
            PluginResolutionError: If no plugin is registered under the name,
                the plugin cannot be constructed, or the constructed object
                does not implement the capability's interface.
        """
        if not name:
            raise PluginResolutionError(
                f"No {capability} plugin specified. Set '{capability.key}' in the configuration."
            )

        try:
            factory = self._factories[capability][name]
        except KeyError as e:
            raise PluginResolutionError(
                f"No {capability} plugin registered as '{name}'. Available: {', '.join(self.names(capability)) or 'none'}.",
                plugin=name,
            ) from e

        try:
            instance = factory()
        except Exception as e:
            raise PluginResolutionError(
                f"Failed to instantiate {capability} plugin '{name}': {e}", plugin=name
            ) from e

        if not isinstance(instance, capability.interface):
            raise PluginResolutionError(
                f"Plugin '{name}' does not implement the {capability.interface.__name__} interface.",
                plugin=name,
            )

        logger.debug(f"Resolved {capability} plugin '{name}'.")
        return instance


# Registry holding the built-in plugins.
REGISTRY = PluginRegistry()


def plugin(capability: Capability, name: str) -> Callable[[T], T]:
    """
    Register a plugin in the global registry.
    """
    return REGISTRY.plugin(capability, name)
