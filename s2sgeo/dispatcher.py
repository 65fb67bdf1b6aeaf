"""Turns spoken or typed keywords into plugin activations and accuracy settings."""

from __future__ import annotations

import logging

from .interfaces import ContextProvider
from .plugins import PluginRegistry, get_plugin_registry
from .shared_memory import SharedMemoryManager, get_shared_memory_manager

_log = logging.getLogger(__name__)

FULL_ACCURACY = 1.0
DEGRADED_ACCURACY = 0.5


class UnknownCommandError(ValueError):
    """The command matches none of the known keywords."""


class CommandDispatcher:
    """Parses keywords and activates the matching context provider.

    Keywords, checked in this order:
    "cycling"/"bike", "dating"/"tinder", "delivery",
    "running"/"walking" (full accuracy), "driving"/"car" (degraded accuracy).
    """

    def __init__(
        self,
        registry: PluginRegistry | None = None,
        manager: SharedMemoryManager | None = None,
    ) -> None:
        self._registry = registry
        self._manager = manager

    @property
    def registry(self) -> PluginRegistry:
        return get_plugin_registry() if self._registry is None else self._registry

    @property
    def manager(self) -> SharedMemoryManager:
        return get_shared_memory_manager() if self._manager is None else self._manager

    def process_command(self, command: str) -> ContextProvider:
        """Activate the provider the command asks for and return it.

        Raises UnknownCommandError when no keyword matches and
        UnknownProviderError when the matching provider is not registered.
        """
        lowered = command.lower()
        _log.info("Processing command: %s", lowered)

        def mentions(*words: str) -> bool:
            return any(word in lowered for word in words)

        if mentions("cycling", "bike"):
            name = "cycling"
        elif mentions("dating", "tinder"):
            name = "dating"
        elif mentions("delivery"):
            name = "delivery"
        elif mentions("running", "walking"):
            self.set_accuracy_level(FULL_ACCURACY)
            name = "cycling"
        elif mentions("driving", "car"):
            self.set_accuracy_level(DEGRADED_ACCURACY)
            name = "cycling"
        else:
            _log.error("Unknown command: %s", command)
            raise UnknownCommandError(command)
        return self.registry.activate_provider(name)

    def active_plugin(self) -> str:
        """Return the active provider's name, or an empty string if none is active."""
        provider = self.registry.active_provider()
        return "" if provider is None else provider.name

    def set_accuracy_level(self, level: float) -> float:
        """Clamp the level to [0, 1], publish it in shared memory when ready, and return it."""
        level = max(0.0, min(1.0, level))
        mgr = self.manager
        if mgr.is_ready():
            mgr.header().accuracy_level = level
            _log.info("Set accuracy level to: %s", level)
        return level