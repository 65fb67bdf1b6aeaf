"""Registry of context provider plugins."""

from __future__ import annotations

import logging
import threading
from typing import Callable

from .interfaces import ContextProvider

ProviderFactory = Callable[[], ContextProvider]

_log = logging.getLogger(__name__)


class UnknownProviderError(KeyError):
    """No provider is registered under the requested name."""


class PluginRegistry:
    """Creates providers on demand from registered factories and tracks the active one."""

    def __init__(self) -> None:
        self._factories: dict[str, ProviderFactory] = {}
        self._instances: dict[str, ContextProvider] = {}
        self._active: ContextProvider | None = None
        self.active_provider_name = ""

    def register_provider(self, name: str, factory: ProviderFactory) -> None:
        """Register a factory under a name, replacing any earlier factory."""
        self._factories[name] = factory
        _log.info("Registered provider: %s", name)

    def _instance(self, name: str) -> ContextProvider | None:
        factory = self._factories.get(name)
        if factory is None:
            return None
        if name not in self._instances:
            self._instances[name] = factory()
        return self._instances[name]

    def activate_provider(self, name: str) -> ContextProvider:
        """Make the named provider active and return it."""
        provider = self._instance(name)
        if provider is None:
            raise UnknownProviderError(name)
        self._active = provider
        self.active_provider_name = name
        _log.info("Activated provider: %s", name)
        return provider

    def active_provider(self) -> ContextProvider | None:
        """Return the active provider, if any."""
        return self._active

    def list_providers(self) -> list[str]:
        """Return the registered provider names in sorted order."""
        return sorted(self._factories)

    def get_provider(self, name: str) -> ContextProvider | None:
        """Return the named provider without activating it, or None if unknown."""
        return self._instance(name)


_instance: PluginRegistry | None = None
_instance_lock = threading.Lock()


def get_plugin_registry() -> PluginRegistry:
    """Return the process-wide plugin registry."""
    global _instance
    with _instance_lock:
        if _instance is None:
            _instance = PluginRegistry()
        return _instance