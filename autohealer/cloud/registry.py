"""Provider registry for cloud backends."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from .base import CloudProvider, CloudProviderFactory, UnknownProviderError

logger = logging.getLogger(__name__)

BackendConstructor = Callable[[Any, Any], CloudProvider]


class CloudProviderRegistry:
    """Maps provider names to backend constructors.

    Backends are registered once during start-up, before the dispatcher looks
    any name up. The registry is not locked; it must not be written to while
    another thread reads it.
    """

    def __init__(self):
        self._constructors: Dict[str, BackendConstructor] = {}

    def register(self, name: str, constructor: BackendConstructor) -> None:
        """Register a constructor. A later registration under the same name wins."""
        if name in self._constructors:
            logger.debug(f"Replacing cloud provider registration for {name}")
        self._constructors[name] = constructor

    def register_factory(self, factory: CloudProviderFactory) -> None:
        """Register a backend implementation under its own name."""
        self.register(factory.name, factory.construct)

    def lookup(self, name: str) -> Optional[BackendConstructor]:
        """Get the constructor registered under name, or None."""
        return self._constructors.get(name)

    def construct(self, name: str, config: Any, kube_client: Any) -> CloudProvider:
        """Build the backend registered under name.

        Raises:
            UnknownProviderError: If name is not registered.
        """
        constructor = self.lookup(name)
        if constructor is None:
            raise UnknownProviderError(name, self.list_providers())
        return constructor(config, kube_client)

    def list_providers(self) -> List[str]:
        """List registered provider names."""
        return list(self._constructors.keys())

    def __contains__(self, name: str) -> bool:
        return name in self._constructors

    def __len__(self) -> int:
        return len(self._constructors)


def default_registry() -> CloudProviderRegistry:
    """Create a registry with every built-in backend registered."""
    from .openstack import register as register_openstack

    registry = CloudProviderRegistry()
    register_openstack(registry)
    return registry
