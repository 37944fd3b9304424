"""Abstract base class for configuration providers.

A provider is a named source of a configuration section. The service only
needs ``name`` and ``load()``; the lifecycle hooks are for providers that
hold resources such as HTTP clients.
"""

from abc import ABC, abstractmethod

from ..interfaces import ConfigSection


class ConfigProvider(ABC):
    """Base class for all configuration providers.

    ``name`` must be stable: the service uses it to deduplicate concurrent
    fetches.
    """

    def __init__(self, name: str):
        self._name = name
        self._initialized = False

    @property
    def name(self) -> str:
        return self._name

    @abstractmethod
    async def load(self) -> ConfigSection:
        """Fetch this provider's configuration section."""
        pass

    async def initialize(self) -> None:
        """Acquire resources. Called once before first use."""
        self._initialized = True

    async def shutdown(self) -> None:
        """Release resources."""
        self._initialized = False

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    async def __aenter__(self):
        if not self._initialized:
            await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.shutdown()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r})"
