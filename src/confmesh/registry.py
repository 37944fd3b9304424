"""Ordered collection of configuration providers."""

from typing import Iterable, Iterator

from .providers.base import ConfigProvider


class ProviderRegistry:
    """Providers in registration order, applied in reverse.

    The last registered provider is applied first and the first registered
    provider is applied last, so on key collisions the earliest registration
    wins. Names must be unique because the service deduplicates fetches by
    name.
    """

    def __init__(self, providers: Iterable[ConfigProvider] = ()):
        self._registered: list[ConfigProvider] = []
        for provider in providers:
            self.register(provider)

    def register(self, provider: ConfigProvider) -> None:
        """Append a provider to the registration order.

        Raises:
            ValueError: If a provider with the same name is already registered
        """
        if any(p.name == provider.name for p in self._registered):
            raise ValueError(f"Duplicate config provider name: {provider.name}")
        self._registered.append(provider)

    @property
    def providers(self) -> tuple[ConfigProvider, ...]:
        """Providers in application order."""
        return tuple(reversed(self._registered))

    @property
    def registered(self) -> tuple[ConfigProvider, ...]:
        """Providers in registration order."""
        return tuple(self._registered)

    def __iter__(self) -> Iterator[ConfigProvider]:
        return iter(self.providers)

    def __len__(self) -> int:
        return len(self._registered)
