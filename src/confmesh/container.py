"""Composition container.

Builds providers from settings, manages their lifecycle, and hands out the
configuration service that consumes them.
"""

import logging
from typing import Optional

from .binding import SectionNames
from .config import MeshSettings, ProviderSettings, ProviderType
from .providers.base import ConfigProvider
from .service import ConfigService

logger = logging.getLogger(__name__)


class ConfigContainer:
    """Owns the providers and the service for one application.

    Usage:
        async with ConfigContainer(MeshSettings.from_env()) as container:
            await container.service.load()
            port = container.service.get_value("server.port")

    Args:
        settings: Composition settings
        option_types: Options types to resolve ``settings.sections`` against,
            matched by class name
    """

    def __init__(self, settings: MeshSettings, option_types: tuple[type, ...] = ()):
        self.settings = settings
        self._option_types = option_types
        self._providers: list[ConfigProvider] = []
        self._service: Optional[ConfigService] = None
        self._initialized = False

    async def initialize(self) -> None:
        """Validate settings, then create and initialize providers in order.

        Raises:
            ValueError: If the settings are invalid
        """
        if self._initialized:
            return

        errors = self.settings.validate()
        if errors:
            raise ValueError(f"Invalid configuration settings: {errors}")

        logger.info(f"Initializing {len(self.settings.providers)} config providers")

        try:
            for provider_settings in self.settings.providers:
                provider = self._create_provider(provider_settings)
                await provider.initialize()
                self._providers.append(provider)
        except Exception:
            await self._shutdown_providers()
            raise

        self._service = ConfigService(
            self._providers,
            options=self.settings.options,
            sections=self._section_names(),
        )
        self._initialized = True
        logger.info("Config container initialized")

    async def shutdown(self) -> None:
        """Shut providers down in reverse order."""
        if not self._initialized:
            return
        await self._shutdown_providers()
        self._service = None
        self._initialized = False
        logger.info("Config container shutdown complete")

    async def _shutdown_providers(self) -> None:
        for provider in reversed(self._providers):
            await provider.shutdown()
        self._providers = []

    @property
    def service(self) -> ConfigService:
        """Get the configuration service."""
        if not self._service:
            raise RuntimeError("Container not initialized. Call initialize() first.")
        return self._service

    @property
    def providers(self) -> tuple[ConfigProvider, ...]:
        """Created providers in registration order."""
        return tuple(self._providers)

    def _section_names(self) -> SectionNames:
        names = SectionNames()
        by_name = {t.__name__: t for t in self._option_types}
        for type_name, section in self.settings.sections.items():
            options_type = by_name.get(type_name)
            if options_type is None:
                logger.warning(f"No options type named '{type_name}' to map to section '{section}'")
                continue
            names.register(options_type, section)
        return names

    def _create_provider(self, cfg: ProviderSettings) -> ConfigProvider:
        """Create a provider based on its settings."""
        from .providers.env import EnvironmentConfigProvider
        from .providers.http import HttpConfigProvider
        from .providers.static import StaticConfigProvider
        from .providers.yaml_file import YamlFileConfigProvider

        name = cfg.resolved_name

        if cfg.type == ProviderType.STATIC:
            return StaticConfigProvider(cfg.data, name=name)
        elif cfg.type == ProviderType.ENV:
            return EnvironmentConfigProvider(prefix=cfg.prefix, separator=cfg.separator, name=name)
        elif cfg.type == ProviderType.YAML:
            return YamlFileConfigProvider(cfg.path, optional=cfg.optional, name=name)
        elif cfg.type == ProviderType.HTTP:
            return HttpConfigProvider(
                cfg.url,
                headers=cfg.headers,
                timeout_seconds=cfg.timeout_seconds,
                name=name,
            )
        else:
            raise ValueError(f"Unknown config provider: {cfg.type}")

    async def __aenter__(self):
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.shutdown()
