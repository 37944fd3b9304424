"""conf-mesh: merge configuration from many async sources into one snapshot.

Usage:
    from confmesh import ConfigService, StaticConfigProvider

    service = ConfigService([StaticConfigProvider({"database": {"port": "5432"}})])
    await service.load()

    service.get_value("database.port")   # "5432"
    service.bind(DatabaseOptions).port   # 5432
"""

__version__ = "0.1.0"

from .binding import SectionNames, normalize_key
from .config import MeshSettings, ProviderSettings, ProviderType, ServiceOptions
from .container import ConfigContainer
from .errors import ConfigError, ProviderLoadError
from .events import LoadEventStream, Subscription
from .interfaces import ConfigSection, ConfigValue, LoadingContext, LoadingStatus
from .providers import (
    ConfigProvider,
    EnvironmentConfigProvider,
    HttpConfigProvider,
    StaticConfigProvider,
    YamlFileConfigProvider,
)
from .registry import ProviderRegistry
from .service import ConfigService

__all__ = [
    "ConfigService",
    "ConfigContainer",
    "ProviderRegistry",
    "SectionNames",
    "normalize_key",
    "MeshSettings",
    "ProviderSettings",
    "ProviderType",
    "ServiceOptions",
    "ConfigError",
    "ProviderLoadError",
    "LoadEventStream",
    "Subscription",
    "ConfigSection",
    "ConfigValue",
    "LoadingContext",
    "LoadingStatus",
    "ConfigProvider",
    "EnvironmentConfigProvider",
    "HttpConfigProvider",
    "StaticConfigProvider",
    "YamlFileConfigProvider",
]
