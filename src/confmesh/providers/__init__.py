"""Configuration provider interface and implementations.

Providers are named sources of configuration sections. The service consumes
only the abstract interface; the concrete classes here cover the common
sources.
"""

from .base import ConfigProvider
from .static import StaticConfigProvider
from .env import EnvironmentConfigProvider
from .yaml_file import YamlFileConfigProvider
from .http import HttpConfigProvider
from .mock import MockConfigProvider

__all__ = [
    # Base interface
    "ConfigProvider",
    # Sources
    "StaticConfigProvider",
    "EnvironmentConfigProvider",
    "YamlFileConfigProvider",
    "HttpConfigProvider",
    # Testing
    "MockConfigProvider",
]
