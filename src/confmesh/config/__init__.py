"""Settings for composing a configuration service.

Settings can be loaded from:
- YAML files
- Environment variables
- Programmatic construction
"""

from .system import MeshSettings
from .providers import ProviderSettings, ProviderType, ServiceOptions

__all__ = [
    "MeshSettings",
    "ProviderSettings",
    "ProviderType",
    "ServiceOptions",
]
