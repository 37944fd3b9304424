"""In-memory configuration provider."""

import copy
from typing import Any, Mapping

from .base import ConfigProvider
from ..interfaces import ConfigSection


class StaticConfigProvider(ConfigProvider):
    """Serves a fixed section held in memory.

    Each load returns a deep copy so callers never share state with the
    provider or with each other.
    """

    def __init__(self, data: Mapping[str, Any], name: str = "static"):
        super().__init__(name)
        self._data = dict(data)

    async def load(self) -> ConfigSection:
        return copy.deepcopy(self._data)
