"""YAML file configuration provider."""

import asyncio
from pathlib import Path
from typing import Optional

import yaml

from .base import ConfigProvider
from ..interfaces import ConfigSection


class YamlFileConfigProvider(ConfigProvider):
    """Reads a section from a YAML file on every load.

    Args:
        path: File to read (``~`` is expanded)
        optional: Return an empty section when the file does not exist
        name: Provider name, defaults to ``yaml:<path>``
    """

    def __init__(self, path: str | Path, optional: bool = False, name: Optional[str] = None):
        self.path = Path(path).expanduser()
        self.optional = optional
        super().__init__(name or f"yaml:{path}")

    async def load(self) -> ConfigSection:
        return await asyncio.to_thread(self._read)

    def _read(self) -> ConfigSection:
        if not self.path.exists():
            if self.optional:
                return {}
            raise FileNotFoundError(f"Config file not found: {self.path}")

        with open(self.path, encoding="utf-8") as f:
            data = yaml.safe_load(f)

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"Top-level YAML must be a mapping, got: {type(data).__name__}")
        return data
