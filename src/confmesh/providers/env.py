"""Environment variable configuration provider."""

import os
from typing import Mapping, Optional

from .base import ConfigProvider
from ..interfaces import ConfigSection


class EnvironmentConfigProvider(ConfigProvider):
    """Builds a section from prefixed environment variables.

    ``APP__DB__HOST=x`` with prefix ``APP__`` becomes ``{"db": {"host": "x"}}``.
    Keys are lower-cased; values stay strings and are coerced at bind time.
    When a scalar and a nested section claim the same key, the variable that
    sorts first wins.
    """

    def __init__(
        self,
        prefix: str = "",
        separator: str = "__",
        environ: Optional[Mapping[str, str]] = None,
        name: Optional[str] = None,
    ):
        super().__init__(name or f"env:{prefix}")
        if not separator:
            raise ValueError("separator cannot be empty")
        self.prefix = prefix
        self.separator = separator
        self._environ = environ

    async def load(self) -> ConfigSection:
        environ = os.environ if self._environ is None else self._environ
        section: ConfigSection = {}

        # Sorted so shorter paths land first and collisions resolve the same way every time
        for var_name in sorted(environ):
            if not var_name.startswith(self.prefix):
                continue
            segments = [
                s.lower() for s in var_name[len(self.prefix):].split(self.separator) if s
            ]
            if not segments:
                continue
            self._assign(section, segments, environ[var_name])

        return section

    @staticmethod
    def _assign(section: ConfigSection, segments: list[str], value: str) -> None:
        current = section
        for segment in segments[:-1]:
            child = current.setdefault(segment, {})
            if not isinstance(child, dict):
                return
            current = child
        if isinstance(current.get(segments[-1]), dict):
            return
        current[segments[-1]] = value
