"""Mock provider for testing."""

import asyncio
import copy
from typing import Any, Mapping, Optional

from .base import ConfigProvider
from ..interfaces import ConfigSection


class MockConfigProvider(ConfigProvider):
    """Records calls and can be held open, delayed, or made to fail.

    Attributes:
        load_count: Number of times ``load`` was entered
        data: Section returned by the next successful load
        error: Exception raised by the next load, if set
        gate: When set, loads wait on this event before returning
    """

    def __init__(
        self,
        name: str,
        data: Optional[Mapping[str, Any]] = None,
        delay: float = 0.0,
        error: Optional[BaseException] = None,
    ):
        super().__init__(name)
        self.data = dict(data or {})
        self.delay = delay
        self.error = error
        self.gate: Optional[asyncio.Event] = None
        self.load_count = 0

    async def load(self) -> ConfigSection:
        self.load_count += 1
        # Snapshot now so later edits to data/error only affect later loads
        data = copy.deepcopy(self.data)
        error = self.error

        if self.gate is not None:
            await self.gate.wait()
        if self.delay:
            await asyncio.sleep(self.delay)

        if error is not None:
            raise error
        return data
