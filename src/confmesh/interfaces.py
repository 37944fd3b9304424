"""Core types shared by the configuration service and its providers."""

from dataclasses import dataclass
from enum import Enum
from typing import Union

# A configuration value is a scalar, None, or a nested section.
ConfigValue = Union[str, int, float, bool, None, "ConfigSection"]
ConfigSection = dict[str, ConfigValue]


class LoadingStatus(Enum):
    """Status of the configuration load cycle."""
    UNSET = "unset"
    LOADING = "loading"
    LOADED = "loaded"


@dataclass(frozen=True)
class LoadingContext:
    """A loading status transition broadcast to subscribers.

    Attributes:
        status: The status the service just entered.
    """
    status: LoadingStatus = LoadingStatus.UNSET

    def __repr__(self) -> str:
        return f"LoadingContext(status={self.status.value})"
