"""Provider-specific settings classes."""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Optional


class ProviderType(Enum):
    """Available configuration providers."""
    STATIC = "static"
    ENV = "env"
    YAML = "yaml"
    HTTP = "http"


@dataclass
class ServiceOptions:
    """Options accepted by the configuration service itself.

    Attributes:
        trace: Emit diagnostic log messages during load cycles
    """
    trace: bool = False


@dataclass
class ProviderSettings:
    """Settings for a single configuration provider.

    Only the attributes relevant to ``type`` are used.

    Attributes:
        type: Which provider to create
        name: Provider name (dedup key); defaults per type when omitted
        data: Inline section (static)
        path: File path (yaml)
        optional: Treat a missing file as an empty section (yaml)
        prefix: Environment variable prefix (env)
        separator: Nesting separator in variable names (env)
        url: Endpoint returning a JSON object (http)
        headers: Extra request headers (http)
        timeout_seconds: Request timeout (http)
    """
    type: ProviderType = ProviderType.STATIC
    name: Optional[str] = None
    data: dict[str, Any] = field(default_factory=dict)
    path: Optional[str] = None
    optional: bool = False
    prefix: str = ""
    separator: str = "__"
    url: Optional[str] = None
    headers: dict[str, str] = field(default_factory=dict)
    timeout_seconds: float = 10.0

    @classmethod
    def from_dict(cls, data: dict) -> "ProviderSettings":
        if not isinstance(data, dict):
            raise ValueError(f"Provider entry must be a mapping, got: {type(data).__name__}")
        check_keys(cls, data, "provider")
        data = dict(data)
        data["type"] = ProviderType(data.get("type", "static"))
        return cls(**data)


def check_keys(settings_type: type, data: dict, where: str) -> None:
    """Reject keys that are not fields of ``settings_type``."""
    known = {f.name for f in fields(settings_type)}
    unknown = sorted(str(k) for k in data if k not in known)
    if unknown:
        raise ValueError(f"Unknown {where} settings: {', '.join(unknown)}")
