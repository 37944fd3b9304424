"""Top-level settings for composing a configuration service."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from .providers import ProviderSettings, ProviderType, ServiceOptions, check_keys


@dataclass
class MeshSettings:
    """Complete composition settings.

    Providers are listed in registration order: the first entry is applied
    last and therefore wins key collisions.

    Attributes:
        options: Options for the configuration service
        providers: Provider settings in registration order
        sections: Options type name -> section key overrides
    """
    options: ServiceOptions = field(default_factory=ServiceOptions)
    providers: list[ProviderSettings] = field(default_factory=list)
    sections: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> "MeshSettings":
        """Create settings from a dictionary.

        Raises:
            ValueError: On unknown keys or malformed entries
        """
        check_keys(cls, data, "top-level")
        options_data = data.get("options") or {}
        providers_data = data.get("providers") or []
        if not isinstance(options_data, dict):
            raise ValueError("options must be a mapping")
        if not isinstance(providers_data, list):
            raise ValueError("providers must be a list")
        check_keys(ServiceOptions, options_data, "options")
        return cls(
            options=ServiceOptions(**options_data),
            providers=[ProviderSettings.from_dict(p) for p in providers_data],
            sections=dict(data.get("sections") or {}),
        )

    @classmethod
    def from_file(cls, path: str | Path) -> "MeshSettings":
        """Load settings from a YAML file. A missing file yields defaults."""
        path = Path(path).expanduser()
        if not path.exists():
            return cls()

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Top-level YAML must be a mapping, got: {type(data).__name__}")
        return cls.from_dict(data)

    @classmethod
    def from_env(cls, prefix: str = "CONFMESH") -> "MeshSettings":
        """Load settings using environment variables.

        Environment variables:
            {prefix}_CONFIG: Path to the settings YAML file
            {prefix}_TRACE: true|false, overrides options.trace
        """
        settings = cls.from_file(
            os.environ.get(f"{prefix}_CONFIG", "~/.confmesh/settings.yaml")
        )
        trace = os.environ.get(f"{prefix}_TRACE")
        if trace is not None:
            settings.options.trace = trace.lower() in ("true", "1", "yes", "on")
        return settings

    @classmethod
    def for_testing(cls, data: Optional[dict] = None) -> "MeshSettings":
        """Settings with a single static provider and tracing enabled."""
        return cls(
            options=ServiceOptions(trace=True),
            providers=[
                ProviderSettings(type=ProviderType.STATIC, name="test", data=data or {}),
            ],
        )

    def validate(self) -> list[str]:
        """Validate settings and return a list of errors."""
        errors = []
        seen: set[str] = set()

        for index, provider in enumerate(self.providers):
            label = f"providers[{index}]"
            if provider.type == ProviderType.YAML and not provider.path:
                errors.append(f"{label}: yaml provider requires path")
            if provider.type == ProviderType.HTTP:
                if not provider.url:
                    errors.append(f"{label}: http provider requires url")
                if provider.timeout_seconds <= 0:
                    errors.append(
                        f"{label}: timeout_seconds must be positive, got {provider.timeout_seconds}"
                    )
            if provider.type == ProviderType.ENV and not provider.separator:
                errors.append(f"{label}: env provider separator cannot be empty")

            name = provider.resolved_name
            if name in seen:
                errors.append(f"{label}: duplicate provider name '{name}'")
            seen.add(name)

        for type_name, section in self.sections.items():
            if not section or not section.strip():
                errors.append(f"sections.{type_name} cannot be empty")

        return errors
