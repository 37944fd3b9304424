"""Tests for composition settings."""

import pytest

from confmesh.config import MeshSettings, ProviderSettings, ProviderType, ServiceOptions


class TestServiceOptions:
    """Tests for ServiceOptions."""

    def test_defaults(self):
        assert ServiceOptions().trace is False


class TestProviderSettings:
    """Tests for ProviderSettings."""

    def test_defaults(self):
        settings = ProviderSettings()

        assert settings.type == ProviderType.STATIC
        assert settings.separator == "__"
        assert settings.timeout_seconds == 10.0
        assert settings.data == {}

    def test_from_dict(self):
        settings = ProviderSettings.from_dict({"type": "yaml", "path": "app.yaml", "optional": True})

        assert settings.type == ProviderType.YAML
        assert settings.path == "app.yaml"
        assert settings.optional is True

    def test_from_dict_unknown_type(self):
        with pytest.raises(ValueError):
            ProviderSettings.from_dict({"type": "consul"})

    def test_from_dict_unknown_key(self):
        with pytest.raises(ValueError, match="Unknown provider settings: colour"):
            ProviderSettings.from_dict({"type": "static", "colour": "red"})

    def test_from_dict_rejects_non_mapping(self):
        with pytest.raises(ValueError, match="mapping"):
            ProviderSettings.from_dict("static")

    @pytest.mark.parametrize("settings, expected", [
        (ProviderSettings(name="explicit"), "explicit"),
        (ProviderSettings(), "static"),
        (ProviderSettings(type=ProviderType.YAML, path="a.yaml"), "yaml:a.yaml"),
        (ProviderSettings(type=ProviderType.HTTP, url="http://x"), "http:http://x"),
        (ProviderSettings(type=ProviderType.ENV, prefix="APP__"), "env:APP__"),
    ])
    def test_resolved_name(self, settings, expected):
        assert settings.resolved_name == expected


class TestMeshSettings:
    """Tests for MeshSettings."""

    def test_defaults(self):
        settings = MeshSettings()

        assert settings.options.trace is False
        assert settings.providers == []
        assert settings.sections == {}

    def test_from_dict(self):
        settings = MeshSettings.from_dict({
            "options": {"trace": True},
            "providers": [
                {"type": "yaml", "path": "base.yaml"},
                {"type": "env", "prefix": "APP__"},
            ],
            "sections": {"DatabaseOptions": "primaryDb"},
        })

        assert settings.options.trace is True
        assert [p.type for p in settings.providers] == [ProviderType.YAML, ProviderType.ENV]
        assert settings.sections == {"DatabaseOptions": "primaryDb"}

    @pytest.mark.parametrize("data, match", [
        ({"provider": []}, "Unknown top-level settings: provider"),
        ({"options": {"verbose": True}}, "Unknown options settings: verbose"),
        ({"options": ["trace"]}, "options must be a mapping"),
        ({"providers": {"type": "static"}}, "providers must be a list"),
    ])
    def test_from_dict_rejects_malformed(self, data, match):
        with pytest.raises(ValueError, match=match):
            MeshSettings.from_dict(data)

    def test_from_file(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text(
            "options:\n"
            "  trace: true\n"
            "providers:\n"
            "  - type: static\n"
            "    data:\n"
            "      a: 1\n"
        )

        settings = MeshSettings.from_file(path)

        assert settings.options.trace is True
        assert settings.providers[0].data == {"a": 1}

    def test_from_missing_file_gives_defaults(self, tmp_path):
        settings = MeshSettings.from_file(tmp_path / "nope.yaml")

        assert settings == MeshSettings()

    def test_from_file_rejects_non_mapping(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("- 1\n")

        with pytest.raises(ValueError, match="mapping"):
            MeshSettings.from_file(path)

    def test_from_env(self, tmp_path, monkeypatch):
        path = tmp_path / "settings.yaml"
        path.write_text("providers:\n  - type: env\n    prefix: APP__\n")
        monkeypatch.setenv("CONFMESH_CONFIG", str(path))
        monkeypatch.setenv("CONFMESH_TRACE", "yes")

        settings = MeshSettings.from_env()

        assert settings.options.trace is True
        assert settings.providers[0].prefix == "APP__"

    def test_for_testing(self):
        settings = MeshSettings.for_testing({"a": 1})

        assert settings.options.trace is True
        assert settings.providers[0].data == {"a": 1}
        assert settings.validate() == []


class TestMeshSettingsValidation:
    """Tests for MeshSettings.validate()."""

    def test_valid(self):
        settings = MeshSettings(providers=[
            ProviderSettings(type=ProviderType.YAML, path="a.yaml"),
            ProviderSettings(type=ProviderType.HTTP, url="http://config"),
        ])

        assert settings.validate() == []

    def test_yaml_requires_path(self):
        settings = MeshSettings(providers=[ProviderSettings(type=ProviderType.YAML)])

        assert any("requires path" in e for e in settings.validate())

    def test_http_requires_url_and_positive_timeout(self):
        settings = MeshSettings(providers=[
            ProviderSettings(type=ProviderType.HTTP, timeout_seconds=0),
        ])

        errors = settings.validate()
        assert any("requires url" in e for e in errors)
        assert any("timeout_seconds" in e for e in errors)

    def test_env_separator_cannot_be_empty(self):
        settings = MeshSettings(providers=[ProviderSettings(type=ProviderType.ENV, separator="")])

        assert any("separator" in e for e in settings.validate())

    def test_duplicate_names(self):
        settings = MeshSettings(providers=[ProviderSettings(), ProviderSettings()])

        assert any("duplicate provider name 'static'" in e for e in settings.validate())

    def test_empty_section_override(self):
        settings = MeshSettings(sections={"DatabaseOptions": " "})

        assert any("sections.DatabaseOptions" in e for e in settings.validate())
