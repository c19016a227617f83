"""Unit tests for SWIS connection settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from swql_inventory.client.settings import (
    DEFAULT_PORT,
    SwisSettings,
    apply_env,
    load_settings,
    settings_from_mapping,
)
from swql_inventory.core.exceptions import ConfigurationError


class TestSwisSettings:
    """Tests for the settings dataclass."""

    def test_base_url(self, swis_settings: SwisSettings) -> None:
        assert swis_settings.base_url == (
            "https://orion.lab.local:17778/SolarWinds/InformationService/v3/Json"
        )

    def test_require_host_raises_when_empty(self) -> None:
        with pytest.raises(ConfigurationError, match="host"):
            SwisSettings().require_host()


class TestLoadSettings:
    """Tests for YAML and environment loading."""

    def test_missing_file_yields_defaults(self, tmp_path: Path) -> None:
        settings = load_settings(tmp_path / "absent.yml", environ={})
        assert settings == SwisSettings()
        assert settings.port == DEFAULT_PORT

    def test_loads_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "swis.yml"
        path.write_text(
            "host: orion.example.net\nusername: svc\nverify_ssl: true\nport: '17774'\n",
            encoding="utf-8",
        )
        settings = load_settings(path, environ={})
        assert settings.host == "orion.example.net"
        assert settings.username == "svc"
        assert settings.verify_ssl is True
        assert settings.port == 17774

    def test_env_overrides_file(self, tmp_path: Path) -> None:
        path = tmp_path / "swis.yml"
        path.write_text("host: orion.example.net\nusername: svc\n", encoding="utf-8")
        settings = load_settings(
            path,
            environ={"SWIS_HOST": "orion2", "SWIS_PASSWORD": "pw", "SWIS_VERIFY_SSL": "yes"},
        )
        assert settings.host == "orion2"
        assert settings.username == "svc"
        assert settings.password == "pw"
        assert settings.verify_ssl is True

    def test_malformed_yaml_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "swis.yml"
        path.write_text("host: [unterminated\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Malformed"):
            load_settings(path, environ={})

    def test_non_mapping_yaml_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "swis.yml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="mapping"):
            load_settings(path, environ={})

    def test_none_path_reads_env_only(self) -> None:
        settings = load_settings(None, environ={"SWIS_HOST": "orion3"})
        assert settings.host == "orion3"


class TestCoercion:
    """Tests for value coercion helpers."""

    def test_unknown_keys_ignored(self) -> None:
        settings = settings_from_mapping({"host": "a", "colour": "blue"})
        assert settings.host == "a"

    def test_bad_port_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="integer"):
            settings_from_mapping({"port": "http"})

    def test_apply_env_without_overrides_returns_same(self, swis_settings: SwisSettings) -> None:
        assert apply_env(swis_settings, environ={}) is swis_settings

    def test_apply_env_returns_copy(self, swis_settings: SwisSettings) -> None:
        updated = apply_env(swis_settings, environ={"SWIS_TIMEOUT": "60"})
        assert updated.timeout == 60
        assert swis_settings.timeout == 15
