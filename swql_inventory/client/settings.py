"""Connection settings for the SolarWinds information service.

Settings come from an optional YAML file and are then overridden by
``SWIS_*`` environment variables::

    # swis.yml
    host: orion.example.net
    username: svc-inventory
    verify_ssl: true

Usage::

    settings = load_settings(Path("swis.yml"))
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

from ..core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_FILE = Path("swis.yml")
DEFAULT_PORT = 17778

ENV_OVERRIDES: dict[str, str] = {
    "SWIS_HOST": "host",
    "SWIS_PORT": "port",
    "SWIS_USERNAME": "username",
    "SWIS_PASSWORD": "password",
    "SWIS_VERIFY_SSL": "verify_ssl",
    "SWIS_TIMEOUT": "timeout",
}

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class SwisSettings:
    """Information service connection parameters.

    Attributes:
        host: Orion server hostname or IP address.
        port: SWIS REST port.
        username: Login username.
        password: Login password.
        verify_ssl: Whether to verify the server certificate.
        timeout: Request timeout in seconds.

    """

    host: str = ""
    port: int = DEFAULT_PORT
    username: str = ""
    password: str = ""
    verify_ssl: bool = False
    timeout: int = 30

    @property
    def base_url(self) -> str:
        """Return the SWIS JSON API root for this server."""
        return f"https://{self.host}:{self.port}/SolarWinds/InformationService/v3/Json"

    def require_host(self) -> None:
        """Raise ``ConfigurationError`` unless a host is configured."""
        if not self.host:
            raise ConfigurationError(
                "No information service host configured",
                details={"hint": "set 'host' in the settings file or SWIS_HOST"},
            )


def _coerce(name: str, value: Any) -> Any:
    if name in ("port", "timeout"):
        try:
            return int(value)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(
                f"Setting '{name}' must be an integer",
                details={"value": value},
            ) from exc
    if name == "verify_ssl":
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() in _TRUE_VALUES
    return str(value)


def settings_from_mapping(data: Mapping[str, Any]) -> SwisSettings:
    """Build settings from a mapping, ignoring unknown keys."""
    known = {f.name for f in fields(SwisSettings)}
    values = {k: _coerce(k, v) for k, v in data.items() if k in known and v is not None}
    unknown = sorted(set(data) - known)
    if unknown:
        logger.debug("Ignoring unknown settings: %s", ", ".join(unknown))
    return SwisSettings(**values)


def apply_env(
    settings: SwisSettings,
    environ: Mapping[str, str] | None = None,
) -> SwisSettings:
    """Return a copy of ``settings`` with ``SWIS_*`` overrides applied."""
    env = os.environ if environ is None else environ
    overrides = {
        attr: _coerce(attr, env[var])
        for var, attr in ENV_OVERRIDES.items()
        if env.get(var)
    }
    return replace(settings, **overrides) if overrides else settings


def load_settings(
    path: Path | None = DEFAULT_SETTINGS_FILE,
    environ: Mapping[str, str] | None = None,
) -> SwisSettings:
    """Load settings from YAML (if present) and the environment.

    Args:
        path: Settings file; a missing file is not an error.
        environ: Environment mapping, defaults to ``os.environ``.

    Raises:
        ConfigurationError: If the file exists but cannot be parsed.

    """
    settings = SwisSettings()
    if path is not None and Path(path).exists():
        import yaml  # type: ignore[import-untyped]

        try:
            with Path(path).open("r", encoding="utf-8") as fh:
                raw = yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(
                f"Malformed settings file: {path}",
                details={"error": str(exc)},
            ) from exc
        if not isinstance(raw, dict):
            raise ConfigurationError(
                f"Settings file must contain a mapping: {path}",
            )
        settings = settings_from_mapping(raw)
        logger.info("Loaded settings from %s", path)
    return apply_env(settings, environ)
