"""Issuer settings loaded from environment variables and YAML config files."""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from appjwt.crypto.errors import ConfigurationError
from appjwt.crypto.types import MAX_LIFETIME_SECONDS, IssuerConfig

LOG_LEVEL_DEFAULT = "WARNING"

logger = logging.getLogger(__name__)


class IssuerSettings(BaseSettings):
    """Key location, issuer identity and token lifetime."""

    model_config = SettingsConfigDict(
        env_prefix="APPJWT_",
        extra="forbid",
        coerce_numbers_to_str=True,
    )

    private_key_file: Path | None = None
    issuer_id: str = ""
    lifetime_seconds: int = MAX_LIFETIME_SECONDS
    log_level: str = LOG_LEVEL_DEFAULT

    def require_private_key_file(self) -> Path:
        """Return the configured key path or fail if none was given."""
        if self.private_key_file is None:
            raise ConfigurationError(
                "no private key file configured "
                "(use --key-file or APPJWT_PRIVATE_KEY_FILE)"
            )
        return self.private_key_file

    def to_issuer_config(self) -> IssuerConfig:
        return IssuerConfig(
            issuer_id=self.issuer_id,
            lifetime_seconds=self.lifetime_seconds,
        )


def read_config_file(path: Path) -> dict[str, Any]:
    """Parse a YAML config file into a settings mapping."""
    try:
        with open(path, encoding="utf-8") as config_file:
            data = yaml.safe_load(config_file)
    except OSError as exc:
        raise ConfigurationError(f"could not read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"could not parse config file {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict) or not all(isinstance(k, str) for k in data):
        raise ConfigurationError(f"config file {path} must contain a mapping")
    logger.info("Using config file %s", path)
    return data


def load_settings(
    config_file: Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> IssuerSettings:
    """Resolve settings: overrides, then config file, then environment.

    ``None`` values in ``overrides`` are ignored so unset CLI flags fall
    through to the lower layers.
    """
    values: dict[str, Any] = {}
    if config_file is not None:
        values.update(read_config_file(config_file))
    if overrides:
        values.update({k: v for k, v in overrides.items() if v is not None})
    try:
        settings = IssuerSettings(**values)
    except ValidationError as exc:
        raise ConfigurationError(f"invalid settings: {exc}") from exc
    logger.debug(
        "Resolved settings issuer_id=%r lifetime_seconds=%d key_file=%s",
        settings.issuer_id,
        settings.lifetime_seconds,
        settings.private_key_file,
    )
    return settings
