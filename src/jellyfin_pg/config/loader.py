"""TOML loader for the provider configuration file."""

import os
import tomllib
from pathlib import Path

from jellyfin_pg.config.models import ProviderConfig

CONFIG_ENV_VAR = "JELLYFIN_PG_CONFIG"
DEFAULT_CONFIG_NAME = "jellyfin-pg.toml"


def default_config_path() -> Path:
    """Config path from ``$JELLYFIN_PG_CONFIG`` or ``./jellyfin-pg.toml``."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return Path.cwd() / DEFAULT_CONFIG_NAME


def load_provider_config(config_path: Path | None = None) -> ProviderConfig:
    """Load provider configuration from TOML file.

    Args:
        config_path: Path to the TOML file (default: ``default_config_path()``)

    Returns:
        ProviderConfig with the database section and host paths

    Raises:
        FileNotFoundError: If config file doesn't exist
        pydantic.ValidationError: If config content is invalid
    """
    if config_path is None:
        config_path = default_config_path()

    if not config_path.exists():
        raise FileNotFoundError(
            f"Provider config not found: {config_path}\n"
            f"Create {DEFAULT_CONFIG_NAME} with [paths] and [database] sections "
            f"or set {CONFIG_ENV_VAR}."
        )

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    return ProviderConfig.model_validate(data)
