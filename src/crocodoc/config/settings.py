"""Configuration management for the Crocodoc client."""

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from ..api.exceptions import ConfigurationError
from .schemas import DEFAULT_VIEW_URL, CrocodocConfig

logger = logging.getLogger(__name__)

ENV_OVERRIDES = {
    "CROCODOC_API_TOKEN": "token",
    "CROCODOC_PARAM_NAME": "param_name",
    "CROCODOC_BASE_URL": "base_url",
    "CROCODOC_VIEW_URL": "view_url",
    "CROCODOC_TIMEOUT": "timeout",
}


def _expand_env_vars(data: Any) -> Any:
    """Recursively expand ${VAR_NAME} references in configuration data."""
    if isinstance(data, dict):
        return {k: _expand_env_vars(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [_expand_env_vars(item) for item in data]
    elif isinstance(data, str):
        def replacer(match):
            var_name = match.group(1)
            value = os.getenv(var_name)
            if value is None:
                logger.warning(f"Environment variable ${{{var_name}}} not found")
                return match.group(0)
            return value

        return re.sub(r'\$\{([^}]+)\}', replacer, data)
    else:
        return data


def _read_config_data(config_path: Path | None) -> dict[str, Any]:
    """Read the raw configuration mapping from the YAML file, if any.

    Environment variable overrides are applied on top of the file values.
    """
    data: dict[str, Any] = {}
    if config_path and config_path.exists():
        with open(config_path) as f:
            loaded = yaml.safe_load(f) or {}

        if not isinstance(loaded, dict):
            raise ConfigurationError(
                f"Configuration file {config_path} must contain a mapping",
                details={"config_path": str(config_path)},
            )
        data = _expand_env_vars(loaded)

    for env_var, key in ENV_OVERRIDES.items():
        value = os.getenv(env_var)
        if value:
            data[key] = value
    return data


class Settings:
    """Loads the client configuration from a YAML file and the environment."""

    def __init__(
        self,
        config_path: Path | None = None,
        env_file: Path | None = None,
        overrides: dict[str, Any] | None = None,
    ):
        """Initialize settings.

        Args:
            config_path: Path to configuration file
            env_file: Path to .env file
            overrides: Values taking precedence over the file and the environment

        Raises:
            ConfigurationError: If the resulting configuration is invalid
        """
        if env_file and env_file.exists():
            load_dotenv(env_file)
        else:
            load_dotenv()

        self.config_path = config_path
        data = _read_config_data(config_path)
        data.update({k: v for k, v in (overrides or {}).items() if v is not None})

        try:
            self.config = CrocodocConfig(**data)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid Crocodoc configuration: {e}",
                details={"config_path": str(config_path) if config_path else None},
            ) from e

        logger.info(f"Settings initialized from {config_path or 'environment'}")

    def save(self, path: Path | None = None) -> None:
        """Save configuration to file.

        Args:
            path: Path to save configuration to
        """
        save_path = path or self.config_path
        if not save_path:
            raise ValueError("No path provided for saving configuration")

        save_path.parent.mkdir(parents=True, exist_ok=True)

        data = self.config.model_dump_for_file()
        # Never write the real token
        data["token"] = "YOUR_API_TOKEN_HERE"

        with open(save_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False)

        logger.info(f"Configuration saved to {save_path}")


def find_config_path(config_path: Path | None = None) -> Path | None:
    """Return config_path, or the first existing standard configuration file."""
    if config_path:
        return config_path

    standard_paths = [
        Path("crocodoc.yml"),
        Path("config/crocodoc.yml"),
        Path.home() / ".crocodoc" / "config.yml",
    ]
    for path in standard_paths:
        if path.exists():
            return path
    return None


def load_settings(
    config_path: Path | None = None, overrides: dict[str, Any] | None = None
) -> Settings:
    """Load settings from file or environment.

    Args:
        config_path: Optional path to configuration file
        overrides: Values taking precedence over the file and the environment

    Returns:
        Settings instance
    """
    return Settings(find_config_path(config_path), overrides=overrides)


def load_view_url(config_path: Path | None = None) -> str:
    """Return the viewer base URL from file or environment.

    Unlike :func:`load_settings` this does not need an API token, since
    viewer URLs are built without calling the API.
    """
    load_dotenv()
    data = _read_config_data(find_config_path(config_path))
    return str(data.get("view_url") or DEFAULT_VIEW_URL).rstrip("/")
