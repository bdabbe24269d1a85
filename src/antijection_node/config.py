"""Configuration settings for antijection-node using pydantic-settings."""

import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import Field, SecretStr, field_validator
from pydantic_core import ValidationError
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from antijection_node.credentials.base import DEFAULT_BASE_URL
from antijection_node.exceptions import ConfigError
from antijection_node.models import DEFAULT_DETECTION_METHOD, DetectionMethod

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Settings source that loads configuration from a YAML file.

    Looks for config file in the following order:
    1. ANTIJECTION_CONFIG_FILE environment variable
    2. ./antijection.yaml (current directory)
    3. $XDG_CONFIG_HOME/antijection-node/config.yaml (defaults to ~/.config)
    """

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Get field value from YAML config."""
        yaml_data = self._load_yaml_config()
        field_value = yaml_data.get(field_name)
        return field_value, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return all settings from YAML config."""
        return self._load_yaml_config()

    def _load_yaml_config(self) -> dict[str, Any]:
        if not hasattr(self, "_yaml_data"):
            self._yaml_data = self._read_yaml_file()
        return self._yaml_data

    def _read_yaml_file(self) -> dict[str, Any]:
        """Read YAML config from the first existing candidate path."""
        xdg_config = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
        config_paths = [
            os.environ.get("ANTIJECTION_CONFIG_FILE"),
            Path.cwd() / "antijection.yaml",
            Path(xdg_config) / "antijection-node" / "config.yaml",
        ]

        for path in config_paths:
            if not path:
                continue
            path_obj = Path(path)
            if not path_obj.exists():
                continue
            try:
                with open(path_obj) as f:
                    data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                mark = getattr(e, "problem_mark", None)
                problem = getattr(e, "problem", None) or str(e)
                raise ConfigError(
                    f"Invalid YAML syntax: {problem}",
                    file_path=str(path_obj),
                    line=mark.line + 1 if mark else None,
                    col=mark.column + 1 if mark else None,
                ) from e
            except PermissionError as e:
                raise ConfigError(
                    "Cannot read config file: permission denied",
                    file_path=str(path_obj),
                ) from e
            except OSError as e:
                raise ConfigError(f"Cannot read config file: {e}", file_path=str(path_obj)) from e

            if data is None:
                return {}
            if not isinstance(data, dict):
                raise ConfigError("Top level of config file must be a mapping", file_path=str(path_obj))
            return data

        return {}


class Settings(BaseSettings):
    """Settings for running the node outside of an automation host.

    Values come from ANTIJECTION_* environment variables or a YAML file:
        api_key: "ak_live_..."
        base_url: "https://api.antijection.com"
        detection_method: "SAFETY_GUARD"
        continue_on_fail: true
    """

    model_config = SettingsConfigDict(env_prefix="ANTIJECTION_")

    api_key: SecretStr | None = None
    base_url: str = DEFAULT_BASE_URL
    detection_method: DetectionMethod = DEFAULT_DETECTION_METHOD
    continue_on_fail: bool = False
    log_level: LogLevel = "WARNING"

    @field_validator("base_url")
    @classmethod
    def _validate_base_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to include YAML config."""
        return (
            init_settings,
            env_settings,
            YamlConfigSettingsSource(settings_cls),
            dotenv_settings,
            file_secret_settings,
        )


def _parse_validation_error(error: ValidationError) -> str:
    """Convert a pydantic ValidationError to a one-line message."""
    errors = error.errors()
    if not errors:
        return "Unknown validation error"

    err = errors[0]
    loc = err.get("loc", ())
    if err.get("type") == "missing" and loc:
        return f"Missing required field '{loc[-1]}'"
    if loc:
        field_name = ".".join(str(part) for part in loc)
        return f"Invalid value for '{field_name}': {err.get('msg', '')}"
    return str(error)


def get_settings_eager() -> Settings:
    """Load settings, failing fast with a readable error.

    Raises:
        ConfigError: If the configuration file or a value is invalid.
    """
    try:
        return Settings()
    except ValidationError as e:
        raise ConfigError(_parse_validation_error(e)) from e
