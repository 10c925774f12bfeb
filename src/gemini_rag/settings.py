"""
Settings for gemini-rag-kb.

Pydantic model validating configuration gathered from an optional YAML file and
environment variables (environment wins).

Environment variables:
    GOOGLE_API_KEY      Gemini API key (GEMINI_API_KEY accepted as fallback)
    STORE_DISPLAY_NAME  Display name of the store the actions operate on
    GEMINI_MODEL        Model used for queries
    LOG_LEVEL           error | warn | warning | info | debug
    POLL_INTERVAL       Seconds between upload operation polls
    DEFAULT_PAGE_SIZE   Page size for list_stores

YAML Configuration:
    ```yaml
    gemini_rag:
      store_display_name: team-docs
      model: gemini-2.5-flash
      poll_interval: 2.0
    ```
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import ConfigurationError

LOG_LEVELS = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}

# setting name -> environment variables, first match wins
ENV_VARS = {
    "api_key": ("GOOGLE_API_KEY", "GEMINI_API_KEY"),
    "store_display_name": ("STORE_DISPLAY_NAME",),
    "model": ("GEMINI_MODEL",),
    "log_level": ("LOG_LEVEL",),
    "poll_interval": ("POLL_INTERVAL",),
    "default_page_size": ("DEFAULT_PAGE_SIZE",),
}


class RagSettings(BaseModel):
    """
    Validated runtime settings.

    Attributes:
        api_key: Gemini API key
        store_display_name: Store targeted by the actions and CLI
        model: Default query model
        log_level: Logging level name
        poll_interval: Seconds between upload operation polls
        default_page_size: Page size for list_stores when none is given
    """

    api_key: str = Field("", description="Gemini API key")
    store_display_name: str = Field("default", min_length=1, description="Store display name")
    model: str = Field("gemini-2.5-pro", min_length=1, description="Query model")
    log_level: str = Field("info", description="Log level name")
    poll_interval: float = Field(5.0, gt=0, description="Seconds between polls")
    default_page_size: int = Field(20, ge=1, le=100, description="list_stores page size")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.lower()
        if level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}")
        return level

    @property
    def logging_level(self) -> int:
        return LOG_LEVELS[self.log_level]

    def require_api_key(self) -> None:
        if not self.api_key:
            raise ConfigurationError("GOOGLE_API_KEY environment variable is required")


def _read_config_file(config_path: Union[str, Path]) -> Dict[str, Any]:
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text()) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in config file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")
    section = data.get("gemini_rag", data)
    if not isinstance(section, dict):
        raise ConfigurationError(f"'gemini_rag' section in {path} must be a mapping")
    return dict(section)


def _read_environment(environ: Mapping[str, str]) -> Dict[str, str]:
    values = {}
    for setting, names in ENV_VARS.items():
        for name in names:
            if environ.get(name):
                values[setting] = environ[name]
                break
    return values


def load_settings(
    config_path: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
    **overrides: Any,
) -> RagSettings:
    """
    Load settings from YAML, then environment, then explicit overrides.

    Args:
        config_path: Optional YAML file
        environ: Environment mapping (defaults to os.environ)
        **overrides: Values taking precedence over everything else (None ignored)

    Returns:
        Validated RagSettings

    Raises:
        ConfigurationError: If the file is unreadable or a value is invalid
    """
    values: Dict[str, Any] = {}
    if config_path:
        values.update(_read_config_file(config_path))
    values.update(_read_environment(os.environ if environ is None else environ))
    values.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return RagSettings(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Configuration validation failed: {e}") from e
