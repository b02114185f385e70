"""Configuration management for sendgrid_kit."""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError
from .transport import (
    DEFAULT_USER_AGENT,
    LISTING_TIMEOUT,
    MAX_RESPONSE_BYTES,
    METADATA_TIMEOUT,
    UPLOAD_TIMEOUT,
    Timeouts,
)


class TimeoutConfig(BaseModel):
    """Per-call timeouts in seconds."""

    metadata: float = Field(METADATA_TIMEOUT, gt=0, description="Send, validate, upload slot and poll calls")
    listing: float = Field(LISTING_TIMEOUT, gt=0, description="Job listing calls")
    upload: float = Field(UPLOAD_TIMEOUT, gt=0, description="File uploads to pre-signed URLs")

    def to_timeouts(self) -> Timeouts:
        return Timeouts(metadata=self.metadata, listing=self.listing, upload=self.upload)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field("INFO", description="Logging level")
    format: str = Field(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format string"
    )
    file_path: Optional[str] = Field(None, description="Path to log file")
    max_file_size: int = Field(10 * 1024 * 1024, description="Maximum log file size in bytes")
    backup_count: int = Field(5, description="Number of backup log files to keep")
    console_output: bool = Field(True, description="Enable console logging")


class SendGridSettings(BaseSettings):
    """Main client settings.

    Environment variables use the ``SENDGRID_`` prefix and ``__`` for nested
    values, e.g. ``SENDGRID_TIMEOUTS__UPLOAD=300``.
    """

    api_key: Optional[str] = Field(None, description="Mail send API key")
    validation_api_key: Optional[str] = Field(None, description="Email validation API key")
    for_eu: bool = Field(False, description="Use the EU regional endpoint")
    user_agent: str = Field(DEFAULT_USER_AGENT, description="User-Agent sent with API calls")
    max_response_bytes: int = Field(MAX_RESPONSE_BYTES, gt=0, description="Largest response body read")
    debug: bool = Field(False, description="Enable debug mode")

    timeouts: TimeoutConfig = Field(default_factory=TimeoutConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_prefix="SENDGRID_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # Environment variables override values read from a config file.
        return env_settings, init_settings, dotenv_settings, file_secret_settings


def _load_config_file(config_file: Path) -> Dict[str, Any]:
    """Load configuration from YAML or JSON file."""
    if not config_file.exists():
        return {}

    with open(config_file, 'r') as f:
        if config_file.suffix.lower() in ['.yaml', '.yml']:
            data = yaml.safe_load(f) or {}
        elif config_file.suffix.lower() == '.json':
            data = json.load(f)
        else:
            raise ConfigurationError(f"Unsupported config file format: {config_file.suffix}")

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {config_file} must contain a mapping")
    return data.get("sendgrid", data)


@lru_cache()
def load_settings(
    config_dir: Optional[Path] = None,
    env_file: Optional[str] = None,
    config_file: Optional[str] = None
) -> SendGridSettings:
    """
    Load client settings from multiple sources.

    Sources are loaded in order of precedence (later sources override earlier):
    1. Default values
    2. Configuration file (YAML/JSON)
    3. Environment file (.env)
    4. Environment variables

    Args:
        config_dir: Directory containing config files (default: current directory)
        env_file: Path to environment file (default: .env in config_dir)
        config_file: Path to configuration file (default: config.yaml in config_dir)

    Returns:
        Loaded settings instance

    Raises:
        ConfigurationError: If a config source cannot be read or is invalid
    """
    if config_dir is None:
        config_dir = Path.cwd()

    # Default paths
    if env_file is None:
        env_file = config_dir / ".env"
    else:
        env_file = Path(env_file)

    if config_file is None:
        config_file = config_dir / "config.yaml"
    else:
        config_file = Path(config_file)

    # Values from .env land in os.environ without overriding real variables
    if env_file.exists():
        load_dotenv(env_file, override=False)

    try:
        file_config = _load_config_file(config_file)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Failed to read {config_file}: {e}", cause=e) from e

    try:
        return SendGridSettings(**file_config)
    except ValueError as e:
        raise ConfigurationError(f"Failed to load configuration: {e}", cause=e) from e
