"""Configuration management for a11ydriver.

Loads settings from a YAML configuration file with environment variable
overrides. Supports .env files.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/a11ydriver.yaml")


class CaptureConfig(BaseModel):
    timeout: float = Field(default=5.0, gt=0, description="Max seconds a capture window stays open")
    interval: float = Field(default=0.1, gt=0, description="Seconds between log source polls")
    start_timeout: float = Field(default=10.0, gt=0)
    start_interval: float = Field(default=0.25, gt=0)


class VoiceOverConfig(BaseModel):
    osascript: str = Field(default="osascript")
    script_timeout: float = Field(default=10.0, gt=0)
    starter_path: str = Field(
        default="/System/Library/CoreServices/VoiceOver.app/Contents/MacOS/VoiceOverStarter",
    )
    configure_defaults: bool = Field(
        default=True, description="Apply automation-friendly VoiceOver preferences on start"
    )


class NVDAConfig(BaseModel):
    executable: str = Field(default=r"C:\Program Files (x86)\NVDA\nvda.exe")
    config_path: str | None = Field(
        default=None, description="NVDA configuration directory passed with -c"
    )
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=6837, ge=1, le=65535)
    channel: str = Field(default="a11ydriver")
    connect_timeout: float = Field(default=5.0, gt=0)
    use_tls: bool = Field(default=True)
    configure_ini: bool = Field(
        default=True, description="Apply automation-friendly nvda.ini settings on start"
    )


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")
    format: str = Field(
        default="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    file: str | None = Field(default=None)


class Settings(BaseSettings):
    """Root configuration for a11ydriver.

    Loads from YAML file and supports environment variable overrides.
    Reads .env files automatically.
    """

    model_config = {
        "env_prefix": "A11YDRIVER_",
        "env_nested_delimiter": "__",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    capture: CaptureConfig = Field(default_factory=CaptureConfig)
    voiceover: VoiceOverConfig = Field(default_factory=VoiceOverConfig)
    nvda: NVDAConfig = Field(default_factory=NVDAConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_settings(config_path: Path | str | None = None) -> Settings:
    """Load settings from YAML + .env + environment variables.

    Priority: env vars > .env file > YAML file > defaults
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    yaml_data = {}
    if path.exists():
        with open(path) as f:
            yaml_data = yaml.safe_load(f) or {}
        logger.info("Loaded configuration from %s", path)
    else:
        logger.warning("Config file %s not found, using defaults + env vars", path)

    _apply_env_overrides(yaml_data)

    return Settings(**yaml_data)


def _apply_env_overrides(yaml_data: dict) -> None:
    """Apply environment variable overrides for non-prefixed vars."""
    nvda_path = os.environ.get("NVDA_PATH", "")
    nvda_config = os.environ.get("NVDA_CONFIG_PATH", "")

    if "nvda" not in yaml_data:
        yaml_data["nvda"] = {}

    if nvda_path and not yaml_data["nvda"].get("executable"):
        yaml_data["nvda"]["executable"] = nvda_path

    if nvda_config and not yaml_data["nvda"].get("config_path"):
        yaml_data["nvda"]["config_path"] = nvda_config
