"""Configuration loader for the content localization pipeline."""

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field


class AppInfo(BaseModel):
    """Application metadata."""

    name: str = "Content L10n"
    version: str = "1.0.0"


class SourceConfig(BaseModel):
    """Extraction-side configuration."""

    locale: str = "en-US"
    project: str = "contentful"
    resource_format: str = "MNFv1"
    content_types: list[str] = Field(default_factory=list)  # empty = all types
    dnt_tags: list[str] = Field(default_factory=list)
    component_attributes: list[str] = Field(
        default_factory=lambda: ["title", "placeholder"]
    )
    component_id_key: str = "fieldName"


class TargetConfig(BaseModel):
    """Reinsertion-side configuration."""

    locale_map: dict[str, str] = Field(default_factory=dict)
    clear_stale_translations: bool = False


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class AppConfig(BaseModel):
    """Root application configuration."""

    app: AppInfo = Field(default_factory=AppInfo)
    source: SourceConfig = Field(default_factory=SourceConfig)
    target: TargetConfig = Field(default_factory=TargetConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    # Tokens loaded from environment
    access_token: str | None = None
    management_token: str | None = None


def load_config(config_path: str | Path = "config.yaml") -> AppConfig:
    """Load configuration from YAML file and environment variables.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        Fully populated AppConfig instance.
    """
    load_dotenv()

    yaml_data: dict = {}
    config_file = Path(config_path)
    if config_file.exists():
        with open(config_file) as f:
            yaml_data = yaml.safe_load(f) or {}

    config = AppConfig(**yaml_data)

    config.access_token = os.getenv("CONTENTFUL_ACCESS_TOKEN")
    config.management_token = os.getenv("CONTENTFUL_MANAGEMENT_TOKEN")

    log_level = os.getenv("L10N_LOG_LEVEL")
    if log_level:
        config.logging.level = log_level.upper()

    return config
