"""
Configuration management for the Unity log reader.
"""
import logging
import os
from pathlib import Path
from typing import Any, Optional
import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

from .segmenter import SegmenterOptions


class SegmenterConfig(BaseModel):
    count: int = Field(default=3, ge=1)
    collapse: bool = True
    collapse_order: str = "sorted"  # "sorted" or "first_seen"

    def to_options(self, count: Optional[int] = None, collapse: Optional[bool] = None,
                   collapse_order: Optional[str] = None) -> SegmenterOptions:
        """Build engine options, letting explicit values override the configured ones."""
        return SegmenterOptions(
            summary_lines=self.count if count is None else count,
            collapse=self.collapse if collapse is None else collapse,
            collapse_order=collapse_order or self.collapse_order,
        )


class AppConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8002
    debug: bool = False


class ReportConfig(BaseModel):
    output_dir: str = "reports"
    title: str = "Unity Log Report"


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings(BaseSettings):
    """Application settings loaded from config.yaml and environment variables."""

    segmenter: SegmenterConfig = Field(default_factory=SegmenterConfig)
    app: AppConfig = Field(default_factory=AppConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    class Config:
        env_prefix = "UNITYLOG_"
        env_nested_delimiter = "__"
        extra = "ignore"  # Ignore extra fields in config


def load_config(config_path: Optional[Path] = None) -> Settings:
    """Load configuration from YAML file and environment variables."""
    if config_path is None:
        config_path = Path(os.getenv("UNITYLOG_CONFIG", Path(__file__).parent.parent / "config.yaml"))
    config_path = Path(config_path)

    # Load YAML config
    config_data = {}
    if config_path.exists():
        with open(config_path, 'r') as f:
            config_data = yaml.safe_load(f) or {}

    # Replace environment variable placeholders
    config_data = _replace_env_vars(config_data)

    return Settings(**config_data)


def _replace_env_vars(data: Any) -> Any:
    """Recursively replace ${ENV_VAR} placeholders with environment variables."""
    if isinstance(data, dict):
        return {k: _replace_env_vars(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [_replace_env_vars(item) for item in data]
    elif isinstance(data, str) and data.startswith("${") and data.endswith("}"):
        env_var = data[2:-1]
        return os.getenv(env_var, data)
    return data


def configure_logging(settings: Settings):
    """Set up root logging from the logging section."""
    logging.basicConfig(
        level=getattr(logging, settings.logging.level.upper(), logging.INFO),
        format=settings.logging.format,
    )


# Global settings instance
settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global settings
    if settings is None:
        settings = load_config()
    return settings


def reset_settings():
    """Drop the cached settings so the next get_settings() reloads them."""
    global settings
    settings = None
