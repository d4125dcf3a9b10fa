"""
Configuration management for the feed aggregator.

Uses Pydantic for validation and pydantic-settings for environment variable support.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class FetcherConfig(BaseSettings):
    """RSS/Atom fetcher configuration."""

    model_config = SettingsConfigDict(env_prefix="FETCHER_")

    # HTTP settings
    timeout_seconds: float = Field(default=15.0, gt=0, le=300, description="Per-feed request timeout")
    user_agent: str = Field(
        default="Feed-Aggregator/0.1.0 (+static news page builder)",
        description="User-Agent header"
    )

    # Follow redirects
    follow_redirects: bool = Field(default=True)
    max_redirects: int = Field(default=5, ge=0, le=20)

    # Concurrency
    max_workers: int = Field(default=8, ge=1, le=64, description="Maximum concurrent feed fetches")

    # Feed entry limits
    default_max_items: int = Field(
        default=10, ge=0, le=1000,
        description="Entries taken per feed when a source does not set maxItems"
    )


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(
        default="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        description="Log format"
    )

    # File logging
    file_enabled: bool = Field(default=False, description="Enable file logging")
    file_path: str = Field(default="logs/feed_aggregator.log", description="Log file path")
    rotation: str = Field(default="10 MB", description="Log rotation size")
    retention: str = Field(default="14 days", description="Log retention period")

    # Console logging
    console_enabled: bool = Field(default=True, description="Enable console logging")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]
        v = v.upper()
        if v not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v


class OutputConfig(BaseSettings):
    """Static page output configuration."""

    model_config = SettingsConfigDict(env_prefix="OUTPUT_")

    directory: str = Field(default="dist", description="Output directory")
    filename: str = Field(default="index.html", description="Output file name")

    page_title: str = Field(default="My News", description="Page heading")
    page_description: str = Field(
        default="A fast, free, static news aggregator.",
        description="Meta description"
    )
    footer_text: str = Field(
        default="Static build • No cookies • Links go to original publishers.",
        description="Footer line"
    )
    updated_format: str = Field(default="%Y-%m-%d %H:%M %Z", description="Format of the 'Updated' stamp")

    @field_validator("filename")
    @classmethod
    def validate_filename(cls, v: str) -> str:
        """Reject empty names and path separators."""
        v = v.strip()
        if not v or "/" in v or "\\" in v:
            raise ValueError(f"Invalid output filename: {v!r}")
        return v

    @property
    def path(self) -> Path:
        """Full path of the rendered page."""
        return Path(self.directory) / self.filename


class Config(BaseSettings):
    """Main application configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="AGG_",
        case_sensitive=False,
    )

    # Application
    version: str = Field(default="0.1.0", description="Application version")
    app_name: str = Field(default="Feed Aggregator", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    # Source registry
    sources_file: str = Field(default="feeds.json", description="Feed source declaration file")

    # Sub-configurations
    fetcher: FetcherConfig = Field(default_factory=FetcherConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


# Global configuration instance
_config: Optional[Config] = None

_NESTED_CONFIGS = {
    "fetcher": FetcherConfig,
    "logging": LoggingConfig,
    "output": OutputConfig,
}


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def set_config(config: Config) -> None:
    """Replace the global configuration instance."""
    global _config
    _config = config


def load_config_from_yaml(yaml_path: str) -> Config:
    """Load configuration from a YAML file.

    Note: Values loaded from YAML take precedence over environment variables.

    Args:
        yaml_path: Path to the YAML configuration file.

    Returns:
        Config instance loaded from the file.
    """
    import yaml

    yaml_file = Path(yaml_path)
    if not yaml_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {yaml_path}")

    with yaml_file.open("r", encoding="utf-8") as f:
        config_dict = yaml.safe_load(f) or {}

    main_config = {}
    nested_configs = {}

    for key, value in config_dict.items():
        if key in _NESTED_CONFIGS:
            nested_configs[key] = value
        else:
            main_config[key] = value

    # Nested configs are built separately so their env prefixes still apply
    for key, config_class in _NESTED_CONFIGS.items():
        if key in nested_configs:
            nested_configs[key] = config_class(**(nested_configs[key] or {}))
        else:
            nested_configs[key] = config_class()

    main_config.update(nested_configs)
    return Config(**main_config)


def reload_config() -> Config:
    """Reload configuration from environment and YAML files."""
    global _config
    _config = None

    config_yaml = Path("config/config.yaml")
    if config_yaml.exists():
        _config = load_config_from_yaml(str(config_yaml))
    else:
        _config = Config()

    return _config
