"""
File provider settings - Configuration management using Pydantic Settings.

Loads configuration from environment variables and .env files.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class FileProviderSettings(BaseSettings):
    """
    File provider configuration settings.

    Settings are loaded from:
    1. Environment variables (highest priority)
    2. .env file in current directory
    3. Default values (lowest priority)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="FP_",  # All file provider env vars must start with FP_
    )

    # Provider identity
    namespace: str = Field(
        default="example",
        description="Package namespace used in resource tokens (env: FP_NAMESPACE)",
    )

    plugin_name: str = Field(
        default="file",
        description="Provider plugin name (env: FP_PLUGIN_NAME)",
    )

    version: str = Field(
        default="0.1.0",
        description="Provider plugin version (env: FP_VERSION)",
    )

    # File I/O
    encoding: str = Field(
        default="utf-8",
        description="Text encoding used to write and read managed files (env: FP_ENCODING)",
    )

    # Local state store used by the CLI
    state_file: Path = Field(
        default=Path(".file-provider") / "state.pkl",
        description="Path of the local state file (env: FP_STATE_FILE)",
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR) (env: FP_LOG_LEVEL)",
    )


# Global settings instance
_settings: FileProviderSettings | None = None


def get_settings() -> FileProviderSettings:
    """
    Get the global settings instance.

    Creates the settings instance on first call, then returns cached instance.

    Returns:
        FileProviderSettings instance
    """
    global _settings
    if _settings is None:
        _settings = FileProviderSettings()
    return _settings


def reload_settings() -> FileProviderSettings:
    """
    Reload settings from environment/files.

    Useful for testing or when .env file changes.

    Returns:
        Fresh FileProviderSettings instance
    """
    global _settings
    _settings = FileProviderSettings()
    return _settings
