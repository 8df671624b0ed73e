"""
dapp Settings Configuration

Settings for the library itself, managed with Pydantic settings.
Values come from DAPP_* environment variables (and an optional .env file);
Settings.from_file builds them from any registered config format instead.
"""

from pathlib import Path
from typing import Any, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("json", "console")
LOG_ROTATIONS = ("minutely", "hourly", "daily", "never")


class LogSettings(BaseSettings):
    """Logging configuration: level, render format, file output and rotation."""

    model_config = SettingsConfigDict(env_prefix="DAPP_LOG_", extra="ignore")

    level: str = Field(default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)")
    format: str = Field(default="console", description="Render format: 'json' or 'console'")
    file: Optional[str] = Field(default=None, description="Log file path; defaults to <app>.log in the XDG state dir")
    rotation: str = Field(default="daily", description="Rolling appender period: minutely, hourly, daily or never")
    backup_count: int = Field(default=7, ge=0, le=1000, description="Rotated files to keep (0 keeps all)")
    console: bool = Field(default=True, description="Emit log records to stderr")
    file_enabled: bool = Field(default=True, description="Emit log records to the log file")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        u = v.upper()
        if u not in LOG_LEVELS:
            raise ValueError(f"level must be one of {LOG_LEVELS}")
        return u

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        if v.lower() not in LOG_FORMATS:
            raise ValueError(f"format must be one of {LOG_FORMATS}")
        return v.lower()

    @field_validator("rotation")
    @classmethod
    def validate_rotation(cls, v: str) -> str:
        if v.lower() not in LOG_ROTATIONS:
            raise ValueError(f"rotation must be one of {LOG_ROTATIONS}")
        return v.lower()


class Settings(BaseSettings):
    """
    Root settings class. Loads from DAPP_* env vars (nested with ``__``, e.g.
    DAPP_LOG__LEVEL) and an optional .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="DAPP_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="dapp", description="Application name used as the XDG directory prefix")
    log: LogSettings = Field(default_factory=LogSettings, description="Logging config")

    @classmethod
    def from_file(cls, path: str | Path) -> "Settings":
        """
        Create Settings from a config file in any registered format (chosen by
        suffix). Values in the file win; environment variables fill the rest.
        """
        from dapp.config.formats import format_for_path

        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        data = format_for_path(path).loads(path.read_text(encoding="utf-8"))
        # Env (flat DAPP_LOG_* and nested DAPP_LOG__*) first, then the file on top, field by field.
        values: dict[str, Any] = cls().model_dump()
        if isinstance(data.get("app_name"), str):
            values["app_name"] = data["app_name"]
        if isinstance(data.get("log"), dict):
            values["log"] = {**values["log"], **data["log"]}
        return cls.model_validate(values)


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Force reload of settings from environment."""
    global _settings
    _settings = Settings()
    return _settings
