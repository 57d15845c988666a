"""
Application configuration management using Pydantic Settings
"""

import re
import sys
import os
import json
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from plantree.core.constants import (
    APP_NAME,
    CONFIG_FILE,
    DEFAULT_INDENT_CHAR,
    DEFAULT_INDENT_WIDTH,
    DEFAULT_TAB_SIZE,
    DEFAULT_SKIP_PATTERNS,
    DEFAULT_EXPLAIN_PREFIX,
    DEFAULT_PLAN_COLUMN,
    LogLevel,
)
from plantree.core.exceptions import ConfigurationError


def get_app_dir() -> Path:
    """
    Get application data directory.
    PLANTREE_APP_DIR if set, otherwise the OS-specific user data folder
    """
    override = os.environ.get('PLANTREE_APP_DIR')
    if override:
        return Path(override)

    if sys.platform == 'win32':
        base = Path(os.environ.get('LOCALAPPDATA', Path.home() / 'AppData' / 'Local'))
    elif sys.platform == 'darwin':
        base = Path.home() / 'Library' / 'Application Support'
    else:
        base = Path.home() / '.config'

    return base / APP_NAME.replace(' ', '')


def ensure_app_dirs(app_dir: Optional[Path] = None) -> Path:
    """Create necessary application directories"""
    app_dir = app_dir or get_app_dir()

    (app_dir / 'config').mkdir(parents=True, exist_ok=True)
    (app_dir / 'logs').mkdir(parents=True, exist_ok=True)

    return app_dir


class PlanParserSettings(BaseModel):
    """How raw plan text lines map to depth and label"""

    indent_char: str = Field(default=DEFAULT_INDENT_CHAR, min_length=1, max_length=1)
    indent_width: int = Field(default=DEFAULT_INDENT_WIDTH, ge=1, le=16)
    tab_size: int = Field(default=DEFAULT_TAB_SIZE, ge=1, le=16)
    skip_patterns: list[str] = Field(default_factory=lambda: list(DEFAULT_SKIP_PATTERNS))

    @field_validator('skip_patterns')
    @classmethod
    def validate_skip_patterns(cls, v: list[str]) -> list[str]:
        for pattern in v:
            try:
                re.compile(pattern)
            except re.error as e:
                raise ValueError(f"Invalid skip pattern {pattern!r}: {e}")
        return v


class DatabaseSettings(BaseModel):
    """Plan text retrieval settings"""

    explain_prefix: str = Field(default=DEFAULT_EXPLAIN_PREFIX)
    plan_column: int = Field(default=DEFAULT_PLAN_COLUMN, ge=0)


class LoggingSettings(BaseModel):
    """Logging settings"""

    level: str = Field(default=LogLevel.INFO.value)
    file_enabled: bool = Field(default=True)
    retention_days: int = Field(default=7, ge=1, le=30)

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid_levels = [level.value for level in LogLevel]
        v = v.upper()
        if v not in valid_levels:
            v = LogLevel.INFO.value
        return v


class Settings(BaseSettings):
    """Main application settings"""

    model_config = SettingsConfigDict(
        env_prefix='PLANTREE_',
        env_nested_delimiter='__',
        extra='ignore',
    )

    # Sub-settings
    parser: PlanParserSettings = Field(default_factory=PlanParserSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    # App paths
    app_dir: Path = Field(default_factory=get_app_dir)

    @property
    def config_dir(self) -> Path:
        return self.app_dir / 'config'

    @property
    def logs_dir(self) -> Path:
        return self.app_dir / 'logs'

    @property
    def settings_file(self) -> Path:
        return self.config_dir / CONFIG_FILE

    def save(self) -> None:
        """Save settings to JSON file"""
        ensure_app_dirs(self.app_dir)

        # Convert to dict, excluding computed properties
        data = self.model_dump(
            exclude={'app_dir'},
            mode='json'
        )

        with open(self.settings_file, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, default=str)

    @classmethod
    def load(cls, app_dir: Optional[Path] = None) -> 'Settings':
        """Load settings from JSON file"""
        app_dir = ensure_app_dirs(app_dir)
        settings_file = app_dir / 'config' / CONFIG_FILE

        if not settings_file.exists():
            return cls(app_dir=app_dir)

        try:
            with open(settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(
                f"Cannot read settings file: {e}",
                {"path": str(settings_file)}
            ) from e

        try:
            return cls(app_dir=app_dir, **data)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid settings: {e.error_count()} error(s)",
                {"path": str(settings_file), "errors": e.errors(include_url=False)}
            ) from e


# Global settings instance (cached)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get global settings instance (singleton)"""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reset_settings() -> Settings:
    """Reset settings to defaults"""
    global _settings
    app_dir = _settings.app_dir if _settings is not None else None
    _settings = Settings(app_dir=app_dir) if app_dir else Settings()
    _settings.save()
    return _settings


def update_settings(**kwargs) -> Settings:
    """Update settings with new values"""
    global _settings
    settings = get_settings()

    # Update nested settings
    for key, value in kwargs.items():
        if hasattr(settings, key):
            if isinstance(value, dict) and hasattr(getattr(settings, key), 'model_copy'):
                # Re-validate so bad values never reach the parser
                nested = getattr(settings, key)
                updated_nested = type(nested).model_validate({**nested.model_dump(), **value})
                setattr(settings, key, updated_nested)
            else:
                setattr(settings, key, value)

    settings.save()
    _settings = settings
    return settings
