"""Tests for settings."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from plantree.core import config
from plantree.core.config import (
    LoggingSettings,
    PlanParserSettings,
    Settings,
    get_settings,
    reset_settings,
    update_settings,
)
from plantree.core.exceptions import ConfigurationError


def test_defaults_match_altibase_plan_format() -> None:
    """It should default to one space per level with dashed rulers skipped."""

    settings = Settings()

    assert settings.parser.indent_char == " "
    assert settings.parser.indent_width == 1
    assert r"^-{3,}$" in settings.parser.skip_patterns
    assert settings.database.plan_column == 0


def test_app_dir_follows_environment(isolated_settings: Path) -> None:
    """It should place settings under PLANTREE_APP_DIR."""

    settings = Settings()

    assert settings.app_dir == isolated_settings
    assert settings.settings_file == isolated_settings / "config" / "settings.json"


def test_nested_environment_override(monkeypatch: pytest.MonkeyPatch) -> None:
    """It should read nested values from PLANTREE_<SECTION>__<KEY>."""

    monkeypatch.setenv("PLANTREE_PARSER__INDENT_WIDTH", "4")
    monkeypatch.setenv("PLANTREE_LOGGING__LEVEL", "debug")

    settings = Settings()

    assert settings.parser.indent_width == 4
    assert settings.logging.level == "DEBUG"


def test_invalid_skip_pattern_is_rejected() -> None:
    """It should refuse skip patterns that are not valid regexes."""

    with pytest.raises(ValidationError):
        PlanParserSettings(skip_patterns=["("])


def test_indent_char_must_be_single_character() -> None:
    """It should refuse multi-character indent markers."""

    with pytest.raises(ValidationError):
        PlanParserSettings(indent_char="  ")


def test_unknown_log_level_falls_back_to_info() -> None:
    """It should normalise unknown log levels to INFO."""

    assert LoggingSettings(level="verbose").level == "INFO"


def test_save_and_load(isolated_settings: Path) -> None:
    """It should persist settings as JSON and read them back."""

    settings = Settings(parser=PlanParserSettings(indent_width=2))
    settings.save()

    loaded = Settings.load(isolated_settings)

    assert loaded.parser.indent_width == 2
    assert "app_dir" not in json.loads(settings.settings_file.read_text(encoding="utf-8"))


def test_load_without_file_returns_defaults(tmp_path: Path) -> None:
    """It should fall back to defaults when no settings file exists."""

    loaded = Settings.load(tmp_path / "fresh")

    assert loaded.parser.indent_width == 1
    assert (tmp_path / "fresh" / "config").is_dir()


def test_corrupt_settings_file_raises(isolated_settings: Path) -> None:
    """It should report an unreadable settings file as ConfigurationError."""

    (isolated_settings / "config").mkdir(parents=True)
    (isolated_settings / "config" / "settings.json").write_text("{not json", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        Settings.load(isolated_settings)


def test_invalid_settings_file_raises(isolated_settings: Path) -> None:
    """It should report invalid values in the settings file as ConfigurationError."""

    (isolated_settings / "config").mkdir(parents=True)
    (isolated_settings / "config" / "settings.json").write_text(
        json.dumps({"parser": {"indent_width": 0}}), encoding="utf-8"
    )

    with pytest.raises(ConfigurationError) as excinfo:
        Settings.load(isolated_settings)

    assert "errors" in excinfo.value.details


def test_get_settings_is_cached() -> None:
    """It should return the same settings object until reset."""

    assert get_settings() is get_settings()


def test_update_settings_validates_and_saves(isolated_settings: Path) -> None:
    """It should merge nested updates, validate them and write them to disk."""

    update_settings(parser={"indent_width": 3})

    assert get_settings().parser.indent_width == 3
    config._settings = None
    assert get_settings().parser.indent_width == 3

    with pytest.raises(ValidationError):
        update_settings(parser={"indent_width": 0})


def test_reset_settings(isolated_settings: Path) -> None:
    """It should restore defaults and persist them."""

    update_settings(parser={"indent_width": 3})

    settings = reset_settings()

    assert settings.parser.indent_width == 1
    assert settings.app_dir == isolated_settings
