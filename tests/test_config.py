"""Tests for tracker config loading."""

from pathlib import Path

from family_tracker.config import (
    DEFAULT_DB_PATH,
    DatabaseConfig,
    LoggingConfig,
    TrackerConfig,
    load_config,
)


def test_load_config_defaults(monkeypatch):
    """Loading with no path returns all defaults."""
    monkeypatch.delenv("FAMILY_TRACKER_DB", raising=False)
    config = load_config()
    assert isinstance(config, TrackerConfig)
    assert config.database.path == DEFAULT_DB_PATH
    assert config.database.seed_defaults is True
    assert config.logging.level == "WARNING"


def test_load_config_nonexistent_file(monkeypatch):
    """Loading a nonexistent file returns defaults."""
    monkeypatch.delenv("FAMILY_TRACKER_DB", raising=False)
    config = load_config("/nonexistent/path.toml")
    assert config.database.path == DEFAULT_DB_PATH


def test_load_config_from_toml(tmp_path):
    """Loading a valid TOML file populates config."""
    config_file = tmp_path / "config.toml"
    config_file.write_text(
        """
[database]
path = "/custom/path/tracker.db"
seed_defaults = false

[logging]
level = "debug"
"""
    )
    config = load_config(config_file)
    assert config.database.path == "/custom/path/tracker.db"
    assert config.database.seed_defaults is False
    assert config.logging.level == "DEBUG"


def test_env_supplies_db_path(monkeypatch):
    """FAMILY_TRACKER_DB is used when the file leaves the path unset."""
    monkeypatch.setenv("FAMILY_TRACKER_DB", "/env/tracker.db")
    config = load_config()
    assert config.database.path == "/env/tracker.db"


def test_config_file_takes_precedence(tmp_path, monkeypatch):
    """Config file values take precedence over env vars."""
    monkeypatch.setenv("FAMILY_TRACKER_DB", "/env/tracker.db")
    config_file = tmp_path / "config.toml"
    config_file.write_text('[database]\npath = "/file/tracker.db"\n')
    config = load_config(config_file)
    assert config.database.path == "/file/tracker.db"


def test_resolved_path_expands_home():
    db = DatabaseConfig(path="~/tracker.db")
    assert db.resolved_path() == Path.home() / "tracker.db"


def test_tracker_config_has_all_sections():
    config = TrackerConfig()
    assert isinstance(config.database, DatabaseConfig)
    assert isinstance(config.logging, LoggingConfig)
