"""TOML configuration loader for the tracker backend."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        tomllib = None  # type: ignore[assignment]

DEFAULT_DB_PATH = "~/.local/share/family-tracker/tracker.db"
DB_PATH_ENV = "FAMILY_TRACKER_DB"


@dataclass
class DatabaseConfig:
    path: str = DEFAULT_DB_PATH
    seed_defaults: bool = True

    def resolved_path(self) -> Path:
        return Path(self.path).expanduser()


@dataclass
class LoggingConfig:
    level: str = "WARNING"


@dataclass
class TrackerConfig:
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | Path | None = None) -> TrackerConfig:
    """Load configuration from a TOML file.

    Falls back to defaults if no path is given or the file doesn't exist.
    The database path can come from the FAMILY_TRACKER_DB environment
    variable when the file leaves it unset.
    """
    raw: dict = {}

    if path is not None:
        p = Path(path)
        if p.exists():
            if tomllib is None:
                raise ImportError(
                    "tomli is required on Python < 3.11: pip install tomli"
                )
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    db = raw.get("database", {})
    log = raw.get("logging", {})

    # Resolve database path: config file → environment variable → default
    db_path = db.get("path", "") or os.environ.get(DB_PATH_ENV, "") or DEFAULT_DB_PATH

    return TrackerConfig(
        database=DatabaseConfig(
            path=db_path,
            seed_defaults=db.get("seed_defaults", True),
        ),
        logging=LoggingConfig(
            level=str(log.get("level", "WARNING")).upper(),
        ),
    )
