from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from typing import Any

from loguru import logger

APP_DIR_NAME = "GolfTour"
DB_FILENAME = "golftour.db"
LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


def get_app_directory() -> Path:
    """Return the per-user application data directory.

    On Windows this points into the user's application data directory.
    """
    if os.name == "nt":
        base_dir = os.environ.get("APPDATA") or os.environ.get("LOCALAPPDATA")
        root = Path(base_dir) if base_dir else Path.home() / "AppData" / "Roaming"
    else:
        root = Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share"))
    app_dir = root / APP_DIR_NAME
    app_dir.mkdir(parents=True, exist_ok=True)
    return app_dir


def _get_app_settings_path() -> Path:
    return get_app_directory() / "settings.json"


def _read_settings() -> dict[str, object]:
    path = _get_app_settings_path()
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return {}
    if isinstance(data, dict):
        return data
    return {}


def _write_settings(data: dict[str, object]) -> None:
    path = _get_app_settings_path()
    path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")


def get_database_path() -> Path:
    env_path = os.environ.get("GOLFTOUR_DB_PATH")
    if env_path:
        return Path(env_path)
    configured = _read_settings().get("database_path")
    if configured:
        return Path(str(configured))
    return get_app_directory() / DB_FILENAME


def set_database_path(path: str | Path) -> None:
    settings = _read_settings()
    settings["database_path"] = str(path)
    _write_settings(settings)


def get_export_directory() -> Path:
    env_path = os.environ.get("GOLFTOUR_EXPORT_DIR")
    if env_path:
        return Path(env_path)
    configured = _read_settings().get("export_directory")
    if configured:
        return Path(str(configured))
    return get_app_directory() / "exports"


def set_export_directory(path: str | Path) -> None:
    settings = _read_settings()
    settings["export_directory"] = str(path)
    _write_settings(settings)


def configure_logging(level: str | None = None, sink: Any = None) -> None:
    """Replace loguru's default sink with one sink (stderr unless given) at the configured level."""
    resolved = (level or os.environ.get("GOLFTOUR_LOG_LEVEL") or "INFO").upper()
    logger.remove()
    logger.add(sink if sink is not None else sys.stderr, format=LOG_FORMAT, level=resolved)
