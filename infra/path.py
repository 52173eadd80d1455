# infra/path.py
from __future__ import annotations
import os
import sys
from pathlib import Path

APP_NAME = "BacklogPro"
DATA_DIR_ENV = "BACKLOG_PRO_HOME"
DB_FILENAME = "backlog_pro.db"


def _platform_base() -> Path:
    if sys.platform.startswith("win"):
        return Path(os.getenv("APPDATA", Path.home() / "AppData" / "Roaming"))
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"
    return Path(os.getenv("XDG_DATA_HOME", Path.home() / ".local" / "share"))


def user_data_dir() -> Path:
    """
    Per-user directory holding the ledger database, logs and reports.

    ``$BACKLOG_PRO_HOME`` wins when set; otherwise:
        Windows: %APPDATA%\\BacklogPro
        macOS:   ~/Library/Application Support/BacklogPro
        Linux:   $XDG_DATA_HOME/BacklogPro (~/.local/share/BacklogPro)
    """
    override = (os.getenv(DATA_DIR_ENV) or "").strip()
    path = Path(override).expanduser() if override else _platform_base() / APP_NAME
    try:
        path.mkdir(parents=True, exist_ok=True)
        return path
    except OSError:
        # read-only profile: fall back to a dot directory in home
        fallback = Path.home() / f".{APP_NAME.lower()}"
        fallback.mkdir(parents=True, exist_ok=True)
        return fallback


def default_db_path() -> Path:
    return user_data_dir() / DB_FILENAME


def default_log_dir() -> Path:
    return user_data_dir() / "logs"


def default_reports_dir() -> Path:
    path = user_data_dir() / "reports"
    path.mkdir(parents=True, exist_ok=True)
    return path
