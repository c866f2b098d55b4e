from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


_APP_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_STORAGE_KEY = "pro_tasks"


def env_str(name: str, default: str, *, strip: bool = True) -> str:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip() if strip else value


def env_optional_str(name: str, default: Optional[str] = None, *, strip: bool = True) -> Optional[str]:
    value = os.environ.get(name)
    if value is None:
        return default
    value = value.strip() if strip else value
    return value or default


def env_log_level(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    raw = raw.strip()
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw.upper())
    return level if isinstance(level, int) else default


def default_database_url() -> str:
    data_dir = _APP_ROOT / "data"
    data_dir.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{(data_dir / 'billminder.db').as_posix()}"


@dataclass(frozen=True)
class AppConfig:
    """Runtime configuration for the Billminder app.

    Storage:
    - BILLMINDER_DATABASE_URL: storage backend (preferred)
    - DATABASE_URL: fallback backend URL
    - If neither is set, defaults to local SQLite at data/billminder.db
    - BILLMINDER_STORAGE_KEY: key holding the task collection (default: pro_tasks)

    Logging:
    - BILLMINDER_LOG_LEVEL: console level name or number (default: INFO)
    - BILLMINDER_LOG_DIR: when set, full logs also go to <dir>/billminder.log

    UI:
    - BILLMINDER_PAGE_TITLE (default: Billminder)
    """

    database_url: str
    storage_key: str
    log_level: int
    log_dir: Optional[str]
    page_title: str

    @classmethod
    def from_env(cls) -> "AppConfig":
        db_url = (
            os.environ.get("BILLMINDER_DATABASE_URL")
            or os.environ.get("DATABASE_URL")
            or ""
        ).strip()
        if not db_url:
            db_url = default_database_url()

        return cls(
            database_url=db_url,
            storage_key=env_str("BILLMINDER_STORAGE_KEY", DEFAULT_STORAGE_KEY) or DEFAULT_STORAGE_KEY,
            log_level=env_log_level("BILLMINDER_LOG_LEVEL", logging.INFO),
            log_dir=env_optional_str("BILLMINDER_LOG_DIR"),
            page_title=env_str("BILLMINDER_PAGE_TITLE", "Billminder") or "Billminder",
        )
