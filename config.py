from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

from appdirs import user_data_dir, user_log_dir
from dotenv import load_dotenv

APP_NAME = "lounge_desk"

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _default_database_url() -> str:
    data_dir = Path(user_data_dir(APP_NAME))
    return f"sqlite:///{data_dir / 'lounge.db'}"


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in _TRUE_VALUES


@dataclass
class Settings:
    database_url: str = field(default_factory=_default_database_url)
    log_dir: str = field(default_factory=lambda: user_log_dir(APP_NAME))
    log_level: str = "INFO"
    detailed_logging: bool = False
    seed_default_data: bool = True
    default_admin_password: str = "admin123"
    calendar_enabled: bool = False
    calendar_id: str = "primary"
    calendar_service_account_file: str = "credentials.json"
    calendar_timezone: str = "UTC"
    api_host: str = "127.0.0.1"
    api_port: int = 8000


@lru_cache()
def get_settings() -> Settings:
    dotenv_path = Path(__file__).resolve().parent / ".env"
    load_dotenv(dotenv_path)

    return Settings(
        database_url=os.getenv("DATABASE_URL") or _default_database_url(),
        log_dir=os.getenv("LOG_DIR") or user_log_dir(APP_NAME),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        detailed_logging=_env_flag("DETAILED_LOGGING"),
        seed_default_data=_env_flag("SEED_DEFAULT_DATA", "1"),
        default_admin_password=os.getenv("DEFAULT_ADMIN_PASSWORD", "admin123"),
        calendar_enabled=_env_flag("GOOGLE_CALENDAR_ENABLED"),
        calendar_id=os.getenv("GOOGLE_CALENDAR_ID", "primary"),
        calendar_service_account_file=os.getenv(
            "GOOGLE_CREDENTIALS", "credentials.json"
        ),
        calendar_timezone=os.getenv("CALENDAR_TIMEZONE", "UTC"),
        api_host=os.getenv("API_HOST", "127.0.0.1"),
        api_port=int(os.getenv("API_PORT", "8000")),
    )
