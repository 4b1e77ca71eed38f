"""Application configuration."""

import os
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from study_tracker.domain.prayers import (
    DEFAULT_PRAYER_WINDOWS,
    PrayerName,
    PrayerWindow,
)
from study_tracker.services.ledger import DEFAULT_RETENTION_DAYS

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


def default_data_file() -> Path:
    """Return the per-user state file path (Windows/macOS/Linux)."""
    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA", os.path.expanduser("~\\AppData\\Local"))
    else:
        base = os.environ.get("XDG_DATA_HOME", os.path.expanduser("~/.local/share"))
    return Path(base) / "StudyTracker" / "state.json"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    tracker_data_file: Path = Field(default_factory=default_data_file)
    tracker_timezone: str | None = None
    retention_days: int = Field(default=DEFAULT_RETENTION_DAYS, ge=1)
    prayer_windows: dict[str, str] = Field(default_factory=dict)
    prayer_refresh_seconds: float = Field(default=30.0, gt=0)
    notifications_enabled_default: bool = True
    log_level: str = "INFO"
    telegram_bot_token: str | None = None
    telegram_chat_id: int | None = None
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @field_validator("tracker_timezone")
    @classmethod
    def _check_timezone(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        try:
            ZoneInfo(value.strip())
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone {value!r}") from exc
        return value.strip()


def parse_prayer_windows(raw: dict[str, str]) -> dict[PrayerName, PrayerWindow]:
    """Merge "HH:MM-HH:MM" overrides into the default prayer windows."""
    windows = dict(DEFAULT_PRAYER_WINDOWS)
    for name, value in raw.items():
        prayer = PrayerName(name.strip().lower())
        start, separator, end = value.partition("-")
        if not separator:
            raise ValueError(f"Prayer window for {name!r} must look like HH:MM-HH:MM")
        windows[prayer] = PrayerWindow(start.strip(), end.strip())
    return windows
