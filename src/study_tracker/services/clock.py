"""Wall-clock access and date/time key helpers."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol
from zoneinfo import ZoneInfo


class Clock(Protocol):
    """Source of the current local time."""

    def now(self) -> datetime:
        """Return the current timezone-aware local time."""


@dataclass
class SystemClock(Clock):
    """Clock backed by the host's wall clock."""

    timezone_name: str | None = None

    def now(self) -> datetime:
        """Return now in the configured zone, or the host's local zone."""
        if self.timezone_name:
            return datetime.now(tz=ZoneInfo(self.timezone_name))
        return datetime.now().astimezone()


def epoch_ms(moment: datetime) -> int:
    """Return epoch milliseconds for an aware datetime."""
    return int(moment.timestamp() * 1000)


def day_key(moment: datetime | date) -> str:
    """Return the YYYY-MM-DD key for the local calendar day."""
    if isinstance(moment, datetime):
        return moment.date().isoformat()
    return moment.isoformat()


def clock_string(moment: datetime) -> str:
    """Return the zero-padded HH:MM local clock time."""
    return moment.strftime("%H:%M")
