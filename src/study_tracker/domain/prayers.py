"""Domain models for daily prayers and their time windows."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

CLOCK_STRING_LENGTH = 5


class PrayerName(str, Enum):
    """The five daily prayers."""

    FAJR = "fajr"
    DHUHR = "dhuhr"
    ASR = "asr"
    MAGHRIB = "maghrib"
    ISHA = "isha"

    @property
    def label(self) -> str:
        """Human-readable prayer name."""
        return PRAYER_LABELS[self]


PRAYER_LABELS: dict[PrayerName, str] = {
    PrayerName.FAJR: "Fajr",
    PrayerName.DHUHR: "Dhuhr",
    PrayerName.ASR: "Asr",
    PrayerName.MAGHRIB: "Maghrib",
    PrayerName.ISHA: "Isha",
}


def is_clock_string(value: str) -> bool:
    """Return True for a zero-padded 24-hour HH:MM string."""
    if len(value) != CLOCK_STRING_LENGTH:
        return False
    try:
        datetime.strptime(value, "%H:%M")  # noqa: DTZ007
    except ValueError:
        return False
    return True


class PrayerState(str, Enum):
    """Status of a prayer on a given day."""

    PENDING = "pending"
    ACTIVE = "active"
    MISSED = "missed"
    COMPLETED = "completed"


@dataclass(frozen=True)
class PrayerWindow:
    """Daily clock range, as zero-padded HH:MM strings, for one prayer."""

    start: str
    end: str

    def __post_init__(self) -> None:
        for value in (self.start, self.end):
            if not is_clock_string(value):
                raise ValueError(f"Invalid clock time {value!r}, expected HH:MM")
        if self.end < self.start:
            raise ValueError(
                f"Prayer window {self.start}-{self.end} ends before it starts"
            )


DEFAULT_PRAYER_WINDOWS: dict[PrayerName, PrayerWindow] = {
    PrayerName.FAJR: PrayerWindow("04:30", "05:45"),
    PrayerName.DHUHR: PrayerWindow("12:15", "15:30"),
    PrayerName.ASR: PrayerWindow("15:45", "17:30"),
    PrayerName.MAGHRIB: PrayerWindow("17:45", "18:45"),
    PrayerName.ISHA: PrayerWindow("19:00", "23:59"),
}
