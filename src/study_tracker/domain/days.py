"""Per-day aggregate of activity totals and prayer states."""

from dataclasses import dataclass, field

from study_tracker.domain.activities import ActivityKind
from study_tracker.domain.prayers import PrayerName, PrayerState


def _zero_totals() -> dict[ActivityKind, int]:
    return {kind: 0 for kind in ActivityKind}


def _pending_prayers() -> dict[PrayerName, PrayerState]:
    return {prayer: PrayerState.PENDING for prayer in PrayerName}


@dataclass
class DayRecord:
    """Accumulated seconds per activity and the prayer states for one day."""

    activity_totals: dict[ActivityKind, int] = field(default_factory=_zero_totals)
    prayer_states: dict[PrayerName, PrayerState] = field(
        default_factory=_pending_prayers
    )

    @property
    def total_seconds(self) -> int:
        """Sum of all stored activity totals."""
        return sum(self.activity_totals.values())

    @property
    def completed_prayers(self) -> int:
        """Number of prayers marked completed."""
        return sum(
            1 for state in self.prayer_states.values() if state is PrayerState.COMPLETED
        )

    def copy(self) -> "DayRecord":
        """Return an independent copy of the record."""
        return DayRecord(
            activity_totals=dict(self.activity_totals),
            prayer_states=dict(self.prayer_states),
        )
