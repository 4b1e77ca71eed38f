"""Prayer status derived from the local clock and configured windows."""

from dataclasses import dataclass, field
from datetime import datetime

from study_tracker.domain.models import AppState
from study_tracker.domain.prayers import (
    DEFAULT_PRAYER_WINDOWS,
    PrayerName,
    PrayerState,
    PrayerWindow,
)
from study_tracker.services.clock import clock_string, day_key
from study_tracker.services.ledger import DayLedger


def derive_state(
    window: PrayerWindow, current: PrayerState, now_clock: str
) -> PrayerState:
    """Return the clock-derived state; completed is never re-derived."""
    if current is PrayerState.COMPLETED:
        return current
    if now_clock > window.end:
        return PrayerState.MISSED
    if window.start <= now_clock <= window.end:
        return PrayerState.ACTIVE
    return PrayerState.PENDING


@dataclass
class PrayerService:
    """Keeps today's prayer states in step with the clock."""

    ledger: DayLedger
    windows: dict[PrayerName, PrayerWindow] = field(
        default_factory=lambda: dict(DEFAULT_PRAYER_WINDOWS)
    )

    def refresh(self, state: AppState, now: datetime) -> bool:
        """Re-derive today's states; return True when anything changed."""
        today = day_key(now)
        now_clock = clock_string(now)
        current = self.ledger.get_or_default(state.history, today).prayer_states
        derived = {
            prayer: derive_state(self.windows[prayer], current[prayer], now_clock)
            for prayer in PrayerName
        }
        if derived == current:
            return False
        record = self.ledger.ensure_day(state.history, today)
        record.prayer_states.update(derived)
        return True

    def mark_prayer(
        self, state: AppState, prayer: PrayerName, now: datetime
    ) -> PrayerState | None:
        """Toggle active/completed for today; None when the prayer is not open."""
        self.refresh(state, now)
        today = day_key(now)
        current = self.ledger.get_or_default(state.history, today).prayer_states[prayer]
        if current is PrayerState.ACTIVE:
            updated = PrayerState.COMPLETED
        elif current is PrayerState.COMPLETED:
            updated = PrayerState.ACTIVE
        else:
            return None
        self.ledger.ensure_day(state.history, today).prayer_states[prayer] = updated
        return updated

    def prayer_state(
        self, state: AppState, day: str, prayer: PrayerName, now: datetime
    ) -> PrayerState:
        """Return the state for any day; past open prayers read as missed."""
        stored = self.ledger.get_or_default(state.history, day).prayer_states[prayer]
        if day < day_key(now) and stored is not PrayerState.COMPLETED:
            return PrayerState.MISSED
        return stored
