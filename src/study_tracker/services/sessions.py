"""Single active session timer reconciled against wall-clock timestamps.

Elapsed time is always recomputed from the absolute start timestamp, so a
suspended process or a changed device clock is reconciled on the next
observation. Nothing here accumulates per tick.
"""

from dataclasses import dataclass
from datetime import datetime

from study_tracker.domain.activities import ActivityKind
from study_tracker.domain.models import ActiveSession, AppState
from study_tracker.services.clock import day_key, epoch_ms
from study_tracker.services.ledger import DayLedger


@dataclass(frozen=True)
class SessionChange:
    """Outcome of a start/stop transition."""

    stopped: ActivityKind | None = None
    folded_seconds: int = 0
    started: ActivityKind | None = None


def elapsed_seconds(start_ms: int, now_ms: int) -> int:
    """Whole seconds between start and now, clamped at zero."""
    if now_ms < start_ms:
        return 0
    return (now_ms - start_ms) // 1000


@dataclass
class SessionService:
    """State machine for the single running activity."""

    ledger: DayLedger

    def start(
        self, state: AppState, kind: ActivityKind, now: datetime
    ) -> SessionChange:
        """Start an activity; the running one toggles off, another one switches."""
        current = state.active_session
        if current is not None and current.kind is kind:
            return self.stop(state, now)

        folded = SessionChange()
        if current is not None:
            folded = self.stop(state, now)
        state.active_session = ActiveSession(kind=kind, start_ms=epoch_ms(now))
        return SessionChange(
            stopped=folded.stopped,
            folded_seconds=folded.folded_seconds,
            started=kind,
        )

    def stop(self, state: AppState, now: datetime) -> SessionChange:
        """Fold the running session into today's totals and clear it."""
        session = state.active_session
        if session is None:
            return SessionChange()
        seconds = elapsed_seconds(session.start_ms, epoch_ms(now))
        record = self.ledger.ensure_day(state.history, day_key(now))
        record.activity_totals[session.kind] += seconds
        state.active_session = None
        return SessionChange(stopped=session.kind, folded_seconds=seconds)

    def display_seconds(
        self, state: AppState, kind: ActivityKind, now: datetime
    ) -> int:
        """Stored total for today plus the live elapsed time when running."""
        record = self.ledger.get_or_default(state.history, day_key(now))
        stored = record.activity_totals[kind]
        session = state.active_session
        if session is not None and session.kind is kind:
            return stored + elapsed_seconds(session.start_ms, epoch_ms(now))
        return stored

    def total_display_seconds(self, state: AppState, now: datetime) -> int:
        """Today's tracked time across all activities, including the live one."""
        return sum(self.display_seconds(state, kind, now) for kind in ActivityKind)

    def active_kind(self, state: AppState) -> ActivityKind | None:
        """Return the running activity, if any."""
        if state.active_session is None:
            return None
        return state.active_session.kind
