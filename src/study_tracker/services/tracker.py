"""Coordinator that owns application state and serializes every mutation."""

import logging
import threading
from dataclasses import dataclass, field
from datetime import date, datetime

from study_tracker.domain.activities import ActivityKind
from study_tracker.domain.days import DayRecord
from study_tracker.domain.models import AppState, Task, UserProfile
from study_tracker.domain.prayers import PrayerName, PrayerState
from study_tracker.services.clock import Clock, day_key
from study_tracker.services.ledger import DayLedger
from study_tracker.services.persistence import PersistenceService
from study_tracker.services.prayers import PrayerService
from study_tracker.services.profile import ProfileService
from study_tracker.services.sessions import SessionChange, SessionService
from study_tracker.services.tasks import TaskService

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrackerSnapshot:
    """Live view of today's timers."""

    day: str
    active_kind: ActivityKind | None
    activities: dict[ActivityKind, int]
    total_seconds: int


@dataclass(frozen=True)
class DayReport:
    """Read model for the daily report."""

    day: str
    activities: dict[ActivityKind, int]
    prayers: dict[PrayerName, PrayerState]
    total_seconds: int
    completed_prayers: int
    breakdown_minutes: dict[ActivityKind, float]


@dataclass(frozen=True)
class PrayerMark:
    """Result of a mark request."""

    prayer: PrayerName
    state: PrayerState
    accepted: bool


@dataclass
class TrackerService:
    """Single owner of the tracker state; persists after every mutation."""

    clock: Clock
    persistence: PersistenceService
    ledger: DayLedger
    session_service: SessionService
    prayer_service: PrayerService
    profile_service: ProfileService = field(default_factory=ProfileService)
    task_service: TaskService = field(default_factory=TaskService)
    state: AppState = field(init=False)
    _lock: threading.Lock = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._lock = threading.Lock()
        self.state = self.persistence.load()
        if self.state.active_session is not None:
            _logger.info(
                "Restored running activity %s", self.state.active_session.kind.value
            )
        self.refresh_prayers()

    # Tracker

    def start(self, kind: ActivityKind) -> SessionChange:
        """Start, switch to, or toggle off an activity."""
        with self._lock:
            now = self.clock.now()
            change = self.session_service.start(self.state, kind, now)
            self._save(now)
        _logger.info(
            "Activity transition: stopped=%s folded=%ss started=%s",
            change.stopped.value if change.stopped else None,
            change.folded_seconds,
            change.started.value if change.started else None,
        )
        return change

    def stop(self) -> SessionChange:
        """Stop the running activity, if any."""
        with self._lock:
            now = self.clock.now()
            change = self.session_service.stop(self.state, now)
            if change.stopped is not None:
                self._save(now)
        return change

    def display_seconds(self, kind: ActivityKind) -> int:
        """Today's seconds for one activity, including live elapsed time."""
        with self._lock:
            return self.session_service.display_seconds(
                self.state, kind, self.clock.now()
            )

    def active_kind(self) -> ActivityKind | None:
        """Return the running activity, if any."""
        with self._lock:
            return self.session_service.active_kind(self.state)

    def snapshot(self) -> TrackerSnapshot:
        """Read-only view of today's timers."""
        with self._lock:
            return self._snapshot(self.clock.now())

    def resume(self) -> TrackerSnapshot:
        """Recompute immediately after returning to the foreground."""
        with self._lock:
            now = self.clock.now()
            if self.prayer_service.refresh(self.state, now):
                self._save(now)
            return self._snapshot(now)

    def reset_today(self) -> None:
        """Clear today's record and stop any running activity."""
        with self._lock:
            now = self.clock.now()
            today = day_key(now)
            self.ledger.reset_day(self.state, today, today)
            self.prayer_service.refresh(self.state, now)
            self._save(now)
        _logger.info("Reset day %s", today)

    # Prayers

    def refresh_prayers(self) -> bool:
        """Re-derive today's prayer states from the clock."""
        with self._lock:
            now = self.clock.now()
            changed = self.prayer_service.refresh(self.state, now)
            if changed:
                self._save(now)
        return changed

    def mark_prayer(self, prayer: PrayerName) -> PrayerMark:
        """Toggle a prayer between active and completed for today."""
        with self._lock:
            now = self.clock.now()
            updated = self.prayer_service.mark_prayer(self.state, prayer, now)
            self._save(now)
            current = self.prayer_service.prayer_state(
                self.state, day_key(now), prayer, now
            )
        return PrayerMark(prayer=prayer, state=current, accepted=updated is not None)

    def prayer_state(self, day: str, prayer: PrayerName) -> PrayerState:
        """Return a prayer's state on the given day."""
        with self._lock:
            return self.prayer_service.prayer_state(
                self.state, day, prayer, self.clock.now()
            )

    def prayer_states(self, day: str) -> dict[PrayerName, PrayerState]:
        """Return every prayer's state on the given day."""
        with self._lock:
            now = self.clock.now()
            return {
                prayer: self.prayer_service.prayer_state(self.state, day, prayer, now)
                for prayer in PrayerName
            }

    # Dashboard

    def day_record(self, day: str) -> DayRecord:
        """Return a copy of the stored record, or the default one."""
        with self._lock:
            return self.ledger.get_or_default(self.state.history, day).copy()

    def day_report(self, day: str) -> DayReport:
        """Return totals, prayer summary and breakdown; today includes live time."""
        with self._lock:
            now = self.clock.now()
            record = self.ledger.get_or_default(self.state.history, day)
            prayers = {
                prayer: self.prayer_service.prayer_state(self.state, day, prayer, now)
                for prayer in PrayerName
            }
            activities = dict(record.activity_totals)
            if day == day_key(now):
                activities = {
                    kind: self.session_service.display_seconds(self.state, kind, now)
                    for kind in ActivityKind
                }
        return DayReport(
            day=day,
            activities=activities,
            prayers=prayers,
            total_seconds=sum(activities.values()),
            completed_prayers=sum(
                1 for state in prayers.values() if state is PrayerState.COMPLETED
            ),
            breakdown_minutes={
                kind: seconds / 60
                for kind, seconds in activities.items()
                if seconds > 0
            },
        )

    def known_dates(self) -> list[str]:
        """Return stored dates for the date picker, newest first."""
        with self._lock:
            today: date = self.clock.now().date()
            return self.ledger.known_dates(self.state.history, today)

    # Profile and preferences

    def get_profile(self) -> UserProfile | None:
        """Return the saved profile."""
        with self._lock:
            return self.profile_service.get_profile(self.state)

    def set_profile(self, name: str, group_label: str) -> UserProfile:
        """Save the profile."""
        with self._lock:
            profile = self.profile_service.set_profile(self.state, name, group_label)
            self._save(self.clock.now())
        return profile

    def notifications_enabled(self) -> bool:
        """Return the notification preference."""
        with self._lock:
            return self.profile_service.notifications_enabled(self.state)

    def set_notifications_enabled(self, *, enabled: bool) -> None:
        """Update the notification preference."""
        with self._lock:
            self.profile_service.set_notifications_enabled(self.state, enabled=enabled)
            self._save(self.clock.now())

    # Tasks

    def list_tasks(self) -> list[Task]:
        """Return all tasks, newest first."""
        with self._lock:
            return self.task_service.list_tasks(self.state)

    def add_task(self, text: str) -> Task | None:
        """Add a task; blank text is ignored."""
        with self._lock:
            now = self.clock.now()
            task = self.task_service.add_task(self.state, text, now)
            if task is not None:
                self._save(now)
        return task

    def completed_tasks(self) -> int:
        """Return how many tasks are done."""
        with self._lock:
            return self.task_service.completed_count(self.state)

    def toggle_task(self, task_id: str) -> Task | None:
        """Flip a task's completed flag."""
        with self._lock:
            task = self.task_service.toggle_task(self.state, task_id)
            if task is not None:
                self._save(self.clock.now())
        return task

    def delete_task(self, task_id: str) -> bool:
        """Delete a task."""
        with self._lock:
            deleted = self.task_service.delete_task(self.state, task_id)
            if deleted:
                self._save(self.clock.now())
        return deleted

    def _snapshot(self, now: datetime) -> TrackerSnapshot:
        activities = {
            kind: self.session_service.display_seconds(self.state, kind, now)
            for kind in ActivityKind
        }
        return TrackerSnapshot(
            day=day_key(now),
            active_kind=self.session_service.active_kind(self.state),
            activities=activities,
            total_seconds=self.session_service.total_display_seconds(self.state, now),
        )

    def _save(self, now: datetime) -> None:
        self.persistence.save(self.state, now)
