"""Tests for the tracker coordinator."""

import json
import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta

import pytest

from study_tracker.domain.activities import ActivityKind
from study_tracker.domain.prayers import PrayerName, PrayerState
from study_tracker.services.clock import Clock
from study_tracker.services.ledger import DayLedger
from study_tracker.services.persistence import PersistenceService, StateStore
from study_tracker.services.prayers import PrayerService
from study_tracker.services.sessions import SessionService
from study_tracker.services.tracker import TrackerService
from tests.conftest import BASE_TIME, FixedClock, InMemoryStateStore, build_tracker


def test_construction_loads_state_and_derives_prayers(
    tracker_service: TrackerService, store: InMemoryStateStore
) -> None:
    assert store.writes == 1
    states = tracker_service.prayer_states("2026-03-10")
    assert states[PrayerName.FAJR] is PrayerState.MISSED
    assert states[PrayerName.DHUHR] is PrayerState.ACTIVE
    assert states[PrayerName.ASR] is PrayerState.PENDING


def test_start_switch_and_stop_persist_each_mutation(
    tracker_service: TrackerService, clock: FixedClock, store: InMemoryStateStore
) -> None:
    tracker_service.start(ActivityKind.SELF_STUDY)
    clock.advance(seconds=10)
    change = tracker_service.start(ActivityKind.FOOD)
    clock.advance(seconds=4)
    tracker_service.stop()

    assert change.folded_seconds == 10
    assert store.writes == 4
    record = tracker_service.day_record("2026-03-10")
    assert record.activity_totals[ActivityKind.SELF_STUDY] == 10
    assert record.activity_totals[ActivityKind.FOOD] == 4
    assert tracker_service.active_kind() is None


def test_reads_never_write(
    tracker_service: TrackerService, clock: FixedClock, store: InMemoryStateStore
) -> None:
    tracker_service.start(ActivityKind.CLASS)
    writes = store.writes

    for _ in range(5):
        clock.advance(seconds=1)
        tracker_service.display_seconds(ActivityKind.CLASS)
        tracker_service.snapshot()
        tracker_service.day_report("2026-03-10")
        tracker_service.known_dates()

    assert store.writes == writes
    assert tracker_service.display_seconds(ActivityKind.CLASS) == 5
    record = tracker_service.day_record("2026-03-10")
    assert record.activity_totals[ActivityKind.CLASS] == 0


def test_stop_when_idle_does_not_save(
    tracker_service: TrackerService, store: InMemoryStateStore
) -> None:
    writes = store.writes

    change = tracker_service.stop()

    assert change.stopped is None
    assert store.writes == writes


def test_running_session_survives_restart(
    tracker_service: TrackerService, clock: FixedClock, store: InMemoryStateStore
) -> None:
    tracker_service.start(ActivityKind.SLEEP)
    clock.advance(hours=2)

    restarted = build_tracker(clock, store)

    assert restarted.active_kind() is ActivityKind.SLEEP
    assert restarted.display_seconds(ActivityKind.SLEEP) == 7200
    restarted.stop()
    assert restarted.day_record("2026-03-10").activity_totals[ActivityKind.SLEEP] == (
        7200
    )


def test_resume_rederives_prayers_immediately(
    tracker_service: TrackerService, clock: FixedClock
) -> None:
    tracker_service.start(ActivityKind.OTHER)
    clock.set(16)

    snapshot = tracker_service.resume()

    assert snapshot.active_kind is ActivityKind.OTHER
    assert snapshot.activities[ActivityKind.OTHER] == 3 * 3600
    assert snapshot.total_seconds == 3 * 3600
    assert tracker_service.prayer_state("2026-03-10", PrayerName.DHUHR) is (
        PrayerState.MISSED
    )
    assert tracker_service.prayer_state("2026-03-10", PrayerName.ASR) is (
        PrayerState.ACTIVE
    )


def test_mark_prayer_reports_acceptance(tracker_service: TrackerService) -> None:
    accepted = tracker_service.mark_prayer(PrayerName.DHUHR)
    rejected = tracker_service.mark_prayer(PrayerName.ISHA)

    assert accepted.accepted is True
    assert accepted.state is PrayerState.COMPLETED
    assert rejected.accepted is False
    assert rejected.state is PrayerState.PENDING


def test_reset_today_clears_totals_and_session(
    tracker_service: TrackerService, clock: FixedClock
) -> None:
    tracker_service.start(ActivityKind.SPORTS)
    clock.advance(minutes=3)
    tracker_service.start(ActivityKind.CLASS)
    tracker_service.mark_prayer(PrayerName.DHUHR)

    tracker_service.reset_today()

    record = tracker_service.day_record("2026-03-10")
    assert record.total_seconds == 0
    assert tracker_service.active_kind() is None
    assert record.prayer_states[PrayerName.DHUHR] is PrayerState.ACTIVE
    assert record.prayer_states[PrayerName.FAJR] is PrayerState.MISSED


def test_day_report_includes_live_time_for_today(
    tracker_service: TrackerService, clock: FixedClock
) -> None:
    tracker_service.start(ActivityKind.SELF_STUDY)
    clock.advance(minutes=90)
    tracker_service.mark_prayer(PrayerName.DHUHR)

    report = tracker_service.day_report("2026-03-10")

    assert report.total_seconds == 5400
    assert report.completed_prayers == 1
    assert report.breakdown_minutes == {ActivityKind.SELF_STUDY: 90.0}


def test_day_report_for_past_day_shows_missed_prayers(
    tracker_service: TrackerService, clock: FixedClock
) -> None:
    tracker_service.mark_prayer(PrayerName.DHUHR)
    clock.set(8, day_offset=1)

    report = tracker_service.day_report("2026-03-10")

    assert report.prayers[PrayerName.DHUHR] is PrayerState.COMPLETED
    assert report.prayers[PrayerName.ISHA] is PrayerState.MISSED
    assert tracker_service.known_dates() == ["2026-03-10"]


def test_old_days_are_pruned_on_next_save(
    tracker_service: TrackerService, clock: FixedClock, store: InMemoryStateStore
) -> None:
    tracker_service.start(ActivityKind.FOOD)
    tracker_service.stop()
    clock.advance(days=31)

    tracker_service.start(ActivityKind.FOOD)

    assert store.payload is not None
    history = json.loads(store.payload)["history"]
    assert "2026-03-10" not in history
    assert tracker_service.known_dates() == []


def test_profile_and_preferences_are_persisted(
    tracker_service: TrackerService, clock: FixedClock, store: InMemoryStateStore
) -> None:
    tracker_service.set_profile("  Rahim  ", "HSC-2025 ")
    tracker_service.set_notifications_enabled(enabled=False)

    restarted = build_tracker(clock, store)

    profile = restarted.get_profile()
    assert profile is not None
    assert profile.name == "Rahim"
    assert profile.group_label == "HSC-2025"
    assert restarted.notifications_enabled() is False


def test_set_profile_rejects_blank_fields(tracker_service: TrackerService) -> None:
    with pytest.raises(ValueError, match="required"):
        tracker_service.set_profile("   ", "HSC")

    assert tracker_service.get_profile() is None


def test_task_lifecycle(tracker_service: TrackerService, clock: FixedClock) -> None:
    first = tracker_service.add_task("Finish chemistry notes")
    clock.advance(seconds=1)
    second = tracker_service.add_task("  Solve 10 math problems ")

    assert first is not None
    assert second is not None
    assert tracker_service.add_task("   ") is None
    assert [task.text for task in tracker_service.list_tasks()] == [
        "Solve 10 math problems",
        "Finish chemistry notes",
    ]

    toggled = tracker_service.toggle_task(first.id)
    assert toggled is not None
    assert toggled.completed is True
    assert tracker_service.completed_tasks() == 1

    assert tracker_service.delete_task(second.id) is True
    assert tracker_service.delete_task(second.id) is False
    assert tracker_service.toggle_task("missing") is None
    assert [task.id for task in tracker_service.list_tasks()] == [first.id]


def test_storage_failure_does_not_fail_mutation(
    tracker_service: TrackerService, clock: FixedClock, store: InMemoryStateStore
) -> None:
    store.fail_writes = True
    tracker_service.start(ActivityKind.CLASS)
    clock.advance(seconds=20)

    change = tracker_service.stop()

    assert change.folded_seconds == 20
    store.fail_writes = False
    tracker_service.add_task("retry save")
    assert store.payload is not None
    totals = json.loads(store.payload)["history"]["2026-03-10"]["activities"]
    assert totals["class"] == 20


def test_snapshot_total_includes_running_activity(
    tracker_service: TrackerService, clock: FixedClock
) -> None:
    tracker_service.start(ActivityKind.SLEEP)
    clock.advance(seconds=30)
    tracker_service.start(ActivityKind.OTHER)
    clock.advance(seconds=12)

    snapshot = tracker_service.snapshot()

    assert snapshot.activities[ActivityKind.SLEEP] == 30
    assert snapshot.activities[ActivityKind.OTHER] == 12
    assert snapshot.total_seconds == 42


@dataclass
class TickingClock(Clock):
    """Thread-safe clock that moves one second on every read."""

    current: datetime = BASE_TIME
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def now(self) -> datetime:
        with self._lock:
            self.current += timedelta(seconds=1)
            return self.current


@dataclass
class CheckingStateStore(StateStore):
    """Store that records any written payload with an incomplete day record."""

    payload: str | None = None
    writes: int = 0
    problems: list[str] = field(default_factory=list)

    def read(self) -> str | None:
        return self.payload

    def write(self, payload: str) -> None:
        document = json.loads(payload)
        kinds = {kind.value for kind in ActivityKind}
        prayers = {prayer.value for prayer in PrayerName}
        for day, record in document["history"].items():
            if set(record["activities"]) != kinds:
                self.problems.append(f"{day}: incomplete activities")
            if set(record["prayers"]) != prayers:
                self.problems.append(f"{day}: incomplete prayers")
        self.payload = payload
        self.writes += 1


def test_concurrent_mutations_are_serialized() -> None:
    clock = TickingClock()
    store = CheckingStateStore()
    ledger = DayLedger()
    tracker = TrackerService(
        clock=clock,
        persistence=PersistenceService(store=store, ledger=ledger),
        ledger=ledger,
        session_service=SessionService(ledger),
        prayer_service=PrayerService(ledger=ledger),
    )
    folded: list[int] = []
    barrier = threading.Barrier(4)

    def run_activities(kinds: list[ActivityKind]) -> None:
        barrier.wait()
        for round_number in range(50):
            change = tracker.start(kinds[round_number % len(kinds)])
            folded.append(change.folded_seconds)
            if round_number % 7 == 0:
                folded.append(tracker.stop().folded_seconds)

    def run_prayers() -> None:
        barrier.wait()
        for _ in range(50):
            tracker.refresh_prayers()
            tracker.mark_prayer(PrayerName.DHUHR)

    threads = [
        threading.Thread(
            target=run_activities, args=([ActivityKind.SELF_STUDY, ActivityKind.CLASS],)
        ),
        threading.Thread(
            target=run_activities, args=([ActivityKind.FOOD, ActivityKind.SPORTS],)
        ),
        threading.Thread(target=run_activities, args=([ActivityKind.MOBILE_SCROLL],)),
        threading.Thread(target=run_prayers),
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    folded.append(tracker.stop().folded_seconds)

    assert store.problems == []
    assert store.writes > 0
    record = tracker.day_record("2026-03-10")
    assert record.total_seconds == sum(folded)
    assert sum(folded) > 0
    assert tracker.active_kind() is None
    assert tracker.prayer_state("2026-03-10", PrayerName.DHUHR) in {
        PrayerState.ACTIVE,
        PrayerState.COMPLETED,
    }
