"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from study_tracker.config import Settings
from study_tracker.containers import AppContainer
from study_tracker.services.clock import Clock
from study_tracker.services.ledger import DayLedger
from study_tracker.services.notifications import NotificationService, Notifier
from study_tracker.services.persistence import PersistenceService, StateStore
from study_tracker.services.prayers import PrayerService
from study_tracker.services.sessions import SessionService
from study_tracker.services.tracker import TrackerService

BASE_TIME = datetime(2026, 3, 10, 13, 0, tzinfo=UTC)


@dataclass
class FixedClock(Clock):
    """Clock that only moves when a test moves it."""

    current: datetime = BASE_TIME

    def now(self) -> datetime:
        return self.current

    def advance(self, **delta: float) -> None:
        self.current = self.current + timedelta(**delta)

    def set(self, hour: int, minute: int = 0, day_offset: int = 0) -> None:
        moved = self.current + timedelta(days=day_offset)
        self.current = moved.replace(hour=hour, minute=minute, second=0)


@dataclass
class InMemoryStateStore(StateStore):
    """In-memory state store for tests."""

    payload: str | None = None
    writes: int = 0
    fail_writes: bool = False

    def read(self) -> str | None:
        return self.payload

    def write(self, payload: str) -> None:
        if self.fail_writes:
            raise OSError("disk full")
        self.payload = payload
        self.writes += 1


@dataclass
class FakeNotifier(Notifier):
    """Fake notifier that records notices."""

    sent: list[tuple[str, str]] = field(default_factory=list)

    async def send(self, title: str, body: str) -> None:
        self.sent.append((title, body))


@dataclass
class FailingNotifier(Notifier):
    """Notifier whose channel is unavailable."""

    attempts: int = 0

    async def send(self, title: str, body: str) -> None:
        self.attempts += 1
        raise RuntimeError("notifications unavailable")


def build_tracker(clock: FixedClock, store: InMemoryStateStore) -> TrackerService:
    ledger = DayLedger()
    return TrackerService(
        clock=clock,
        persistence=PersistenceService(store=store, ledger=ledger),
        ledger=ledger,
        session_service=SessionService(ledger),
        prayer_service=PrayerService(ledger=ledger),
    )


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def store() -> InMemoryStateStore:
    return InMemoryStateStore()


@pytest.fixture
def ledger() -> DayLedger:
    return DayLedger()


@pytest.fixture
def tracker_service(clock: FixedClock, store: InMemoryStateStore) -> TrackerService:
    return build_tracker(clock, store)


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        tracker_data_file=tmp_path / "state.json",
    )


@pytest.fixture
def container(
    settings: Settings,
    tracker_service: TrackerService,
    notifier: FakeNotifier,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        tracker_service=tracker_service,
        notification_service=NotificationService(notifier),
        close_resources=close_resources,
    )
