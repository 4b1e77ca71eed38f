"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from study_tracker.adapters.json_file_store import JsonFileStateStore
from study_tracker.adapters.log_notifier import LogNotifier
from study_tracker.adapters.telegram_notifier import HttpxTelegramNotifier
from study_tracker.config import Settings, parse_prayer_windows
from study_tracker.services.clock import SystemClock
from study_tracker.services.ledger import DayLedger
from study_tracker.services.notifications import NotificationService, Notifier
from study_tracker.services.persistence import PersistenceService
from study_tracker.services.prayers import PrayerService
from study_tracker.services.sessions import SessionService
from study_tracker.services.tracker import TrackerService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    tracker_service: TrackerService
    notification_service: NotificationService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    ledger = DayLedger(retention_days=resolved_settings.retention_days)
    persistence = PersistenceService(
        store=JsonFileStateStore(resolved_settings.tracker_data_file),
        ledger=ledger,
        default_notifications=resolved_settings.notifications_enabled_default,
    )
    tracker_service = TrackerService(
        clock=SystemClock(resolved_settings.tracker_timezone),
        persistence=persistence,
        ledger=ledger,
        session_service=SessionService(ledger),
        prayer_service=PrayerService(
            ledger=ledger,
            windows=parse_prayer_windows(resolved_settings.prayer_windows),
        ),
    )

    telegram_notifier: HttpxTelegramNotifier | None = None
    notifier: Notifier
    if (
        resolved_settings.telegram_bot_token
        and resolved_settings.telegram_chat_id is not None
    ):
        telegram_notifier = HttpxTelegramNotifier.create(
            bot_token=resolved_settings.telegram_bot_token,
            chat_id=resolved_settings.telegram_chat_id,
        )
        notifier = telegram_notifier
    else:
        notifier = LogNotifier()

    async def close_resources() -> None:
        if telegram_notifier is not None:
            await telegram_notifier.close()

    return AppContainer(
        settings=resolved_settings,
        tracker_service=tracker_service,
        notification_service=NotificationService(notifier),
        close_resources=close_resources,
    )
