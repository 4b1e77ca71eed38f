"""Best-effort user notifications for session and prayer events."""

import logging
from dataclasses import dataclass
from typing import Protocol

from study_tracker.domain.prayers import PrayerName
from study_tracker.services.formatting import format_clock
from study_tracker.services.sessions import SessionChange

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notice:
    """A title/body pair to show the user."""

    title: str
    body: str


TEST_NOTICE = Notice(title="Study Tracker", body="Notifications are working.")


class Notifier(Protocol):
    """Delivery channel for notices."""

    async def send(self, title: str, body: str) -> None:
        """Deliver a notice."""


@dataclass
class NotificationService:
    """Dispatches notices, never letting a delivery failure escape."""

    notifier: Notifier

    async def dispatch(self, notice: Notice, *, enabled: bool) -> bool:
        """Send the notice when enabled; return True if it was delivered."""
        if not enabled:
            return False
        try:
            await self.notifier.send(notice.title, notice.body)
        except Exception:
            _logger.exception("Failed to deliver notification %r", notice.title)
            return False
        return True

    async def dispatch_all(self, notices: list[Notice], *, enabled: bool) -> int:
        """Send several notices in order; return how many were delivered."""
        delivered = 0
        for notice in notices:
            if await self.dispatch(notice, enabled=enabled):
                delivered += 1
        return delivered


def session_notices(change: SessionChange) -> list[Notice]:
    """Build notices for a session transition."""
    notices = []
    if change.stopped is not None:
        notices.append(
            Notice(
                title="Activity stopped",
                body=f"{change.stopped.label}: {format_clock(change.folded_seconds)}",
            )
        )
    if change.started is not None:
        notices.append(
            Notice(title="Activity started", body=f"{change.started.label} is running.")
        )
    return notices


def prayer_notice(prayer: PrayerName) -> Notice:
    """Build the notice for a completed prayer."""
    return Notice(title="Prayer completed", body=f"{prayer.label} marked as prayed.")
