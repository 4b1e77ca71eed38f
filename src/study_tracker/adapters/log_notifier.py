"""Notifier that writes notices to the application log."""

import logging
from dataclasses import dataclass, field

from study_tracker.services.notifications import Notifier


@dataclass
class LogNotifier(Notifier):
    """Default notifier when no external channel is configured."""

    logger: logging.Logger = field(
        default_factory=lambda: logging.getLogger("study_tracker.notifications")
    )

    async def send(self, title: str, body: str) -> None:
        """Log the notice."""
        self.logger.info("%s: %s", title, body)
