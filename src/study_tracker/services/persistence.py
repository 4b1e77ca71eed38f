"""Whole-state persistence with best-effort load and non-fatal save."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from pydantic import ValidationError

from study_tracker.domain.models import AppState
from study_tracker.domain.snapshot import StateSnapshot
from study_tracker.services.ledger import DayLedger

_logger = logging.getLogger(__name__)


class StateStore(Protocol):
    """Durable storage for the serialized state document."""

    def read(self) -> str | None:
        """Return the stored document, or None when nothing was saved yet."""

    def write(self, payload: str) -> None:
        """Overwrite the stored document."""


@dataclass
class PersistenceService:
    """Serializes application state to a store on every mutation."""

    store: StateStore
    ledger: DayLedger
    default_notifications: bool = True

    def save(self, state: AppState, now: datetime) -> bool:
        """Prune and write the state; return False when the write failed."""
        self.ledger.prune(state.history, now.date())
        payload = StateSnapshot.from_state(state).model_dump_json(by_alias=True)
        try:
            self.store.write(payload)
        except Exception:
            _logger.exception("Failed to persist tracker state")
            return False
        return True

    def load(self) -> AppState:
        """Return the stored state, or the default state if absent or malformed."""
        try:
            raw = self.store.read()
        except Exception:
            _logger.exception("Failed to read tracker state, starting empty")
            return self.default_state()
        if raw is None:
            return self.default_state()
        try:
            snapshot = StateSnapshot.model_validate_json(raw)
        except ValidationError as exc:
            _logger.warning(
                "Stored tracker state is malformed (%s errors), starting empty",
                exc.error_count(),
            )
            return self.default_state()
        return snapshot.to_state(self.default_notifications)

    def default_state(self) -> AppState:
        """Return the empty state used on first run or after corruption."""
        return AppState(notifications_enabled=self.default_notifications)
