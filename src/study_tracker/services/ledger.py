"""Day ledger: per-day records with lazy creation and retention pruning."""

import logging
from dataclasses import dataclass
from datetime import date

from study_tracker.domain.days import DayRecord
from study_tracker.domain.models import AppState

DEFAULT_RETENTION_DAYS = 30

_logger = logging.getLogger(__name__)


@dataclass
class DayLedger:
    """Rules for reading, creating and pruning day records."""

    retention_days: int = DEFAULT_RETENTION_DAYS

    def get_or_default(self, history: dict[str, DayRecord], day: str) -> DayRecord:
        """Return the stored record, or a fresh default one that is not stored."""
        record = history.get(day)
        if record is None:
            return DayRecord()
        return record

    def ensure_day(self, history: dict[str, DayRecord], day: str) -> DayRecord:
        """Return the stored record, creating it first when missing."""
        record = history.get(day)
        if record is None:
            record = DayRecord()
            history[day] = record
        return record

    def prune(self, history: dict[str, DayRecord], today: date) -> list[str]:
        """Drop records more than the retention window away from today."""
        removed = []
        for key in list(history):
            try:
                day = date.fromisoformat(key)
            except ValueError:
                _logger.warning("Dropping ledger entry with invalid date key %r", key)
                removed.append(key)
                continue
            if abs((today - day).days) > self.retention_days:
                removed.append(key)
        for key in removed:
            del history[key]
        if removed:
            _logger.info("Pruned %s day record(s) from ledger", len(removed))
        return removed

    def reset_day(self, state: AppState, day: str, today: str) -> None:
        """Replace a day with the default record; resetting today stops the timer."""
        state.history[day] = DayRecord()
        if day == today:
            state.active_session = None

    def known_dates(self, history: dict[str, DayRecord], today: date) -> list[str]:
        """Return the stored dates that pruning keeps, newest first."""
        dates = []
        for key in history:
            try:
                day = date.fromisoformat(key)
            except ValueError:
                continue
            if abs((today - day).days) <= self.retention_days:
                dates.append(key)
        return sorted(dates, reverse=True)
