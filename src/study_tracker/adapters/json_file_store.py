"""JSON file storage for the tracker state document."""

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from study_tracker.services.persistence import StateStore


@dataclass
class JsonFileStateStore(StateStore):
    """Stores the state document in a single local file."""

    path: Path

    def read(self) -> str | None:
        """Return the file contents, or None when it does not exist."""
        try:
            return self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def write(self, payload: str) -> None:
        """Replace the file atomically so readers never see a partial write."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            Path(tmp_name).replace(self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
