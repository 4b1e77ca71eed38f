"""Domain models for the study tracker."""

from dataclasses import dataclass, field

from study_tracker.domain.activities import ActivityKind
from study_tracker.domain.days import DayRecord


@dataclass(frozen=True)
class UserProfile:
    """Descriptive profile of the person using the tracker."""

    name: str
    group_label: str


@dataclass(frozen=True)
class Task:
    """Standalone to-do entry."""

    id: str
    text: str
    completed: bool
    created_at_ms: int


@dataclass(frozen=True)
class ActiveSession:
    """The running activity and its wall-clock start in epoch milliseconds."""

    kind: ActivityKind
    start_ms: int


@dataclass
class AppState:
    """Everything the tracker persists between runs."""

    profile: UserProfile | None = None
    history: dict[str, DayRecord] = field(default_factory=dict)
    active_session: ActiveSession | None = None
    tasks: list[Task] = field(default_factory=list)
    notifications_enabled: bool = True
