"""Pydantic models for the local HTTP API."""

from pydantic import BaseModel, Field

from study_tracker.domain.activities import ActivityKind
from study_tracker.domain.models import Task, UserProfile
from study_tracker.domain.prayers import PrayerName, PrayerState
from study_tracker.services.formatting import format_clock, format_duration_brief
from study_tracker.services.tracker import DayReport, PrayerMark, TrackerSnapshot


class ActivityTimer(BaseModel):
    """Live timer value for one activity."""

    kind: ActivityKind
    label: str
    seconds: int
    display: str
    running: bool


class TrackerResponse(BaseModel):
    """Today's timers."""

    day: str
    active_kind: ActivityKind | None
    activities: list[ActivityTimer]
    total_seconds: int
    total_display: str

    @classmethod
    def from_snapshot(cls, snapshot: TrackerSnapshot) -> "TrackerResponse":
        """Build the response from a tracker snapshot."""
        return cls(
            day=snapshot.day,
            active_kind=snapshot.active_kind,
            activities=[
                ActivityTimer(
                    kind=kind,
                    label=kind.label,
                    seconds=seconds,
                    display=format_clock(seconds),
                    running=kind is snapshot.active_kind,
                )
                for kind, seconds in snapshot.activities.items()
            ],
            total_seconds=snapshot.total_seconds,
            total_display=format_clock(snapshot.total_seconds),
        )


class PrayerStatesResponse(BaseModel):
    """Prayer states for one day."""

    day: str
    prayers: dict[PrayerName, PrayerState]


class PrayerMarkResponse(BaseModel):
    """Outcome of a mark request."""

    prayer: PrayerName
    state: PrayerState
    accepted: bool

    @classmethod
    def from_mark(cls, mark: PrayerMark) -> "PrayerMarkResponse":
        """Build the response from a mark result."""
        return cls(prayer=mark.prayer, state=mark.state, accepted=mark.accepted)


class DayReportResponse(BaseModel):
    """Daily report for the dashboard."""

    day: str
    activities: dict[ActivityKind, int]
    prayers: dict[PrayerName, PrayerState]
    total_seconds: int
    total_display: str
    completed_prayers: int
    prayer_count: int
    breakdown_minutes: dict[ActivityKind, float]

    @classmethod
    def from_report(cls, report: DayReport) -> "DayReportResponse":
        """Build the response from a day report."""
        return cls(
            day=report.day,
            activities=report.activities,
            prayers=report.prayers,
            total_seconds=report.total_seconds,
            total_display=format_duration_brief(report.total_seconds),
            completed_prayers=report.completed_prayers,
            prayer_count=len(report.prayers),
            breakdown_minutes=report.breakdown_minutes,
        )


class ProfilePayload(BaseModel):
    """User profile body."""

    name: str = Field(min_length=1)
    group_label: str = Field(min_length=1)

    @classmethod
    def from_profile(cls, profile: UserProfile) -> "ProfilePayload":
        """Build the payload from a profile."""
        return cls(name=profile.name, group_label=profile.group_label)


class NotificationPreference(BaseModel):
    """Notification preference body."""

    enabled: bool


class TaskCreate(BaseModel):
    """New task body."""

    text: str


class TaskResponse(BaseModel):
    """A to-do task."""

    id: str
    text: str
    completed: bool
    created_at_ms: int

    @classmethod
    def from_task(cls, task: Task) -> "TaskResponse":
        """Build the response from a task."""
        return cls(
            id=task.id,
            text=task.text,
            completed=task.completed,
            created_at_ms=task.created_at_ms,
        )


class TaskListResponse(BaseModel):
    """All tasks plus the number already done."""

    tasks: list[TaskResponse]
    completed: int
