"""Pydantic models for the persisted state document."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from study_tracker.domain.activities import ActivityKind
from study_tracker.domain.days import DayRecord
from study_tracker.domain.models import ActiveSession, AppState, Task, UserProfile
from study_tracker.domain.prayers import PrayerName, PrayerState


class ProfileSnapshot(BaseModel):
    """Persisted user profile."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    group_label: str = Field(alias="studentClass")


class DaySnapshot(BaseModel):
    """Persisted day record."""

    activities: dict[str, int] = Field(default_factory=dict)
    prayers: dict[str, PrayerState] = Field(default_factory=dict)

    @field_validator("prayers", mode="before")
    @classmethod
    def _accept_legacy_flags(cls, value: object) -> object:
        """Older documents stored prayers as plain done/not-done booleans."""
        if not isinstance(value, dict):
            return value
        converted: dict[object, object] = {}
        for key, flag in value.items():
            if flag is True:
                converted[key] = PrayerState.COMPLETED
            elif flag is False:
                converted[key] = PrayerState.PENDING
            else:
                converted[key] = flag
        return converted

    @classmethod
    def from_record(cls, record: DayRecord) -> "DaySnapshot":
        """Build a snapshot from a domain record."""
        return cls(
            activities={
                kind.value: seconds for kind, seconds in record.activity_totals.items()
            },
            prayers={
                prayer.value: state for prayer, state in record.prayer_states.items()
            },
        )

    def to_record(self) -> DayRecord:
        """Return a complete record; missing keys take defaults, unknown are dropped."""
        record = DayRecord()
        for kind in ActivityKind:
            record.activity_totals[kind] = max(0, self.activities.get(kind.value, 0))
        for prayer in PrayerName:
            record.prayer_states[prayer] = self.prayers.get(
                prayer.value, PrayerState.PENDING
            )
        return record


class SessionSnapshot(BaseModel):
    """Persisted active session."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    start_time: int = Field(alias="startTime")

    def to_session(self) -> ActiveSession | None:
        """Return the session, or None when the activity kind is unknown."""
        try:
            kind = ActivityKind(self.id)
        except ValueError:
            return None
        return ActiveSession(kind=kind, start_ms=self.start_time)


class TaskSnapshot(BaseModel):
    """Persisted to-do entry."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    text: str
    completed: bool = False
    created_at: int = Field(default=0, alias="createdAt")


class StateSnapshot(BaseModel):
    """Whole persisted application state."""

    model_config = ConfigDict(populate_by_name=True)

    profile: ProfileSnapshot | None = None
    history: dict[str, DaySnapshot] = Field(default_factory=dict)
    active_session: SessionSnapshot | None = Field(
        default=None, alias="activeSession"
    )
    tasks: list[TaskSnapshot] = Field(default_factory=list)
    notifications_enabled: bool | None = Field(
        default=None, alias="notificationsEnabled"
    )

    @classmethod
    def from_state(cls, state: AppState) -> "StateSnapshot":
        """Build the persisted document from application state."""
        profile = None
        if state.profile is not None:
            profile = ProfileSnapshot(
                name=state.profile.name, group_label=state.profile.group_label
            )
        session = None
        if state.active_session is not None:
            session = SessionSnapshot(
                id=state.active_session.kind.value,
                start_time=state.active_session.start_ms,
            )
        return cls(
            profile=profile,
            history={
                day: DaySnapshot.from_record(record)
                for day, record in state.history.items()
            },
            active_session=session,
            tasks=[
                TaskSnapshot(
                    id=task.id,
                    text=task.text,
                    completed=task.completed,
                    created_at=task.created_at_ms,
                )
                for task in state.tasks
            ],
            notifications_enabled=state.notifications_enabled,
        )

    def to_state(self, default_notifications: bool) -> AppState:  # noqa: FBT001
        """Convert back into application state."""
        profile = None
        if self.profile is not None:
            profile = UserProfile(
                name=self.profile.name, group_label=self.profile.group_label
            )
        return AppState(
            profile=profile,
            history={day: snap.to_record() for day, snap in self.history.items()},
            active_session=(
                self.active_session.to_session() if self.active_session else None
            ),
            tasks=[
                Task(
                    id=task.id,
                    text=task.text,
                    completed=task.completed,
                    created_at_ms=task.created_at,
                )
                for task in self.tasks
            ],
            notifications_enabled=(
                default_notifications
                if self.notifications_enabled is None
                else self.notifications_enabled
            ),
        )
