"""Profile and preference settings."""

from dataclasses import dataclass

from study_tracker.domain.models import AppState, UserProfile


@dataclass
class ProfileService:
    """Service for the user profile and notification preference."""

    def get_profile(self, state: AppState) -> UserProfile | None:
        """Return the profile if one was saved."""
        return state.profile

    def set_profile(self, state: AppState, name: str, group_label: str) -> UserProfile:
        """Store a profile; both fields must be non-blank."""
        cleaned_name = name.strip()
        cleaned_group = group_label.strip()
        if not cleaned_name or not cleaned_group:
            raise ValueError("Profile name and class are required")
        profile = UserProfile(name=cleaned_name, group_label=cleaned_group)
        state.profile = profile
        return profile

    def notifications_enabled(self, state: AppState) -> bool:
        """Return True when notifications are switched on."""
        return state.notifications_enabled

    def set_notifications_enabled(self, state: AppState, *, enabled: bool) -> None:
        """Switch notifications on or off."""
        state.notifications_enabled = enabled
