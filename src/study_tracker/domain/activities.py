"""Activity kinds that can be tracked."""

from enum import Enum


class ActivityKind(str, Enum):
    """Fixed set of trackable activities."""

    SELF_STUDY = "self_study"
    CLASS = "class"
    MOBILE_SCROLL = "mobile_scroll"
    PRAYER = "prayer"
    FOOD = "food"
    SLEEP = "sleep"
    SPORTS = "sports"
    OTHER = "other"

    @property
    def label(self) -> str:
        """Human-readable activity name."""
        return ACTIVITY_LABELS[self]


ACTIVITY_LABELS: dict[ActivityKind, str] = {
    ActivityKind.SELF_STUDY: "Self Study",
    ActivityKind.CLASS: "Class",
    ActivityKind.MOBILE_SCROLL: "Mobile scroll",
    ActivityKind.PRAYER: "Prayer",
    ActivityKind.FOOD: "Food",
    ActivityKind.SLEEP: "Sleep",
    ActivityKind.SPORTS: "Sports",
    ActivityKind.OTHER: "Other",
}
