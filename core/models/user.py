# =============================================================================
# core/models/user.py - Visitor & Preference Schemas
# =============================================================================
# - UserPrefs: per-user preferences stored at user:{id}:prefs
# - VisitorStats: global counters stored at visitor:stats
# - VisitorRequest: body of POST /api/visitor
# =============================================================================

from enum import Enum

from pydantic import Field

from .base import CamelModel


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"
    AUTO = "auto"


class UserSettings(CamelModel):
    """UI settings a user can toggle. All optional."""
    theme: Theme | None = None
    notifications: bool | None = None
    auto_redirect: bool | None = None


class UserPrefs(CamelModel):
    """
    Preferences and visit history for one user (or the shared guest record).

    Example:
        {
            "visitCount": 3,
            "lastVisit": "2024-01-15T10:30:00.000Z",
            "votedTaskIdeas": ["idea_1705312200000_k3j9x2m1qa"]
        }
    """

    visit_count: int = Field(
        default=0,
        ge=0,
        description="How many times this user has been tracked as visiting"
    )

    last_visit: str | None = Field(
        default=None,
        description="ISO timestamp of the most recent visit"
    )

    favorite_tasks: list[str] = Field(
        default_factory=list,
        description="Task IDs the user marked as favourite"
    )

    # Includes ideas the user submitted, not only ones they voted for
    voted_task_ideas: list[str] = Field(
        default_factory=list,
        description="Task idea IDs the user has voted for or submitted"
    )

    settings: UserSettings | None = Field(
        default=None,
        description="UI settings"
    )


class VisitorStats(CamelModel):
    """Site-wide visitor counters. currentlyOnline is computed on read."""
    total_visitors: int = 0
    unique_visitors: int = 0
    currently_online: int = 0
    last_updated: str


class VisitorRequest(CamelModel):
    user_id: str | None = None
