# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - base.py: CamelModel (camelCase JSON <-> snake_case attributes)
# - user.py: Preferences and visitor counters
# - task.py: Task catalogue entries, task ideas, task stats
# - completion.py: Completions and completion statistics
# - leaderboard.py: Leaderboard entries
# - generation.py: Structured output of the AI task generator
# - trends.py: HackerNews items and derived inspiration
#
# These models define the "contract" between API, store and clients.
# =============================================================================

from .base import CamelModel

# -----------------------------------------------------------------------------
# Users & Visitors
# -----------------------------------------------------------------------------
from .user import (
    Theme,
    UserPrefs,
    UserSettings,
    VisitorRequest,
    VisitorStats,
)

# -----------------------------------------------------------------------------
# Tasks & Task Ideas
# -----------------------------------------------------------------------------
from .task import (
    TaskIdea,
    TaskIdeaStatus,
    TaskIdeaSubmitRequest,
    TaskListEntry,
    TaskStats,
    TaskVisitRequest,
    VoteRequest,
)

# -----------------------------------------------------------------------------
# Completions & Leaderboard
# -----------------------------------------------------------------------------
from .completion import (
    CompletionRequest,
    Difficulty,
    StoredCompletion,
    TaskCompletionStats,
    UserCompletion,
)
from .leaderboard import LeaderboardEntry

# -----------------------------------------------------------------------------
# AI Generation & Trends
# -----------------------------------------------------------------------------
from .generation import (
    AITaskBatch,
    AITaskIdea,
    FocusedTaskRequest,
    FormattedTaskIdea,
    GoalType,
    InteractionType,
    TaskCategory,
    TaskEnhancement,
)
from .trends import (
    HackerNewsItem,
    InspirationType,
    ProjectIdea,
    ProjectInspiration,
)

__all__ = [
    "CamelModel",
    # Users
    "Theme",
    "UserPrefs",
    "UserSettings",
    "VisitorRequest",
    "VisitorStats",
    # Tasks
    "TaskIdea",
    "TaskIdeaStatus",
    "TaskIdeaSubmitRequest",
    "TaskListEntry",
    "TaskStats",
    "TaskVisitRequest",
    "VoteRequest",
    # Completions
    "CompletionRequest",
    "Difficulty",
    "StoredCompletion",
    "TaskCompletionStats",
    "UserCompletion",
    "LeaderboardEntry",
    # Generation
    "AITaskBatch",
    "AITaskIdea",
    "FocusedTaskRequest",
    "FormattedTaskIdea",
    "GoalType",
    "InteractionType",
    "TaskCategory",
    "TaskEnhancement",
    # Trends
    "HackerNewsItem",
    "InspirationType",
    "ProjectIdea",
    "ProjectInspiration",
]
