# =============================================================================
# core/models/completion.py - Task Completion Schemas
# =============================================================================
# - CompletionRequest: what the client reports when a task is finished
# - StoredCompletion: the record persisted at completion:{id} (adds points)
# - UserCompletion: per-user view used by the leaderboard page
# - TaskCompletionStats: aggregate numbers for one task
# =============================================================================

from enum import Enum

from pydantic import Field, field_validator

from lib.utils import parse_iso

from .base import CamelModel


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class CompletionRequest(CamelModel):
    """
    Body of POST /api/completions.

    Every field is required; attempts must be at least 1 and timeSpent may
    be zero.

    Example:
        {
            "userId": "user-123",
            "taskId": "task-0000001",
            "timeSpent": 42,
            "attempts": 1,
            "completedAt": "2024-01-15T10:30:00.000Z"
        }
    """

    user_id: str = Field(..., min_length=1, description="Who completed the task")

    task_id: str = Field(..., min_length=1, description="Which task was completed")

    time_spent: float = Field(..., ge=0, description="Seconds from start to completion")

    attempts: int = Field(..., ge=1, description="Number of attempts including the successful one")

    completed_at: str = Field(..., min_length=1, description="ISO timestamp of completion")

    @field_validator("completed_at")
    @classmethod
    def _must_be_iso(cls, value: str) -> str:
        parse_iso(value)
        return value


class StoredCompletion(CompletionRequest):
    """A scored completion as persisted in the store."""
    id: str
    points: int


class UserCompletion(CamelModel):
    """Completion as presented on the leaderboard (time in milliseconds)."""
    id: str
    task_id: str
    completion_time: float
    points: int
    completed_at: str
    difficulty: Difficulty | None = None


class TaskCompletionStats(CamelModel):
    total_completions: int = 0
    average_points: int = 0
    # Milliseconds
    average_completion_time: int = 0
    completions_by_difficulty: dict[str, int] = Field(
        default_factory=lambda: {d.value: 0 for d in Difficulty}
    )
