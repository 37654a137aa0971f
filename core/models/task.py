# =============================================================================
# core/models/task.py - Task, Task Idea & Task Stats Schemas
# =============================================================================
# These models define the contract for:
# - TaskListEntry: a released task in the static catalogue
# - TaskIdea: a community-submitted idea for a future task (votable)
# - TaskStats: visit counters for a released task
# - Request bodies for idea submission, voting and visit tracking
# =============================================================================

from enum import Enum

from pydantic import Field

from .base import CamelModel


class TaskIdeaStatus(str, Enum):
    """
    Lifecycle of a task idea.

    Flow: pending -> in_progress -> completed
                 +-> rejected
    """
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    REJECTED = "rejected"


class TaskListEntry(CamelModel):
    """A released, playable task. The catalogue lives in code, not the store."""
    id: str
    name: str
    description: str
    created_at: str


class TaskIdea(CamelModel):
    """
    A proposed task that users can vote on.

    Stored at taskidea:{id}; its ID is also listed in global:taskideas.

    Example:
        {
            "id": "idea_1705312200000_k3j9x2m1qa",
            "title": "Regex Golf",
            "description": "Match the left list, avoid the right list",
            "votes": 2,
            "voters": ["user-1", "user-2"],
            "status": "pending",
            "createdAt": "2024-01-15T10:30:00.000Z",
            "submittedBy": "user-3"
        }
    """

    id: str = Field(..., description="Unique idea identifier")

    title: str = Field(..., description="Short title shown on the vote page")

    description: str = Field(default="", description="What the task would be")

    votes: int = Field(default=0, ge=0, description="Number of votes received")

    # One entry per vote; used to reject repeat votes
    voters: list[str] = Field(default_factory=list, description="IDs of users who voted")

    status: TaskIdeaStatus = Field(default=TaskIdeaStatus.PENDING)

    created_at: str = Field(..., description="ISO timestamp of submission")

    submitted_by: str | None = Field(default=None, description="Submitting user ID, if any")


class TaskStats(CamelModel):
    """Visit counters for one task, stored at task:stats:{taskId}."""
    id: str
    name: str
    visits: int = 0
    time_spent: float = Field(default=0, description="Total seconds spent, summed over visits")
    rating: float = 0
    created_at: str


class TaskIdeaSubmitRequest(CamelModel):
    """Body of POST /api/tasks/idea/submit. Presence of fields is checked by the route."""
    title: str | None = None
    description: str = ""
    user_id: str | None = None


class VoteRequest(CamelModel):
    """Body of POST /api/votes."""
    idea_id: str | None = None
    user_id: str | None = None


class TaskVisitRequest(CamelModel):
    time_spent: float | None = Field(default=None, ge=0)
