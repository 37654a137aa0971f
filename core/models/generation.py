# =============================================================================
# core/models/generation.py - AI Task Generation Schemas
# =============================================================================
# Structured output contract for the task idea generator. The LLM is asked
# for JSON matching these shapes and the reply is validated against them,
# so constraints here (lengths, counts, enums) are what reject bad output.
# =============================================================================

from enum import Enum

from pydantic import Field

from .base import CamelModel
from .completion import Difficulty
from .task import TaskIdeaStatus


class TaskCategory(str, Enum):
    GAME = "game"
    PUZZLE = "puzzle"
    TOOL = "tool"


class InteractionType(str, Enum):
    CLICK = "click"
    DRAG = "drag"
    TYPE = "type"
    SELECT = "select"
    DRAW = "draw"
    SWIPE = "swipe"
    SCROLL = "scroll"


class GoalType(str, Enum):
    SCORE = "score"
    COMPLETION = "completion"
    ACCURACY = "accuracy"
    SPEED = "speed"
    CREATIVITY = "creativity"


class AITaskIdea(CamelModel):
    """
    A single generated task idea.

    Example:
        {
            "title": "Prompt Injection Defender",
            "description": "Spot the malicious instruction hidden in ...",
            "category": "puzzle",
            "difficulty": "medium",
            "estimatedTime": 60,
            "keywords": ["ai", "security"],
            "inspiration": "Front-page story about LLM jailbreaks",
            "interactionType": "click",
            "goalType": "accuracy"
        }
    """

    title: str = Field(..., min_length=10, max_length=100, description="Catchy, fun title for the task")

    description: str = Field(
        ...,
        min_length=50,
        max_length=300,
        description="Clear description of what the user will do and achieve"
    )

    category: TaskCategory = Field(..., description="Type of interactive task")

    difficulty: Difficulty = Field(..., description="How challenging the task is to complete")

    estimated_time: int = Field(..., ge=30, le=90, description="Estimated completion time in seconds")

    keywords: list[str] = Field(..., min_length=2, max_length=5, description="Relevant technology or topic keywords")

    inspiration: str = Field(..., description="What HackerNews trend or story inspired this task")

    interaction_type: InteractionType = Field(..., description="Primary interaction method")

    goal_type: GoalType = Field(..., description="How success is measured")


class AITaskBatch(CamelModel):
    """A batch of ideas generated from the current trends."""

    tasks: list[AITaskIdea] = Field(..., min_length=3, max_length=6)

    trend_summary: str = Field(..., description="Summary of the trends that inspired these tasks")

    reasoning: str = Field(..., description="Why these tasks would be engaging right now")


class TaskEnhancement(CamelModel):
    """Reviewed idea plus notes for whoever implements it."""
    enhanced: AITaskIdea
    implementation_notes: str
    technical_requirements: list[str] = Field(default_factory=list)


class FormattedTaskIdea(CamelModel):
    """A generated idea flattened into the shape accepted by idea submission."""
    title: str
    description: str
    status: TaskIdeaStatus = TaskIdeaStatus.PENDING


class FocusedTaskRequest(CamelModel):
    """Body of POST /api/generate-tasks."""
    trend: str | None = None
    inspiration: str | None = None
