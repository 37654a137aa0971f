# =============================================================================
# app/routers/generation.py - AI Task Generation Endpoints
# =============================================================================
# Thin wrappers around TaskGeneratorAgent. Generation errors carry a code
# and suggestion and are returned as 502 (the upstream model failed).
# =============================================================================

import logging
from typing import Annotated, Literal

from fastapi import APIRouter, HTTPException, Query

from agents.task_generator import GenerationError, TaskGeneratorAgent
from app.exceptions import AiShipsException, MissingFieldError
from core.models import AITaskIdea, FocusedTaskRequest

router = APIRouter()
logger = logging.getLogger(__name__)


def _generation_failed(e: GenerationError) -> AiShipsException:
    return AiShipsException(
        message=e.message,
        code=e.code,
        status_code=502,
        suggestion=e.suggestion,
    )


@router.get("/generate-tasks")
async def generate_tasks(
    format: Annotated[Literal["raw", "formatted"], Query()] = "raw",
):
    """
    Generate a batch of task ideas from current trends.

    - raw: the generator's full output (tasks, trendSummary, reasoning)
    - formatted: ideas flattened for idea submission
    """
    try:
        agent = TaskGeneratorAgent()

        if format == "formatted":
            ideas = await agent.get_formatted_task_ideas()
            return {
                "success": True,
                "data": [idea.to_record() for idea in ideas],
                "count": len(ideas),
                "format": "formatted",
            }

        batch = await agent.generate_task_ideas()
        return {
            "success": True,
            "data": batch.to_record(),
            "count": len(batch.tasks),
            "format": "raw",
        }

    except GenerationError as e:
        raise _generation_failed(e)
    except AiShipsException:
        raise
    except Exception as e:
        logger.exception(f"Failed to generate tasks: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate tasks")


@router.post("/generate-tasks")
async def generate_focused_task(request: FocusedTaskRequest):
    """Generate a single idea for one trend."""
    if not request.trend:
        raise MissingFieldError("trend", "Trend parameter is required")

    try:
        idea = await TaskGeneratorAgent().generate_focused_task_idea(request.trend, request.inspiration)
        return {
            "success": True,
            "data": idea.to_record(),
            "trend": request.trend,
            "inspiration": request.inspiration,
        }

    except GenerationError as e:
        raise _generation_failed(e)
    except AiShipsException:
        raise
    except Exception as e:
        logger.exception(f"Failed to generate focused task: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate task")


@router.post("/generate-tasks/enhance")
async def enhance_task(task_idea: AITaskIdea):
    """Refine an idea and add implementation notes."""
    try:
        enhancement = await TaskGeneratorAgent().enhance_task_idea(task_idea)
        return {"success": True, "data": enhancement.to_record()}

    except GenerationError as e:
        raise _generation_failed(e)
    except AiShipsException:
        raise
    except Exception as e:
        logger.exception(f"Failed to enhance task idea: {e}")
        raise HTTPException(status_code=500, detail="Failed to enhance task idea")
