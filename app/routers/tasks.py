# =============================================================================
# app/routers/tasks.py - Task Catalogue & Task Stats Endpoints
# =============================================================================
# - GET  /tasks                 catalogue (or one task with ?taskId=)
# - GET  /tasks/stats           visit stats for every visited task
# - GET  /tasks/{taskId}/stats  visits plus completion stats for one task
# - POST /tasks/{taskId}/visit  count a visit
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, HTTPException, Path, Query

from app.exceptions import AiShipsException
from core.models import TaskVisitRequest
from core.services import CompletionService, TaskStatsService, task_catalog

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/tasks")
async def get_tasks(
    task_id: Annotated[str | None, Query(alias="taskId")] = None,
):
    """
    The task catalogue, newest first.

    With taskId returns {"task": {...} | null} instead.
    """
    try:
        if task_id:
            task = task_catalog.get_task_by_id(task_id)
            return {"task": task.to_record() if task else None}

        return {"tasks": [t.to_record() for t in task_catalog.get_all_tasks()]}

    except AiShipsException:
        raise
    except Exception as e:
        logger.exception(f"Failed to load tasks: {e}")
        raise HTTPException(status_code=500, detail="Failed to load tasks")


@router.get("/tasks/stats")
async def get_all_task_stats():
    """Visit stats for all tasks, most visited first."""
    try:
        return {"stats": [s.to_record() for s in TaskStatsService.get_all_task_stats()]}

    except AiShipsException:
        raise
    except Exception as e:
        logger.exception(f"Failed to load task stats: {e}")
        raise HTTPException(status_code=500, detail="Failed to load task stats")


@router.get("/tasks/{task_id}/stats")
async def get_task_stats(
    task_id: Annotated[str, Path(description="Task ID")],
    user_id: Annotated[str | None, Query(alias="userId")] = None,
):
    """
    Stats for one task.

    Returns:
        visits: the task's visit stats (null if never visited)
        completions: totals and averages over all users
        userCompletion: the given user's completion (only with userId)
    """
    try:
        stats = TaskStatsService.get_task_stats(task_id)
        result = {
            "visits": stats.to_record() if stats else None,
            "completions": CompletionService.get_task_completion_stats(task_id).to_record(),
        }
        if user_id:
            completion = CompletionService.get_user_task_completion(user_id, task_id)
            result["userCompletion"] = completion.to_record() if completion else None
        return result

    except AiShipsException:
        raise
    except Exception as e:
        logger.exception(f"Failed to load stats for task {task_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to load task stats")


@router.post("/tasks/{task_id}/visit")
async def track_task_visit(
    task_id: Annotated[str, Path(description="Task ID")],
    request: TaskVisitRequest | None = None,
):
    """Count a visit, optionally adding the seconds spent on the page."""
    try:
        stats = TaskStatsService.track_task_visit(task_id, request.time_spent if request else None)
        return {"success": True, "stats": stats.to_record()}

    except AiShipsException:
        raise
    except Exception as e:
        logger.exception(f"Failed to track visit for task {task_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to track task visit")
