# =============================================================================
# app/routers/completions.py - Task Completion Endpoints
# =============================================================================
# Clients report finished tasks here; points are computed server-side.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, HTTPException, Query

from app.exceptions import AiShipsException, MissingFieldError
from core.models import CompletionRequest
from core.services import CompletionService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/completions")
async def record_completion(request: CompletionRequest):
    """
    Record a completion and update the leaderboard.

    Missing or invalid fields are rejected with 400 before anything is
    stored.
    """
    try:
        completion = CompletionService.record_completion(request)
        return {
            "success": True,
            "completion": {"id": completion.id, "points": completion.points},
        }

    except AiShipsException:
        raise
    except Exception as e:
        logger.exception(f"Failed to save completion: {e}")
        raise HTTPException(status_code=500, detail="Failed to save completion")


@router.get("/completions")
async def get_completions(
    user_id: Annotated[str | None, Query(alias="userId")] = None,
    task_id: Annotated[str | None, Query(alias="taskId")] = None,
):
    """
    A user's completions.

    - userId only: {"completions": [...]} newest first
    - userId and taskId: {"completion": {...} | null}
    """
    if not user_id:
        raise MissingFieldError("userId")

    try:
        if task_id:
            completion = CompletionService.get_user_completion(user_id, task_id)
            return {"completion": completion.to_record() if completion else None}

        completions = CompletionService.list_user_completions(user_id)
        return {"completions": [c.to_record() for c in completions]}

    except AiShipsException:
        raise
    except Exception as e:
        logger.exception(f"Failed to fetch completions for {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch completions")
