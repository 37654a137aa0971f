# =============================================================================
# app/routers/ideas.py - Task Idea Submission
# =============================================================================
# Signed-in users may submit one idea per submission window (an hour by
# default). Submitting counts as the submitter's vote for the idea.
# =============================================================================

import logging
import math

from fastapi import APIRouter, HTTPException

from app.exceptions import AiShipsException, MissingFieldError, RateLimitExceededError
from core.models import TaskIdeaSubmitRequest
from core.services import TaskIdeaService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/tasks/idea/submit")
async def submit_task_idea(request: TaskIdeaSubmitRequest):
    """
    Submit a task idea.

    Errors:
        400: title or userId missing
        429: the user already submitted within the window; the body carries
             timeRemaining in milliseconds
    """
    if not request.title:
        raise MissingFieldError("title", "Title is required")
    if not request.user_id:
        raise MissingFieldError("userId", "User ID is required")

    try:
        if not TaskIdeaService.can_user_submit_task(request.user_id):
            time_remaining = TaskIdeaService.get_time_until_next_submission(request.user_id)
            minutes_remaining = math.ceil(time_remaining / (1000 * 60))
            logger.info(f"Idea submission rate limited for {request.user_id}: {time_remaining}ms left")
            raise RateLimitExceededError(time_remaining, minutes_remaining)

        idea = TaskIdeaService.submit_task_idea(
            title=request.title,
            description=request.description,
            user_id=request.user_id,
        )
        return {"success": True, "id": idea.id}

    except AiShipsException:
        raise
    except Exception as e:
        logger.exception(f"Failed to submit task idea: {e}")
        raise HTTPException(status_code=500, detail="Failed to submit task idea")
