# =============================================================================
# app/routers/votes.py - Task Idea Voting
# =============================================================================

import logging

from fastapi import APIRouter, HTTPException

from app.exceptions import AiShipsException, MissingFieldError
from core.models import VoteRequest
from core.services import TaskIdeaService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/votes")
async def get_task_ideas():
    """All task ideas, most votes first."""
    try:
        return {"taskIdeas": [idea.to_record() for idea in TaskIdeaService.get_task_ideas()]}

    except AiShipsException:
        raise
    except Exception as e:
        logger.exception(f"Failed to load task ideas: {e}")
        raise HTTPException(status_code=500, detail="Failed to load task ideas")


@router.post("/votes")
async def vote_for_task_idea(request: VoteRequest):
    """
    Vote for a task idea.

    Errors:
        400: ideaId or userId missing
        404: unknown idea
        409: the user already voted for this idea
    """
    if not request.idea_id:
        raise MissingFieldError("ideaId")
    if not request.user_id:
        raise MissingFieldError("userId", "userId is required for voting")

    try:
        TaskIdeaService.vote_for_task_idea(request.idea_id, request.user_id)
        return {"success": True}

    except AiShipsException:
        raise
    except Exception as e:
        logger.exception(f"Failed to vote for {request.idea_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to record vote")
