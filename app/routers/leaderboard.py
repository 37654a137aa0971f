# =============================================================================
# app/routers/leaderboard.py - Leaderboard Endpoint
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, HTTPException, Query

from app.exceptions import AiShipsException
from core.services import CompletionService, LeaderboardService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/leaderboard")
async def get_leaderboard(
    limit: Annotated[int, Query(ge=1, le=500, description="Max entries")] = 50,
    user_id: Annotated[str | None, Query(alias="userId")] = None,
):
    """
    Ranked leaderboard.

    With userId the response also carries that user's completions
    (completionTime in milliseconds).
    """
    try:
        result = {
            "leaderboard": [e.to_record() for e in LeaderboardService.get_leaderboard(limit)],
        }
        if user_id:
            result["userCompletions"] = [
                c.to_record() for c in CompletionService.get_user_completions_summary(user_id)
            ]
        return result

    except AiShipsException:
        raise
    except Exception as e:
        logger.exception(f"Failed to load leaderboard: {e}")
        raise HTTPException(status_code=500, detail="Failed to load leaderboard")
