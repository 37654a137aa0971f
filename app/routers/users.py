# =============================================================================
# app/routers/users.py - User Preferences
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, HTTPException, Path

from app.exceptions import AiShipsException
from core.models import UserPrefs
from core.services import VisitorService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/users/{user_id}/prefs")
async def get_prefs(
    user_id: Annotated[str, Path(min_length=1, description="User ID")],
):
    """Stored preferences, or defaults for an unknown user."""
    try:
        return VisitorService.get_prefs(user_id).to_record()

    except AiShipsException:
        raise
    except Exception as e:
        logger.exception(f"Failed to load prefs for {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to load preferences")


@router.put("/users/{user_id}/prefs")
async def update_prefs(
    prefs: UserPrefs,
    user_id: Annotated[str, Path(min_length=1, description="User ID")],
):
    """Replace the user's preferences with the request body."""
    try:
        return VisitorService.update_prefs(prefs, user_id).to_record()

    except AiShipsException:
        raise
    except Exception as e:
        logger.exception(f"Failed to save prefs for {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to save preferences")
