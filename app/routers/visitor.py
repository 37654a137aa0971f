# =============================================================================
# app/routers/visitor.py - Visitor Tracking
# =============================================================================

import logging

from fastapi import APIRouter, HTTPException

from app.exceptions import AiShipsException
from core.models import VisitorRequest
from core.services import VisitorService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/visitor")
async def track_visitor(request: VisitorRequest | None = None):
    """
    Count a page visit.

    The body is optional; without a userId the visit is counted against
    the shared guest preferences.
    """
    try:
        VisitorService.track_visitor(request.user_id if request else None)
        return {"success": True}

    except AiShipsException:
        raise
    except Exception as e:
        logger.exception(f"Failed to track visitor: {e}")
        raise HTTPException(status_code=500, detail="Failed to track visitor")
