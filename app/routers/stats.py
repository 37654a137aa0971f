# =============================================================================
# app/routers/stats.py - Site Statistics
# =============================================================================
# Home page numbers: visitor counters, recent tasks and the latest task.
# =============================================================================

import logging

from fastapi import APIRouter, HTTPException

from app.exceptions import AiShipsException
from core.services import VisitorService, task_catalog

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/stats")
async def get_stats():
    """
    Visitor stats plus the five newest catalogue tasks.

    latestTask is the newest task's ID, or null for an empty catalogue.
    """
    try:
        visitor_stats = VisitorService.get_visitor_stats()
        task_history = [
            {"id": task.id, "name": task.name, "createdAt": task.created_at}
            for task in task_catalog.get_all_tasks()[:5]
        ]
        latest = task_catalog.get_latest_task()

        return {
            "visitorStats": visitor_stats.to_record(),
            "taskHistory": task_history,
            "latestTask": latest.id if latest else None,
        }

    except AiShipsException:
        raise
    except Exception as e:
        logger.exception(f"Failed to load stats: {e}")
        raise HTTPException(status_code=500, detail="Failed to load stats")
