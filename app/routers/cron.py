# =============================================================================
# app/routers/cron.py - Scheduled Job Endpoints
# =============================================================================
# Called by an external scheduler (or by hand) with
# "Authorization: Bearer <CRON_SECRET>". The Celery beat schedule runs the
# same daily maintenance without going through HTTP.
# =============================================================================

import logging

from fastapi import APIRouter, Depends, HTTPException

from app.auth import verify_cron_auth
from app.exceptions import AiShipsException
from core.services import TaskIdeaService
from core.services.maintenance_service import MaintenanceService

router = APIRouter(dependencies=[Depends(verify_cron_auth)])
logger = logging.getLogger(__name__)


@router.post("/daily")
async def run_daily():
    """
    Run daily maintenance.

    Individual step failures don't fail the request; they are listed under
    "errors" in the summary.
    """
    try:
        summary = await MaintenanceService.run_daily_maintenance()
        return {
            "success": True,
            "message": "Successfully run daily cron job",
            "source": "cron",
            **summary,
        }

    except AiShipsException:
        raise
    except Exception as e:
        logger.exception(f"Daily cron job failed: {e}")
        raise HTTPException(status_code=500, detail="Failed to run daily cron job")


@router.post("/tasks/idea/delete")
async def delete_old_task_ideas():
    """Delete task ideas older than one day."""
    try:
        logger.info("Starting cleanup of old task ideas")
        result = TaskIdeaService.delete_old_task_ideas(1)

        return {
            "success": True,
            "message": f"Successfully deleted {result['deletedCount']} old task ideas",
            "deletedCount": result["deletedCount"],
            "deletedIds": result["deletedIds"],
            "source": "cron",
        }

    except AiShipsException:
        raise
    except Exception as e:
        logger.exception(f"Failed to delete old task ideas: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete old task ideas")


@router.post("/tasks/release")
async def release_task():
    """Promote the most-voted pending idea to in_progress."""
    try:
        released = TaskIdeaService.release_top_task_idea()
        return {
            "success": True,
            "releasedIdea": released.to_record() if released else None,
        }

    except AiShipsException:
        raise
    except Exception as e:
        logger.exception(f"Failed to release task: {e}")
        raise HTTPException(status_code=500, detail="Failed to release task")
