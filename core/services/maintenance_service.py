# =============================================================================
# core/services/maintenance_service.py - Daily Maintenance
# =============================================================================
# The once-a-day job, run by the Celery beat schedule and by POST /api/daily:
# 1. Delete task ideas older than IDEA_RETENTION_DAYS
# 2. Seed fresh ideas from the AI generator
# 3. Release the most-voted pending idea
#
# Steps are independent: a failing step is logged and reported in the
# summary, and the remaining steps still run.
# =============================================================================

import logging
from typing import Any

from app.config import settings
from agents.task_generator import TaskGeneratorAgent
from core.services.task_idea_service import TaskIdeaService
from lib.utils import utc_now_iso

logger = logging.getLogger(__name__)


class MaintenanceService:
    """
    Service for scheduled housekeeping.
    """

    @staticmethod
    async def run_daily_maintenance() -> dict[str, Any]:
        """
        Run every daily step and summarize the outcome.

        Returns:
            {
                "deletedCount": int,
                "deletedIds": [...],
                "generatedIds": [...],
                "releasedIdea": {...} | None,
                "errors": {step: message},
                "ranAt": ISO timestamp
            }
        """
        logger.info("Starting daily maintenance")
        summary: dict[str, Any] = {
            "deletedCount": 0,
            "deletedIds": [],
            "generatedIds": [],
            "releasedIdea": None,
            "errors": {},
            "ranAt": utc_now_iso(),
        }

        # ---------------------------------------------------------------------
        # Step 1: Cleanup
        # ---------------------------------------------------------------------
        try:
            result = TaskIdeaService.delete_old_task_ideas(settings.IDEA_RETENTION_DAYS)
            summary["deletedCount"] = result["deletedCount"]
            summary["deletedIds"] = result["deletedIds"]
        except Exception as e:
            logger.exception("Daily maintenance: idea cleanup failed")
            summary["errors"]["cleanup"] = str(e)

        # ---------------------------------------------------------------------
        # Step 2: Seed ideas from the generator
        # ---------------------------------------------------------------------
        try:
            formatted = await TaskGeneratorAgent().get_formatted_task_ideas()
            for idea in formatted:
                stored = TaskIdeaService.submit_task_idea(
                    title=idea.title,
                    description=idea.description,
                    status=idea.status,
                )
                summary["generatedIds"].append(stored.id)
        except Exception as e:
            logger.exception("Daily maintenance: idea generation failed")
            summary["errors"]["generation"] = str(e)

        # ---------------------------------------------------------------------
        # Step 3: Release
        # ---------------------------------------------------------------------
        try:
            released = TaskIdeaService.release_top_task_idea()
            summary["releasedIdea"] = released.to_record() if released else None
        except Exception as e:
            logger.exception("Daily maintenance: task release failed")
            summary["errors"]["release"] = str(e)

        logger.info(
            f"Daily maintenance finished: deleted={summary['deletedCount']}, "
            f"generated={len(summary['generatedIds'])}, "
            f"released={summary['releasedIdea']['id'] if summary['releasedIdea'] else None}, "
            f"errors={list(summary['errors'])}"
        )
        return summary
