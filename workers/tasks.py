# =============================================================================
# workers/tasks.py - Celery Task Definitions
# =============================================================================
# Scheduled maintenance tasks.
#
# Tasks:
# - run_daily_maintenance: cleanup, idea seeding and release (beat, 00:00 UTC)
# - purge_old_task_ideas: idea cleanup only (unscheduled, queued on demand)
# =============================================================================

import asyncio
import logging
from typing import Any

from celery import shared_task

from core.services.maintenance_service import MaintenanceService
from core.services.task_idea_service import TaskIdeaService

logger = logging.getLogger(__name__)


@shared_task(name="workers.tasks.run_daily_maintenance")
def run_daily_maintenance() -> dict[str, Any]:
    """
    Run the daily maintenance job.

    Same operation as POST /api/daily. Returns the maintenance summary.
    """
    logger.info("Running scheduled daily maintenance")
    return asyncio.run(MaintenanceService.run_daily_maintenance())


@shared_task(name="workers.tasks.purge_old_task_ideas")
def purge_old_task_ideas(older_than_days: int = 1) -> dict[str, Any]:
    """
    Delete task ideas older than `older_than_days` days.

    Returns:
        {"deletedCount": int, "deletedIds": [...]}
    """
    logger.info(f"Purging task ideas older than {older_than_days} day(s)")
    return TaskIdeaService.delete_old_task_ideas(older_than_days)
