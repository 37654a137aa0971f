# =============================================================================
# core/services/task_stats_service.py - Task Visit Statistics
# =============================================================================

import logging

from core.models import TaskStats
from core.services import task_catalog
from core.services.keys import TASK_STATS_PATTERN, task_stats_key
from lib.kv import KVClient
from lib.utils import utc_now_iso

logger = logging.getLogger(__name__)


class TaskStatsService:
    """
    Counts visits to released tasks and the time spent on them.
    """

    @staticmethod
    def track_task_visit(task_id: str, time_spent: float | None = None) -> TaskStats:
        """
        Add one visit (and optionally seconds spent) to a task's counters.

        The first visit names the record after the catalogue entry, falling
        back to the task ID for unknown tasks.
        """
        kv = KVClient.get_store()
        raw = kv.get(task_stats_key(task_id))

        if raw:
            stats = TaskStats.model_validate(raw)
        else:
            task = task_catalog.get_task_by_id(task_id)
            stats = TaskStats(
                id=task_id,
                name=task.name if task else task_id,
                created_at=utc_now_iso(),
            )

        stats.visits += 1
        stats.time_spent += time_spent or 0
        kv.set(task_stats_key(task_id), stats.to_record())
        return stats

    @staticmethod
    def get_task_stats(task_id: str) -> TaskStats | None:
        raw = KVClient.get_store().get(task_stats_key(task_id))
        return TaskStats.model_validate(raw) if raw else None

    @staticmethod
    def get_all_task_stats() -> list[TaskStats]:
        """Stats for every visited task, most visited first."""
        kv = KVClient.get_store()
        stats = []
        for key in kv.keys(TASK_STATS_PATTERN):
            raw = kv.get(key)
            if raw:
                stats.append(TaskStats.model_validate(raw))

        stats.sort(key=lambda s: s.visits, reverse=True)
        return stats
