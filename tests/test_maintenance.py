# =============================================================================
# tests/test_maintenance.py - Daily Maintenance Tests
# =============================================================================

import asyncio
from datetime import timedelta
from unittest.mock import AsyncMock, patch

import pytest

from core.models import FormattedTaskIdea
from core.services import TaskIdeaService
from core.services.keys import task_idea_key
from core.services.maintenance_service import MaintenanceService
from lib.utils import to_iso, utc_now


@pytest.fixture
def generated_ideas():
    return [
        FormattedTaskIdea(title="Generated one", description="First"),
        FormattedTaskIdea(title="Generated two", description="Second"),
    ]


def _patch_generator(**kwargs):
    return patch(
        "core.services.maintenance_service.TaskGeneratorAgent",
        **{"return_value.get_formatted_task_ideas": AsyncMock(**kwargs)},
    )


class TestDailyMaintenance:

    def test_runs_all_steps(self, kv_store, generated_ideas):
        old = TaskIdeaService.submit_task_idea("Old idea")
        record = kv_store.get(task_idea_key(old.id))
        record["createdAt"] = to_iso(utc_now() - timedelta(days=3))
        kv_store.set(task_idea_key(old.id), record)

        with _patch_generator(return_value=generated_ideas):
            summary = asyncio.run(MaintenanceService.run_daily_maintenance())

        assert summary["deletedIds"] == [old.id]
        assert len(summary["generatedIds"]) == 2
        assert summary["releasedIdea"]["status"] == "in_progress"
        assert summary["errors"] == {}

        titles = {i.title for i in TaskIdeaService.get_task_ideas()}
        assert titles == {"Generated one", "Generated two"}

    def test_recent_ideas_kept(self, generated_ideas):
        recent = TaskIdeaService.submit_task_idea("Recent idea")

        with _patch_generator(return_value=generated_ideas):
            summary = asyncio.run(MaintenanceService.run_daily_maintenance())

        assert summary["deletedCount"] == 0
        assert TaskIdeaService.get_task_idea(recent.id) is not None

    def test_generation_failure_does_not_stop_release(self):
        pending = TaskIdeaService.submit_task_idea("Pending idea")

        with _patch_generator(side_effect=RuntimeError("OpenAI down")):
            summary = asyncio.run(MaintenanceService.run_daily_maintenance())

        assert summary["errors"] == {"generation": "OpenAI down"}
        assert summary["generatedIds"] == []
        assert summary["releasedIdea"]["id"] == pending.id

    def test_cleanup_failure_reported(self, generated_ideas):
        with _patch_generator(return_value=generated_ideas), \
             patch.object(TaskIdeaService, "delete_old_task_ideas", side_effect=RuntimeError("store down")):
            summary = asyncio.run(MaintenanceService.run_daily_maintenance())

        assert summary["errors"] == {"cleanup": "store down"}
        assert len(summary["generatedIds"]) == 2


class TestWorkerTasks:

    def test_daily_task_runs_maintenance(self):
        from workers.tasks import run_daily_maintenance

        with patch(
            "workers.tasks.MaintenanceService.run_daily_maintenance",
            new=AsyncMock(return_value={"errors": {}}),
        ) as mock_run:
            assert run_daily_maintenance() == {"errors": {}}

        mock_run.assert_awaited_once()

    def test_purge_task(self, kv_store):
        TaskIdeaService.submit_task_idea("Fresh idea")
        old = TaskIdeaService.submit_task_idea("Old idea")
        record = kv_store.get(task_idea_key(old.id))
        record["createdAt"] = to_iso(utc_now() - timedelta(days=2))
        kv_store.set(task_idea_key(old.id), record)

        from workers.tasks import purge_old_task_ideas

        assert purge_old_task_ideas(1) == {"deletedCount": 1, "deletedIds": [old.id]}

    def test_purge_task_not_scheduled(self):
        from workers.config import CeleryConfig

        scheduled = {entry["task"] for entry in CeleryConfig.beat_schedule.values()}
        assert "workers.tasks.purge_old_task_ideas" not in scheduled

    def test_beat_schedule(self):
        from workers.config import CeleryConfig

        entry = CeleryConfig.beat_schedule["daily-maintenance"]
        assert entry["task"] == "workers.tasks.run_daily_maintenance"
