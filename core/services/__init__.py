# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================
# MaintenanceService is imported from its module directly since it pulls in
# the OpenAI-backed generator.
# =============================================================================

from .completion_service import CompletionService
from .leaderboard_service import LeaderboardService
from .task_idea_service import TaskIdeaService
from .task_stats_service import TaskStatsService
from .visitor_service import VisitorService
from . import task_catalog

__all__ = [
    "CompletionService",
    "LeaderboardService",
    "TaskIdeaService",
    "TaskStatsService",
    "VisitorService",
    "task_catalog",
]
