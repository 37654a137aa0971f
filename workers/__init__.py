# =============================================================================
# workers/ - Celery Background Task Workers
# =============================================================================
# This package contains the Celery configuration and task definitions for
# scheduled maintenance.
#
# Components:
# - celery_app.py: Celery application configuration
# - tasks.py: Task definitions (daily maintenance, idea cleanup)
# - config.py: Worker and beat schedule settings
#
# Usage:
#   # Start worker with the embedded beat scheduler
#   celery -A workers.celery_app worker --beat --loglevel=info
#
#   # Run maintenance now (from anywhere with broker access)
#   from workers.tasks import run_daily_maintenance
#   result = run_daily_maintenance.delay()
# =============================================================================

from .celery_app import celery_app
from . import tasks

__all__ = [
    "celery_app",
    "tasks",
]
