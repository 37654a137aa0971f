# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains framework-agnostic business logic:
# - models/: Pydantic schemas for data validation
# - services/: Completions, leaderboard, visitors, task ideas, task stats,
#   the task catalogue and daily maintenance
#
# Services raise the exceptions defined in app/exceptions.py but otherwise
# don't import from FastAPI or Celery. This keeps the logic testable.
# =============================================================================
