# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the AI Ships API:
# - test_scoring.py, test_kv.py: Unit tests for scoring and the KV store
# - test_completions.py, test_leaderboard.py, test_visitor.py, test_tasks.py:
#   Service and endpoint tests for the task loop
# - test_task_ideas.py, test_cron.py, test_maintenance.py: Ideas and daily jobs
# - test_hackernews.py, test_task_generator.py: Trends and AI generation (mocked)
#
# Run tests with: pytest
# =============================================================================
