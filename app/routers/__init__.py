# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - stats.py: Home page statistics
# - visitor.py: Visitor tracking
# - users.py: User preferences
# - completions.py: Task completions
# - leaderboard.py: Leaderboard
# - tasks.py: Task catalogue and task stats
# - ideas.py: Task idea submission
# - votes.py: Task idea voting
# - cron.py: Scheduled jobs (bearer-secret protected)
# - generation.py: AI task generation
# - trends.py: HackerNews trends
#
# Each router is mounted in main.py under the /api prefix.
# =============================================================================

from . import health
from . import stats
from . import visitor
from . import users
from . import completions
from . import leaderboard
from . import tasks
from . import ideas
from . import votes
from . import cron
from . import generation
from . import trends

__all__ = [
    "health",
    "stats",
    "visitor",
    "users",
    "completions",
    "leaderboard",
    "tasks",
    "ideas",
    "votes",
    "cron",
    "generation",
    "trends",
]
