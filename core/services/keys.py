# =============================================================================
# core/services/keys.py - Store Key Layout
# =============================================================================
# Every key the services read or write is built here, so the layout of the
# store can be read in one place:
#
#   user:{userId}:prefs            UserPrefs (guest:prefs for anonymous)
#   user:{userId}:completions      [completionId, ...]
#   completion:{completionId}      StoredCompletion
#   leaderboard:{userId}           LeaderboardEntry (without rank)
#   leaderboard:users              [userId, ...]
#   taskidea:{ideaId}              TaskIdea
#   global:taskideas               [ideaId, ...] newest first
#   rate_limit:task_submit:{id}    epoch ms of last submission (expires)
#   task:stats:{taskId}            TaskStats
#   visitor:stats                  VisitorStats
#   visitor:active:{visitorKey}    ISO timestamp (expires)
# =============================================================================

GUEST_PREFS_KEY = "guest:prefs"
LEADERBOARD_USERS_KEY = "leaderboard:users"
TASK_IDEAS_INDEX_KEY = "global:taskideas"
VISITOR_STATS_KEY = "visitor:stats"
ACTIVE_VISITOR_PATTERN = "visitor:active:*"
TASK_STATS_PATTERN = "task:stats:*"


def prefs_key(user_id: str | None) -> str:
    return f"user:{user_id}:prefs" if user_id else GUEST_PREFS_KEY


def user_completions_key(user_id: str) -> str:
    return f"user:{user_id}:completions"


def completion_key(completion_id: str) -> str:
    return f"completion:{completion_id}"


def leaderboard_key(user_id: str) -> str:
    return f"leaderboard:{user_id}"


def task_idea_key(idea_id: str) -> str:
    return f"taskidea:{idea_id}"


def submission_rate_limit_key(user_id: str) -> str:
    return f"rate_limit:task_submit:{user_id}"


def task_stats_key(task_id: str) -> str:
    return f"task:stats:{task_id}"


def active_visitor_key(visitor_key: str) -> str:
    return f"visitor:active:{visitor_key}"
