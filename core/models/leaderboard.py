# =============================================================================
# core/models/leaderboard.py - Leaderboard Schemas
# =============================================================================

from .base import CamelModel


class LeaderboardEntry(CamelModel):
    """
    One user's standing.

    Stored at leaderboard:{userId} without a meaningful rank; rank is
    assigned when the leaderboard is read and sorted.
    """
    user_id: str
    rank: int = 0
    total_points: int = 0
    completed_tasks: int = 0
    last_active: str
