# =============================================================================
# core/services/leaderboard_service.py - Leaderboard Queries
# =============================================================================

import logging

from core.models import LeaderboardEntry
from core.services.keys import LEADERBOARD_USERS_KEY, leaderboard_key
from lib.kv import KVClient
from lib.utils import parse_iso

logger = logging.getLogger(__name__)


class LeaderboardService:
    """
    Builds the ranked leaderboard from per-user entries.
    """

    @staticmethod
    def get_leaderboard(limit: int = 50) -> list[LeaderboardEntry]:
        """
        Rank every user on the leaderboard index.

        Sorted by totalPoints (highest first), ties broken by lastActive
        (most recent first). Ranks start at 1 and are assigned before the
        list is truncated to `limit`.
        """
        kv = KVClient.get_store()
        user_ids = kv.get(LEADERBOARD_USERS_KEY) or []

        entries: list[LeaderboardEntry] = []
        for user_id in user_ids:
            raw = kv.get(leaderboard_key(user_id))
            if raw:
                entries.append(LeaderboardEntry.model_validate(raw))

        entries.sort(
            key=lambda e: (e.total_points, parse_iso(e.last_active)),
            reverse=True,
        )

        for position, entry in enumerate(entries, start=1):
            entry.rank = position

        logger.debug(f"Leaderboard built from {len(entries)} entries")
        return entries[:limit]
