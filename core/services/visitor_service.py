# =============================================================================
# core/services/visitor_service.py - Visitor Tracking & Preferences
# =============================================================================
# Handles:
# - Per-user preferences (anonymous visitors share one guest record)
# - Site-wide visitor counters
# - "Currently online" markers that expire on their own
# =============================================================================

import logging

from app.config import settings
from core.models import UserPrefs, VisitorStats
from core.services.keys import (
    ACTIVE_VISITOR_PATTERN,
    VISITOR_STATS_KEY,
    active_visitor_key,
    prefs_key,
)
from lib.kv import KVClient
from lib.utils import epoch_ms, utc_now_iso

logger = logging.getLogger(__name__)


class VisitorService:
    """
    Service for preferences and visitor statistics.
    """

    @staticmethod
    def get_prefs(user_id: str | None = None) -> UserPrefs:
        """Stored preferences, or empty defaults."""
        raw = KVClient.get_store().get(prefs_key(user_id))
        return UserPrefs.model_validate(raw or {})

    @staticmethod
    def update_prefs(prefs: UserPrefs, user_id: str | None = None) -> UserPrefs:
        """Replace the stored preferences as a whole."""
        KVClient.get_store().set(prefs_key(user_id), prefs.to_record())
        return prefs

    @staticmethod
    def track_visitor(user_id: str | None = None) -> VisitorStats:
        """
        Record one visit.

        - Bumps the user's visitCount and lastVisit
        - Bumps totalVisitors, and uniqueVisitors when the visit carries a userId
        - Marks the visitor online for ACTIVE_VISITOR_TTL_SECONDS

        Returns:
            The updated global counters (currentlyOnline not computed)
        """
        kv = KVClient.get_store()
        now = utc_now_iso()
        visitor_key = user_id or f"guest:{epoch_ms()}"

        prefs = VisitorService.get_prefs(user_id)
        prefs.visit_count += 1
        prefs.last_visit = now
        VisitorService.update_prefs(prefs, user_id)

        raw_stats = kv.get(VISITOR_STATS_KEY)
        stats = VisitorStats.model_validate(raw_stats) if raw_stats else VisitorStats(last_updated=now)
        stats.total_visitors += 1
        if user_id:
            stats.unique_visitors += 1
        stats.currently_online = 0
        stats.last_updated = now
        kv.set(VISITOR_STATS_KEY, stats.to_record())

        kv.set(active_visitor_key(visitor_key), now, ex=settings.ACTIVE_VISITOR_TTL_SECONDS)

        logger.debug(f"Tracked visit from {visitor_key}")
        return stats

    @staticmethod
    def get_visitor_stats() -> VisitorStats:
        """Global counters with currentlyOnline counted from live markers."""
        kv = KVClient.get_store()
        currently_online = len(kv.keys(ACTIVE_VISITOR_PATTERN))

        raw_stats = kv.get(VISITOR_STATS_KEY)
        if not raw_stats:
            return VisitorStats(currently_online=currently_online, last_updated=utc_now_iso())

        stats = VisitorStats.model_validate(raw_stats)
        stats.currently_online = currently_online
        return stats
