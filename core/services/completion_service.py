# =============================================================================
# core/services/completion_service.py - Completion Business Logic
# =============================================================================
# Records task completions, keeps each user's completion index current and
# recomputes the user's leaderboard entry after every write.
#
# A user holds at most one completion per task: a new completion replaces
# the previous one in the index (the old record itself is left in place).
# =============================================================================

import logging
from collections import Counter

from core.models import (
    CompletionRequest,
    Difficulty,
    LeaderboardEntry,
    StoredCompletion,
    TaskCompletionStats,
    UserCompletion,
)
from core.services.keys import (
    LEADERBOARD_USERS_KEY,
    completion_key,
    leaderboard_key,
    user_completions_key,
)
from core.services.scoring import calculate_points, round_half_up
from lib.kv import KVClient
from lib.utils import EPOCH_ISO, epoch_ms, parse_iso

logger = logging.getLogger(__name__)


class CompletionService:
    """
    Service for recording and querying task completions.
    """

    @staticmethod
    def record_completion(request: CompletionRequest) -> StoredCompletion:
        """
        Score and store a completion.

        Steps:
        1. Build ID completion_{userId}_{taskId}_{epochMs} and score it
        2. Store the completion record
        3. Replace any earlier completion of the same task in the user's index
        4. Recompute the user's leaderboard entry

        Args:
            request: Validated completion report

        Returns:
            The stored completion including its points
        """
        kv = KVClient.get_store()

        completion = StoredCompletion(
            id=f"completion_{request.user_id}_{request.task_id}_{epoch_ms()}",
            points=calculate_points(request.time_spent, request.attempts),
            **request.model_dump(),
        )
        kv.set(completion_key(completion.id), completion.to_record())

        index_key = user_completions_key(request.user_id)
        completion_ids = kv.get(index_key) or []

        # Entries whose record has gone missing are dropped along the way
        kept_ids = []
        for existing_id in completion_ids:
            existing = kv.get(completion_key(existing_id))
            if existing and existing.get("taskId") != request.task_id:
                kept_ids.append(existing_id)

        kept_ids.append(completion.id)
        kv.set(index_key, kept_ids)

        CompletionService.recompute_leaderboard_entry(request.user_id)

        logger.info(
            f"Recorded completion {completion.id}: {completion.points} points "
            f"({request.time_spent}s, {request.attempts} attempts)"
        )
        return completion

    @staticmethod
    def recompute_leaderboard_entry(user_id: str) -> LeaderboardEntry:
        """
        Rebuild a user's leaderboard entry from their completions.

        totalPoints is the sum over indexed completions, lastActive the latest
        completedAt (epoch when there are none). The user is added to the
        leaderboard index the first time.
        """
        kv = KVClient.get_store()
        completion_ids = kv.get(user_completions_key(user_id)) or []

        total_points = 0
        last_active = EPOCH_ISO
        for completion in CompletionService._load(completion_ids):
            total_points += completion.points
            if parse_iso(completion.completed_at) > parse_iso(last_active):
                last_active = completion.completed_at

        entry = LeaderboardEntry(
            user_id=user_id,
            total_points=total_points,
            completed_tasks=len(completion_ids),
            last_active=last_active,
        )
        kv.set(leaderboard_key(user_id), entry.model_dump(by_alias=True, exclude={"rank"}))

        leaderboard_users = kv.get(LEADERBOARD_USERS_KEY) or []
        if user_id not in leaderboard_users:
            leaderboard_users.append(user_id)
            kv.set(LEADERBOARD_USERS_KEY, leaderboard_users)

        logger.debug(f"Leaderboard entry for {user_id}: {total_points} points")
        return entry

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @staticmethod
    def _load(completion_ids: list[str]) -> list[StoredCompletion]:
        kv = KVClient.get_store()
        completions = []
        for completion_id in completion_ids:
            raw = kv.get(completion_key(completion_id))
            if raw:
                completions.append(StoredCompletion.model_validate(raw))
        return completions

    @staticmethod
    def list_user_completions(user_id: str) -> list[StoredCompletion]:
        """All of a user's current completions, newest first."""
        kv = KVClient.get_store()
        completions = CompletionService._load(kv.get(user_completions_key(user_id)) or [])
        completions.sort(key=lambda c: parse_iso(c.completed_at), reverse=True)
        return completions

    @staticmethod
    def get_user_completion(user_id: str, task_id: str) -> StoredCompletion | None:
        """The user's completion of one task, or None."""
        kv = KVClient.get_store()
        for completion in CompletionService._load(kv.get(user_completions_key(user_id)) or []):
            if completion.task_id == task_id:
                return completion
        return None

    @staticmethod
    def get_user_completions_summary(user_id: str) -> list[UserCompletion]:
        """
        Completions in the leaderboard view: completion time in milliseconds.

        Tasks carry no difficulty rating yet, so every completion is reported
        as medium.
        """
        return [
            UserCompletion(
                id=completion.id,
                task_id=completion.task_id,
                completion_time=completion.time_spent * 1000,
                points=completion.points,
                completed_at=completion.completed_at,
                difficulty=Difficulty.MEDIUM,
            )
            for completion in CompletionService.list_user_completions(user_id)
        ]

    @staticmethod
    def get_user_task_completion(user_id: str, task_id: str) -> UserCompletion | None:
        summary = CompletionService.get_user_completions_summary(user_id)
        return next((c for c in summary if c.task_id == task_id), None)

    @staticmethod
    def get_task_completion_stats(task_id: str) -> TaskCompletionStats:
        """
        Aggregate every leaderboard user's completion of one task.

        Averages are rounded to whole numbers; averageCompletionTime is in
        milliseconds.
        """
        kv = KVClient.get_store()
        leaderboard_users = kv.get(LEADERBOARD_USERS_KEY) or []

        completions: list[UserCompletion] = []
        for user_id in leaderboard_users:
            completion = CompletionService.get_user_task_completion(user_id, task_id)
            if completion:
                completions.append(completion)

        if not completions:
            return TaskCompletionStats()

        total = len(completions)
        by_difficulty = Counter(c.difficulty for c in completions)

        return TaskCompletionStats(
            total_completions=total,
            average_points=round_half_up(sum(c.points for c in completions) / total),
            average_completion_time=round_half_up(sum(c.completion_time for c in completions) / total),
            completions_by_difficulty={d.value: by_difficulty.get(d.value, 0) for d in Difficulty},
        )
