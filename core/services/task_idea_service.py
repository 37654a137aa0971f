# =============================================================================
# core/services/task_idea_service.py - Task Idea Business Logic
# =============================================================================
# Handles the community side of task planning:
# - Submission rate limiting (one idea per user per window)
# - Idea submission, listing and voting
# - Status changes, cleanup of stale ideas and releasing the top idea
#
# Read-modify-write sequences (voting, index updates) are not atomic: two
# concurrent votes on the same idea can lose one of them.
# =============================================================================

import logging
import uuid
from datetime import timedelta
from typing import Any

from app.config import settings
from app.exceptions import AlreadyVotedError, TaskIdeaNotFoundError
from core.models import TaskIdea, TaskIdeaStatus
from core.services.keys import (
    TASK_IDEAS_INDEX_KEY,
    submission_rate_limit_key,
    task_idea_key,
)
from core.services.visitor_service import VisitorService
from lib.kv import KVClient
from lib.utils import epoch_ms, parse_iso, utc_now, utc_now_iso

logger = logging.getLogger(__name__)


class TaskIdeaService:
    """
    Service for task idea submission and voting.
    """

    # -------------------------------------------------------------------------
    # Rate Limiting
    # -------------------------------------------------------------------------

    @staticmethod
    def can_user_submit_task(user_id: str | None) -> bool:
        """Anonymous submissions are never limited."""
        if not user_id:
            return True

        last_submission = KVClient.get_store().get(submission_rate_limit_key(user_id))
        if last_submission is None:
            return True

        return epoch_ms() - int(last_submission) >= settings.submission_window_ms

    @staticmethod
    def record_task_submission(user_id: str | None) -> None:
        if not user_id:
            return

        KVClient.get_store().setex(
            submission_rate_limit_key(user_id),
            settings.SUBMISSION_WINDOW_SECONDS,
            epoch_ms(),
        )

    @staticmethod
    def get_time_until_next_submission(user_id: str | None) -> int:
        """Milliseconds until the user may submit again (0 if allowed now)."""
        if not user_id:
            return 0

        last_submission = KVClient.get_store().get(submission_rate_limit_key(user_id))
        if last_submission is None:
            return 0

        remaining = settings.submission_window_ms - (epoch_ms() - int(last_submission))
        return max(0, remaining)

    # -------------------------------------------------------------------------
    # Submission & Listing
    # -------------------------------------------------------------------------

    @staticmethod
    def get_task_ideas() -> list[TaskIdea]:
        """All indexed ideas, most votes first."""
        kv = KVClient.get_store()
        ideas = []
        for idea_id in kv.get(TASK_IDEAS_INDEX_KEY) or []:
            raw = kv.get(task_idea_key(idea_id))
            if raw:
                ideas.append(TaskIdea.model_validate(raw))

        ideas.sort(key=lambda idea: idea.votes, reverse=True)
        return ideas

    @staticmethod
    def get_task_idea(idea_id: str) -> TaskIdea | None:
        raw = KVClient.get_store().get(task_idea_key(idea_id))
        return TaskIdea.model_validate(raw) if raw else None

    @staticmethod
    def submit_task_idea(
        title: str,
        description: str = "",
        status: TaskIdeaStatus = TaskIdeaStatus.PENDING,
        user_id: str | None = None,
    ) -> TaskIdea:
        """
        Store a new idea and put it at the front of the index.

        When a user submits, the submission starts their rate-limit window
        and the idea is added to their votedTaskIdeas preference.

        Returns:
            The stored idea
        """
        kv = KVClient.get_store()

        if user_id:
            TaskIdeaService.record_task_submission(user_id)

        idea = TaskIdea(
            id=f"idea_{epoch_ms()}_{uuid.uuid4().hex[:10]}",
            title=title,
            description=description,
            status=status,
            created_at=utc_now_iso(),
            submitted_by=user_id,
        )
        kv.set(task_idea_key(idea.id), idea.to_record())

        index = kv.get(TASK_IDEAS_INDEX_KEY) or []
        index.insert(0, idea.id)
        kv.set(TASK_IDEAS_INDEX_KEY, index)

        if user_id:
            TaskIdeaService._remember_voted_idea(user_id, idea.id)

        logger.info(f"Task idea submitted: {idea.id} '{title}' by {user_id or 'anonymous'}")
        return idea

    @staticmethod
    def _remember_voted_idea(user_id: str, idea_id: str) -> None:
        prefs = VisitorService.get_prefs(user_id)
        if idea_id not in prefs.voted_task_ideas:
            prefs.voted_task_ideas.append(idea_id)
            VisitorService.update_prefs(prefs, user_id)

    # -------------------------------------------------------------------------
    # Voting
    # -------------------------------------------------------------------------

    @staticmethod
    def vote_for_task_idea(idea_id: str, user_id: str | None = None) -> TaskIdea:
        """
        Add one vote to an idea.

        Anonymous votes get a one-off guest voter ID, so they are never
        rejected as duplicates.

        Raises:
            TaskIdeaNotFoundError: If the idea doesn't exist
            AlreadyVotedError: If this voter already voted for the idea
        """
        idea = TaskIdeaService.get_task_idea(idea_id)
        if idea is None:
            raise TaskIdeaNotFoundError(idea_id)

        voter_id = user_id or f"guest:{epoch_ms()}"
        if voter_id in idea.voters:
            raise AlreadyVotedError(idea_id, voter_id)

        idea.votes += 1
        idea.voters.append(voter_id)
        KVClient.get_store().set(task_idea_key(idea_id), idea.to_record())

        if user_id:
            TaskIdeaService._remember_voted_idea(user_id, idea_id)

        logger.info(f"Vote recorded for {idea_id} by {voter_id} (now {idea.votes})")
        return idea

    @staticmethod
    def has_user_voted_for_idea(idea_id: str, user_id: str | None) -> bool:
        if not user_id:
            return False

        idea = TaskIdeaService.get_task_idea(idea_id)
        return idea is not None and user_id in idea.voters

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @staticmethod
    def update_task_idea_status(idea_id: str, status: TaskIdeaStatus) -> bool:
        """Returns False if the idea doesn't exist."""
        idea = TaskIdeaService.get_task_idea(idea_id)
        if idea is None:
            return False

        idea.status = status
        KVClient.get_store().set(task_idea_key(idea_id), idea.to_record())
        return True

    @staticmethod
    def delete_old_task_ideas(older_than_days: int = 1) -> dict[str, Any]:
        """
        Delete ideas created more than `older_than_days` days ago.

        Index entries whose record is missing, or whose createdAt is absent or
        unreadable, are deleted too.

        Returns:
            {"deletedCount": int, "deletedIds": [ideaId, ...]}
        """
        kv = KVClient.get_store()
        cutoff = utc_now() - timedelta(days=older_than_days)

        deleted_ids: list[str] = []
        kept_ids: list[str] = []

        for idea_id in kv.get(TASK_IDEAS_INDEX_KEY) or []:
            raw = kv.get(task_idea_key(idea_id))
            created_at = raw.get("createdAt") if raw else None

            try:
                is_stale = created_at is None or parse_iso(created_at) < cutoff
            except ValueError:
                is_stale = True

            if is_stale:
                kv.delete(task_idea_key(idea_id))
                deleted_ids.append(idea_id)
            else:
                kept_ids.append(idea_id)

        kv.set(TASK_IDEAS_INDEX_KEY, kept_ids)

        logger.info(f"Deleted {len(deleted_ids)} task ideas older than {older_than_days} day(s)")
        return {"deletedCount": len(deleted_ids), "deletedIds": deleted_ids}

    @staticmethod
    def release_top_task_idea() -> TaskIdea | None:
        """
        Move the most-voted pending idea to in_progress.

        Ties go to the newest idea. Returns None when nothing is pending.
        """
        pending = [
            idea for idea in TaskIdeaService.get_task_ideas()
            if idea.status == TaskIdeaStatus.PENDING
        ]
        if not pending:
            logger.info("No pending task ideas to release")
            return None

        top = pending[0]
        TaskIdeaService.update_task_idea_status(top.id, TaskIdeaStatus.IN_PROGRESS)
        top.status = TaskIdeaStatus.IN_PROGRESS

        logger.info(f"Released task idea {top.id} '{top.title}' with {top.votes} votes")
        return top
