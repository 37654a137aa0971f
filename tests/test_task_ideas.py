# =============================================================================
# tests/test_task_ideas.py - Task Idea Submission & Voting Tests
# =============================================================================

from datetime import timedelta
from unittest.mock import patch

import pytest

from app.config import settings
from app.exceptions import AlreadyVotedError, TaskIdeaNotFoundError
from core.models import TaskIdeaStatus
from core.services import TaskIdeaService, VisitorService
from core.services.keys import TASK_IDEAS_INDEX_KEY, task_idea_key
from lib.utils import to_iso, utc_now

WINDOW_MS = 3600 * 1000


def _age_idea(kv_store, idea_id: str, days: float) -> None:
    record = kv_store.get(task_idea_key(idea_id))
    record["createdAt"] = to_iso(utc_now() - timedelta(days=days))
    kv_store.set(task_idea_key(idea_id), record)


# =============================================================================
# Rate Limiting
# =============================================================================

class TestRateLimit:

    def test_anonymous_always_allowed(self):
        assert TaskIdeaService.can_user_submit_task(None) is True
        assert TaskIdeaService.get_time_until_next_submission(None) == 0

    def test_new_user_allowed(self):
        assert TaskIdeaService.can_user_submit_task("user-1") is True

    def test_blocked_within_window(self):
        with patch("core.services.task_idea_service.epoch_ms", return_value=1_000_000):
            TaskIdeaService.record_task_submission("user-1")
        with patch("core.services.task_idea_service.epoch_ms", return_value=1_000_000 + 10 * 60 * 1000):
            assert TaskIdeaService.can_user_submit_task("user-1") is False
            assert TaskIdeaService.get_time_until_next_submission("user-1") == 50 * 60 * 1000

    def test_allowed_after_window(self):
        with patch("core.services.task_idea_service.epoch_ms", return_value=1_000_000):
            TaskIdeaService.record_task_submission("user-1")
        with patch("core.services.task_idea_service.epoch_ms", return_value=1_000_000 + WINDOW_MS):
            assert TaskIdeaService.can_user_submit_task("user-1") is True
            assert TaskIdeaService.get_time_until_next_submission("user-1") == 0


# =============================================================================
# Submission & Voting
# =============================================================================

class TestSubmitTaskIdea:

    def test_submit_stores_and_indexes(self, kv_store):
        first = TaskIdeaService.submit_task_idea("First idea")
        second = TaskIdeaService.submit_task_idea("Second idea", "details")

        assert kv_store.get(TASK_IDEAS_INDEX_KEY) == [second.id, first.id]
        stored = kv_store.get(task_idea_key(second.id))
        assert stored["title"] == "Second idea"
        assert stored["description"] == "details"
        assert stored["votes"] == 0
        assert stored["status"] == "pending"

    def test_id_format(self):
        idea = TaskIdeaService.submit_task_idea("Idea")
        prefix, ms, suffix = idea.id.split("_")
        assert prefix == "idea"
        assert ms.isdigit()
        assert len(suffix) == 10

    def test_user_submission_starts_window_and_marks_prefs(self):
        idea = TaskIdeaService.submit_task_idea("Idea", user_id="user-1")

        assert TaskIdeaService.can_user_submit_task("user-1") is False
        assert idea.id in VisitorService.get_prefs("user-1").voted_task_ideas
        assert idea.submitted_by == "user-1"

    def test_anonymous_submission_not_limited(self):
        TaskIdeaService.submit_task_idea("Idea")
        assert TaskIdeaService.can_user_submit_task(None) is True


class TestVoting:

    def test_vote(self):
        idea = TaskIdeaService.submit_task_idea("Idea")

        updated = TaskIdeaService.vote_for_task_idea(idea.id, "user-1")

        assert updated.votes == 1
        assert updated.voters == ["user-1"]
        assert TaskIdeaService.has_user_voted_for_idea(idea.id, "user-1") is True
        assert idea.id in VisitorService.get_prefs("user-1").voted_task_ideas

    def test_repeat_vote_rejected(self):
        idea = TaskIdeaService.submit_task_idea("Idea")
        TaskIdeaService.vote_for_task_idea(idea.id, "user-1")

        with pytest.raises(AlreadyVotedError):
            TaskIdeaService.vote_for_task_idea(idea.id, "user-1")

        assert TaskIdeaService.get_task_idea(idea.id).votes == 1

    def test_unknown_idea(self):
        with pytest.raises(TaskIdeaNotFoundError):
            TaskIdeaService.vote_for_task_idea("idea_missing", "user-1")

    def test_anonymous_votes_each_count(self):
        idea = TaskIdeaService.submit_task_idea("Idea")

        with patch("core.services.task_idea_service.epoch_ms", return_value=1):
            TaskIdeaService.vote_for_task_idea(idea.id)
        with patch("core.services.task_idea_service.epoch_ms", return_value=2):
            updated = TaskIdeaService.vote_for_task_idea(idea.id)

        assert updated.votes == 2
        assert updated.voters == ["guest:1", "guest:2"]

    def test_has_user_voted_without_user(self):
        idea = TaskIdeaService.submit_task_idea("Idea")
        assert TaskIdeaService.has_user_voted_for_idea(idea.id, None) is False

    def test_ideas_sorted_by_votes(self):
        a = TaskIdeaService.submit_task_idea("A")
        b = TaskIdeaService.submit_task_idea("B")
        TaskIdeaService.vote_for_task_idea(a.id, "user-1")
        TaskIdeaService.vote_for_task_idea(a.id, "user-2")
        TaskIdeaService.vote_for_task_idea(b.id, "user-1")
        c = TaskIdeaService.submit_task_idea("C")

        assert [i.id for i in TaskIdeaService.get_task_ideas()] == [a.id, b.id, c.id]


# =============================================================================
# Lifecycle
# =============================================================================

class TestLifecycle:

    def test_update_status(self):
        idea = TaskIdeaService.submit_task_idea("Idea")

        assert TaskIdeaService.update_task_idea_status(idea.id, TaskIdeaStatus.REJECTED) is True
        assert TaskIdeaService.get_task_idea(idea.id).status == "rejected"
        assert TaskIdeaService.update_task_idea_status("idea_missing", TaskIdeaStatus.REJECTED) is False

    def test_delete_old_ideas(self, kv_store):
        old = TaskIdeaService.submit_task_idea("Old")
        fresh = TaskIdeaService.submit_task_idea("Fresh")
        _age_idea(kv_store, old.id, days=3)

        result = TaskIdeaService.delete_old_task_ideas(2)

        assert result == {"deletedCount": 1, "deletedIds": [old.id]}
        assert kv_store.get(task_idea_key(old.id)) is None
        assert kv_store.get(TASK_IDEAS_INDEX_KEY) == [fresh.id]

    def test_delete_removes_dangling_and_unreadable(self, kv_store):
        good = TaskIdeaService.submit_task_idea("Good")
        broken = TaskIdeaService.submit_task_idea("Broken")
        record = kv_store.get(task_idea_key(broken.id))
        record["createdAt"] = "not a date"
        kv_store.set(task_idea_key(broken.id), record)
        kv_store.set(TASK_IDEAS_INDEX_KEY, ["idea_ghost", broken.id, good.id])

        result = TaskIdeaService.delete_old_task_ideas(1)

        assert result["deletedIds"] == ["idea_ghost", broken.id]
        assert kv_store.get(TASK_IDEAS_INDEX_KEY) == [good.id]

    def test_release_top_pending_idea(self):
        a = TaskIdeaService.submit_task_idea("A")
        b = TaskIdeaService.submit_task_idea("B")
        TaskIdeaService.vote_for_task_idea(b.id, "user-1")

        released = TaskIdeaService.release_top_task_idea()

        assert released.id == b.id
        assert TaskIdeaService.get_task_idea(b.id).status == "in_progress"
        assert TaskIdeaService.get_task_idea(a.id).status == "pending"

    def test_release_skips_non_pending(self):
        a = TaskIdeaService.submit_task_idea("A")
        b = TaskIdeaService.submit_task_idea("B")
        TaskIdeaService.vote_for_task_idea(b.id, "user-1")
        TaskIdeaService.update_task_idea_status(b.id, TaskIdeaStatus.COMPLETED)

        assert TaskIdeaService.release_top_task_idea().id == a.id

    def test_release_nothing_pending(self):
        assert TaskIdeaService.release_top_task_idea() is None


# =============================================================================
# Endpoint Tests
# =============================================================================

class TestIdeaEndpoints:

    def test_submit(self, client):
        response = client.post(
            "/api/tasks/idea/submit",
            json={"title": "Emoji Memory Match", "description": "Flip cards", "userId": "user-1"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["id"].startswith("idea_")

    def test_submit_requires_title(self, client):
        response = client.post("/api/tasks/idea/submit", json={"userId": "user-1"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Title is required"

    def test_submit_requires_user(self, client):
        response = client.post("/api/tasks/idea/submit", json={"title": "Idea"})

        assert response.status_code == 400
        assert response.json()["detail"] == "User ID is required"

    def test_submit_rate_limited(self, client):
        client.post("/api/tasks/idea/submit", json={"title": "One", "userId": "user-1"})

        response = client.post("/api/tasks/idea/submit", json={"title": "Two", "userId": "user-1"})

        assert response.status_code == 429
        body = response.json()
        assert body["code"] == "RATE_LIMIT_EXCEEDED"
        assert 0 < body["timeRemaining"] <= WINDOW_MS
        assert body["details"]["timeRemaining"] == body["timeRemaining"]
        assert "one task per hour" in body["detail"]
        assert "60 minutes" in body["detail"]

    def test_rate_limit_message_follows_window(self, client):
        with patch.object(settings, "SUBMISSION_WINDOW_SECONDS", 1800):
            client.post("/api/tasks/idea/submit", json={"title": "One", "userId": "user-1"})
            response = client.post("/api/tasks/idea/submit", json={"title": "Two", "userId": "user-1"})

        assert response.status_code == 429
        body = response.json()
        assert 0 < body["timeRemaining"] <= 1800 * 1000
        assert "one task per 30 minutes" in body["detail"]
        assert "30 minutes before" in body["detail"]

    def test_list_votes(self, client):
        client.post("/api/tasks/idea/submit", json={"title": "Idea", "userId": "user-1"})

        ideas = client.get("/api/votes").json()["taskIdeas"]

        assert len(ideas) == 1
        assert ideas[0]["title"] == "Idea"
        assert ideas[0]["submittedBy"] == "user-1"

    def test_vote(self, client):
        idea = TaskIdeaService.submit_task_idea("Idea")

        response = client.post("/api/votes", json={"ideaId": idea.id, "userId": "user-1"})

        assert response.status_code == 200
        assert response.json() == {"success": True}

    def test_repeat_vote_is_409(self, client):
        idea = TaskIdeaService.submit_task_idea("Idea")
        client.post("/api/votes", json={"ideaId": idea.id, "userId": "user-1"})

        response = client.post("/api/votes", json={"ideaId": idea.id, "userId": "user-1"})

        assert response.status_code == 409
        assert response.json()["detail"] == "You have already voted for this task idea"

    def test_unknown_idea_is_404(self, client):
        response = client.post("/api/votes", json={"ideaId": "idea_missing", "userId": "user-1"})

        assert response.status_code == 404
        assert response.json()["detail"] == "Task idea not found"

    @pytest.mark.parametrize("body", [{"userId": "user-1"}, {"ideaId": "idea_1"}, {}])
    def test_vote_missing_fields_is_400(self, client, body):
        assert client.post("/api/votes", json=body).status_code == 400
