# =============================================================================
# tests/test_visitor.py - Visitor Tracking & Preferences Tests
# =============================================================================

from core.models import UserPrefs
from core.services import VisitorService
from core.services.keys import GUEST_PREFS_KEY


class TestTrackVisitor:

    def test_signed_in_visit_counts_as_unique(self):
        stats = VisitorService.track_visitor("user-1")

        assert stats.total_visitors == 1
        assert stats.unique_visitors == 1

    def test_every_signed_in_visit_counts_as_unique(self):
        VisitorService.track_visitor("user-1")
        stats = VisitorService.track_visitor("user-1")

        assert stats.total_visitors == 2
        assert stats.unique_visitors == 2

    def test_mixed_visits(self):
        VisitorService.track_visitor("user-1")
        VisitorService.track_visitor()
        stats = VisitorService.track_visitor("user-2")

        assert stats.total_visitors == 3
        assert stats.unique_visitors == 2

    def test_updates_prefs(self):
        VisitorService.track_visitor("user-1")
        VisitorService.track_visitor("user-1")

        prefs = VisitorService.get_prefs("user-1")
        assert prefs.visit_count == 2
        assert prefs.last_visit is not None

    def test_anonymous_visits(self, kv_store):
        stats = VisitorService.track_visitor()

        assert stats.total_visitors == 1
        assert stats.unique_visitors == 0
        assert kv_store.get(GUEST_PREFS_KEY)["visitCount"] == 1

    def test_currently_online(self):
        VisitorService.track_visitor("user-1")
        VisitorService.track_visitor("user-2")
        VisitorService.track_visitor("user-1")

        assert VisitorService.get_visitor_stats().currently_online == 2


class TestVisitorStats:

    def test_defaults_when_empty(self):
        stats = VisitorService.get_visitor_stats()

        assert stats.total_visitors == 0
        assert stats.unique_visitors == 0
        assert stats.currently_online == 0
        assert stats.last_updated


class TestPrefs:

    def test_default_prefs(self):
        prefs = VisitorService.get_prefs("new-user")
        assert prefs.visit_count == 0
        assert prefs.voted_task_ideas == []

    def test_update_replaces_prefs(self):
        VisitorService.update_prefs(UserPrefs(favorite_tasks=["task-0000001"]), "user-1")

        assert VisitorService.get_prefs("user-1").favorite_tasks == ["task-0000001"]
        assert VisitorService.get_prefs("user-2").favorite_tasks == []


class TestVisitorEndpoints:

    def test_post_visitor(self, client):
        response = client.post("/api/visitor", json={"userId": "user-1"})

        assert response.status_code == 200
        assert response.json() == {"success": True}

    def test_post_visitor_without_body(self, client):
        assert client.post("/api/visitor").status_code == 200

    def test_stats(self, client):
        client.post("/api/visitor", json={"userId": "user-1"})

        body = client.get("/api/stats").json()

        assert body["visitorStats"]["totalVisitors"] == 1
        assert body["visitorStats"]["currentlyOnline"] == 1
        assert body["latestTask"] == "task-0000001"
        assert body["taskHistory"][0] == {
            "id": "task-0000001",
            "name": "Interactive Color Palette Generator",
            "createdAt": "2024-01-15T10:00:00Z",
        }

    def test_prefs_round_trip(self, client):
        put = client.put(
            "/api/users/user-1/prefs",
            json={"favoriteTasks": ["task-0000001"], "settings": {"theme": "dark", "autoRedirect": True}},
        )
        assert put.status_code == 200

        prefs = client.get("/api/users/user-1/prefs").json()
        assert prefs["favoriteTasks"] == ["task-0000001"]
        assert prefs["settings"] == {"theme": "dark", "autoRedirect": True}

    def test_invalid_theme_rejected(self, client):
        response = client.put("/api/users/user-1/prefs", json={"settings": {"theme": "neon"}})
        assert response.status_code == 400
