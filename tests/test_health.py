# =============================================================================
# tests/test_health.py - Health Endpoint Tests
# =============================================================================

from unittest.mock import MagicMock

from app.dependencies import get_kv_store
from lib.kv import InMemoryKVStore, KVClient, KVStoreError, RedisKVStore


class TestHealth:

    def test_health(self, client):
        body = client.get("/api/health").json()

        assert body["status"] == "healthy"
        assert body["environment"] == "development"
        assert body["store"] == "memory"

    def test_ready(self, client):
        body = client.get("/api/health/ready").json()

        assert body["status"] == "ready"
        assert body["kv"] == "healthy"

    def test_ready_degraded_when_store_unreachable(self, client):
        redis_client = MagicMock()
        redis_client.ping.side_effect = KVStoreError("down")
        KVClient.set_store(RedisKVStore(redis_client))

        body = client.get("/api/health/ready").json()

        assert body["status"] == "degraded"
        assert body["kv"].startswith("unhealthy")

    def test_store_comes_from_dependency(self, client):
        unhealthy = MagicMock(spec=InMemoryKVStore)
        unhealthy.ping.return_value = False
        client.app.dependency_overrides[get_kv_store] = lambda: unhealthy
        try:
            body = client.get("/api/health/ready").json()
        finally:
            client.app.dependency_overrides.clear()

        assert body == {"status": "degraded", "kv": "unhealthy", "timestamp": body["timestamp"]}

    def test_root(self, client):
        assert client.get("/").json()["health"] == "/api/health"
