# =============================================================================
# lib/kv.py - Key-Value Store Wrapper
# =============================================================================
# This module provides the persistence layer for the whole application.
# Every record (preferences, task ideas, completions, leaderboard entries)
# is stored as a whole JSON value under a string key.
#
# Two implementations share the KVStore interface:
# - RedisKVStore: hosted Redis-protocol store (KV_URL), values JSON-encoded
# - InMemoryKVStore: process-local dict, used when KV_URL is not configured
#
# KVClient holds the process-wide singleton, the same way the rest of the
# code expects to reach a shared client without passing it around.
#
# Usage:
#   from lib.kv import KVClient
#   kv = KVClient.get_store()
#   kv.set("visitor:stats", {"totalVisitors": 1})
#   stats = kv.get("visitor:stats")
# =============================================================================

from __future__ import annotations

import copy
import fnmatch
import json
import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Callable

import redis

from app.config import settings
from lib.utils import ApplicationError

# Set up logging for this module
logger = logging.getLogger(__name__)


class KVStoreError(ApplicationError):
    """
    Error during key-value store operations.

    Example:
        raise KVStoreError(
            message="Failed to read key",
            code="KV_READ_FAILED",
            suggestion="Check that KV_URL points to a reachable store",
        )
    """

    def __init__(self, message: str, code: str = "KV_ERROR", **kwargs: Any):
        super().__init__(message, code=code, **kwargs)


# =============================================================================
# Interface
# =============================================================================

class KVStore(ABC):
    """
    Minimal key-value interface used by the services.

    Values are anything JSON-serializable. Reads return a fresh copy, so
    mutating a returned object never changes stored state until it is
    written back with set().
    """

    @abstractmethod
    def get(self, key: str) -> Any | None: ...

    @abstractmethod
    def set(self, key: str, value: Any, ex: int | None = None, px: int | None = None) -> bool:
        """Store a value. `ex` expires it after N seconds, `px` after N milliseconds."""

    @abstractmethod
    def setex(self, key: str, seconds: int, value: Any) -> bool: ...

    @abstractmethod
    def delete(self, *keys: str) -> int:
        """Delete keys, returning how many existed."""

    @abstractmethod
    def exists(self, *keys: str) -> int: ...

    @abstractmethod
    def incr(self, key: str) -> int: ...

    @abstractmethod
    def decr(self, key: str) -> int: ...

    @abstractmethod
    def keys(self, pattern: str = "*") -> list[str]:
        """Return keys matching a glob pattern (`*` wildcard)."""

    @abstractmethod
    def flushall(self) -> bool: ...

    @abstractmethod
    def hget(self, key: str, field: str) -> Any | None: ...

    @abstractmethod
    def hset(self, key: str, mapping: dict[str, Any]) -> int:
        """Set hash fields, returning the number of fields that were new."""

    @abstractmethod
    def hdel(self, key: str, *fields: str) -> int:
        """Delete hash fields. Returns 1 if anything was deleted, else 0."""

    @abstractmethod
    def hgetall(self, key: str) -> dict[str, Any] | None: ...

    def ping(self) -> bool:
        return True


# =============================================================================
# In-Memory Implementation
# =============================================================================

class InMemoryKVStore(KVStore):
    """
    Dict-backed store for development and tests.

    Expiry is checked lazily whenever a key is touched. Values pass through
    a JSON round-trip on write so the store behaves like the hosted one
    (tuples become lists, non-serializable values fail early).
    """

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}
        self._expires_at: dict[str, float] = {}

    def _purge_if_expired(self, key: str) -> None:
        deadline = self._expires_at.get(key)
        if deadline is not None and time.monotonic() >= deadline:
            self._data.pop(key, None)
            self._expires_at.pop(key, None)

    def _live_keys(self) -> list[str]:
        for key in list(self._data):
            self._purge_if_expired(key)
        return list(self._data)

    def get(self, key: str) -> Any | None:
        self._purge_if_expired(key)
        if key not in self._data:
            return None
        return copy.deepcopy(self._data[key])

    def set(self, key: str, value: Any, ex: int | None = None, px: int | None = None) -> bool:
        self._data[key] = json.loads(json.dumps(value))
        self._expires_at.pop(key, None)
        if ex:
            self._expires_at[key] = time.monotonic() + ex
        elif px:
            self._expires_at[key] = time.monotonic() + px / 1000
        return True

    def setex(self, key: str, seconds: int, value: Any) -> bool:
        return self.set(key, value, ex=seconds)

    def delete(self, *keys: str) -> int:
        deleted = 0
        for key in keys:
            self._purge_if_expired(key)
            if key in self._data:
                del self._data[key]
                self._expires_at.pop(key, None)
                deleted += 1
        return deleted

    def exists(self, *keys: str) -> int:
        live = set(self._live_keys())
        return sum(1 for key in keys if key in live)

    def _add(self, key: str, amount: int) -> int:
        self._purge_if_expired(key)
        value = int(self._data.get(key) or 0) + amount
        self._data[key] = value
        return value

    def incr(self, key: str) -> int:
        return self._add(key, 1)

    def decr(self, key: str) -> int:
        return self._add(key, -1)

    def keys(self, pattern: str = "*") -> list[str]:
        return [key for key in self._live_keys() if fnmatch.fnmatchcase(key, pattern)]

    def flushall(self) -> bool:
        self._data.clear()
        self._expires_at.clear()
        return True

    def hget(self, key: str, field: str) -> Any | None:
        hash_value = self.get(key) or {}
        return hash_value.get(field)

    def hset(self, key: str, mapping: dict[str, Any]) -> int:
        hash_value = self.get(key) or {}
        new_fields = sum(1 for field in mapping if field not in hash_value)
        hash_value.update(mapping)
        self._data[key] = json.loads(json.dumps(hash_value))
        return new_fields

    def hdel(self, key: str, *fields: str) -> int:
        hash_value = self.get(key)
        if not hash_value:
            return 0

        deleted = False
        for field in fields:
            if field in hash_value:
                del hash_value[field]
                deleted = True

        self._data[key] = hash_value
        return 1 if deleted else 0

    def hgetall(self, key: str) -> dict[str, Any] | None:
        return self.get(key)


# =============================================================================
# Redis Implementation
# =============================================================================

class RedisKVStore(KVStore):
    """
    Pass-through wrapper over a Redis-protocol store.

    Plain values are JSON strings; hashes are native Redis hashes whose
    field values are JSON strings.
    """

    def __init__(self, client: redis.Redis):
        self.client = client

    @classmethod
    def from_url(cls, url: str) -> "RedisKVStore":
        return cls(redis.Redis.from_url(url, decode_responses=True))

    def _run(self, operation: str, func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except redis.RedisError as e:
            raise KVStoreError(
                message=f"KV {operation} failed: {e}",
                code=f"KV_{operation.upper()}_FAILED",
                suggestion="Check that KV_URL points to a reachable store and the credentials are valid",
                details={"operation": operation, "args": [str(a) for a in args][:3]},
            ) from e

    @staticmethod
    def _decode(raw: str | None) -> Any | None:
        return None if raw is None else json.loads(raw)

    def get(self, key: str) -> Any | None:
        return self._decode(self._run("get", self.client.get, key))

    def set(self, key: str, value: Any, ex: int | None = None, px: int | None = None) -> bool:
        return bool(self._run("set", self.client.set, key, json.dumps(value), ex=ex, px=px))

    def setex(self, key: str, seconds: int, value: Any) -> bool:
        return bool(self._run("setex", self.client.setex, key, seconds, json.dumps(value)))

    def delete(self, *keys: str) -> int:
        if not keys:
            return 0
        return self._run("delete", self.client.delete, *keys)

    def exists(self, *keys: str) -> int:
        if not keys:
            return 0
        return self._run("exists", self.client.exists, *keys)

    def incr(self, key: str) -> int:
        return self._run("incr", self.client.incr, key)

    def decr(self, key: str) -> int:
        return self._run("decr", self.client.decr, key)

    def keys(self, pattern: str = "*") -> list[str]:
        # SCAN instead of KEYS so large keyspaces don't block the server
        return self._run("keys", lambda: list(self.client.scan_iter(match=pattern)))

    def flushall(self) -> bool:
        return bool(self._run("flushall", self.client.flushall))

    def hget(self, key: str, field: str) -> Any | None:
        return self._decode(self._run("hget", self.client.hget, key, field))

    def hset(self, key: str, mapping: dict[str, Any]) -> int:
        encoded = {field: json.dumps(value) for field, value in mapping.items()}
        return self._run("hset", self.client.hset, key, mapping=encoded)

    def hdel(self, key: str, *fields: str) -> int:
        removed = self._run("hdel", self.client.hdel, key, *fields)
        return 1 if removed else 0

    def hgetall(self, key: str) -> dict[str, Any] | None:
        data = self._run("hgetall", self.client.hgetall, key)
        if not data:
            return None
        return {field: json.loads(value) for field, value in data.items()}

    def ping(self) -> bool:
        return bool(self._run("ping", self.client.ping))


# =============================================================================
# Singleton Access
# =============================================================================

class KVClient:
    """
    Holds the shared KVStore instance.

    Implements the singleton pattern - one store is shared across the
    application. The store is chosen on first use:
    - KV_URL set: RedisKVStore
    - KV_URL unset: InMemoryKVStore (data is lost on restart)

    Example:
        kv = KVClient.get_store()
        ideas = kv.get("global:taskideas") or []
    """

    _instance: KVStore | None = None

    @classmethod
    def get_store(cls) -> KVStore:
        """
        Get or create the singleton store.

        Raises:
            KVStoreError: If the Redis client cannot be created
        """
        if cls._instance is None:
            if settings.KV_URL:
                try:
                    cls._instance = RedisKVStore.from_url(settings.KV_URL)
                    logger.info("KV store initialized (redis)")
                except Exception as e:
                    raise KVStoreError(
                        message=f"Failed to create KV client: {e}",
                        code="CLIENT_INIT_FAILED",
                        suggestion="Check KV_URL in your .env file (expected redis:// or rediss:// URL)",
                    ) from e
            else:
                logger.warning("KV_URL not set - using in-memory store, data will not persist")
                cls._instance = InMemoryKVStore()
        return cls._instance

    @classmethod
    def set_store(cls, store: KVStore | None) -> None:
        """Replace the shared store (tests, scripts). Pass None to reset."""
        cls._instance = store
