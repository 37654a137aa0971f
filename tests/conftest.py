# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Gives every test a fresh in-memory KV store
# - Provides an API client and common payloads
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("OPENAI_API_KEY", "test-openai-key")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")
os.environ["KV_URL"] = ""

import pytest
from fastapi.testclient import TestClient

from lib.kv import InMemoryKVStore, KVClient


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def kv_store():
    """Fresh in-memory store for each test."""
    store = InMemoryKVStore()
    KVClient.set_store(store)
    yield store
    KVClient.set_store(None)


@pytest.fixture(autouse=True)
def clear_hackernews_cache():
    from lib import hackernews
    hackernews.clear_cache()
    yield
    hackernews.clear_cache()


@pytest.fixture
def client():
    """FastAPI test client."""
    from app.main import app
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def completion_payload():
    """A valid POST /api/completions body."""
    return {
        "userId": "user-1",
        "taskId": "task-0000001",
        "timeSpent": 60,
        "attempts": 1,
        "completedAt": "2024-01-15T10:30:00.000Z",
    }


@pytest.fixture
def ai_task_idea_dict():
    """A generator reply that satisfies AITaskIdea."""
    return {
        "title": "Prompt Injection Defender",
        "description": "Spot the malicious instruction hidden in a stream of chatbot prompts before it reaches the model.",
        "category": "puzzle",
        "difficulty": "medium",
        "estimatedTime": 60,
        "keywords": ["ai", "security"],
        "inspiration": "Front-page story about LLM jailbreaks",
        "interactionType": "click",
        "goalType": "accuracy",
    }


@pytest.fixture
def ai_task_batch_dict(ai_task_idea_dict):
    """A generator reply that satisfies AITaskBatch."""
    second = dict(ai_task_idea_dict, title="WebAssembly Speed Sprint", category="game", goalType="speed")
    third = dict(ai_task_idea_dict, title="Color Palette Remix Tool", category="tool", difficulty="easy")
    return {
        "tasks": [ai_task_idea_dict, second, third],
        "trendSummary": "AI security and fast web runtimes",
        "reasoning": "Both topics dominate the front page this week",
    }
