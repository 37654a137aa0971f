# =============================================================================
# tests/test_hackernews.py - HackerNews Client Tests
# =============================================================================
# HTTP calls go through httpx.MockTransport; no network access.
# =============================================================================

import asyncio
from unittest.mock import patch

import httpx
import pytest

from core.models import HackerNewsItem
from lib import hackernews

STORIES = {
    1: {"id": 1, "type": "story", "title": "Show HN: A Rust library for graphs", "url": "https://www.example.com/graphs", "score": 120},
    2: {"id": 2, "type": "story", "title": "Building a chess engine in Python", "url": "https://chess.dev/post", "score": 80},
    3: {"id": 3, "type": "story", "title": "Ask HN: Where do you live?", "score": 300},
    4: {"id": 4, "type": "story", "title": "New AI color tool", "url": "https://colors.io", "score": 3},
    5: {"id": 5, "type": "story", "title": "Open source music generator", "url": "https://music.example.org", "score": 45},
}


def _transport(listings: dict[str, list[int]], calls: list[str] | None = None) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path.removeprefix("/v0/")
        if calls is not None:
            calls.append(path)
        if path.startswith("item/"):
            item_id = int(path.removeprefix("item/").removesuffix(".json"))
            if item_id not in STORIES:
                # The API answers deleted or unknown items with a literal null
                return httpx.Response(200, content=b"null")
            return httpx.Response(200, json=STORIES[item_id])
        listing = path.removesuffix(".json")
        if listing in listings:
            return httpx.Response(200, json=listings[listing])
        return httpx.Response(404)

    return httpx.MockTransport(handler)


def _patch_client(transport: httpx.MockTransport):
    return patch(
        "lib.hackernews._make_client",
        side_effect=lambda: httpx.AsyncClient(transport=transport),
    )


# =============================================================================
# Text Helpers
# =============================================================================

class TestExtractKeywords:

    def test_matches_title_and_url(self):
        keywords = hackernews.extract_keywords("Show HN: A Rust library", "https://github.com/x/y")
        assert "rust" in keywords
        assert "library" in keywords
        assert "github" in keywords

    def test_case_insensitive(self):
        assert "python" in hackernews.extract_keywords("PYTHON tips")

    def test_no_keywords(self):
        assert hackernews.extract_keywords("Ask HN: Where do you live?") == []


class TestCategorizeInspiration:

    @pytest.mark.parametrize(
        "title,expected",
        [
            ("A browser chess puzzle", "game"),
            ("Markdown formatter utility", "tool"),
            ("Generative music with code", "creative"),
            ("Why we moved to TypeScript", "tech"),
            ("The history of the fax machine", "trending"),
        ],
    )
    def test_categories(self, title, expected):
        assert hackernews.categorize_inspiration(HackerNewsItem(id=1, title=title)) == expected

    def test_game_checked_before_tool(self):
        item = HackerNewsItem(id=1, title="A game level generator")
        assert hackernews.categorize_inspiration(item) == "game"


class TestGenerateSummary:

    def test_full_summary(self):
        item = HackerNewsItem(id=1, title="Show HN: A Rust library for graphs", url="https://www.example.com/graphs")

        assert hackernews.generate_summary(item) == (
            "Tech inspiration: Show HN: A Rust library for graphs (from example.com). "
            "Related to: rust, library"
        )

    def test_without_url_or_keywords(self):
        item = HackerNewsItem(id=1, title="Ask HN: Where do you live?")
        assert hackernews.generate_summary(item) == "Trending inspiration: Ask HN: Where do you live?"


class TestGetDifficulty:

    def test_levels(self):
        assert hackernews.get_difficulty("css") == "easy"
        assert hackernews.get_difficulty("webassembly") == "hard"
        assert hackernews.get_difficulty("react") == "medium"


# =============================================================================
# Fetching
# =============================================================================

class TestFetchStories:

    def test_top_stories(self):
        with _patch_client(_transport({"topstories": [1, 2, 3]})):
            stories = asyncio.run(hackernews.get_top_stories(2))

        assert [s.id for s in stories] == [1, 2]
        assert stories[0].title == "Show HN: A Rust library for graphs"

    def test_deleted_items_skipped(self):
        with _patch_client(_transport({"newstories": [1, 999]})):
            stories = asyncio.run(hackernews.get_new_stories(5))

        assert [s.id for s in stories] == [1]

    def test_http_error_returns_empty(self):
        with _patch_client(_transport({})):
            assert asyncio.run(hackernews.get_best_stories(5)) == []

    def test_responses_are_cached(self):
        calls: list[str] = []
        transport = _transport({"topstories": [1]}, calls)

        with _patch_client(transport):
            asyncio.run(hackernews.get_top_stories(1))
            asyncio.run(hackernews.get_top_stories(1))

        assert calls == ["topstories.json", "item/1.json"]


class TestProjectInspiration:

    @pytest.fixture
    def hn(self):
        listings = {"topstories": [1, 2, 3], "newstories": [4, 5], "beststories": [1]}
        with _patch_client(_transport(listings)):
            yield

    def test_filters_and_sorts(self, hn):
        inspirations = asyncio.run(hackernews.get_project_inspiration(20))

        # 3 has no keywords, 4 scores too low; 1 appears in two listings
        assert [i.title for i in inspirations] == [
            "Show HN: A Rust library for graphs",
            "Show HN: A Rust library for graphs",
            "Building a chess engine in Python",
            "Open source music generator",
        ]
        assert inspirations[0].inspiration_type == "tech"
        assert inspirations[2].inspiration_type == "game"

    def test_limit(self, hn):
        assert len(asyncio.run(hackernews.get_project_inspiration(1))) == 1

    def test_trending_technologies(self, hn):
        trending = asyncio.run(hackernews.get_trending_technologies())

        assert trending[0] == "rust"
        assert len(trending) <= 10

    def test_project_ideas(self, hn):
        ideas = asyncio.run(hackernews.generate_project_ideas())

        assert len(ideas) <= 10
        assert ideas[-1].title == "Minimalist Game Collection"
        assert ideas[0].title.startswith("Interactive ")

    def test_project_ideas_without_network(self):
        with _patch_client(_transport({})):
            ideas = asyncio.run(hackernews.generate_project_ideas())

        assert [i.title for i in ideas] == [
            "Trending Topic Visualizer",
            "Interactive Code Playground",
            "Minimalist Game Collection",
        ]


class TestTrendsEndpoint:

    def test_invalid_type_is_400(self, client):
        response = client.get("/api/hackernews-trends", params={"type": "nope"})

        assert response.status_code == 400
        assert "Invalid type parameter" in response.json()["detail"]

    def test_stories(self, client):
        with _patch_client(_transport({"topstories": [1, 2]})):
            body = client.get("/api/hackernews-trends", params={"type": "stories", "limit": 2}).json()

        assert body["success"] is True
        assert body["type"] == "stories"
        assert body["count"] == 2
        assert body["data"][0]["id"] == 1

    def test_inspiration(self, client):
        with _patch_client(_transport({"topstories": [1, 2], "newstories": [], "beststories": []})):
            body = client.get("/api/hackernews-trends").json()

        assert body["type"] == "inspiration"
        assert body["data"][0]["inspirationType"] == "tech"
