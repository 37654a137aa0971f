# =============================================================================
# lib/hackernews.py - HackerNews Trend Source
# =============================================================================
# Async client over the public HackerNews API plus the helpers that turn
# stories into project inspiration for the task generator.
#
# API docs: https://github.com/HackerNews/API
# Responses are cached in-process for HACKERNEWS_CACHE_SECONDS to stay well
# clear of rate limits. Fetch failures are logged and produce empty lists.
#
# Usage:
#   from lib.hackernews import get_project_inspiration
#   inspirations = await get_project_inspiration(limit=10)
# =============================================================================

from __future__ import annotations

import asyncio
import logging
import re
import time
from collections import Counter
from typing import Any
from urllib.parse import urlparse

import httpx

from app.config import settings
from core.models import (
    Difficulty,
    HackerNewsItem,
    InspirationType,
    ProjectIdea,
    ProjectInspiration,
)

logger = logging.getLogger(__name__)

HN_API_BASE = "https://hacker-news.firebaseio.com/v0"

# url -> (fetched_at, payload)
_cache: dict[str, tuple[float, Any]] = {}

TECH_KEYWORDS = [
    "ai", "ml", "machine learning", "artificial intelligence",
    "javascript", "typescript", "react", "vue", "svelte", "next.js",
    "python", "rust", "go", "webassembly", "wasm",
    "game", "graphics", "webgl", "threejs", "canvas",
    "api", "database", "visualization", "chart",
    "crypto", "blockchain", "nft",
    "tool", "utility", "generator", "converter",
    "animation", "creative", "art", "music",
    "productivity", "automation", "workflow",
    "mobile", "app", "pwa", "web app",
    "security", "privacy", "encryption",
    "open source", "github", "library", "framework",
]

# Checked in order; the first match wins
_CATEGORY_PATTERNS = [
    (InspirationType.GAME, re.compile(r"game|play|puzzle|arcade|chess|cards")),
    (InspirationType.TOOL, re.compile(r"tool|utility|generator|converter|calculator|formatter")),
    (InspirationType.CREATIVE, re.compile(r"art|creative|music|animation|drawing|design|color")),
    (InspirationType.TECH, re.compile(r"javascript|typescript|react|vue|python|rust|framework|library|api")),
]

_EASY_TECH = ["html", "css", "color", "text", "simple"]
_HARD_TECH = ["webassembly", "wasm", "machine learning", "ai", "blockchain", "crypto"]

_CREATIVE_IDEAS = [
    ProjectIdea(
        title="Trending Topic Visualizer",
        description="Real-time visualization of HackerNews trending topics and keywords",
        category="visualization",
        difficulty=Difficulty.MEDIUM,
        keywords=["data", "visualization", "real-time"],
    ),
    ProjectIdea(
        title="Interactive Code Playground",
        description="Browser-based code editor with live preview for popular languages",
        category="tool",
        difficulty=Difficulty.HARD,
        keywords=["code", "editor", "playground"],
    ),
    ProjectIdea(
        title="Minimalist Game Collection",
        description="Simple but addictive browser games inspired by current trends",
        category="game",
        difficulty=Difficulty.EASY,
        keywords=["game", "minimal", "browser"],
    ),
]


# =============================================================================
# HTTP Layer
# =============================================================================

def clear_cache() -> None:
    _cache.clear()


def _make_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=httpx.Timeout(20.0, connect=10.0))


async def _cached_fetch(client: httpx.AsyncClient, url: str) -> Any:
    """GET a JSON document, serving repeats from the cache while fresh."""
    cached = _cache.get(url)
    now = time.monotonic()
    if cached and now - cached[0] < settings.HACKERNEWS_CACHE_SECONDS:
        return cached[1]

    response = await client.get(url)
    response.raise_for_status()
    data = response.json()

    _cache[url] = (now, data)
    return data


async def _fetch_stories(listing: str, limit: int) -> list[HackerNewsItem]:
    """
    Fetch the first `limit` items of a story listing concurrently.

    Args:
        listing: topstories, newstories or beststories

    Returns:
        Items in listing order (deleted items, which the API returns as
        null, are skipped). Empty list if anything fails.
    """
    try:
        async with _make_client() as client:
            story_ids = await _cached_fetch(client, f"{HN_API_BASE}/{listing}.json")
            items = await asyncio.gather(*[
                _cached_fetch(client, f"{HN_API_BASE}/item/{story_id}.json")
                for story_id in (story_ids or [])[:limit]
            ])
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"Error fetching {listing}: {e}")
        return []

    return [HackerNewsItem.model_validate(item) for item in items if item]


async def get_top_stories(limit: int = 10) -> list[HackerNewsItem]:
    return await _fetch_stories("topstories", limit)


async def get_new_stories(limit: int = 10) -> list[HackerNewsItem]:
    return await _fetch_stories("newstories", limit)


async def get_best_stories(limit: int = 10) -> list[HackerNewsItem]:
    return await _fetch_stories("beststories", limit)


# =============================================================================
# Text Helpers
# =============================================================================

def extract_keywords(title: str, url: str | None = None) -> list[str]:
    """
    Technology keywords found in a story's title or URL.

    Matching is plain case-insensitive substring search, so short
    keywords like "go" also match inside longer words.

    Example:
        extract_keywords("Show HN: A Rust library for graphs")
        # -> ["rust", "library"] (in TECH_KEYWORDS order)
    """
    text = f"{title} {url or ''}".lower()
    return [keyword for keyword in TECH_KEYWORDS if keyword in text]


def categorize_inspiration(item: HackerNewsItem) -> InspirationType:
    text = f"{(item.title or '').lower()} {(item.url or '').lower()}"
    for inspiration_type, pattern in _CATEGORY_PATTERNS:
        if pattern.search(text):
            return inspiration_type
    return InspirationType.TRENDING


def generate_summary(item: HackerNewsItem) -> str:
    """
    One-line description of a story.

    Format: "<Category> inspiration: <title> (from <domain>). Related to: k1, k2, k3"
    The domain and keyword parts are omitted when empty.
    """
    title = item.title or ""

    domain = ""
    if item.url:
        try:
            domain = (urlparse(item.url).hostname or "").replace("www.", "", 1)
        except ValueError:
            domain = ""

    keywords = extract_keywords(title, item.url)
    category = categorize_inspiration(item).value

    summary = f"{category.capitalize()} inspiration: {title}"
    if domain:
        summary += f" (from {domain})"
    if keywords:
        summary += f". Related to: {', '.join(keywords[:3])}"
    return summary


def get_difficulty(tech: str) -> Difficulty:
    if any(easy in tech for easy in _EASY_TECH):
        return Difficulty.EASY
    if any(hard in tech for hard in _HARD_TECH):
        return Difficulty.HARD
    return Difficulty.MEDIUM


# =============================================================================
# Inspiration & Trends
# =============================================================================

async def get_project_inspiration(limit: int = 20) -> list[ProjectInspiration]:
    """
    Mix of top, new and best stories turned into project inspiration.

    Only stories with a title, a score above 5 and at least one technology
    keyword are kept. Highest score first.
    """
    top, new, best = await asyncio.gather(
        get_top_stories(8),
        get_new_stories(8),
        get_best_stories(4),
    )

    inspirations = []
    for story in [*top, *new, *best]:
        if not story.title or not story.score or story.score <= 5:
            continue

        keywords = extract_keywords(story.title, story.url)
        if not keywords:
            continue

        inspirations.append(ProjectInspiration(
            title=story.title,
            url=story.url,
            summary=generate_summary(story),
            keywords=keywords,
            score=story.score,
            inspiration_type=categorize_inspiration(story),
        ))

    inspirations.sort(key=lambda i: i.score or 0, reverse=True)
    return inspirations[:limit]


async def get_trending_technologies() -> list[str]:
    """The ten keywords that occur most often across current inspiration."""
    inspirations = await get_project_inspiration(50)
    counts = Counter(keyword for i in inspirations for keyword in i.keywords)
    return [keyword for keyword, _ in counts.most_common(10)]


async def generate_project_ideas() -> list[ProjectIdea]:
    """
    Template project ideas from the top trending keywords.

    One idea per trending keyword (first five) that has a matching story,
    followed by a fixed set of creative ideas. At most ten ideas.
    """
    inspirations = await get_project_inspiration(30)
    trending = await get_trending_technologies()

    ideas = []
    for tech in trending[:5]:
        related = [i for i in inspirations if tech in i.keywords]
        if not related:
            continue

        inspiration = related[0]
        ideas.append(ProjectIdea(
            title=f"Interactive {tech[:1].upper() + tech[1:]} Demo",
            description=(
                f"Create an engaging demonstration or tool related to {tech}, "
                f"inspired by: {inspiration.title}"
            ),
            category=InspirationType(inspiration.inspiration_type).value,
            difficulty=get_difficulty(tech),
            keywords=[tech, *inspiration.keywords[:3]],
        ))

    ideas.extend(idea.model_copy() for idea in _CREATIVE_IDEAS)
    return ideas[:10]
