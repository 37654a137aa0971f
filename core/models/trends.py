# =============================================================================
# core/models/trends.py - HackerNews Trend Schemas
# =============================================================================
# HackerNewsItem mirrors the public API item shape. ProjectInspiration and
# ProjectIdea are what the app derives from those items.
# =============================================================================

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .base import CamelModel
from .completion import Difficulty


class HackerNewsItem(BaseModel):
    """Item from https://hacker-news.firebaseio.com/v0/item/{id}.json"""

    model_config = ConfigDict(extra="ignore")

    id: int
    deleted: bool | None = None
    type: str | None = None
    by: str | None = None
    time: int | None = None
    text: str | None = None
    dead: bool | None = None
    parent: int | None = None
    poll: int | None = None
    kids: list[int] | None = None
    url: str | None = None
    score: int | None = None
    title: str | None = None
    parts: list[int] | None = None
    descendants: int | None = None


class InspirationType(str, Enum):
    TRENDING = "trending"
    TECH = "tech"
    TOOL = "tool"
    GAME = "game"
    CREATIVE = "creative"


class ProjectInspiration(CamelModel):
    title: str
    url: str | None = None
    summary: str
    keywords: list[str] = Field(default_factory=list)
    score: int | None = None
    inspiration_type: InspirationType


class ProjectIdea(CamelModel):
    title: str
    description: str
    category: str
    difficulty: Difficulty
    keywords: list[str] = Field(default_factory=list)
