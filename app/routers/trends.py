# =============================================================================
# app/routers/trends.py - HackerNews Trends Endpoint
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, HTTPException, Query

from app.exceptions import AiShipsException
from lib import hackernews

router = APIRouter()
logger = logging.getLogger(__name__)

TREND_TYPES = ("inspiration", "trending", "stories", "project-ideas")


@router.get("/hackernews-trends")
async def get_hackernews_trends(
    type: Annotated[str, Query(description="inspiration, trending, stories or project-ideas")] = "inspiration",
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
):
    """
    Trend data derived from HackerNews.

    count is the number of items available before `limit` is applied
    (except for inspiration and stories, which are fetched with the limit).
    """
    if type not in TREND_TYPES:
        raise AiShipsException(
            message="Invalid type parameter. Use: inspiration, trending, stories, or project-ideas",
            code="INVALID_TREND_TYPE",
            status_code=400,
            details={"type": type},
        )

    try:
        if type == "inspiration":
            items = await hackernews.get_project_inspiration(limit)
            data = [i.to_record() for i in items]
            count = len(items)
        elif type == "trending":
            trending = await hackernews.get_trending_technologies()
            data = trending[:limit]
            count = len(trending)
        elif type == "stories":
            stories = await hackernews.get_top_stories(limit)
            data = [s.model_dump(exclude_none=True) for s in stories]
            count = len(stories)
        else:
            ideas = await hackernews.generate_project_ideas()
            data = [i.to_record() for i in ideas[:limit]]
            count = len(ideas)

        return {"success": True, "data": data, "count": count, "type": type}

    except AiShipsException:
        raise
    except Exception as e:
        logger.exception(f"Failed to fetch HackerNews data: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch HackerNews data")
