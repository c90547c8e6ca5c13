from __future__ import annotations

import logging
from datetime import datetime, timezone

import httpx
from fastapi import APIRouter, HTTPException, Query
from pydantic import ValidationError

from topposts.common.mapper import DomainEntityMapper
from topposts.core.settings import settings
from topposts.domain.models import TimeRange, TopPostsResponse
from topposts.top.facade import TopPostsFacade
from topposts.top.registry import subreddit_registry
from topposts.top.sources import build_top_request_source

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/top", tags=["top"])
source = build_top_request_source(settings)
facade = TopPostsFacade(source, DomainEntityMapper())


@router.get("")
def list_subreddits() -> dict:
    rows = subreddit_registry.list_subreddits()
    return {
        "subreddits": [
            {
                "subreddit": row.subreddit,
                "name": row.name or row.subreddit,
                "time_range": row.time_range.value,
                "limit": row.limit,
            }
            for row in rows
        ]
    }


@router.post("/reload")
def reload_subreddits() -> dict:
    subreddit_registry.reload()
    source.clear()
    count = len(subreddit_registry.list_subreddits())
    logger.info("subreddit registry reloaded subreddits=%s", count)
    return {"subreddits": count, "cache_cleared": True}


@router.get("/{subreddit}")
async def get_top_posts(
    subreddit: str,
    time_range: TimeRange | None = None,
    limit: int | None = Query(default=None, ge=0, le=100),
    force: bool = False,
) -> dict:
    row = subreddit_registry.get_subreddit(subreddit)
    if time_range is None:
        time_range = row.time_range if row else TimeRange.ALL_TIME
    if limit is None:
        limit = row.limit if row else settings.default_limit

    try:
        if force:
            items = await facade.fetch_top(subreddit, time_range, limit)
        else:
            items = await facade.get_top(subreddit, time_range, limit)
    except httpx.HTTPStatusError as exc:
        status = exc.response.status_code
        if status == 404:
            raise HTTPException(status_code=404, detail="subreddit not found") from exc
        raise HTTPException(status_code=502, detail=f"upstream returned {status}") from exc
    except httpx.HTTPError as exc:
        logger.warning("top request failed subreddit=%s err=%s", subreddit, exc)
        raise HTTPException(status_code=502, detail="upstream unavailable") from exc
    except ValidationError as exc:
        logger.warning("top payload invalid subreddit=%s err=%s", subreddit, exc)
        raise HTTPException(status_code=502, detail="upstream payload invalid") from exc

    payload = TopPostsResponse(
        subreddit=subreddit,
        time_range=time_range,
        limit=limit,
        updated_at=datetime.now(timezone.utc),
        items=items,
    )
    return payload.model_dump(mode="json")
