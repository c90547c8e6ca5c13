from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class TimeRange(str, Enum):
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    ALL_TIME = "all"


class Post(BaseModel):
    model_config = ConfigDict(frozen=True)

    post_id: str
    title: str
    subreddit: str
    author: str
    score: int = 0
    comment_count: int = 0
    permalink: str
    url: str
    thumbnail_url: str | None = None
    created_at: datetime | None = None
    is_nsfw: bool = False


class SubredditConfig(BaseModel):
    subreddit: str
    name: str | None = None
    enabled: bool = True
    time_range: TimeRange = TimeRange.ALL_TIME
    limit: int = Field(default=25, ge=0, le=100)


class TopPostsResponse(BaseModel):
    subreddit: str
    time_range: TimeRange
    limit: int
    updated_at: datetime
    items: list[Post]
