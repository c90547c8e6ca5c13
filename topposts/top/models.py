"""Reddit listing envelope for /r/{subreddit}/top.json.

A page arrives wrapped twice: the listing container holds ``data``, whose
``children`` are item containers each holding one post under ``data``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from topposts.domain.models import TimeRange


class TopRequestParameters(BaseModel):
    model_config = ConfigDict(frozen=True)

    subreddit: str
    time_range: TimeRange
    limit: int = 0


class DataPost(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str = ""
    name: str = ""
    title: str = ""
    author: str = ""
    subreddit: str = ""
    score: int = 0
    num_comments: int = 0
    permalink: str = ""
    url: str = ""
    thumbnail: str | None = None
    created_utc: float | None = None
    over_18: bool = False


class DataPostContainer(BaseModel):
    model_config = ConfigDict(extra="ignore")

    kind: str = "t3"
    data: DataPost


class TopRequestData(BaseModel):
    model_config = ConfigDict(extra="ignore")

    children: list[DataPostContainer] = Field(default_factory=list)
    after: str | None = None
    before: str | None = None


class TopRequestDataContainer(BaseModel):
    model_config = ConfigDict(extra="ignore")

    kind: str = "Listing"
    data: TopRequestData
