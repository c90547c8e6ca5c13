from __future__ import annotations

import html
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Generic, TypeVar

from topposts.domain.models import Post
from topposts.top.models import DataPost

RawT = TypeVar("RawT")
EntityT = TypeVar("EntityT")

REDDIT_WEB_URL = "https://www.reddit.com"


class EntityMapper(ABC, Generic[RawT, EntityT]):
    @abstractmethod
    def transform(self, source: RawT) -> EntityT:
        raise NotImplementedError


class DomainEntityMapper(EntityMapper[DataPost, Post]):
    def transform(self, source: DataPost) -> Post:
        permalink = _absolute_permalink(source.permalink)
        return Post(
            post_id=source.id or source.name,
            title=html.unescape(source.title),
            subreddit=source.subreddit,
            author=source.author,
            score=source.score,
            comment_count=source.num_comments,
            permalink=permalink,
            url=html.unescape(source.url) or permalink,
            thumbnail_url=_thumbnail_url(source.thumbnail),
            created_at=_created_at(source.created_utc),
            is_nsfw=source.over_18,
        )


def _absolute_permalink(permalink: str) -> str:
    txt = (permalink or "").strip()
    if not txt or txt.startswith(("http://", "https://")):
        return txt
    if not txt.startswith("/"):
        txt = f"/{txt}"
    return f"{REDDIT_WEB_URL}{txt}"


def _thumbnail_url(value: str | None) -> str | None:
    # Reddit uses "self", "default", "nsfw", "spoiler" and "" as placeholders.
    txt = (value or "").strip()
    if not txt.startswith(("http://", "https://")):
        return None
    return html.unescape(txt)


def _created_at(value: float | None) -> datetime | None:
    if value is None:
        return None
    return datetime.fromtimestamp(float(value), tz=timezone.utc)
