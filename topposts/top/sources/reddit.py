from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

import httpx

from topposts.core.settings import Settings
from topposts.top.models import TopRequestDataContainer, TopRequestParameters
from topposts.top.sources.base import TopRequestSource

logger = logging.getLogger(__name__)


class RedditTopRequestSource(TopRequestSource):
    def __init__(
        self,
        base_url: str = "https://www.reddit.com",
        user_agent: str = "topposts/0.1 (+https://github.com/topposts)",
        timeout_seconds: float = 12.0,
        cache_ttl_seconds: int = 30,
        cache_max_entries: int = 256,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.timeout_seconds = timeout_seconds
        self._transport = transport
        # Insertion order is storage order; the first entry is the oldest page.
        self._cache: dict[TopRequestParameters, tuple[datetime, TopRequestDataContainer]] = {}
        self._cache_ttl = timedelta(seconds=cache_ttl_seconds)
        self._cache_max_entries = max(1, cache_max_entries)

    async def fetch(self, params: TopRequestParameters) -> TopRequestDataContainer:
        try:
            container = await self._request(params)
        except Exception as exc:
            logger.warning(
                "top fetch failed subreddit=%s time_range=%s err=%s",
                params.subreddit,
                params.time_range.value,
                exc,
            )
            raise
        self._store(_cache_key(params), container)
        logger.info(
            "top fetch subreddit=%s time_range=%s items=%s",
            params.subreddit,
            params.time_range.value,
            len(container.data.children),
        )
        return container

    async def get(self, params: TopRequestParameters) -> TopRequestDataContainer:
        key = _cache_key(params)
        cached = self._cache.get(key)
        if cached:
            if datetime.now(timezone.utc) - cached[0] <= self._cache_ttl:
                logger.debug("top cache hit subreddit=%s time_range=%s", params.subreddit, params.time_range.value)
                return cached[1]
            self._cache.pop(key, None)
        return await self.fetch(params)

    def clear(self) -> None:
        self._cache.clear()

    def cached_pages(self) -> int:
        return len(self._cache)

    def _store(self, key: TopRequestParameters, container: TopRequestDataContainer) -> None:
        now = datetime.now(timezone.utc)
        expired = [k for k, (stored_at, _) in self._cache.items() if now - stored_at > self._cache_ttl]
        for k in expired:
            del self._cache[k]
        self._cache.pop(key, None)
        if self._cache_ttl < timedelta(0):
            return
        while len(self._cache) >= self._cache_max_entries:
            del self._cache[next(iter(self._cache))]
        self._cache[key] = (now, container)

    async def _request(self, params: TopRequestParameters) -> TopRequestDataContainer:
        query: dict[str, str | int] = {"t": params.time_range.value}
        if params.limit > 0:
            query["limit"] = params.limit
        async with httpx.AsyncClient(
            timeout=self.timeout_seconds,
            follow_redirects=True,
            headers={"User-Agent": self.user_agent},
            transport=self._transport,
        ) as client:
            res = await client.get(self._url(params.subreddit), params=query)
            res.raise_for_status()
            payload = res.json()
        return TopRequestDataContainer.model_validate(payload)

    def _url(self, subreddit: str) -> str:
        return f"{self.base_url}/r/{_subreddit_name(subreddit)}/top.json"


def _subreddit_name(subreddit: str) -> str:
    name = subreddit.strip().strip("/")
    if name.lower().startswith("r/"):
        name = name[2:]
    return name


def _cache_key(params: TopRequestParameters) -> TopRequestParameters:
    # Subreddit names are case-insensitive on Reddit.
    return params.model_copy(update={"subreddit": _subreddit_name(params.subreddit).lower()})


def build_top_request_source(settings: Settings) -> RedditTopRequestSource:
    return RedditTopRequestSource(
        base_url=settings.reddit_base_url,
        user_agent=settings.reddit_user_agent,
        timeout_seconds=settings.http_timeout_seconds,
        cache_ttl_seconds=settings.top_cache_ttl_seconds,
        cache_max_entries=settings.top_cache_max_entries,
    )
