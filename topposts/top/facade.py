from __future__ import annotations

from topposts.common.mapper import EntityMapper
from topposts.domain.models import Post, TimeRange
from topposts.top.models import DataPost, TopRequestDataContainer, TopRequestParameters
from topposts.top.sources.base import TopRequestSource


class TopPostsFacade:
    """Turns raw top listings from a request source into domain posts.

    Source failures propagate unchanged. A page is mapped in full before it is
    returned, one post per item container and in the same order.
    """

    def __init__(self, source: TopRequestSource, entity_mapper: EntityMapper[DataPost, Post]) -> None:
        self._source = source
        self._entity_mapper = entity_mapper

    async def fetch_top(self, subreddit: str, time_range: TimeRange, limit: int) -> list[Post]:
        container = await self._source.fetch(_params(subreddit, time_range, limit))
        return self._map(container)

    async def get_top(self, subreddit: str, time_range: TimeRange, limit: int) -> list[Post]:
        container = await self._source.get(_params(subreddit, time_range, limit))
        return self._map(container)

    def _map(self, container: TopRequestDataContainer) -> list[Post]:
        return [self._entity_mapper.transform(child.data) for child in container.data.children]


def _params(subreddit: str, time_range: TimeRange, limit: int) -> TopRequestParameters:
    return TopRequestParameters(subreddit=subreddit, time_range=time_range, limit=limit)
