from __future__ import annotations

from abc import ABC, abstractmethod

from topposts.top.models import TopRequestDataContainer, TopRequestParameters


class TopRequestSource(ABC):
    @abstractmethod
    async def fetch(self, params: TopRequestParameters) -> TopRequestDataContainer:
        """Retrieve one page from the remote origin."""
        raise NotImplementedError

    @abstractmethod
    async def get(self, params: TopRequestParameters) -> TopRequestDataContainer:
        """Retrieve one page, possibly from a local cache."""
        raise NotImplementedError
