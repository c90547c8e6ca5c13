from __future__ import annotations

from topposts.core.settings import settings
from topposts.domain.models import SubredditConfig
from topposts.top.config_loader import load_subreddits


class SubredditRegistry:
    def __init__(self, path: str | None = None) -> None:
        self._path = path or settings.subreddits_config_path
        self._subreddits: dict[str, SubredditConfig] = {}
        self.reload()

    def reload(self) -> None:
        rows = load_subreddits(self._path)
        self._subreddits = {row.subreddit.lower(): row for row in rows if row.enabled}

    def list_subreddits(self) -> list[SubredditConfig]:
        return list(self._subreddits.values())

    def get_subreddit(self, subreddit: str) -> SubredditConfig | None:
        return self._subreddits.get(subreddit.lower())


subreddit_registry = SubredditRegistry()
