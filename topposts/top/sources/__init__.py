from topposts.top.sources.base import TopRequestSource
from topposts.top.sources.reddit import RedditTopRequestSource, build_top_request_source

__all__ = ["TopRequestSource", "RedditTopRequestSource", "build_top_request_source"]
