from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from topposts.domain.models import SubredditConfig

logger = logging.getLogger(__name__)


def load_raw_config(path: str) -> dict:
    cfg_path = Path(path)
    if not cfg_path.exists():
        return {}
    return yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}


def load_subreddits(path: str) -> list[SubredditConfig]:
    data = load_raw_config(path)
    rows = data.get("subreddits", [])
    out: list[SubredditConfig] = []
    for row in rows:
        try:
            out.append(SubredditConfig.model_validate(row))
        except ValidationError as exc:
            logger.warning("skipping invalid subreddit row path=%s row=%s err=%s", path, row, exc)
            continue
    return out
