from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "Top Posts Backend"
    app_env: str = "dev"
    app_host: str = "0.0.0.0"
    app_port: int = 8080
    log_level: str = "INFO"
    subreddits_config_path: str = "config/subreddits.yaml"

    # Reddit listing source
    reddit_base_url: str = "https://www.reddit.com"
    reddit_user_agent: str = "topposts/0.1 (+https://github.com/topposts)"
    http_timeout_seconds: float = 12.0
    top_cache_ttl_seconds: int = 30
    top_cache_max_entries: int = 256
    default_limit: int = 25

    model_config = SettingsConfigDict(env_file=".env", env_prefix="TOPPOSTS_")

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.strip().upper() or "INFO"

    @field_validator("default_limit")
    @classmethod
    def _clamp_default_limit(cls, value: int) -> int:
        # Reddit serves at most 100 posts per listing page.
        return max(0, min(100, value))


settings = Settings()
