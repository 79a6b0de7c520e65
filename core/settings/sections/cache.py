from pydantic_settings import BaseSettings
from pydantic import Field


class CacheSettings(BaseSettings):
    """
    Redis cache settings.
    The ordering service only ever deletes keys; it never populates them.
    """

    enabled: bool = Field(default=True, alias="CACHE_ENABLED")
    redis_url: str = Field(default="redis://localhost:6379/0", alias="REDIS_URL")
    recent_orders_key: str = Field(default="orders:last30days", alias="CACHE_RECENT_ORDERS_KEY")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }
