from datetime import timedelta, timezone
from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # LLM (OpenAI-compatible chat completions)
    llm_base_url: str = "https://api.openai.com/v1"
    llm_model: str = "gpt-4o"
    llm_api_key: str = ""
    llm_timeout_seconds: float = 60.0

    # Redis (key-value store)
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8787

    # Retrieval
    list_cap: int = 50
    default_limit: int = 50

    # Ingestion
    default_source: str = "api"

    # Timezone
    timezone_offset_hours: int = 0

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def local_tz(self) -> timezone:
        return timezone(timedelta(hours=self.timezone_offset_hours))


@lru_cache
def get_settings() -> Settings:
    return Settings()
